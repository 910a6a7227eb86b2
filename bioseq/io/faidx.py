"""
FASTA index (.fai) building and parsing.

An index holds one line per sequence, in file order:

    name<TAB>length<TAB>offset<TAB>line_bases<TAB>line_bytes

where offset is the byte position of the first base, line_bases the
number of bases on each full line and line_bytes the same line's size
including its terminator. With these numbers any base can be located
without scanning the file, provided every line of a sequence except
the last has the same width. build_index() refuses files that break
that rule; parse_index() is lenient and skips lines it cannot read
or whose geometry cannot be used, since a damaged index can always be
rebuilt.

The name column holds the first word of the header, not the whole
header line, so it matches FastaRecord.id and samtools faidx output.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Union

from bioseq.errors import FormatError
from bioseq.io.fasta import HEADER_MARKER, parse_header

logger = logging.getLogger(__name__)

FAI_SUFFIX = ".fai"
FAI_FIELDS = 5

PathLike = Union[str, Path]


@dataclass(frozen=True)
class FaiEntry:
    """
    Location of one sequence inside a FASTA file.

    Attributes:
        name: Sequence identifier used for lookup
        length: Number of bases
        offset: Byte offset of the first base
        line_bases: Bases per full line
        line_bytes: Bytes per full line, terminator included
    """
    name: str
    length: int
    offset: int
    line_bases: int
    line_bytes: int


def default_index_path(fasta_path: PathLike) -> Path:
    return Path(str(fasta_path) + FAI_SUFFIX)


def format_entry(entry: FaiEntry) -> str:
    """Encode an entry as one tab-separated index line."""
    return (
        f"{entry.name}\t{entry.length}\t{entry.offset}\t"
        f"{entry.line_bases}\t{entry.line_bytes}\n"
    )


class _OpenSequence:
    """Accumulates line geometry for the sequence being scanned."""

    def __init__(self, name: str, offset: int):
        self.name = name
        self.offset = offset
        self.length = 0
        self.line_bases = 0
        self.line_bytes = 0
        self.seen_data = False
        self.seen_short = False

    def add_line(self, bases: int, raw_bytes: int, line_number: int) -> None:
        if not self.seen_data:
            self.line_bases = bases
            self.line_bytes = raw_bytes
            self.seen_data = True
        elif self.seen_short:
            raise FormatError(
                f"sequence '{self.name}': data at line {line_number} "
                f"follows a shorter line"
            )
        elif bases > self.line_bases or raw_bytes > self.line_bytes:
            raise FormatError(
                f"sequence '{self.name}': line {line_number} has {bases} "
                f"bases, longer than the line width of {self.line_bases}"
            )
        elif bases < self.line_bases or raw_bytes < self.line_bytes:
            self.seen_short = True
        self.length += bases

    def to_entry(self) -> FaiEntry:
        return FaiEntry(
            name=self.name,
            length=self.length,
            offset=self.offset,
            line_bases=self.line_bases,
            line_bytes=self.line_bytes,
        )


def build_index(fasta_path: PathLike) -> Dict[str, FaiEntry]:
    """
    Scan a FASTA file once and compute its index.

    Args:
        fasta_path: Uncompressed FASTA file

    Returns:
        Dictionary of FaiEntry keyed by sequence name, in file order

    Raises:
        FormatError: on an empty header, a duplicate name, a data line
            wider than the first line of its sequence, or data following
            a short line
        OSError: if the file cannot be read
    """
    entries: Dict[str, FaiEntry] = {}
    current: Optional[_OpenSequence] = None
    offset = 0

    def flush():
        if current is None:
            return
        if current.name in entries:
            raise FormatError(f"duplicate sequence name '{current.name}'")
        entries[current.name] = current.to_entry()

    with open(fasta_path, "rb") as handle:
        for line_number, raw in enumerate(handle, start=1):
            line = raw.strip()
            if line.startswith(HEADER_MARKER):
                flush()
                name, _ = parse_header(line, line_number)
                current = _OpenSequence(name, offset + len(raw))
            elif current is not None:
                if not line:
                    if current.seen_data:
                        current.seen_short = True
                    else:
                        # blank line before the first base
                        current.offset = offset + len(raw)
                elif raw[:1].isspace():
                    raise FormatError(
                        f"sequence '{current.name}': line {line_number} "
                        f"starts with whitespace"
                    )
                else:
                    current.add_line(len(line), len(raw), line_number)
            offset += len(raw)
        flush()

    return entries


def write_index(entries: Iterable[FaiEntry], index_path: PathLike) -> Path:
    """
    Write entries to an index file.

    The file is written under a temporary name in the same directory
    and renamed into place, so readers never see a partial index.

    Args:
        entries: FaiEntry objects in file order
        index_path: Destination path

    Returns:
        Path of the written index
    """
    index_path = Path(index_path)
    tmp_path = index_path.with_name(f".{index_path.name}.{os.getpid()}.tmp")
    try:
        # exclusive create, so the umask sets the published mode
        with open(tmp_path, "x", encoding="utf-8", newline="\n") as f:
            for entry in entries:
                f.write(format_entry(entry))
        os.replace(tmp_path, index_path)
    except BaseException:
        if tmp_path.exists():
            tmp_path.unlink()
        raise
    return index_path


def index_fasta(
    fasta_path: PathLike,
    index_path: Optional[PathLike] = None
) -> Path:
    """
    Build and write the index for a FASTA file.

    Nothing is written when the FASTA file is malformed.

    Args:
        fasta_path: Uncompressed FASTA file
        index_path: Destination, defaults to fasta_path + ".fai"

    Returns:
        Path of the written index

    Example:
        >>> index_fasta("genome.fa")
        PosixPath('genome.fa.fai')
    """
    if index_path is None:
        index_path = default_index_path(fasta_path)
    logger.info("Indexing %s", fasta_path)
    entries = build_index(fasta_path)
    path = write_index(entries.values(), index_path)
    logger.info("Wrote %d sequences to %s", len(entries), path)
    return path


def _parse_line(line: str) -> Optional[FaiEntry]:
    fields = line.rstrip("\r\n").split("\t")
    if len(fields) != FAI_FIELDS:
        return None
    try:
        length, offset, line_bases, line_bytes = (int(f) for f in fields[1:])
    except ValueError:
        return None
    if min(length, offset, line_bases, line_bytes) < 0:
        return None
    if length > 0 and (line_bases <= 0 or line_bytes < line_bases):
        return None
    return FaiEntry(
        name=fields[0],
        length=length,
        offset=offset,
        line_bases=line_bases,
        line_bytes=line_bytes,
    )


def parse_index(index_path: PathLike) -> Mapping[str, FaiEntry]:
    """
    Load an index file.

    Lines without exactly five fields, or with non-integer numbers,
    are skipped. A name seen twice keeps its last entry.

    Args:
        index_path: Path to a .fai file

    Returns:
        Read-only mapping of sequence name to FaiEntry, in file order

    Raises:
        OSError: if the file cannot be read
    """
    entries: Dict[str, FaiEntry] = {}
    with open(index_path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            entry = _parse_line(line)
            if entry is None:
                logger.debug("Skipping malformed index line %d in %s", line_number, index_path)
                continue
            entries[entry.name] = entry
    return MappingProxyType(entries)
