"""
FASTA file format reader and writer.

FASTA stores one or more named sequences. Each record is a header
line starting with '>' followed by the identifier and an optional
description, then any number of sequence lines:

    >seq1 example sequence
    ACGTACGTAC
    GTAC

Records are read one at a time by FastaParser, which keeps a single
line of lookahead so the next record's header is never lost.
"""

import gzip
import io
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Optional, Tuple, Union

from bioseq.errors import FormatError
from bioseq.sequence.alphabet import (
    SequenceType,
    infer_sequence_type,
    validate_sequence,
)
from bioseq.utils.sequences import gc_content, slice_region

HEADER_MARKER = b">"


@dataclass(frozen=True)
class FastaRecord:
    """
    Represents a single FASTA record.

    Attributes:
        id: Sequence identifier (first word after '>')
        description: Rest of the header line, or None
        sequence: Sequence bytes with line breaks removed
        seq_type: Alphabet inferred from the sequence
    """
    id: str
    description: Optional[str]
    sequence: bytes
    seq_type: SequenceType = SequenceType.UNKNOWN

    def __len__(self) -> int:
        return len(self.sequence)

    def __str__(self) -> str:
        return self.to_fasta()

    @property
    def header(self) -> str:
        if self.description:
            return f"{self.id} {self.description}"
        return self.id

    def validate(self) -> bool:
        """Check the sequence against the alphabet of its inferred type."""
        return validate_sequence(self.sequence, self.seq_type)

    def slice(self, start: int, end: int) -> bytes:
        """Return bases start..end, 1-based and inclusive."""
        return slice_region(self.sequence, start, end, self.id)

    def gc_content(self) -> float:
        return gc_content(self.sequence)

    def to_fasta(self, line_width: int = 60) -> str:
        """Format as FASTA string with wrapped sequence lines."""
        sequence = self.sequence.decode("ascii", errors="replace")
        lines = [f">{self.header}"]
        for i in range(0, len(sequence), line_width):
            lines.append(sequence[i:i + line_width])
        return "\n".join(lines)


class ParserState(Enum):
    AWAITING_HEADER = "awaiting_header"
    HAVE_HEADER = "have_header"
    END = "end"


def parse_header(line: bytes, line_number: int = 0) -> Tuple[str, Optional[str]]:
    """
    Split a stripped header line into identifier and description.

    Args:
        line: Header line including the leading '>'
        line_number: Position in the file, for error messages

    Returns:
        (identifier, description or None)

    Raises:
        FormatError: if the header carries no identifier
    """
    text = line[len(HEADER_MARKER):].decode("utf-8", errors="replace")
    parts = text.split(None, 1)
    if not parts:
        raise FormatError(f"empty FASTA header at line {line_number}")
    description = parts[1].strip() if len(parts) > 1 else None
    return parts[0], description or None


class FastaParser:
    """
    Pull-based FASTA reader.

    Call next_record() until it returns None, or iterate over the
    parser. The stream may be opened in binary or text mode.

    With strict=True every record is validated against its inferred
    alphabet and a FormatError naming the record is raised on the
    first invalid one. The default is permissive since FASTA files in
    the wild often carry characters outside any single alphabet.

    Example:
        >>> with open("genome.fa", "rb") as handle:
        ...     for record in FastaParser(handle):
        ...         print(record.id, len(record))
    """

    def __init__(self, handle: IO, strict: bool = False):
        self._handle = handle
        self.strict = strict
        self.state = ParserState.AWAITING_HEADER
        self._peeked_header: Optional[bytes] = None
        self._peeked_line_number = 0
        self.line_number = 0

    def _readline(self) -> Optional[bytes]:
        line = self._handle.readline()
        if not line:
            return None
        self.line_number += 1
        if isinstance(line, str):
            line = line.encode("utf-8")
        return line

    def _find_header(self) -> Optional[bytes]:
        while True:
            line = self._readline()
            if line is None:
                return None
            line = line.strip()
            if line.startswith(HEADER_MARKER):
                self._peeked_line_number = self.line_number
                return line

    def next_record(self) -> Optional[FastaRecord]:
        """
        Read the next record.

        Returns:
            The next FastaRecord, or None once the stream is exhausted.
            Further calls keep returning None.

        Raises:
            FormatError: on an empty header, or an invalid record in
                strict mode
        """
        if self.state is ParserState.END:
            return None

        if self.state is ParserState.HAVE_HEADER:
            header = self._peeked_header
            self._peeked_header = None
        else:
            header = self._find_header()
            if header is None:
                self.state = ParserState.END
                return None

        seq_id, description = parse_header(header, self._peeked_line_number)

        chunks: List[bytes] = []
        while True:
            line = self._readline()
            if line is None:
                self.state = ParserState.END
                break
            line = line.strip()
            if line.startswith(HEADER_MARKER):
                self._peeked_header = line
                self._peeked_line_number = self.line_number
                self.state = ParserState.HAVE_HEADER
                break
            chunks.append(line)

        sequence = b"".join(chunks)
        record = FastaRecord(
            id=seq_id,
            description=description,
            sequence=sequence,
            seq_type=infer_sequence_type(sequence),
        )

        if self.strict and not record.validate():
            raise FormatError(
                f"record {record.id} contains invalid characters "
                f"for inferred type {record.seq_type.value}"
            )

        return record

    def __iter__(self) -> Iterator[FastaRecord]:
        return self

    def __next__(self) -> FastaRecord:
        record = self.next_record()
        if record is None:
            raise StopIteration
        return record


def _open_file(filepath: Union[str, Path], mode: str = "rb"):
    """Open a file, handling gzip compression if needed."""
    filepath = Path(filepath)
    if filepath.suffix == ".gz":
        return gzip.open(filepath, mode)
    return open(filepath, mode)


def read_fasta(
    filepath: Union[str, Path],
    strict: bool = False
) -> Iterator[FastaRecord]:
    """
    Read sequences from a FASTA file in file order.

    Supports both plain text and gzip-compressed files. Compressed
    files can only be read sequentially.

    Args:
        filepath: Path to FASTA file (.fasta, .fa, .fna, or .gz)
        strict: Raise FormatError on records that fail validation

    Yields:
        FastaRecord objects

    Example:
        >>> for record in read_fasta("sequences.fasta"):
        ...     print(f"{record.id}: {len(record)} bp")
    """
    with _open_file(filepath, "rb") as f:
        yield from FastaParser(f, strict=strict)


def parse_fasta_string(
    content: Union[str, bytes],
    strict: bool = False
) -> Iterator[FastaRecord]:
    """
    Parse FASTA format from a string.

    Args:
        content: FASTA formatted text
        strict: Raise FormatError on records that fail validation

    Yields:
        FastaRecord objects
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    yield from FastaParser(io.BytesIO(content), strict=strict)


def write_fasta(
    records: Union[FastaRecord, Iterable[FastaRecord]],
    filepath: Union[str, Path],
    line_width: int = 60,
    compress: bool = False
) -> None:
    """
    Write sequences to a new FASTA file.

    Args:
        records: Single record or iterable of FastaRecord objects
        filepath: Output file path
        line_width: Number of characters per sequence line
        compress: If True, write gzip-compressed file

    Example:
        >>> records = [FastaRecord("seq1", "example", b"ACGT")]
        >>> write_fasta(records, "output.fasta")
    """
    if isinstance(records, FastaRecord):
        records = [records]

    filepath = Path(filepath)
    if compress and not filepath.suffix == ".gz":
        filepath = Path(str(filepath) + ".gz")

    opener = gzip.open if compress or filepath.suffix == ".gz" else open

    with opener(filepath, "wt") as f:
        for record in records:
            f.write(record.to_fasta(line_width) + "\n")


def load_fasta_dict(
    filepath: Union[str, Path],
    strict: bool = False
) -> dict:
    """
    Load FASTA file as dictionary mapping IDs to sequences.

    Args:
        filepath: Path to FASTA file
        strict: Raise FormatError on records that fail validation

    Returns:
        Dictionary mapping sequence IDs to sequence bytes
    """
    return {
        record.id: record.sequence
        for record in read_fasta(filepath, strict=strict)
    }
