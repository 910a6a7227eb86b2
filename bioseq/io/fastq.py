"""
FASTQ file format reader and writer.

FASTQ is a text-based format for storing nucleotide sequences
along with quality scores. Each record consists of 4 lines:
1. Header line starting with '@' followed by sequence ID
2. Sequence line
3. '+' line (optionally followed by the ID again)
4. Quality line (ASCII-encoded Phred scores)
"""

import gzip
import numpy as np
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Optional, Union

from bioseq.errors import FormatError
from bioseq.utils.sequences import gc_content


# Phred quality score encoding offset (Sanger/Illumina 1.8+)
PHRED33_OFFSET = 33

ID_MARKER = b"@"
SEPARATOR_MARKER = b"+"


@dataclass(frozen=True)
class FastqRecord:
    """
    Represents a single FASTQ record.

    Attributes:
        id: Header line without the leading '@'
        sequence: The nucleotide sequence
        quality: Quality bytes (Phred+33), one per base
    """
    id: str
    sequence: bytes
    quality: bytes

    def __post_init__(self):
        if len(self.sequence) != len(self.quality):
            raise FormatError(
                f"record {self.id}: sequence and quality length mismatch "
                f"({len(self.sequence)} vs {len(self.quality)})"
            )

    def __len__(self) -> int:
        return len(self.sequence)

    def __str__(self) -> str:
        return "\n".join([
            f"@{self.id}",
            self.sequence.decode("ascii", errors="replace"),
            "+",
            self.quality.decode("ascii", errors="replace"),
        ])

    @property
    def name(self) -> str:
        """First word of the header."""
        parts = self.id.split(None, 1)
        return parts[0] if parts else ""

    def quality_scores(self, offset: int = PHRED33_OFFSET) -> np.ndarray:
        """
        Convert quality bytes to numeric Phred scores.

        Args:
            offset: ASCII offset (33 for Phred+33)

        Returns:
            numpy array of integer quality scores
        """
        return np.frombuffer(self.quality, dtype=np.uint8).astype(np.int32) - offset

    def mean_quality(self, offset: int = PHRED33_OFFSET) -> float:
        """Calculate mean quality score, 0.0 for an empty read."""
        if not self.quality:
            return 0.0
        return float(np.mean(self.quality_scores(offset)))

    def gc_content(self) -> float:
        return gc_content(self.sequence)


def quality_to_phred(quality_string: Union[str, bytes], offset: int = PHRED33_OFFSET) -> List[int]:
    """
    Convert quality string to Phred scores.

    Args:
        quality_string: ASCII-encoded quality string
        offset: Phred offset

    Returns:
        List of integer Phred scores
    """
    if isinstance(quality_string, str):
        quality_string = quality_string.encode("ascii")
    return [q - offset for q in quality_string]


def phred_to_quality(phred_scores: Iterable[int], offset: int = PHRED33_OFFSET) -> bytes:
    """
    Convert Phred scores to quality bytes.

    Args:
        phred_scores: Integer Phred scores
        offset: Phred offset

    Returns:
        ASCII-encoded quality bytes
    """
    return bytes(score + offset for score in phred_scores)


class FastqParser:
    """
    Pull-based FASTQ reader, four lines per record.

    next_record() returns None when the stream ends cleanly before an
    identifier line. A record cut short after its identifier line, a
    bad '@' or '+' marker, or a quality line whose length differs from
    the sequence line raises FormatError.
    """

    def __init__(self, handle: IO):
        self._handle = handle
        self.record_number = 0
        self._done = False

    def _readline(self) -> Optional[bytes]:
        line = self._handle.readline()
        if not line:
            return None
        if isinstance(line, str):
            line = line.encode("utf-8")
        return line.rstrip(b"\r\n")

    def _require(self, what: str, after: str) -> bytes:
        line = self._readline()
        if line is None:
            raise FormatError(
                f"record {self.record_number}: unexpected end of file "
                f"after {after} line, expected {what} line"
            )
        return line

    def next_record(self) -> Optional[FastqRecord]:
        """
        Read the next record.

        Returns:
            The next FastqRecord, or None at end of stream

        Raises:
            FormatError: if the record is truncated or malformed
        """
        if self._done:
            return None

        id_line = self._readline()
        while id_line is not None and not id_line.strip():
            id_line = self._readline()
        if id_line is None:
            self._done = True
            return None

        self.record_number += 1
        seq_line = self._require("sequence", "id")
        sep_line = self._require("separator", "sequence")
        qual_line = self._require("quality", "separator")

        if not id_line.startswith(ID_MARKER):
            raise FormatError(
                f"record {self.record_number}: expected id line to start "
                f"with '@', got {id_line[:40]!r}"
            )
        if not sep_line.startswith(SEPARATOR_MARKER):
            raise FormatError(
                f"record {self.record_number}: expected separator line to "
                f"start with '+', got {sep_line[:40]!r}"
            )
        if len(seq_line) != len(qual_line):
            raise FormatError(
                f"record {self.record_number}: quality line length "
                f"{len(qual_line)} does not match sequence line length "
                f"{len(seq_line)}"
            )

        return FastqRecord(
            id=id_line[len(ID_MARKER):].decode("utf-8", errors="replace"),
            sequence=seq_line,
            quality=qual_line,
        )

    def __iter__(self) -> Iterator[FastqRecord]:
        return self

    def __next__(self) -> FastqRecord:
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


def read_fastq(filepath: Union[str, Path]) -> Iterator[FastqRecord]:
    """
    Read sequences from a FASTQ file.

    Supports both plain text and gzip-compressed files.

    Args:
        filepath: Path to FASTQ file (.fastq, .fq, or .gz)

    Yields:
        FastqRecord objects

    Example:
        >>> for record in read_fastq("reads.fastq.gz"):
        ...     if record.mean_quality() > 20:
        ...         print(record.id)
    """
    with _open_file(filepath, "rb") as f:
        yield from FastqParser(f)


def write_fastq(
    records: Union[FastqRecord, Iterable[FastqRecord]],
    filepath: Union[str, Path],
    compress: bool = False
) -> None:
    """
    Write sequences to a FASTQ file.

    Args:
        records: Single record or iterable of FastqRecord objects
        filepath: Output file path
        compress: If True, write gzip-compressed file

    Example:
        >>> records = [FastqRecord("read1", b"ACGT", b"IIII")]
        >>> write_fastq(records, "output.fastq")
    """
    if isinstance(records, FastqRecord):
        records = [records]

    filepath = Path(filepath)
    if compress and not filepath.suffix == ".gz":
        filepath = Path(str(filepath) + ".gz")

    opener = gzip.open if compress or filepath.suffix == ".gz" else open

    with opener(filepath, "wt") as f:
        for record in records:
            f.write(str(record) + "\n")
