"""
Random access to FASTA sequences through a .fai index.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Iterator, List, Mapping, Optional, Union

from bioseq.errors import SequenceNotFoundError
from bioseq.io.faidx import FaiEntry, default_index_path, index_fasta, parse_index
from bioseq.io.fasta import FastaRecord
from bioseq.sequence.alphabet import infer_sequence_type
from bioseq.utils.sequences import check_region

logger = logging.getLogger(__name__)


class IndexedFastaReader:
    """
    Fetch FASTA sequences by name without scanning the file.

    The index is read from fasta_path + ".fai" (or index_path), and
    built first if that file does not exist. The FASTA file stays open
    until close() is called or the context manager exits.

    A reader holds a single file handle and each fetch seeks then
    reads, so concurrent fetches on one reader race on the file
    position. Serialise access with a lock or give each thread its own
    reader; index lookups alone are safe to share.

    Example:
        >>> with IndexedFastaReader("genome.fa") as reader:
        ...     record = reader.fetch("chr1")
        ...     window = reader.fetch_region("chr1", 1000, 1099)
    """

    def __init__(
        self,
        fasta_path: Union[str, Path],
        index_path: Optional[Union[str, Path]] = None
    ):
        self.fasta_path = Path(fasta_path)
        self.index_path = Path(index_path) if index_path else default_index_path(fasta_path)

        if not self.index_path.exists():
            logger.info("FASTA index not found, building %s", self.index_path)
            index_fasta(self.fasta_path, self.index_path)

        handle = open(self.fasta_path, "rb")
        try:
            self._index = parse_index(self.index_path)
        except BaseException:
            handle.close()
            raise
        self._handle: Optional[BinaryIO] = handle
        logger.debug("Opened %s with %d indexed sequences", self.fasta_path, len(self._index))

    @property
    def index(self) -> Mapping[str, FaiEntry]:
        return self._index

    @property
    def closed(self) -> bool:
        return self._handle is None

    def names(self) -> List[str]:
        """Sequence names in index order."""
        return list(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def entry(self, name: str) -> FaiEntry:
        """
        Look up the index entry for a sequence.

        Raises:
            SequenceNotFoundError: if the name is not indexed
        """
        try:
            return self._index[name]
        except KeyError:
            raise SequenceNotFoundError(
                f"sequence with id '{name}' not found in index"
            ) from None

    def _read_sequence(self, entry: FaiEntry) -> bytes:
        if self._handle is None:
            raise ValueError("I/O operation on closed IndexedFastaReader")

        self._handle.seek(entry.offset)
        chunks = []
        remaining = entry.length
        while remaining > 0:
            chunk = min(remaining, entry.line_bases)
            line = self._handle.read(entry.line_bytes)
            if not line:
                break
            chunks.append(line[:chunk])
            if len(line) < entry.line_bytes:
                # end of file, last line without terminator
                break
            remaining -= chunk

        sequence = b"".join(chunks)
        if len(sequence) != entry.length:
            logger.warning(
                "Read %d of %d bases for '%s'; index %s may be stale",
                len(sequence), entry.length, entry.name, self.index_path,
            )
        return sequence

    def fetch(self, name: str) -> FastaRecord:
        """
        Read one sequence.

        Args:
            name: Sequence identifier

        Returns:
            FastaRecord with the full sequence and inferred type; the
            description is not stored in the index and is None

        Raises:
            SequenceNotFoundError: if the name is not indexed
            OSError: on seek or read failure
        """
        entry = self.entry(name)
        sequence = self._read_sequence(entry)
        return FastaRecord(
            id=entry.name,
            description=None,
            sequence=sequence,
            seq_type=infer_sequence_type(sequence),
        )

    def fetch_region(self, name: str, start: int, end: int) -> bytes:
        """
        Read bases start..end of a sequence, 1-based and inclusive.

        Coordinates are checked before any read.

        Raises:
            SequenceNotFoundError: if the name is not indexed
            BoundaryError: if start < 1, end > length or start > end
        """
        entry = self.entry(name)
        check_region(start, end, entry.length, name)
        return self.fetch(name).sequence[start - 1:end]

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            logger.debug("Closed %s", self.fasta_path)

    def __enter__(self) -> "IndexedFastaReader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
