"""
Core sequence utilities.

Functions shared by FASTA and FASTQ records: GC content and
1-based region slicing.
"""

from typing import Union

from bioseq.errors import BoundaryError

SequenceLike = Union[bytes, bytearray, str]

_GC = frozenset(b"GCgc")


def gc_content(sequence: SequenceLike) -> float:
    """
    Calculate the GC content (fraction) of a sequence.

    Args:
        sequence: DNA or RNA sequence, bytes or string

    Returns:
        GC content as a fraction between 0 and 1, 0.0 when empty

    Example:
        >>> gc_content(b"GGCC")
        1.0
        >>> gc_content("AATT")
        0.0
    """
    if isinstance(sequence, str):
        sequence = sequence.encode("ascii", errors="replace")

    total = len(sequence)
    if total == 0:
        return 0.0

    gc_count = sum(1 for base in sequence if base in _GC)
    return gc_count / total


def check_region(start: int, end: int, length: int, name: str = "") -> None:
    """
    Validate 1-based inclusive coordinates against a sequence length.

    Raises:
        BoundaryError: if start < 1, end > length or start > end
    """
    if start < 1 or end > length or start > end:
        label = f" on '{name}'" if name else ""
        raise BoundaryError(
            f"invalid region {start}-{end}{label} "
            f"for sequence of length {length}"
        )


def slice_region(sequence: bytes, start: int, end: int, name: str = "") -> bytes:
    """
    Extract bases start..end (1-based, both inclusive).

    Args:
        sequence: Full sequence
        start: First base, counting from 1
        end: Last base included
        name: Sequence name used in error messages

    Returns:
        sequence[start - 1:end]

    Example:
        >>> slice_region(b"ACGTACGTAC", 3, 7)
        b'GTACG'
    """
    check_region(start, end, len(sequence), name)
    return bytes(sequence[start - 1:end])
