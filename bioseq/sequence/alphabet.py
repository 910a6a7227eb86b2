"""
Sequence alphabets and type inference.

Classification here is a best-effort heuristic, not validation:
a sequence is called protein as soon as it holds a residue that
cannot be a nucleotide ambiguity code, RNA when it has U but no T,
and DNA otherwise (including all-N or all-gap sequences).
"""

from enum import Enum
from typing import FrozenSet, Optional, Union


class SequenceType(Enum):
    """Biological alphabet of a sequence."""
    DNA = "DNA"
    RNA = "RNA"
    PROTEIN = "Protein"
    UNKNOWN = "Unknown"


def _both_cases(letters: str) -> FrozenSet[int]:
    return frozenset((letters.upper() + letters.lower()).encode("ascii"))


# IUPAC nucleotide ambiguity codes
AMBIGUITY_CODES = "RYSWKMBDHVN"
GAP = "-"
STOP = "*"

DNA_ALPHABET = _both_cases("ACGTU" + AMBIGUITY_CODES) | frozenset(GAP.encode())
RNA_ALPHABET = _both_cases("ACGU" + AMBIGUITY_CODES) | frozenset(GAP.encode())
PROTEIN_ALPHABET = (
    _both_cases("ACDEFGHIKLMNPQRSTVWY" + "BZX")
    | frozenset((STOP + GAP).encode())
)

# Amino acids that are never nucleotide ambiguity codes
PROTEIN_ONLY = _both_cases("EFILPQZX") | frozenset(STOP.encode())

_T = frozenset(b"Tt")
_U = frozenset(b"Uu")

SequenceLike = Union[bytes, bytearray, memoryview, str]


def _as_bytes(seq: SequenceLike) -> bytes:
    if isinstance(seq, str):
        return seq.encode("ascii", errors="replace")
    return bytes(seq)


def infer_sequence_type(seq: SequenceLike) -> SequenceType:
    """
    Guess the alphabet of a sequence from its characters.

    Decision order: protein-only residue -> PROTEIN; both T and U ->
    UNKNOWN; U only -> RNA; anything else -> DNA.

    Args:
        seq: Sequence as bytes or ASCII string (case-insensitive)

    Returns:
        The inferred SequenceType

    Example:
        >>> infer_sequence_type("ACGU")
        <SequenceType.RNA: 'RNA'>
    """
    has_t = has_u = has_protein = False
    for base in _as_bytes(seq):
        if base in _T:
            has_t = True
        elif base in _U:
            has_u = True
        elif base in PROTEIN_ONLY:
            has_protein = True

    if has_protein:
        return SequenceType.PROTEIN
    if has_t and has_u:
        return SequenceType.UNKNOWN
    if has_u:
        return SequenceType.RNA
    return SequenceType.DNA


def alphabet_for(seq_type: SequenceType) -> Optional[FrozenSet[int]]:
    """Return the allowed byte values for a type, or None for UNKNOWN."""
    return {
        SequenceType.DNA: DNA_ALPHABET,
        SequenceType.RNA: RNA_ALPHABET,
        SequenceType.PROTEIN: PROTEIN_ALPHABET,
    }.get(seq_type)


def validate_sequence(seq: SequenceLike, seq_type: SequenceType) -> bool:
    """
    Check that every character of a sequence belongs to an alphabet.

    Ambiguity codes and the gap character are accepted. An UNKNOWN
    type has no alphabet and never validates.

    Args:
        seq: Sequence as bytes or ASCII string
        seq_type: Alphabet to check against

    Returns:
        True if all characters are allowed
    """
    alphabet = alphabet_for(seq_type)
    if alphabet is None:
        return False
    return all(base in alphabet for base in _as_bytes(seq))
