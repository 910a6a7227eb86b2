"""
Sequence alphabets for DNA, RNA and protein.

This module provides:
- Sequence type inference from raw characters
- Alphabet validation including IUPAC ambiguity codes and gaps
"""

from bioseq.sequence.alphabet import (
    SequenceType,
    infer_sequence_type,
    validate_sequence,
    alphabet_for,
    DNA_ALPHABET,
    RNA_ALPHABET,
    PROTEIN_ALPHABET,
)

__all__ = [
    "SequenceType",
    "infer_sequence_type",
    "validate_sequence",
    "alphabet_for",
    "DNA_ALPHABET",
    "RNA_ALPHABET",
    "PROTEIN_ALPHABET",
]
