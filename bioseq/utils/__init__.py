"""
Sequence utilities for FASTA and FASTQ records.

This module provides:
- GC content calculation
- 1-based region coordinate checks and slicing
"""

from bioseq.utils.sequences import (
    gc_content,
    check_region,
    slice_region,
)

__all__ = [
    "gc_content",
    "check_region",
    "slice_region",
]
