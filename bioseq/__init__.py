"""
bioseq: sequential and indexed access to biological sequence files

This package provides tools for:
- Sequence type inference and alphabet validation (DNA/RNA/protein)
- Streaming FASTA and FASTQ parsers
- Building and reading .fai indexes for FASTA files
- Fetching FASTA sequences and regions by name without a full scan
- A capability-describing adapter interface for viewers

Built on the standard library with NumPy for quality-score arrays.
"""

__version__ = "0.1.0"
__author__ = "bioseq Contributors"

from bioseq.errors import (
    BioSeqError,
    FormatError,
    SequenceNotFoundError,
    BoundaryError,
    UnsupportedOperationError,
)

from bioseq.sequence import (
    SequenceType,
    infer_sequence_type,
    validate_sequence,
)

from bioseq.io import (
    read_fasta,
    read_fastq,
    write_fasta,
    write_fastq,
    FastaParser,
    FastqParser,
    FastaRecord,
    FastqRecord,
    FaiEntry,
    build_index,
    index_fasta,
    parse_index,
    IndexedFastaReader,
)

from bioseq.utils import gc_content

from bioseq.adapter import (
    Capability,
    OpenSpec,
    Region,
    FastaAdapter,
    open_adapter,
)

__all__ = [
    # Errors
    "BioSeqError",
    "FormatError",
    "SequenceNotFoundError",
    "BoundaryError",
    "UnsupportedOperationError",
    # Sequence types
    "SequenceType",
    "infer_sequence_type",
    "validate_sequence",
    # I/O
    "read_fasta",
    "read_fastq",
    "write_fasta",
    "write_fastq",
    "FastaParser",
    "FastqParser",
    "FastaRecord",
    "FastqRecord",
    # Indexing
    "FaiEntry",
    "build_index",
    "index_fasta",
    "parse_index",
    "IndexedFastaReader",
    # Utilities
    "gc_content",
    # Adapters
    "Capability",
    "OpenSpec",
    "Region",
    "FastaAdapter",
    "open_adapter",
]
