"""
Genomic file I/O utilities.

This module provides readers and writers for:
- FASTA: Sequence storage format, read sequentially or by name
  through a .fai index
- FASTQ: Sequence + quality scores (NGS data)
"""

from bioseq.io.fasta import (
    read_fasta,
    write_fasta,
    load_fasta_dict,
    parse_fasta_string,
    FastaParser,
    FastaRecord,
    ParserState,
)

from bioseq.io.fastq import (
    read_fastq,
    write_fastq,
    FastqParser,
    FastqRecord,
    quality_to_phred,
    phred_to_quality,
    PHRED33_OFFSET,
)

from bioseq.io.faidx import (
    build_index,
    write_index,
    index_fasta,
    parse_index,
    FaiEntry,
    FAI_SUFFIX,
)

from bioseq.io.indexed import IndexedFastaReader

__all__ = [
    "read_fasta",
    "write_fasta",
    "load_fasta_dict",
    "parse_fasta_string",
    "FastaParser",
    "FastaRecord",
    "ParserState",
    "read_fastq",
    "write_fastq",
    "FastqParser",
    "FastqRecord",
    "quality_to_phred",
    "phred_to_quality",
    "PHRED33_OFFSET",
    "build_index",
    "write_index",
    "index_fasta",
    "parse_index",
    "FaiEntry",
    "FAI_SUFFIX",
    "IndexedFastaReader",
]
