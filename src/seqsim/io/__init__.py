"""
I/O module for seqsim.

Provides readers and writers for gVCF and VCF files.
"""

from .input import (
    GvcfReader,
    RecordReader,
    ReferenceChecker,
    VariantVcfReader,
    collect_gvcf_files,
    group_by_chromosome,
    read_chrom_ids,
)
from .output import GvcfWriter, OutputWriter

__all__ = [
    "GvcfReader",
    "GvcfWriter",
    "OutputWriter",
    "RecordReader",
    "ReferenceChecker",
    "VariantVcfReader",
    "collect_gvcf_files",
    "group_by_chromosome",
    "read_chrom_ids",
]
