"""
Core module for seqsim.

Provides the reference-block splitter and the per-chromosome variant injector.
"""

from .injector import VariantInjector, inject_variants, validate_chromosome_records
from .splitter import split_reference_block

__all__ = [
    "VariantInjector",
    "inject_variants",
    "split_reference_block",
    "validate_chromosome_records",
]
