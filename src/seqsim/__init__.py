"""
seqsim - Mutated assembly simulation on gVCF reference blocks.

This package injects pre-selected point variants into the reference-block
representation of an assembly, keeping every coordinate covered exactly once.

Example usage:
    $ seqsim mutate -g assembly.g.vcf.gz -v variants.vcf -o mutated.g.vcf.gz
"""

__version__ = "0.1.0"

from .core import VariantInjector, inject_variants, split_reference_block
from .errors import (
    ChromosomeMismatch,
    CoverageViolation,
    InvalidOverlap,
    PositionConflict,
    SeqSimError,
)
from .models.core import (
    ConflictPolicy,
    GenomicPosition,
    IntervalRecord,
    MutationConfig,
    PointVariant,
    ReferenceBlock,
)
from .pipeline import MutationPipeline

__all__ = [
    "__version__",
    "ChromosomeMismatch",
    "ConflictPolicy",
    "CoverageViolation",
    "GenomicPosition",
    "IntervalRecord",
    "InvalidOverlap",
    "MutationConfig",
    "MutationPipeline",
    "PointVariant",
    "PositionConflict",
    "ReferenceBlock",
    "SeqSimError",
    "VariantInjector",
    "inject_variants",
    "split_reference_block",
]
