"""
Data models for seqsim.

Provides Pydantic models for positions, interval records, and run configuration.
"""

from .core import (
    ConflictPolicy,
    GenomicPosition,
    IntervalRecord,
    MutationConfig,
    PointVariant,
    ReferenceBlock,
)

__all__ = [
    "ConflictPolicy",
    "GenomicPosition",
    "IntervalRecord",
    "MutationConfig",
    "PointVariant",
    "ReferenceBlock",
]
