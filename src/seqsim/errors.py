"""
Error types raised by the reference-block splitting engine.

The splitter and injector never repair malformed input; each violation is
raised as one of the exceptions below and the caller decides whether to abort
the chromosome, skip the variant, or stop the run.
"""

from typing import Any


class SeqSimError(Exception):
    """Base class for all seqsim engine errors."""


class InvalidOverlap(SeqSimError):
    """A variant does not lie entirely inside the reference block it targets."""

    def __init__(self, block: Any, variant: Any):
        self.block = block
        self.variant = variant
        super().__init__(
            f"Variant {variant.chrom}:{variant.start.offset}-{variant.end.offset} is not "
            f"contained in reference block {block.chrom}:{block.start.offset}-{block.end.offset}"
        )


class PositionConflict(SeqSimError):
    """A variant targets a span that no reference block can accept."""

    def __init__(self, position: Any, existing: Any = None):
        self.position = position
        self.existing = existing
        if existing is None:
            detail = "no record covers this position"
        else:
            detail = (
                f"already occupied by variant {existing.chrom}:"
                f"{existing.start.offset}-{existing.end.offset} {existing.ref}>{existing.alt}"
            )
        super().__init__(f"Cannot place variant at {position.chrom}:{position.offset}: {detail}")


class ChromosomeMismatch(SeqSimError):
    """An operation was attempted across two different chromosomes."""

    def __init__(self, left: str, right: str):
        self.left = left
        self.right = right
        super().__init__(f"Chromosome mismatch: '{left}' vs '{right}'")


class CoverageViolation(SeqSimError):
    """A chromosome record set is unsorted, gapped, overlapping, or changed its span."""
