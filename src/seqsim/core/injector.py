"""
Injector: applies an ordered list of point variants to one chromosome.

The chromosome is held as a list of IntervalRecord that is sorted, contiguous
and non-overlapping at all times. Each variant is located by binary search on
start offsets and its containing reference block is replaced in place by the
splitter's output, which is already locally sorted, so a slice assignment keeps
the whole list ordered.

Errors are raised as soon as they are found. Splits already applied to the
list are not rolled back; take a copy of `records` first if the chromosome
must be all-or-nothing.
"""

import bisect
import logging
from collections.abc import Iterable, Sequence
from operator import attrgetter

from ..errors import ChromosomeMismatch, CoverageViolation, PositionConflict
from ..models.core import GenomicPosition, IntervalRecord, PointVariant
from .splitter import split_reference_block

logger = logging.getLogger(__name__)

_start_offset = attrgetter("start.offset")


def validate_chromosome_records(
    records: Sequence[IntervalRecord], span: tuple[int, int] | None = None
) -> None:
    """
    Check the chromosome-level invariant of a record list.

    Args:
        records: Records for a single chromosome.
        span: Expected (first start, last end) offsets, if known.

    Raises:
        CoverageViolation: If records mix chromosomes, are unsorted, leave a gap,
            overlap, or do not cover `span` exactly.
    """
    if not records:
        if span is not None:
            raise CoverageViolation(f"Expected records covering {span[0]}-{span[1]}, found none")
        return

    chrom = records[0].chrom
    for prev, curr in zip(records, records[1:]):
        if curr.chrom != chrom:
            raise CoverageViolation(f"Record set mixes chromosomes '{chrom}' and '{curr.chrom}'")
        expected = prev.end.offset + 1
        if curr.start.offset < expected:
            raise CoverageViolation(
                f"Records overlap or are unsorted at {chrom}:{curr.start.offset} "
                f"(previous record ends at {prev.end.offset})"
            )
        if curr.start.offset > expected:
            raise CoverageViolation(
                f"Gap on {chrom} between {prev.end.offset} and {curr.start.offset}"
            )

    if span is not None:
        actual = (records[0].start.offset, records[-1].end.offset)
        if actual != tuple(span):
            raise CoverageViolation(
                f"Records on {chrom} cover {actual[0]}-{actual[1]}, expected {span[0]}-{span[1]}"
            )


class VariantInjector:
    """
    Owns the record list of one chromosome and applies variants to it.

    Example:
        injector = VariantInjector(blocks)
        records = injector.apply_all(variants)
    """

    def __init__(self, records: Iterable[IntervalRecord]):
        self.records: list[IntervalRecord] = list(records)
        validate_chromosome_records(self.records)
        self.chrom: str | None = self.records[0].chrom if self.records else None
        self.span: tuple[int, int] | None = (
            (self.records[0].start.offset, self.records[-1].end.offset) if self.records else None
        )
        self.applied = 0

    def locate(self, position: GenomicPosition) -> int | None:
        """Return the index of the record covering `position`, or None."""
        if self.chrom is not None and position.chrom != self.chrom:
            raise ChromosomeMismatch(self.chrom, position.chrom)
        idx = bisect.bisect_right(self.records, position.offset, key=_start_offset) - 1
        if idx < 0 or self.records[idx].end.offset < position.offset:
            return None
        return idx

    def apply(self, variant: PointVariant) -> None:
        """
        Inject one variant.

        Raises:
            TypeError: `variant` is not a PointVariant.
            ChromosomeMismatch: Variant is on another chromosome.
            PositionConflict: No record covers the variant, or its span is
                already occupied by another variant.
            InvalidOverlap: Variant crosses the edge of its reference block.
        """
        if not isinstance(variant, PointVariant):
            raise TypeError(f"Expected PointVariant, got {type(variant).__name__}")
        idx = self.locate(variant.start)
        if idx is None:
            raise PositionConflict(variant.start)

        target = self.records[idx]
        if isinstance(target, PointVariant):
            raise PositionConflict(variant.start, target)

        # A span running past the block is only a conflict if it reaches a variant;
        # otherwise the splitter reports it as an invalid overlap.
        nxt = idx + 1
        while nxt < len(self.records) and self.records[nxt].start.offset <= variant.end.offset:
            if isinstance(self.records[nxt], PointVariant):
                raise PositionConflict(variant.start, self.records[nxt])
            nxt += 1

        self.records[idx : idx + 1] = split_reference_block(target, variant)
        self.applied += 1

    def apply_all(self, variants: Iterable[PointVariant]) -> list[IntervalRecord]:
        """
        Inject variants in order and verify the chromosome is still fully covered.

        Returns:
            The updated record list (the injector's own list, not a copy).
        """
        for variant in variants:
            self.apply(variant)
        self.check()
        logger.debug(
            "Injected %d variants on %s (%d records)", self.applied, self.chrom, len(self.records)
        )
        return self.records

    def check(self) -> None:
        """Verify records are sorted, contiguous and span the original range."""
        validate_chromosome_records(self.records, self.span)


def inject_variants(
    records: Iterable[IntervalRecord], variants: Iterable[PointVariant]
) -> list[IntervalRecord]:
    """Apply `variants` to a copy of `records` and return the resulting records."""
    return VariantInjector(records).apply_all(variants)
