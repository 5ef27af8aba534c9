"""
Splitter: replaces one reference block with the records that result from
placing a point variant inside it.

Given block [S, E] and a contained variant [s, e]:

- Interior (S < s, e < E):  [S, s-1], variant, [e+1, E]
- Left boundary (s == S):   variant, [e+1, E]
- Right boundary (e == E):  [S, s-1], variant
- Full coverage:            variant

Reference fragments keep the block's placeholder allele; the variant object is
passed through as-is so identity comparisons downstream still hold.
"""

from ..errors import ChromosomeMismatch, InvalidOverlap
from ..models.core import IntervalRecord, PointVariant, ReferenceBlock


def split_reference_block(block: ReferenceBlock, variant: PointVariant) -> list[IntervalRecord]:
    """
    Split `block` around `variant`.

    Args:
        block: Reference block to split.
        variant: Point variant fully contained in `block`.

    Returns:
        Ordered records covering exactly block's span (1 to 3 entries).

    Raises:
        TypeError: If `block` is not a ReferenceBlock.
        ChromosomeMismatch: If block and variant are on different chromosomes.
        InvalidOverlap: If the variant is outside the block or crosses one of its edges.
    """
    if not isinstance(block, ReferenceBlock):
        raise TypeError(f"Only reference blocks can be split, got {type(block).__name__}")
    if block.chrom != variant.chrom:
        raise ChromosomeMismatch(block.chrom, variant.chrom)
    if not block.contains(variant):
        raise InvalidOverlap(block, variant)

    result: list[IntervalRecord] = []
    if variant.start.offset > block.start.offset:
        result.append(block.with_span(block.start.offset, variant.start.offset - 1))
    result.append(variant)
    if variant.end.offset < block.end.offset:
        result.append(block.with_span(variant.end.offset + 1, block.end.offset))
    return result
