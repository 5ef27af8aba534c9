"""Tests for whole-chromosome variant injection."""

import random

import pytest

from conftest import block, variant
from seqsim.core.injector import VariantInjector, inject_variants, validate_chromosome_records
from seqsim.errors import ChromosomeMismatch, CoverageViolation, InvalidOverlap, PositionConflict
from seqsim.models.core import GenomicPosition, PointVariant, ReferenceBlock


@pytest.fixture
def chrom_blocks():
    return [block(1, 99), block(100, 200), block(201, 201), block(202, 500)]


def spans(records):
    return [(r.start.offset, r.end.offset) for r in records]


class TestValidateChromosomeRecords:
    def test_valid_records(self, chrom_blocks):
        validate_chromosome_records(chrom_blocks, (1, 500))

    def test_empty_records(self):
        validate_chromosome_records([])
        with pytest.raises(CoverageViolation):
            validate_chromosome_records([], (1, 10))

    def test_gap(self):
        with pytest.raises(CoverageViolation, match="Gap"):
            validate_chromosome_records([block(1, 10), block(12, 20)])

    def test_overlap(self):
        with pytest.raises(CoverageViolation, match="overlap"):
            validate_chromosome_records([block(1, 10), block(10, 20)])

    def test_unsorted(self):
        with pytest.raises(CoverageViolation):
            validate_chromosome_records([block(11, 20), block(1, 10)])

    def test_mixed_chromosomes(self):
        with pytest.raises(CoverageViolation, match="mixes"):
            validate_chromosome_records([block(1, 10), block(11, 20, chrom="chr2")])

    def test_span_changed(self, chrom_blocks):
        with pytest.raises(CoverageViolation):
            validate_chromosome_records(chrom_blocks, (1, 600))


class TestLocate:
    def test_locate_each_block(self, chrom_blocks):
        injector = VariantInjector(chrom_blocks)
        assert injector.locate(GenomicPosition(chrom="chr1", offset=1)) == 0
        assert injector.locate(GenomicPosition(chrom="chr1", offset=99)) == 0
        assert injector.locate(GenomicPosition(chrom="chr1", offset=100)) == 1
        assert injector.locate(GenomicPosition(chrom="chr1", offset=201)) == 2
        assert injector.locate(GenomicPosition(chrom="chr1", offset=500)) == 3

    def test_locate_outside(self, chrom_blocks):
        injector = VariantInjector(chrom_blocks[1:])
        assert injector.locate(GenomicPosition(chrom="chr1", offset=50)) is None
        assert injector.locate(GenomicPosition(chrom="chr1", offset=501)) is None

    def test_locate_other_chromosome(self, chrom_blocks):
        injector = VariantInjector(chrom_blocks)
        with pytest.raises(ChromosomeMismatch):
            injector.locate(GenomicPosition(chrom="chr2", offset=10))


class TestApply:
    def test_rejects_invalid_input(self):
        with pytest.raises(CoverageViolation):
            VariantInjector([block(1, 10), block(20, 30)])

    def test_rejects_reference_block(self, chrom_blocks):
        injector = VariantInjector(chrom_blocks)
        with pytest.raises(TypeError, match="ReferenceBlock"):
            injector.apply(block(150, 150))
        assert injector.records == chrom_blocks
        assert injector.applied == 0

    def test_does_not_mutate_input_list(self, chrom_blocks):
        original = list(chrom_blocks)
        inject_variants(chrom_blocks, [variant(150)])
        assert chrom_blocks == original

    def test_sequence_of_variants(self, chrom_blocks):
        snvs = [variant(50), variant(100), variant(150), variant(201), variant(500)]
        records = inject_variants(chrom_blocks, snvs)

        assert spans(records) == [
            (1, 49),
            (50, 50),
            (51, 99),
            (100, 100),
            (101, 149),
            (150, 150),
            (151, 200),
            (201, 201),
            (202, 499),
            (500, 500),
        ]
        placed = [r for r in records if isinstance(r, PointVariant)]
        assert placed == snvs
        assert all(any(p is s for p in placed) for s in snvs)

    def test_same_position_twice(self, chrom_blocks):
        injector = VariantInjector(chrom_blocks)
        first = variant(150)
        injector.apply(first)
        with pytest.raises(PositionConflict) as excinfo:
            injector.apply(variant(150, alt="C"))
        assert excinfo.value.existing is first
        assert excinfo.value.position == GenomicPosition(chrom="chr1", offset=150)

    def test_overlapping_spans(self, chrom_blocks):
        injector = VariantInjector(chrom_blocks)
        injector.apply(variant(150))
        with pytest.raises(PositionConflict):
            injector.apply(variant(148, 152, ref="TTTTT", alt="T"))

    def test_position_outside_chromosome(self, chrom_blocks):
        injector = VariantInjector(chrom_blocks)
        with pytest.raises(PositionConflict, match="no record covers"):
            injector.apply(variant(501))

    def test_variant_crossing_block_edge(self, chrom_blocks):
        injector = VariantInjector(chrom_blocks)
        with pytest.raises(InvalidOverlap):
            injector.apply(variant(198, 202, ref="TTTTT", alt="T"))

    def test_variant_past_chromosome_end(self, chrom_blocks):
        injector = VariantInjector(chrom_blocks)
        with pytest.raises(InvalidOverlap):
            injector.apply(variant(499, 505, ref="TTTTTTT", alt="T"))

    def test_failed_variant_leaves_records_unchanged(self, chrom_blocks):
        injector = VariantInjector(chrom_blocks)
        injector.apply(variant(150))
        before = list(injector.records)
        with pytest.raises(PositionConflict):
            injector.apply(variant(150))
        assert injector.records == before
        assert injector.applied == 1

    def test_no_rollback_of_earlier_splits(self, chrom_blocks):
        injector = VariantInjector(chrom_blocks)
        with pytest.raises(PositionConflict):
            injector.apply_all([variant(50), variant(50)])
        assert len(injector.records) == 6

    def test_other_chromosome(self, chrom_blocks):
        with pytest.raises(ChromosomeMismatch):
            inject_variants(chrom_blocks, [variant(10, chrom="chr2")])

    def test_existing_variant_in_input(self):
        existing = variant(11)
        records = [block(1, 10), existing, block(12, 20)]
        with pytest.raises(PositionConflict):
            inject_variants(records, [variant(11)])
        result = inject_variants(records, [variant(12)])
        assert spans(result) == [(1, 10), (11, 11), (12, 12), (13, 20)]


def test_random_variants_keep_coverage():
    """Any set of non-conflicting variants leaves the chromosome sorted and contiguous."""
    rng = random.Random(7)
    blocks = []
    start = 1
    for _ in range(50):
        end = start + rng.randint(0, 40)
        blocks.append(block(start, end))
        start = end + 1
    last = start - 1

    positions = sorted(rng.sample(range(1, last + 1), 200))
    records = inject_variants(blocks, [variant(p) for p in positions])

    validate_chromosome_records(records, (1, last))
    assert records[0].start.offset == 1
    assert records[-1].end.offset == last
    assert sum(r.length for r in records) == last
    assert [r.start.offset for r in records if isinstance(r, PointVariant)] == positions
    assert all(isinstance(r, (ReferenceBlock, PointVariant)) for r in records)
