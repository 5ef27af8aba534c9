"""
Core data models for seqsim.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..errors import ChromosomeMismatch


class GenomicPosition(BaseModel):
    """
    A 1-based coordinate on a named chromosome.

    Positions compare equal by (chrom, offset). Ordering is only defined on the
    same chromosome; ordering across chromosomes raises ChromosomeMismatch.
    """

    model_config = ConfigDict(frozen=True)

    chrom: str
    offset: int = Field(ge=1, description="1-based offset on the chromosome")

    def _check_same_chrom(self, other: "GenomicPosition") -> None:
        if self.chrom != other.chrom:
            raise ChromosomeMismatch(self.chrom, other.chrom)

    def __lt__(self, other: "GenomicPosition") -> bool:
        self._check_same_chrom(other)
        return self.offset < other.offset

    def __le__(self, other: "GenomicPosition") -> bool:
        self._check_same_chrom(other)
        return self.offset <= other.offset

    def __gt__(self, other: "GenomicPosition") -> bool:
        self._check_same_chrom(other)
        return self.offset > other.offset

    def __ge__(self, other: "GenomicPosition") -> bool:
        self._check_same_chrom(other)
        return self.offset >= other.offset

    def __str__(self) -> str:
        return f"{self.chrom}:{self.offset}"


class _Interval(BaseModel):
    """Closed interval [start, end] on a single chromosome."""

    model_config = ConfigDict(frozen=True)

    start: GenomicPosition
    end: GenomicPosition

    @model_validator(mode="after")
    def validate_interval(self):
        if self.start.chrom != self.end.chrom:
            raise ValueError(
                f"Interval spans two chromosomes ({self.start.chrom}, {self.end.chrom})"
            )
        if self.end.offset < self.start.offset:
            raise ValueError(
                f"End position ({self.end.offset}) must be >= start position ({self.start.offset})"
            )
        return self

    @property
    def chrom(self) -> str:
        return self.start.chrom

    @property
    def length(self) -> int:
        return self.end.offset - self.start.offset + 1

    def contains(self, other: "_Interval") -> bool:
        """True if `other` lies entirely within this interval (inclusive)."""
        if self.chrom != other.chrom:
            raise ChromosomeMismatch(self.chrom, other.chrom)
        return self.start <= other.start and other.end <= self.end


class ReferenceBlock(_Interval):
    """
    A span with no called variant.

    `ref` is the placeholder reference allele the block was loaded with (in a
    gVCF, the first base of the block). Fragments produced by splitting keep it.
    """

    kind: Literal["reference_block"] = "reference_block"
    ref: str

    def with_span(self, start_offset: int, end_offset: int) -> "ReferenceBlock":
        """Return a new block with the same allele over [start_offset, end_offset]."""
        return ReferenceBlock(
            start=GenomicPosition(chrom=self.chrom, offset=start_offset),
            end=GenomicPosition(chrom=self.chrom, offset=end_offset),
            ref=self.ref,
        )


class PointVariant(_Interval):
    """A variant with concrete reference and alternate alleles."""

    kind: Literal["point_variant"] = "point_variant"
    ref: str
    alt: str
    variant_id: str | None = None

    @classmethod
    def at(
        cls, chrom: str, pos: int, ref: str, alt: str, variant_id: str | None = None
    ) -> "PointVariant":
        """
        Build a variant from a VCF-style position.

        The span covers the reference allele: [pos, pos + len(ref) - 1].
        """
        return cls(
            start=GenomicPosition(chrom=chrom, offset=pos),
            end=GenomicPosition(chrom=chrom, offset=pos + max(len(ref), 1) - 1),
            ref=ref,
            alt=alt,
            variant_id=variant_id,
        )


IntervalRecord = Annotated[ReferenceBlock | PointVariant, Field(discriminator="kind")]


class ConflictPolicy(str, Enum):
    """What the pipeline does when a variant cannot be injected."""

    ABORT = "abort"
    SKIP_VARIANT = "skip-variant"
    SKIP_CHROMOSOME = "skip-chromosome"


class MutationConfig(BaseModel):
    """
    Configuration for a mutated-assembly run.
    """

    # Input
    gvcf_file: Path
    variant_file: Path
    reference_fasta: Path | None = None

    # Output
    output_file: Path
    sample_name: str | None = None

    # Behaviour
    conflict_policy: ConflictPolicy = ConflictPolicy.ABORT

    # Performance
    threads: int = Field(default=1, ge=1)

    @field_validator("gvcf_file", "variant_file")
    @classmethod
    def validate_file_exists(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"File not found: {v}")
        return v

    @field_validator("reference_fasta")
    @classmethod
    def validate_fasta_exists(cls, v: Path | None) -> Path | None:
        if v is not None and not v.exists():
            raise ValueError(f"Reference FASTA not found: {v}")
        return v

    @field_validator("output_file")
    @classmethod
    def validate_output_file(cls, v: Path) -> Path:
        if v.is_dir():
            raise ValueError(f"Output path must be a file, not a directory: {v}")
        return v
