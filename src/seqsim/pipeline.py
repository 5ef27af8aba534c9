"""
Pipeline Orchestrator: builds a mutated assembly gVCF.

This module handles:
1. Reading reference blocks from the input gVCF.
2. Reading the point variants to inject (optionally checked against a FASTA).
3. Injecting variants chromosome by chromosome, in parallel when configured.
4. Writing the mutated records back out as a gVCF.
"""

import logging
from dataclasses import dataclass, field
from operator import attrgetter
from pathlib import Path

from .core.injector import VariantInjector
from .errors import CoverageViolation, InvalidOverlap, PositionConflict
from .io.input import GvcfReader, ReferenceChecker, VariantVcfReader, group_by_chromosome
from .io.output import GvcfWriter
from .models.core import ConflictPolicy, IntervalRecord, MutationConfig, PointVariant
from .parallel import ParallelProcessor
from .utils.logging import console, timed

logger = logging.getLogger(__name__)

MAX_REPORTED_INVALID = 5


@dataclass
class ChromosomeResult:
    """Outcome of injecting variants into one chromosome."""

    chrom: str
    records: list[IntervalRecord]
    applied: int = 0
    skipped: list[PointVariant] = field(default_factory=list)
    error: str | None = None


@dataclass
class MutationSummary:
    """Counts reported at the end of a run."""

    output_file: Path
    chromosomes: int = 0
    variants_loaded: int = 0
    variants_invalid: int = 0
    variants_unplaced: int = 0
    variants_applied: int = 0
    variants_skipped: int = 0
    failed_chromosomes: list[str] = field(default_factory=list)


def mutate_chromosome(
    chrom: str,
    records: list[IntervalRecord],
    variants: list[PointVariant],
    policy: ConflictPolicy = ConflictPolicy.ABORT,
) -> ChromosomeResult:
    """
    Inject `variants` into one chromosome according to `policy`.

    ABORT re-raises the first InvalidOverlap/PositionConflict/CoverageViolation.
    SKIP_VARIANT leaves an unplaceable variant out and continues. SKIP_CHROMOSOME
    returns the chromosome's records as loaded, including when the loaded
    records are not a contiguous record set.
    """
    snapshot = list(records)

    def leave_unmutated(error: Exception) -> ChromosomeResult:
        logger.warning("Leaving %s unmutated: %s", chrom, error)
        return ChromosomeResult(
            chrom=chrom, records=snapshot, skipped=list(variants), error=str(error)
        )

    try:
        injector = VariantInjector(records)
    except CoverageViolation as e:
        if policy is ConflictPolicy.SKIP_CHROMOSOME:
            return leave_unmutated(e)
        raise

    result = ChromosomeResult(chrom=chrom, records=injector.records)
    with timed(f"Injecting {len(variants)} variants on {chrom}", logger):
        for variant in variants:
            try:
                injector.apply(variant)
            except (InvalidOverlap, PositionConflict) as e:
                if policy is ConflictPolicy.SKIP_VARIANT:
                    logger.warning("Skipping variant: %s", e)
                    result.skipped.append(variant)
                    continue
                if policy is ConflictPolicy.SKIP_CHROMOSOME:
                    return leave_unmutated(e)
                raise
        injector.check()

    result.applied = injector.applied
    return result


class MutationPipeline:
    def __init__(self, config: MutationConfig):
        self.config = config
        self.console = console

    def run(self) -> MutationSummary:
        """Execute the pipeline."""
        summary = MutationSummary(output_file=self.config.output_file)
        self.console.print("[bold blue]Starting seqsim mutate[/bold blue]")

        # 1. Load reference blocks
        with self.console.status("[bold green]Loading gVCF...[/bold green]"):
            blocks, contigs, samples = self._load_gvcf()
        summary.chromosomes = len(blocks)
        self.console.print(
            f"Loaded [bold]{sum(len(r) for r in blocks.values())}[/bold] records "
            f"on {len(blocks)} chromosomes."
        )

        # 2. Load and validate variants
        with self.console.status("[bold green]Loading variants...[/bold green]"):
            variants = self._load_variants()
        summary.variants_loaded = len(variants)
        self.console.print(f"Loaded [bold]{len(variants)}[/bold] variants.")

        if self.config.reference_fasta:
            valid = self._validate_variants(variants)
            summary.variants_invalid = len(variants) - len(valid)
            variants = valid

        # 3. Assign variants to chromosomes
        by_chrom = group_by_chromosome(variants)
        for chrom in list(by_chrom):
            if chrom not in blocks:
                unplaced = by_chrom.pop(chrom)
                if self.config.conflict_policy is ConflictPolicy.ABORT:
                    raise PositionConflict(unplaced[0].start)
                logger.warning(
                    "Chromosome %s is not in the gVCF; skipping %d variants", chrom, len(unplaced)
                )
                summary.variants_unplaced += len(unplaced)

        jobs = [
            (
                chrom,
                records,
                sorted(by_chrom.get(chrom, []), key=attrgetter("start.offset")),
                self.config.conflict_policy,
            )
            for chrom, records in blocks.items()
        ]

        # 4. Inject
        processor = ParallelProcessor(n_jobs=self.config.threads)
        results: list[ChromosomeResult] = processor.starmap(
            mutate_chromosome, jobs, description="Injecting variants"
        )

        for result in results:
            summary.variants_applied += result.applied
            summary.variants_skipped += len(result.skipped)
            if result.error is not None:
                summary.failed_chromosomes.append(result.chrom)

        # 5. Write
        sample_name = self.config.sample_name or (samples[0] if samples else "SAMPLE")
        with timed(f"Writing {self.config.output_file}", logger):
            self._write_output(results, sample_name, contigs)

        self.console.print(
            f"Applied [bold]{summary.variants_applied}[/bold] variants, "
            f"skipped {summary.variants_skipped}."
        )
        if summary.failed_chromosomes:
            self.console.print(
                f"[yellow]Chromosomes left unmutated: {', '.join(summary.failed_chromosomes)}[/yellow]"
            )
        self.console.print(f"[bold green]Mutated gVCF written to {self.config.output_file}[/bold green]")
        return summary

    def _load_gvcf(self) -> tuple[dict[str, list[IntervalRecord]], dict[str, int | None], list[str]]:
        reader = GvcfReader(self.config.gvcf_file)
        try:
            records = group_by_chromosome(reader)
            contigs = reader.contigs
            samples = reader.samples
        finally:
            reader.close()
        return records, contigs, samples

    def _load_variants(self) -> list[PointVariant]:
        reader = VariantVcfReader(self.config.variant_file)
        try:
            return list(reader)
        finally:
            reader.close()

    def _validate_variants(self, variants: list[PointVariant]) -> list[PointVariant]:
        """Drop variants whose REF does not match the reference FASTA."""
        checker = ReferenceChecker(self.config.reference_fasta)
        valid_variants = []
        invalid_count = 0

        try:
            for v in variants:
                if checker.validate(v):
                    valid_variants.append(v)
                else:
                    invalid_count += 1
                    if invalid_count <= MAX_REPORTED_INVALID:
                        self.console.print(
                            f"[yellow]Invalid variant (REF mismatch): {v.start} {v.ref}>{v.alt}[/yellow]"
                        )
        finally:
            checker.close()

        if invalid_count > MAX_REPORTED_INVALID:
            self.console.print(
                f"[yellow]... and {invalid_count - MAX_REPORTED_INVALID} more invalid variants.[/yellow]"
            )
        return valid_variants

    def _write_output(
        self,
        results: list[ChromosomeResult],
        sample_name: str,
        contigs: dict[str, int | None],
    ):
        """Write results to the output gVCF."""
        self.config.output_file.parent.mkdir(parents=True, exist_ok=True)
        writer = GvcfWriter(self.config.output_file, sample_name=sample_name, contigs=contigs)
        try:
            for result in results:
                for record in result.records:
                    writer.write(record)
        finally:
            writer.close()
