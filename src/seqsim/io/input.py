"""
Input Adapters: Handling gVCF and VCF inputs.

This module provides classes to read reference blocks and point variants from
gVCF/VCF files, converting them into IntervalRecord models, plus helpers to
discover gVCF files and the chromosome ids they contain.
"""

import gzip
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Iterator

import pysam

from ..models.core import GenomicPosition, IntervalRecord, PointVariant, ReferenceBlock

logger = logging.getLogger(__name__)

# ALT values that mark a gVCF record as a non-variant block
SYMBOLIC_REF_ALTS = frozenset({"<NON_REF>", "<*>"})
GVCF_EXTENSIONS = (".gvcf", ".gvcf.gz", ".g.vcf", ".g.vcf.gz")


def _called_alts(alts: tuple[str, ...] | None) -> list[str]:
    return [a for a in (alts or ()) if a not in SYMBOLIC_REF_ALTS and a not in (".", "*")]


def _concrete_alts(alts: tuple[str, ...] | None) -> list[str]:
    # Symbolic alleles such as <DEL> or <INS> carry no sequence to inject
    return [a for a in _called_alts(alts) if not a.startswith("<")]


class RecordReader:
    """Abstract base class for record readers."""

    def __iter__(self) -> Iterator[IntervalRecord]:
        raise NotImplementedError


class GvcfReader(RecordReader):
    """
    Reads a gVCF into reference blocks and point variants.

    Records whose ALT column only holds a symbolic non-reference allele become
    ReferenceBlock spanning [POS, END]; all others become PointVariant.
    """

    def __init__(self, path: Path):
        self.path = path
        self._vcf = pysam.VariantFile(str(path))

    @property
    def contigs(self) -> dict[str, int | None]:
        """Contig names and lengths declared in the header, in header order."""
        return {name: contig.length for name, contig in self._vcf.header.contigs.items()}

    @property
    def samples(self) -> list[str]:
        return list(self._vcf.header.samples)

    def __iter__(self) -> Iterator[IntervalRecord]:
        for record in self._vcf:
            # pysam: record.pos is 1-based, record.stop is END (1-based inclusive)
            start = GenomicPosition(chrom=record.chrom, offset=record.pos)
            end = GenomicPosition(chrom=record.chrom, offset=record.stop)
            alts = _called_alts(record.alts)
            if not alts:
                yield ReferenceBlock(start=start, end=end, ref=record.ref)
            else:
                yield PointVariant(
                    start=start,
                    end=end,
                    ref=record.ref,
                    alt=",".join(alts),
                    variant_id=record.id,
                )

    def close(self):
        self._vcf.close()


class VariantVcfReader(RecordReader):
    """
    Reads the point variants to inject from a VCF.

    Only the first concrete ALT of a site is used: a position can receive a
    single mutation.
    """

    def __init__(self, path: Path):
        self.path = path
        self._vcf = pysam.VariantFile(str(path))

    def __iter__(self) -> Iterator[PointVariant]:
        for record in self._vcf:
            alts = _concrete_alts(record.alts)
            if not alts:
                logger.debug("Skipping %s:%d with no concrete ALT", record.chrom, record.pos)
                continue
            if len(alts) > 1:
                logger.debug(
                    "Site %s:%d has %d ALTs; injecting %s",
                    record.chrom,
                    record.pos,
                    len(alts),
                    alts[0],
                )
            yield PointVariant.at(
                chrom=record.chrom,
                pos=record.pos,
                ref=record.ref,
                alt=alts[0],
                variant_id=record.id,
            )

    def close(self):
        self._vcf.close()


def group_by_chromosome(records: Iterable[IntervalRecord]) -> dict[str, list[IntervalRecord]]:
    """Group records by chromosome, keeping first-seen chromosome order."""
    groups: dict[str, list[IntervalRecord]] = {}
    for record in records:
        groups.setdefault(record.chrom, []).append(record)
    return groups


class ReferenceChecker:
    """
    Utility to check variants against a reference FASTA.
    Ensures that the REF allele matches the genome.
    """

    def __init__(self, fasta_path: Path):
        self.fasta = pysam.FastaFile(str(fasta_path))

    def validate(self, variant: PointVariant) -> bool:
        """
        Check if variant REF matches reference genome.
        """
        try:
            ref_seq = self.fasta.fetch(variant.chrom, variant.start.offset - 1, variant.end.offset)
            return ref_seq.upper() == variant.ref.upper()
        except (ValueError, KeyError):
            return False

    def close(self):
        self.fasta.close()


def is_gvcf_file(path: Path) -> bool:
    return path.name.endswith(GVCF_EXTENSIONS)


def collect_gvcf_files(path: Path) -> list[Path]:
    """
    Resolve a gVCF input to a list of files.

    Args:
        path: A gVCF file, a directory of gVCF files, or a .txt file listing
            one gVCF path per line (blank lines and '#' comments ignored).

    Raises:
        FileNotFoundError: If `path` does not exist.
        ValueError: If no gVCF files can be found.
    """
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {path}")

    if path.is_dir():
        files = sorted(p for p in path.iterdir() if p.is_file() and is_gvcf_file(p))
        if not files:
            raise ValueError(f"No gVCF files ({', '.join(GVCF_EXTENSIONS)}) found in directory: {path}")
        return files

    if path.suffix == ".txt":
        files = []
        with open(path) as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                gvcf = Path(line)
                if gvcf.is_file():
                    files.append(gvcf)
                else:
                    logger.warning("gVCF file not found: %s", line)
        if not files:
            raise ValueError(f"No valid gVCF files found in list file: {path}")
        return files

    if is_gvcf_file(path):
        return [path]

    raise ValueError(f"File must have extension {', '.join(GVCF_EXTENSIONS)} or .txt: {path}")


def read_chrom_ids(path: Path) -> set[str]:
    """Return the CHROM values used by data lines of a plain or gzipped gVCF."""
    opener = gzip.open if path.name.endswith(".gz") else open
    chrom_ids = set()
    with opener(path, "rt") as f:
        for line in f:
            if line.startswith("#"):
                continue
            chrom = line.split("\t", 1)[0].strip()
            if chrom:
                chrom_ids.add(chrom)
    return chrom_ids
