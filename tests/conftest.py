"""Pytest configuration and fixtures."""

import sys
import tempfile
from collections.abc import Generator
from pathlib import Path

import pysam
import pytest

# Add src directory to path so tests use local code, not installed package
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from seqsim.models.core import GenomicPosition, PointVariant, ReferenceBlock  # noqa: E402

GVCF_HEADER = [
    "##fileformat=VCFv4.2",
    '##ALT=<ID=NON_REF,Description="Represents any possible alternative allele at this location">',
    '##INFO=<ID=END,Number=1,Type=Integer,Description="Stop position of the interval">',
    '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">',
    "##contig=<ID=chr1,length=300>",
    "##contig=<ID=chr2,length=100>",
]

# chr1: [1,99] block, [100,200] block, 201 existing SNP, [202,300] block
# chr2: [1,100] block
GVCF_ROWS = [
    ["chr1", "1", ".", "A", "<NON_REF>", ".", ".", "END=99", "GT", "0"],
    ["chr1", "100", ".", "C", "<NON_REF>", ".", ".", "END=200", "GT", "0"],
    ["chr1", "201", "snp0", "G", "T,<NON_REF>", ".", ".", ".", "GT", "1"],
    ["chr1", "202", ".", "A", "<NON_REF>", ".", ".", "END=300", "GT", "0"],
    ["chr2", "1", ".", "T", "<NON_REF>", ".", ".", "END=100", "GT", "0"],
]


def block(start: int, end: int, chrom: str = "chr1", ref: str = "A") -> ReferenceBlock:
    """Build a reference block on `chrom` spanning [start, end]."""
    return ReferenceBlock(
        start=GenomicPosition(chrom=chrom, offset=start),
        end=GenomicPosition(chrom=chrom, offset=end),
        ref=ref,
    )


def variant(
    start: int, end: int | None = None, chrom: str = "chr1", ref: str = "T", alt: str = "G"
) -> PointVariant:
    """Build a point variant on `chrom` spanning [start, end]."""
    return PointVariant(
        start=GenomicPosition(chrom=chrom, offset=start),
        end=GenomicPosition(chrom=chrom, offset=end if end is not None else start),
        ref=ref,
        alt=alt,
    )


def write_vcf(path: Path, header: list[str], rows: list[list[str]], samples: list[str]) -> Path:
    columns = ["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO"]
    if samples:
        columns += ["FORMAT", *samples]
    with open(path, "w") as f:
        f.write("\n".join(header) + "\n")
        f.write("\t".join(columns) + "\n")
        for row in rows:
            f.write("\t".join(row) + "\n")
    return path


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_gvcf(temp_dir: Path) -> Path:
    """A two-chromosome gVCF with one existing variant on chr1."""
    return write_vcf(temp_dir / "assembly.g.vcf", GVCF_HEADER, GVCF_ROWS, ["sampleA"])


@pytest.fixture
def write_variants(temp_dir: Path):
    """Factory fixture writing a sites-only VCF of variants to inject."""

    def _write(rows: list[list[str]], name: str = "variants.vcf") -> Path:
        header = [
            "##fileformat=VCFv4.2",
            "##contig=<ID=chr1,length=300>",
            "##contig=<ID=chr2,length=100>",
            "##contig=<ID=chr3,length=100>",
        ]
        full_rows = [[*row[:5], ".", ".", "."] for row in rows]
        return write_vcf(temp_dir / name, header, full_rows, [])

    return _write


@pytest.fixture
def sample_variants(write_variants) -> Path:
    """Variants at chr1:150 (interior), chr1:100 (block edge) and chr2:50."""
    return write_variants(
        [
            ["chr1", "150", "var1", "A", "G"],
            ["chr1", "100", "var2", "C", "T"],
            ["chr2", "50", "var3", "T", "A"],
        ]
    )


@pytest.fixture
def sample_fasta(temp_dir: Path) -> Path:
    """Reference FASTA consistent with the sample gVCF and variants."""
    chr1 = ["A"] * 300
    chr1[99] = "C"
    chr1[200] = "G"
    fasta_path = temp_dir / "ref.fa"
    with open(fasta_path, "w") as f:
        f.write(">chr1\n" + "".join(chr1) + "\n")
        f.write(">chr2\n" + "T" * 100 + "\n")
    pysam.faidx(str(fasta_path))
    return fasta_path
