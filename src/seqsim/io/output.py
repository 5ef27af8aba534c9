"""
Output Writers: Formatting mutated chromosomes as gVCF.

Reference blocks are written with the symbolic <NON_REF> allele and an END
INFO field; injected variants are written with their concrete ALT followed by
<NON_REF>, so downstream tools can tell them apart.
"""

import logging
from pathlib import Path

import pysam

from ..models.core import IntervalRecord, PointVariant

logger = logging.getLogger(__name__)

NON_REF = "<NON_REF>"


class OutputWriter:
    """Abstract base class for output writers."""

    def write(self, record: IntervalRecord):
        raise NotImplementedError

    def close(self):
        pass


class GvcfWriter(OutputWriter):
    """
    Writes records to a single-sample gVCF.

    A path ending in `.gz` is written as BGZF through pysam.
    """

    def __init__(
        self,
        path: Path,
        sample_name: str = "SAMPLE",
        contigs: dict[str, int | None] | None = None,
    ):
        self.path = path
        self.sample_name = sample_name
        self.contigs = contigs or {}
        self._compress = path.name.endswith(".gz")
        self.file = pysam.BGZFile(str(path), "wb") if self._compress else open(path, "w")
        self._headers_written = False
        self.records_written = 0

    def _emit(self, text: str):
        self.file.write(text.encode() if self._compress else text)

    def _write_header(self):
        headers = [
            "##fileformat=VCFv4.2",
            "##source=seqsim",
            '##ALT=<ID=NON_REF,Description="Represents any possible alternative allele at this location">',
            '##INFO=<ID=END,Number=1,Type=Integer,Description="Stop position of the interval">',
            '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">',
        ]
        for name, length in self.contigs.items():
            if length:
                headers.append(f"##contig=<ID={name},length={length}>")
            else:
                headers.append(f"##contig=<ID={name}>")
        headers.append(f"#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\t{self.sample_name}")
        self._emit("\n".join(headers) + "\n")
        self._headers_written = True

    def write(self, record: IntervalRecord):
        if not self._headers_written:
            self._write_header()

        if isinstance(record, PointVariant):
            row = [
                record.chrom,
                str(record.start.offset),
                record.variant_id or ".",
                record.ref,
                f"{record.alt},{NON_REF}",
                ".",
                ".",
                ".",
                "GT",
                "1",
            ]
        else:
            row = [
                record.chrom,
                str(record.start.offset),
                ".",
                record.ref,
                NON_REF,
                ".",
                ".",
                f"END={record.end.offset}",
                "GT",
                "0",
            ]

        self._emit("\t".join(row) + "\n")
        self.records_written += 1

    def close(self):
        if not self._headers_written:
            self._write_header()
        self.file.close()
        logger.debug("Wrote %d records to %s", self.records_written, self.path)
