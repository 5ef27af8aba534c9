"""
CLI Entry Point: Exposes the seqsim functionality via command line.
"""

from pathlib import Path

import typer
from rich.markup import escape

from . import __version__
from .io.input import collect_gvcf_files, read_chrom_ids
from .models.core import ConflictPolicy, MutationConfig
from .pipeline import MutationPipeline
from .utils.logging import console, setup_logging

app = typer.Typer(help="seqsim: mutated assembly simulation")


@app.callback()
def main():
    """
    seqsim: mutated assembly simulation
    """
    pass


@app.command()
def version():
    """Print the seqsim version."""
    typer.echo(f"seqsim {__version__}")


@app.command()
def mutate(
    gvcf_file: Path = typer.Option(
        ..., "--gvcf", "-g", help="gVCF with reference blocks for the assembly to mutate"
    ),
    variant_file: Path = typer.Option(
        ..., "--variants", "-v", help="VCF of point variants to inject"
    ),
    output_file: Path = typer.Option(
        ..., "--output", "-o", help="Path of the mutated gVCF (.gz for bgzip output)"
    ),
    reference: Path | None = typer.Option(
        None, "--fasta", "-f", help="Reference FASTA used to check variant REF alleles"
    ),
    sample_name: str | None = typer.Option(
        None, "--sample-name", "-s", help="Sample column name (default: taken from the gVCF)"
    ),
    conflict_policy: ConflictPolicy = typer.Option(
        ConflictPolicy.ABORT, "--on-conflict", help="How to handle variants that cannot be placed"
    ),
    threads: int = typer.Option(1, "--threads", "-t", help="Chromosomes processed in parallel"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Also append logs to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose debug logging"),
):
    """
    Inject point variants into a gVCF's reference blocks.
    """
    setup_logging(verbose=verbose, log_file=log_file)

    try:
        config = MutationConfig(
            gvcf_file=gvcf_file,
            variant_file=variant_file,
            output_file=output_file,
            reference_fasta=reference,
            sample_name=sample_name,
            conflict_policy=conflict_policy,
            threads=threads,
        )
        MutationPipeline(config).run()

    except Exception as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1) from e


@app.command("extract-chrom-ids")
def extract_chrom_ids(
    gvcf_input: Path = typer.Option(
        ...,
        "--gvcf-file",
        "-g",
        help="gVCF file, directory of gVCF files, or .txt file listing gVCF paths",
    ),
    output_file: Path = typer.Option(
        Path("chromosome_ids.txt"), "--output-file", "-o", help="Path for the output file"
    ),
):
    """
    Write the unique chromosome ids found in one or more gVCF files.
    """
    try:
        gvcf_files = collect_gvcf_files(gvcf_input)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1) from e

    console.print(f"Found {len(gvcf_files)} gVCF file(s)")

    chrom_ids: set[str] = set()
    failures = 0
    for i, gvcf in enumerate(gvcf_files, start=1):
        console.print(f"Processing ({i}/{len(gvcf_files)}): {gvcf.name}")
        try:
            chrom_ids |= read_chrom_ids(gvcf)
        except (OSError, UnicodeDecodeError) as e:
            failures += 1
            console.print(f"[red]Error processing {gvcf.name}: {escape(str(e))}[/red]")

    sorted_ids = sorted(chrom_ids)
    try:
        output_file.write_text("".join(f"{c}\n" for c in sorted_ids))
    except OSError as e:
        console.print(f"[bold red]Error: Failed to write output file: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1) from e

    console.print(
        f"Files processed: {len(gvcf_files) - failures} successful, {failures} failed"
    )
    console.print(f"Unique chromosome ids: {len(sorted_ids)}")
    console.print(f"Output written to: {output_file}")


if __name__ == "__main__":
    app()
