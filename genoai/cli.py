"""
GenoAI CLI - DNA mutation and CRISPR target analysis from the terminal.

Usage:
    genoai normalize --file sample.fasta
    genoai scan --sequence ATCG... --format table
    genoai crispr --file sample.fasta --order safety
    genoai report --demo --output report.txt

Pipe-friendly:
    genoai scan --file sample.fasta | jq '.targets[].sequence'
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from genoai import __version__
from genoai.config import configure_logging, get_config
from genoai.models.data_classes import NormalizedSequence
from genoai.models.enums import TargetOrder

# Initialize Typer app and Rich console
app = typer.Typer(
    name="genoai",
    help="DNA mutation and CRISPR target analysis",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)


# =============================================================================
# Version callback
# =============================================================================

def version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]GenoAI[/bold blue] version {__version__}")
        raise typer.Exit()


# =============================================================================
# Main app options
# =============================================================================

@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log at the configured level instead of warnings only",
    ),
) -> None:
    """
    GenoAI - DNA Mutation and CRISPR Analysis

    Normalize sequences, find guide RNA candidates, and run remote analyses.
    """
    config = get_config()
    if not verbose:
        config = config.model_copy(update={"log_level": "WARNING"})
    configure_logging(config)


# =============================================================================
# Shared options
# =============================================================================

SequenceOption = typer.Option(None, "--sequence", "-s", help="DNA sequence text")
FileOption = typer.Option(None, "--file", "-i", help="Sequence file (.fasta, .fa, .txt)")
DemoOption = typer.Option(False, "--demo", help="Use the built-in demo sequence")


def _read_input(sequence: Optional[str], file: Optional[Path], demo: bool) -> NormalizedSequence:
    """Resolve exactly one input source into a normalized sequence."""
    from genoai.design.normalizer import DEMO_SEQUENCE, normalize, read_sequence_file

    if sum([sequence is not None, file is not None, demo]) != 1:
        console.print("[red]Error:[/red] Specify exactly one of --sequence, --file or --demo")
        raise typer.Exit(1)

    if file is not None:
        try:
            normalized = read_sequence_file(file)
        except (ValueError, FileNotFoundError) as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
    elif demo:
        normalized = normalize(DEMO_SEQUENCE)
    else:
        normalized = normalize(sequence)

    if normalized.was_modified:
        err_console.print(
            f"[yellow]Warning:[/yellow] {normalized.message} "
            f"Removed: {''.join(normalized.removed_characters)}"
        )
    return normalized


def _require_sequence(normalized: NormalizedSequence) -> str:
    if not normalized.sequence:
        console.print("[red]Error:[/red] Sequence is empty after normalization")
        raise typer.Exit(1)
    return normalized.sequence


def _build_service():
    """Analysis service around the configured remote collaborator."""
    from genoai.analysis import AnalysisService, GeminiAnalysisClient, AnalysisNotConfiguredError
    from genoai.design.pam_scanner import GuideScanner

    config = get_config()
    try:
        collaborator = GeminiAnalysisClient.from_config(config.analysis)
    except AnalysisNotConfiguredError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    return AnalysisService(collaborator, scanner=GuideScanner.from_config(config.scan))


def _run_analysis(coro):
    from genoai.analysis import AnalysisFailedError

    try:
        return asyncio.run(coro)
    except AnalysisFailedError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)


# =============================================================================
# Normalize command
# =============================================================================

@app.command()
def normalize(
    sequence: Optional[str] = SequenceOption,
    file: Optional[Path] = FileOption,
) -> None:
    """
    Print the canonical A/T/G/C form of a sequence.

    Examples:
        genoai normalize --sequence "atg cxa"
        genoai normalize --file sample.fasta
    """
    normalized = _read_input(sequence, file, demo=False)
    print(normalized.sequence)


# =============================================================================
# Scan command
# =============================================================================

@app.command()
def scan(
    sequence: Optional[str] = SequenceOption,
    file: Optional[Path] = FileOption,
    demo: bool = DemoOption,
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Output file. If not specified, prints to stdout.",
    ),
    format: str = typer.Option(
        "json",
        "--format", "-f",
        help="Output format: json, tsv, table",
    ),
) -> None:
    """
    List guide RNA candidates upstream of NGG PAM sites (local, no AI call).

    Examples:
        genoai scan --demo --format table
        genoai scan --file sample.fasta -o targets.json
    """
    from genoai.design.composition import gc_content
    from genoai.design.pam_scanner import GuideScanner

    normalized = _read_input(sequence, file, demo)
    candidates = GuideScanner.from_config(get_config().scan).scan(normalized.sequence)

    results = {
        "status": "success",
        "sequence_length": normalized.length,
        "n_targets": len(candidates),
        "targets": [
            {
                "position": c.position,
                "sequence": c.sequence,
                "gc_content": round(gc_content(c.sequence), 1),
            }
            for c in candidates
        ],
    }
    _output_results(results, output, format)


# =============================================================================
# Remote analysis commands
# =============================================================================

@app.command()
def mutation(
    sequence: Optional[str] = SequenceOption,
    file: Optional[Path] = FileOption,
    demo: bool = DemoOption,
    format: str = typer.Option("json", "--format", "-f", help="Output format: json, table"),
) -> None:
    """
    Classify a sequence as Mutated/Normal with the remote AI model.
    """
    _check_format(format, ("json", "table"))
    seq = _require_sequence(_read_input(sequence, file, demo))
    service = _build_service()
    result = _run_analysis(service.analyze_mutation(seq))

    if format == "table":
        impact = result.clinical_impact
        console.print(Panel.fit(
            f"Classification: [bold]{result.classification.value}[/bold]\n"
            f"Probability: {result.probability * 100:.1f}%\n"
            f"Gene: {impact.gene}\n"
            f"Disease association: {impact.disease_association}\n"
            f"Protein impact: {impact.protein_impact}\n"
            f"Clinical significance: {impact.clinical_significance.value}",
            title="Mutation Analysis",
        ))
        console.print(result.ai_explanation)
    else:
        print(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))


@app.command()
def crispr(
    sequence: Optional[str] = SequenceOption,
    file: Optional[Path] = FileOption,
    demo: bool = DemoOption,
    order: TargetOrder = typer.Option(
        TargetOrder.POSITION,
        "--order",
        help="Order targets by position or safety score",
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file"),
    format: str = typer.Option("json", "--format", "-f", help="Output format: json, csv, fasta, table"),
) -> None:
    """
    Score guide RNA candidates with the remote AI model.

    Examples:
        genoai crispr --demo --order safety --format table
        genoai crispr --file sample.fasta -f csv -o targets.csv
    """
    from genoai.reporting import export
    from genoai.reporting.report import NO_TARGETS_MESSAGE, order_targets
    from genoai.models.data_classes import CrisprAnalysis

    _check_format(format, ("json", "csv", "fasta", "table"))
    seq = _require_sequence(_read_input(sequence, file, demo))
    service = _build_service()
    result = _run_analysis(service.analyze_crispr(seq))
    ordered = CrisprAnalysis(targets=order_targets(result.targets, order))

    if format == "table":
        if not ordered.targets:
            console.print(f"[yellow]{NO_TARGETS_MESSAGE}[/yellow]")
            return
        table = Table(title="CRISPR Targets")
        table.add_column("Position", style="dim")
        table.add_column("Guide RNA (20nt)", style="cyan")
        table.add_column("GC %")
        table.add_column("Safety", style="yellow")
        table.add_column("Risk")
        for t in ordered.targets:
            table.add_row(
                str(t.position),
                t.sequence,
                f"{t.gc_content:.1f}",
                f"{t.safety_score:.2f}",
                t.risk_level.value,
            )
        console.print(table)
        return

    if format == "csv":
        content = export.to_csv(ordered, order)
    elif format == "fasta":
        content = export.to_fasta(ordered, order)
    else:
        content = json.dumps(ordered.model_dump(mode="json", by_alias=True), indent=2)
    _write_or_print(content, output)


@app.command()
def report(
    sequence: Optional[str] = SequenceOption,
    file: Optional[Path] = FileOption,
    demo: bool = DemoOption,
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Report file (.txt)"),
) -> None:
    """
    Run both analyses and produce the clinical text report.
    """
    from genoai.reporting.report import generate_report_text

    seq = _require_sequence(_read_input(sequence, file, demo))
    service = _build_service()
    mutation_result = _run_analysis(service.analyze_mutation(seq))
    crispr_result = _run_analysis(service.analyze_crispr(seq))

    _write_or_print(generate_report_text(mutation_result, crispr_result, len(seq)), output)


# =============================================================================
# Serve / info commands
# =============================================================================

@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", help="Port (default from config)"),
) -> None:
    """Run the HTTP API."""
    from genoai.api.server import serve as run_server

    config = get_config()
    run_server(host or config.api_host, port or config.api_port)


@app.command()
def info() -> None:
    """Show configuration."""
    config = get_config()

    console.print(Panel.fit(
        f"[bold blue]GenoAI[/bold blue] v{__version__}\n"
        f"Analysis model: {config.analysis.model}\n"
        f"Analysis endpoint: {config.analysis.base_url}\n"
        f"API key configured: {'yes' if config.analysis_enabled else 'no'}\n"
        f"Guide length: {config.scan.guide_length} nt, PAM: N{config.scan.pam_motif}",
        title="Configuration",
    ))


# =============================================================================
# Utility functions
# =============================================================================

def _check_format(format: str, allowed: Tuple[str, ...]) -> None:
    if format not in allowed:
        console.print(f"[red]Error:[/red] Unknown format: {format} (choose from {', '.join(allowed)})")
        raise typer.Exit(1)


def _write_or_print(content: str, output: Optional[Path]) -> None:
    if output:
        output.write_text(content)
        console.print(f"[green]Results written to {output}[/green]")
    else:
        print(content)


def _output_results(results: Dict[str, Any], output: Optional[Path], format: str) -> None:
    """Output scan results in specified format."""
    if format == "json":
        _write_or_print(json.dumps(results, indent=2, default=str), output)

    elif format == "tsv":
        lines = ["position\tsequence\tgc_content"]
        for target in results["targets"]:
            lines.append(f"{target['position']}\t{target['sequence']}\t{target['gc_content']}")
        _write_or_print("\n".join(lines), output)

    elif format == "table":
        if not results["targets"]:
            console.print("[yellow]No targets found.[/yellow]")
            return
        table = Table(title="Guide RNA Candidates")
        table.add_column("Position", style="dim")
        table.add_column("Guide RNA (20nt)", style="cyan")
        table.add_column("GC %", style="yellow")

        for target in results["targets"]:
            table.add_row(
                str(target["position"]),
                target["sequence"],
                f"{target['gc_content']:.1f}",
            )

        console.print(table)

    else:
        console.print(f"[red]Error:[/red] Unknown format: {format}")
        raise typer.Exit(1)


# =============================================================================
# Entry point
# =============================================================================

if __name__ == "__main__":
    app()
