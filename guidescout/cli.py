"""
GuideScout CLI - Scriptable CRISPR guide finding.

Usage:
    guidescout analyze --sequence ATGCTGACTGACTGGATCGATCGG...
    guidescout analyze --input target.fasta --cas "SaCas9 (S. aureus, Type II-A)"
    guidescout map --input target.fasta --top-n 5
    guidescout compare ATGCATGC ATGGATGCA
    guidescout systems

Pipe-friendly:
    cat target.fasta | guidescout analyze --format tsv | sort -k9 -g
"""

import json
import sys
from pathlib import Path
from typing import Optional, List

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich.progress import Progress, SpinnerColumn, TextColumn

from guidescout import __version__
from guidescout.config import get_config, configure_logging
from guidescout.models.enums import (
    OutputFormat,
    SortField,
    PositionCategory,
    DiffType,
    GCBand,
    ScoreBand,
)
from guidescout.models.data_classes import AnalysisResult, GuideRow
from guidescout.design.pam_table import (
    CAS_PAM_TABLE,
    UnknownCasSystemError,
    iupac_legend,
    list_cas_systems,
)
from guidescout.design.sequence import prepare_sequence
from guidescout.analysis.pipeline import analyze as run_analysis, SequenceTooShortError
from guidescout.analysis.filtering import sort_guides, gc_band, score_band
from guidescout.analysis.sequence_map import (
    get_sequence_position_types,
    slice_context,
    select_map_guides,
    build_map_lines,
)
from guidescout.analysis.compare import compute_diff, compare_stats
from guidescout.io.export import guides_to_csv, guides_to_tsv, guides_to_records, write_guides_csv

# Initialize Typer app and Rich consoles
app = typer.Typer(
    name="guidescout",
    help="CRISPR guide RNA finder",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)

NOT_COMPUTED = "n/c"

_CATEGORY_STYLES = {
    PositionCategory.NORMAL: "dim",
    PositionCategory.GUIDE: "bold cyan",
    PositionCategory.PAM: "bold magenta",
}

_GC_BAND_STYLES = {
    GCBand.OPTIMAL: "green",
    GCBand.ACCEPTABLE: "yellow",
    GCBand.POOR: "red",
}

_SCORE_BAND_STYLES = {
    ScoreBand.GOOD: "green",
    ScoreBand.MODERATE: "yellow",
    ScoreBand.BAD: "red",
}

_DISPLAY_FORMATS = (OutputFormat.TABLE, OutputFormat.JSON)


# =============================================================================
# Version callback
# =============================================================================

def version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]GuideScout[/bold blue] version {__version__}")
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
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Logs go to stderr.",
    ),
) -> None:
    """
    GuideScout - CRISPR guide RNA finder

    Find PAM sites, score candidate guides and render sequence maps.
    """
    configure_logging(log_level)


# =============================================================================
# Analyze command
# =============================================================================

@app.command()
def analyze(
    sequence: Optional[str] = typer.Option(
        None,
        "--sequence", "-s",
        help="DNA sequence or FASTA text",
    ),
    input_file: Optional[Path] = typer.Option(
        None,
        "--input", "-i",
        help="FASTA or plain sequence file (reads from stdin if -)",
    ),
    cas: Optional[str] = typer.Option(
        None,
        "--cas", "-c",
        help="CRISPR system name (see 'guidescout systems')",
    ),
    pam: Optional[str] = typer.Option(
        None,
        "--pam",
        help="Custom IUPAC PAM pattern, overrides --cas",
    ),
    guide_length: Optional[int] = typer.Option(
        None,
        "--guide-length", "-l",
        help="Guide length in nt",
    ),
    advanced: Optional[bool] = typer.Option(
        None,
        "--advanced/--basic",
        help="Compute self-complementarity and off-target-like scores",
    ),
    gc_min: Optional[float] = typer.Option(None, "--gc-min", help="Minimum GC% kept"),
    gc_max: Optional[float] = typer.Option(None, "--gc-max", help="Maximum GC% kept"),
    show_all: bool = typer.Option(
        False,
        "--all",
        help="Output the unfiltered table instead of the GC-filtered one",
    ),
    sort: SortField = typer.Option(
        SortField.RANK,
        "--sort",
        help="Field to sort the output by",
    ),
    descending: bool = typer.Option(False, "--desc", help="Sort descending"),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Output file. If not specified, prints to stdout.",
    ),
    format: OutputFormat = typer.Option(
        OutputFormat.JSON,
        "--format", "-f",
        help="Output format: json, tsv, table, csv",
    ),
) -> None:
    """
    Find, score and rank guides in a sequence.

    Examples:
        guidescout analyze --sequence ATCG... --guide-length 20
        guidescout analyze --input locus.fa --basic --format table
    """
    text = _read_sequence_text(sequence, input_file)
    gc_range = _resolve_gc_range(gc_min, gc_max)
    guide_length = _check_guide_length(guide_length)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
        disable=not sys.stderr.isatty(),
    ) as progress:
        progress.add_task("Scanning for PAM sites...", total=None)
        result = _run_or_exit(text, cas, guide_length, advanced, gc_range, pam)

    rows = result.guides if show_all else result.filtered_guides
    rows = sort_guides(rows, sort, ascending=not descending)

    if not rows:
        message = "No guides found" if not result.guides else "No guides remain after GC filtering"
        err_console.print(f"[yellow]{message}.[/yellow]")

    _output_results(result, rows, output, format)


# =============================================================================
# Map command
# =============================================================================

@app.command(name="map")
def sequence_map(
    sequence: Optional[str] = typer.Option(None, "--sequence", "-s", help="DNA sequence or FASTA text"),
    input_file: Optional[Path] = typer.Option(None, "--input", "-i", help="Sequence file (- for stdin)"),
    cas: Optional[str] = typer.Option(None, "--cas", "-c", help="CRISPR system name"),
    pam: Optional[str] = typer.Option(None, "--pam", help="Custom IUPAC PAM pattern"),
    guide_length: Optional[int] = typer.Option(None, "--guide-length", "-l", help="Guide length in nt"),
    advanced: Optional[bool] = typer.Option(None, "--advanced/--basic", help="Advanced scoring"),
    top_n: Optional[int] = typer.Option(None, "--top-n", "-n", help="Number of top guides to highlight"),
    chars_per_line: Optional[int] = typer.Option(None, "--width", "-w", help="Bases per line"),
    rank: Optional[int] = typer.Option(None, "--rank", "-r", help="Also show the context of this rank"),
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="table or json"),
) -> None:
    """
    Show where the best guides and their PAMs sit in the sequence.

    Guides are shown in cyan, PAMs in magenta.
    """
    _check_format(format, _DISPLAY_FORMATS)
    design = get_config().design
    text = _read_sequence_text(sequence, input_file)
    guide_length = _check_guide_length(guide_length)
    top_n = design.map_top_n if top_n is None else top_n
    chars_per_line = chars_per_line or design.chars_per_line

    result = _run_or_exit(text, cas, guide_length, advanced, None, pam)
    clean = prepare_sequence(text)

    shown = select_map_guides(result.filtered_guides, top_n, design.map_max_guides)
    categories = get_sequence_position_types(clean, shown)
    lines = build_map_lines(clean, categories, chars_per_line)

    selected: Optional[GuideRow] = None
    if rank is not None:
        selected = next((g for g in result.filtered_guides if g.rank == rank), None)
        if selected is None:
            err_console.print(f"[red]Error:[/red] No guide with rank {rank} after filtering")
            raise typer.Exit(1)

    if format == OutputFormat.JSON:
        payload = {
            "status": "success",
            "pam_pattern": result.pam_pattern,
            "n_guides_shown": len(shown),
            "categories": [c.value for c in categories],
            "lines": [line.model_dump(mode="json") for line in lines],
        }
        if selected is not None:
            ctx = slice_context(clean, selected.guide_start, selected.guide_end,
                                selected.pam_end, design.context_flank)
            payload["context"] = ctx.model_dump(mode="json")
        print(json.dumps(payload, indent=2))
        return

    if not shown:
        err_console.print("[yellow]No guides to display.[/yellow]")

    offset_width = len(str(len(clean)))
    for line in lines:
        rendered = Text(f"{line.line_start + 1:>{offset_width}}  ")
        for base, category in zip(line.bases, line.categories):
            rendered.append(base, style=_CATEGORY_STYLES[category])
        console.print(rendered, soft_wrap=True)

    if selected is not None:
        ctx = slice_context(clean, selected.guide_start, selected.guide_end,
                            selected.pam_end, design.context_flank)
        g0, g1 = ctx.relative(selected.guide_start, selected.guide_end)
        p0, p1 = ctx.relative(selected.pam_start, selected.pam_end)
        snippet = Text(ctx.context[:g0], style="dim")
        snippet.append(ctx.context[g0:g1], style=_CATEGORY_STYLES[PositionCategory.GUIDE])
        snippet.append(ctx.context[p0:p1], style=_CATEGORY_STYLES[PositionCategory.PAM])
        snippet.append(ctx.context[p1:], style="dim")
        console.print(Panel.fit(snippet, title=f"Rank #{selected.rank} context ({ctx.left + 1}-{ctx.right})"))


# =============================================================================
# Compare command
# =============================================================================

@app.command()
def compare(
    seq_a: str = typer.Argument(..., help="First sequence (reference)"),
    seq_b: str = typer.Argument(..., help="Second sequence"),
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="table or json"),
) -> None:
    """
    Compare two sequences position by position (no alignment).
    """
    _check_format(format, _DISPLAY_FORMATS)
    clean_a = prepare_sequence(seq_a)
    clean_b = prepare_sequence(seq_b)
    if not clean_a or not clean_b:
        err_console.print("[red]Error:[/red] Both sequences must contain A/T/G/C bases")
        raise typer.Exit(1)

    diff = compute_diff(clean_a, clean_b)
    stats = compare_stats(diff)

    if format == OutputFormat.JSON:
        print(json.dumps({
            "status": "success",
            "length_a": len(clean_a),
            "length_b": len(clean_b),
            "stats": stats.model_dump(mode="json"),
            "differences": [
                d.model_dump(mode="json") for d in diff if d.type != DiffType.MATCH
            ],
        }, indent=2))
        return

    table = Table(title="Sequence Comparison")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Length A", str(len(clean_a)))
    table.add_row("Length B", str(len(clean_b)))
    table.add_row("Matches", str(stats.matches))
    table.add_row("Mismatches", str(stats.mismatches))
    table.add_row("Insertions (in B)", str(stats.insertions))
    table.add_row("Deletions (in B)", str(stats.deletions))
    table.add_row("Identity", f"{stats.identity:.1f}%")
    console.print(table)


# =============================================================================
# Systems command
# =============================================================================

@app.command()
def systems() -> None:
    """List supported CRISPR systems and the IUPAC legend."""
    design = get_config().design

    table = Table(title="Supported CRISPR Systems")
    table.add_column("System", style="green")
    table.add_column("PAM", style="magenta")
    table.add_column("PAM length", justify="right")
    for name in list_cas_systems():
        pattern = CAS_PAM_TABLE[name]
        marker = " (default)" if name == design.default_cas_system else ""
        table.add_row(name + marker, pattern, str(len(pattern)))
    console.print(table)

    legend = Table(title="IUPAC Legend")
    legend.add_column("Code", style="bold")
    legend.add_column("Bases")
    for symbol, bases in iupac_legend():
        legend.add_row(symbol, " / ".join(bases))
    console.print(legend)

    console.print(
        f"Guide length: {design.min_guide_length}-{design.max_guide_length} nt "
        f"(default {design.default_guide_length})"
    )


# =============================================================================
# Serve command
# =============================================================================

@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from config)"),
) -> None:
    """Start the JSON web API."""
    from guidescout.api.server import run

    api = get_config().api
    err_console.print(f"Starting GuideScout API on http://{host or api.host}:{port or api.port}")
    run(host=host, port=port)


# =============================================================================
# Utility functions
# =============================================================================

def _read_sequence_text(sequence: Optional[str], input_file: Optional[Path]) -> str:
    """Get raw sequence text from --sequence, --input, or piped stdin."""
    if sequence:
        text = sequence
    elif input_file:
        if str(input_file) == "-":
            text = sys.stdin.read()
        else:
            if not input_file.exists():
                err_console.print(f"[red]Error:[/red] File not found: {input_file}")
                raise typer.Exit(1)
            text = input_file.read_text()
    elif not sys.stdin.isatty():
        text = sys.stdin.read()
    else:
        text = ""

    if not prepare_sequence(text):
        err_console.print("[red]Error:[/red] No DNA sequence provided (use --sequence, --input, or stdin)")
        raise typer.Exit(1)
    return text


def _check_guide_length(guide_length: Optional[int]) -> int:
    settings = get_config()
    if guide_length is None:
        return settings.design.default_guide_length
    if not settings.guide_length_in_bounds(guide_length):
        err_console.print(
            f"[red]Error:[/red] Guide length must be between "
            f"{settings.design.min_guide_length} and {settings.design.max_guide_length} nt"
        )
        raise typer.Exit(1)
    return guide_length


def _resolve_gc_range(gc_min: Optional[float], gc_max: Optional[float]) -> tuple:
    design = get_config().design
    low = design.gc_min if gc_min is None else gc_min
    high = design.gc_max if gc_max is None else gc_max
    if low > high:
        err_console.print("[red]Error:[/red] --gc-min must not exceed --gc-max")
        raise typer.Exit(1)
    return low, high


def _run_or_exit(text, cas, guide_length, advanced, gc_range, pam) -> AnalysisResult:
    try:
        return run_analysis(
            text,
            cas_system=cas,
            guide_length=guide_length,
            advanced=advanced,
            gc_range=gc_range,
            pam_pattern=pam,
        )
    except (UnknownCasSystemError, SequenceTooShortError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _output_results(
    result: AnalysisResult,
    rows: List[GuideRow],
    output: Optional[Path],
    format: OutputFormat,
) -> None:
    """Output results in specified format."""
    if format == OutputFormat.JSON:
        payload = {
            "status": "success",
            "cas_system": result.cas_system,
            "pam_pattern": result.pam_pattern,
            "guide_length": result.guide_length,
            "advanced_scores": result.advanced_scores,
            "sequence_length": result.sequence_length,
            "n_pam_sites": result.n_pam_sites,
            "gc_range": list(result.gc_range),
            "summary": result.summary.model_dump(mode="json"),
            "guides": guides_to_records(rows),
        }
        content = json.dumps(payload, indent=2)

    elif format == OutputFormat.TSV:
        content = guides_to_tsv(rows)

    elif format == OutputFormat.CSV:
        if output:
            write_guides_csv(rows, output)
            err_console.print(f"[green]Results written to {output}[/green]")
            return
        content = guides_to_csv(rows)

    else:
        _print_table(result, rows)
        return

    if output:
        output.write_text(content, encoding="utf-8")
        err_console.print(f"[green]Results written to {output}[/green]")
    else:
        # Print to stdout for piping
        print(content)


def _print_table(result: AnalysisResult, rows: List[GuideRow]) -> None:
    summary = result.summary
    console.print(Panel.fit(
        f"PAM [bold magenta]{result.pam_pattern}[/bold magenta]  "
        f"guide {result.guide_length}nt  {result.sequence_length}bp  "
        f"PAM sites: {result.n_pam_sites}\n"
        f"Guides found (raw): {summary.n_raw}   After GC filter: {summary.n_filtered}\n"
        f"Best score: {_fmt_score(summary.best_score)}   "
        f"Worst score: {_fmt_score(summary.worst_score)}",
        title="GuideScout",
    ))
    if not rows:
        return

    table = Table(title="Ranked Guides")
    table.add_column("Rank", style="dim")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Guide (5'→3')", style="cyan")
    table.add_column("PAM", style="magenta")
    table.add_column("GC%", justify="right")
    table.add_column("Self-comp", justify="right")
    table.add_column("Off-target-like", justify="right")
    table.add_column("Score", justify="right")

    totals = [row.total_score for row in rows]
    low, high = min(totals), max(totals)
    for row in rows:
        gc_style = _GC_BAND_STYLES[gc_band(row.gc_percent)]
        score_style = _SCORE_BAND_STYLES[score_band(row.total_score, low, high)]
        table.add_row(
            str(row.rank),
            str(row.guide_start),
            str(row.guide_end),
            row.guide_seq,
            row.matched_pam,
            f"[{gc_style}]{row.gc_percent:.2f}[/{gc_style}]",
            NOT_COMPUTED if row.self_complementarity is None else str(row.self_complementarity),
            NOT_COMPUTED if row.off_target_like_matches is None else str(row.off_target_like_matches),
            f"[{score_style}]{row.total_score:.2f}[/{score_style}]",
        )
    console.print(table)


def _fmt_score(score: Optional[float]) -> str:
    return "n/a" if score is None else f"{score:.2f}"


def _check_format(format: OutputFormat, allowed) -> None:
    if format not in allowed:
        names = ", ".join(f.value for f in allowed)
        err_console.print(f"[red]Error:[/red] Unsupported format {format.value!r} (use {names})")
        raise typer.Exit(1)


# =============================================================================
# Entry point
# =============================================================================

if __name__ == "__main__":
    app()
