# End-to-end incident analysis with Rich console output

import argparse
from pathlib import Path
from typing import Optional

import pandas as pd
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from nyc_incident_pipelines.ingestion.incident_ingest import load_incidents
from nyc_incident_pipelines.transform.transform_master import run_transforms
from nyc_incident_pipelines.transform.summaries import show_summary
from nyc_incident_pipelines.validate.orchestrator import run_validations, run_count_validations
from nyc_incident_pipelines.models.count_model import (
    coefficient_table,
    fit_count_model,
    rank_coefficients,
)
from nyc_incident_pipelines.models.report_tables import export_results

from config import INCIDENTS_CSV, TABLES_DIR, TOP_N

console = Console()


def create_header():
    header = """
    ╔═══════════════════════════════════════════════════════════════╗
    ║              NYC INCIDENT ANALYSIS PIPELINE                   ║
    ║   Ingest → Derive → Aggregate → Fit → Rank → Export           ║
    ╚═══════════════════════════════════════════════════════════════╝
    """
    return Panel(header, style="bold cyan", border_style="bright_cyan", expand=False)


def create_step_panel(step_num, total_steps, title, status="running"):
    if status == "running":
        emoji, style = "⏳", "bold yellow"
    elif status == "complete":
        emoji, style = "✅", "bold green"
    else:
        emoji, style = "❌", "bold red"
    return Panel(f"{emoji} [bold]{title}[/bold]", title=f"[{style}]Step {step_num}/{total_steps}[/{style}]", border_style=style, expand=False)


def create_coefficient_table(ranked: pd.DataFrame, alpha: float):
    table = Table(title="📊 Top Contributing Factors", box=box.ROUNDED, show_header=True, header_style="bold magenta", border_style="bright_magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Factor", style="cyan", no_wrap=True)
    table.add_column("Estimate", justify="right")
    table.add_column(f"{1 - alpha:.0%} CI", justify="right")
    table.add_column("p-value", justify="right")
    table.add_column("Sig.", justify="center")
    for row in ranked.itertuples(index=False):
        table.add_row(
            str(row.rank),
            row.factor,
            f"{row.estimate:+.3f}",
            f"[{row.ci_lower:.3f}, {row.ci_upper:.3f}]",
            f"{row.p_value:.4f}",
            "[green]yes[/green]" if row.significant else "[dim]no[/dim]",
        )
    return table


def run_analysis(raw_df: pd.DataFrame, top_n: Optional[int] = TOP_N, dedupe: bool = False) -> dict:
    """
    Raw incident rows → enriched rows → grouped counts → OLS fit → ranked coefficients.

    Raises ModelFitError when the grouped-count table cannot support the fit.
    """
    transform_output = run_transforms(raw_df, dedupe=dedupe)
    grouped_counts = run_count_validations(transform_output["grouped_counts"], show_quality_report=False)

    fit = fit_count_model(grouped_counts)
    coefficients = coefficient_table(fit)
    ranked = rank_coefficients(coefficients, top_n=top_n)

    return {
        **transform_output,
        "fit": fit,
        "coefficients": coefficients,
        "ranked": ranked,
    }


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Derive calendar features from incident data, count by key and rank factors with OLS."
    )
    parser.add_argument("--data", type=Path, nargs="+", default=[INCIDENTS_CSV], help="Incident CSV/parquet file(s).")
    parser.add_argument("--output", type=Path, default=TABLES_DIR, help="Directory for the exported tables.")
    parser.add_argument("--top-n", type=int, default=TOP_N, help="Number of ranked factors to keep.")
    parser.add_argument("--dedupe", action="store_true", help="Keep one row per incident key.")
    parser.add_argument("--wandb", action="store_true", help="Log results to Weights & Biases.")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    console.print()
    console.print(create_header())
    console.print()
    total_steps = 4
    try:
        console.print(create_step_panel(1, total_steps, "Ingestion", "running"))
        with console.status("[bold yellow]Loading raw incidents...", spinner="dots"):
            raw_df = load_incidents(args.data)
        console.print(create_step_panel(1, total_steps, "Ingestion Complete", "complete"))
        console.print()

        console.print(create_step_panel(2, total_steps, "Transform & Fit", "running"))
        results = run_analysis(raw_df, top_n=args.top_n, dedupe=args.dedupe)
        console.print(create_step_panel(2, total_steps, "Transform & Fit Complete", "complete"))
        console.print()

        console.print(create_step_panel(3, total_steps, "Validation", "running"))
        run_validations(results["enriched"], step_name="Enriched incidents")
        console.print(create_step_panel(3, total_steps, "Validation Complete", "complete"))
        console.print()

        console.print(create_step_panel(4, total_steps, "Export", "running"))
        written = export_results(results, args.output)
        console.print(create_step_panel(4, total_steps, "Export Complete", "complete"))
        console.print()

        if args.wandb:
            from nyc_incident_pipelines.validate.wandb_logging import log_analysis_results
            log_analysis_results(written, results["ranked"], results["fit"].summary_stats())

        show_summary(results["summaries"]["by_year"], "Incidents by Year")
        show_summary(results["summaries"]["by_borough"], "Incidents by Borough")
        console.print(create_coefficient_table(results["ranked"], results["fit"].alpha))
        console.print(Panel("[bold green] ANALYSIS COMPLETED SUCCESSFULLY [/bold green]", border_style="bright_green", expand=False))
        return results
    except Exception as e:
        console.print()
        console.print(Panel(f"[bold red] ANALYSIS FAILED [/bold red]\n\n[red]Error:[/red] {str(e)}\n\n[dim]Check logs above for details.[/dim]", border_style="bright_red", title="[bold red]Error[/bold red]", expand=False))
        raise


if __name__ == "__main__":
    main()
