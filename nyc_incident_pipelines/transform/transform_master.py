"""
transform_master.py

Orchestrates all transformation steps for raw incident data.
"""

import pandas as pd
from rich.console import Console

from nyc_incident_pipelines.validate.core import run_validation_checks, show_missing_comparison
from nyc_incident_pipelines.validate.orchestrator import create_snapshot
from nyc_incident_pipelines.utils.logging import log_step, show_pipeline_table, clear_pipeline_log

from nyc_incident_pipelines.transform.cleaning import standardize_column_name
from nyc_incident_pipelines.transform.temporal import derive_features
from nyc_incident_pipelines.transform.aggregate import build_grouped_counts
from nyc_incident_pipelines.transform.summaries import build_summaries

console = Console()


def run_transforms(raw_df: pd.DataFrame, dedupe: bool = False) -> dict:
    """
    Run complete transformation pipeline.

    Parameters:
        raw_df: Raw incident rows as read from the export
        dedupe: Collapse repeated incident keys to one row each

    Returns:
        Dict with transformed data:
            - enriched: cleaned rows with calendar / time-of-day features
            - grouped_counts: incident count per observed grouping key
            - summaries: descriptive tables keyed by name
            - missingness: per-column missing counts before / after feature derivation
    """
    console.print("\n[bold cyan]=== TRANSFORM PIPELINE START ===[/bold cyan]\n")
    clear_pipeline_log()

    log_step("Initial incident data", raw_df)

    # Snapshot under the cleaned column names so both sides line up
    before = raw_df.rename(columns=lambda c: standardize_column_name(str(c)))
    snapshot = create_snapshot(before.loc[:, ~before.columns.duplicated()])

    enriched = derive_features(raw_df, dedupe=dedupe)
    run_validation_checks(enriched, "Transform: After temporal")
    missingness = show_missing_comparison(enriched, snapshot, "Transform: Feature derivation")

    grouped_counts = build_grouped_counts(enriched)
    log_step("Grouped counts", grouped_counts)

    summaries = build_summaries(enriched)

    console.print("\n[green]Transformation completed successfully.[/green]\n")
    show_pipeline_table()

    return {
        "enriched": enriched,
        "grouped_counts": grouped_counts,
        "summaries": summaries,
        "missingness": missingness,
    }
