# Master validation orchestrator that runs all validation checks

import pandas as pd
from rich.console import Console
from typing import Dict

from .core import run_validation_checks, show_missingness
from .count_checks import (
    counts_quality_report,
    validate_counts_schema,
    validate_counts_unique,
    validate_counts_positive,
)

console = Console()


def create_snapshot(df: pd.DataFrame) -> Dict[str, tuple]:
    """
    Create a snapshot of DataFrame missingness for comparison.

    Returns:
        Dict mapping column names to (count, percentage) of missing values
    """
    return {
        col: (int(df[col].isna().sum()), float(df[col].isna().mean() * 100) if len(df) else 0.0)
        for col in df.columns
    }


def run_validations(
    df: pd.DataFrame,
    step_name: str = "Enriched incidents",
    check_boroughs: bool = True,
) -> pd.DataFrame:
    """
    Run standard validation checks on enriched incident data.

    Returns:
        Original DataFrame (unmodified)
    """
    console.print("\n[bold cyan]=== VALIDATION PIPELINE START ===[/bold cyan]\n")

    run_validation_checks(df, step_name, check_boroughs=check_boroughs)
    show_missingness(df, step_name)

    console.print("\n[green]Validation completed successfully.[/green]\n")
    return df


def run_count_validations(
    counts: pd.DataFrame,
    show_quality_report: bool = True,
) -> pd.DataFrame:
    """
    Run schema, uniqueness and positivity checks on the grouped-count table.

    Returns:
        Original DataFrame (unmodified)
    """
    console.print("\n[bold cyan]=== GROUPED COUNT VALIDATION START ===[/bold cyan]\n")

    if show_quality_report:
        counts_quality_report(counts)

    for check in (validate_counts_schema, validate_counts_unique, validate_counts_positive):
        try:
            check(counts)
        except ValueError as e:
            console.print(f"[bold red]{check.__name__} failed:[/bold red] {e}")
            raise

    console.print("\n[green]Grouped count validation completed successfully.[/green]\n")
    return counts


__all__ = [
    "run_validations",
    "run_count_validations",
    "create_snapshot",
]
