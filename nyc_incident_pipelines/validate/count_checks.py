# Validation checks for the grouped-count table


import pandas as pd
from rich.console import Console
from typing import List, Optional

from config import GROUP_KEY, MODEL_TARGET

console = Console()


def counts_quality_report(counts: pd.DataFrame, count_col: str = MODEL_TARGET) -> None:
    """
    Summary of the grouped-count table: size, incidents covered,
    count distribution and sample rows.
    """
    console.print("\n[bold cyan]=== GROUPED COUNTS REPORT ===[/bold cyan]")
    console.print(f"[cyan]Key combinations:[/cyan] {counts.shape[0]:,}")
    console.print(f"[cyan]Columns:[/cyan] {counts.shape[1]}")

    if count_col in counts.columns and len(counts):
        total = int(counts[count_col].sum())
        console.print(f"[cyan]Incidents covered:[/cyan] {total:,}")
        desc = counts[count_col].describe()
        console.print(
            f"[yellow]Count per key:[/yellow] min={desc['min']:.0f} "
            f"median={desc['50%']:.0f} mean={desc['mean']:.2f} max={desc['max']:.0f}"
        )

    console.print("\n[cyan]Sample rows (first 5):[/cyan]")
    console.print(counts.head().to_string())


def validate_counts_schema(
    counts: pd.DataFrame,
    key: Optional[List[str]] = None,
    count_col: str = MODEL_TARGET,
) -> None:
    """Every grouping column and the count column must be present."""
    key = list(GROUP_KEY if key is None else key)
    required_cols = key + [count_col]

    missing = [c for c in required_cols if c not in counts.columns]

    if missing:
        console.print("[bold red]Grouped-count schema validation failed.[/bold red]")
        console.print(f"[red]Missing columns:[/red] {missing}")
        raise ValueError(f"Grouped-count schema validation failed. Missing: {missing}")

    console.print("[green]Grouped-count schema validated.[/green]")


def validate_counts_unique(counts: pd.DataFrame, key: Optional[List[str]] = None) -> None:
    """No key combination may appear twice."""
    key = list(GROUP_KEY if key is None else key)
    duplicates = int(counts.duplicated(subset=key).sum())

    if duplicates:
        console.print(f"[bold red]Key uniqueness failed:[/bold red] {duplicates:,} duplicate keys")
        raise ValueError(f"Grouped counts contain {duplicates} duplicate keys")

    console.print("[green]Grouped-count keys unique.[/green]")


def validate_counts_positive(counts: pd.DataFrame, count_col: str = MODEL_TARGET) -> None:
    """Sparse grid: every materialized combination has at least one incident."""
    bad = int((counts[count_col] < 1).sum())

    if bad:
        console.print(f"[bold red]Positive-count check failed:[/bold red] {bad:,} rows with count < 1")
        raise ValueError(f"Grouped counts contain {bad} rows with count < 1")

    console.print("[green]All grouped counts positive.[/green]")


__all__ = [
    "counts_quality_report",
    "validate_counts_schema",
    "validate_counts_unique",
    "validate_counts_positive",
]
