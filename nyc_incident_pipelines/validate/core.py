# Core data validation checks for the incident pipeline

import pandas as pd
from rich.console import Console
from rich.table import Table
from typing import Dict, Any

from config import BOROUGH_COL, BOROUGHS, DATE_COL, INCIDENT_KEY_COL, TIME_COL

console = Console()


def run_validation_checks(df: pd.DataFrame, step_name: str, check_boroughs: bool = True) -> Dict[str, str]:
    """
    Key integrity checks (reported, never raised):
    - incident_key uniqueness (raw exports repeat keys per victim, so WARN not FAIL)
    - core completeness (missing time is WARN, missing date / borough is FAIL)
    - borough labels within the known five boroughs (optional)

    Returns check name -> PASS / WARN / FAIL.
    """
    results: Dict[str, str] = {}

    if INCIDENT_KEY_COL in df.columns:
        duplicates = int(df.duplicated(subset=[INCIDENT_KEY_COL]).sum())
        if duplicates > 0:
            console.print(
                f"[bold yellow]WARNING: {step_name} - {duplicates:,} repeated {INCIDENT_KEY_COL} rows.[/bold yellow]"
            )
            results["incident_key_unique"] = "WARN"
        else:
            console.print(f"[green]PASS: {step_name} - {INCIDENT_KEY_COL} unique.[/green]")
            results["incident_key_unique"] = "PASS"

    core_cols = [DATE_COL, TIME_COL, BOROUGH_COL]
    for col in core_cols:
        if col in df.columns and len(df):
            missing_pct = df[col].isna().sum() / len(df)
            if missing_pct > 0.01 and col == TIME_COL:
                # rows without a time are kept; only their time features are missing
                console.print(
                    f"[bold yellow]WARNING: {step_name} - '{col}' missing {missing_pct:.2%} (>1%).[/bold yellow]"
                )
                results[f"{col}_complete"] = "WARN"
            elif missing_pct > 0.01:
                console.print(
                    f"[bold red]FAIL: {step_name} - '{col}' missing {missing_pct:.2%} (>1%).[/bold red]"
                )
                results[f"{col}_complete"] = "FAIL"
            else:
                console.print(
                    f"[green]PASS: {step_name} - '{col}' completeness OK ({missing_pct:.2%} missing).[/green]"
                )
                results[f"{col}_complete"] = "PASS"

    if check_boroughs and BOROUGH_COL in df.columns:
        labels = set(df[BOROUGH_COL].dropna().astype(str).str.upper())
        unknown = labels - set(BOROUGHS)
        if unknown:
            console.print(
                f"[bold red]FAIL: {step_name} - unexpected borough labels: {sorted(unknown)}[/bold red]"
            )
            results["borough_labels"] = "FAIL"
        else:
            console.print(f"[green]PASS: {step_name} - borough labels valid.[/green]")
            results["borough_labels"] = "PASS"

    return results


def show_missing_comparison(df_local: pd.DataFrame, snapshot: Dict[str, Any], step_name: str) -> pd.DataFrame:
    """
    Compare missingness before/after a step.

    `snapshot` is taken from the frame before the step (see create_snapshot).
    Only columns present on both sides are compared. Change is after - before,
    so a negative value means missing cells were filled or their rows dropped.
    """
    table = Table(
        title=f"{step_name} - Missing Data Comparison",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Column", style="cyan")
    table.add_column("Before", justify="right", style="red")
    table.add_column("After", justify="right", style="green")
    table.add_column("Change", justify="right", style="blue")

    rows = []
    n = max(len(df_local), 1)
    for col, (before, before_pct) in snapshot.items():
        if col in df_local.columns:
            after = int(df_local[col].isna().sum())
            table.add_row(
                col,
                f"{before:,} ({before_pct:.1f}%)",
                f"{after:,} ({after / n * 100:.1f}%)",
                f"{after - before:+,}",
            )
            rows.append({"column": col, "before": before, "after": after, "change": after - before})

    console.print(table)
    return pd.DataFrame(rows, columns=["column", "before", "after", "change"])


def show_missingness(df: pd.DataFrame, step_name: str) -> pd.Series:
    """Print missing count and share per column; returns the counts."""
    missing = df.isna().sum().astype(int)

    table = Table(title=f"{step_name} - Missing Data", show_header=True, header_style="bold magenta")
    table.add_column("Column", style="cyan")
    table.add_column("Missing", justify="right", style="red")
    table.add_column("%", justify="right")

    n = max(len(df), 1)
    for col, count in missing.items():
        table.add_row(str(col), f"{count:,}", f"{count / n * 100:.1f}%")

    console.print(table)
    return missing


__all__ = ["run_validation_checks", "show_missing_comparison", "show_missingness"]
