# Step logging for the incident pipeline: shapes per step plus dropped-row accounting.

from typing import List, Dict, Any, Optional
import pandas as pd
from rich.console import Console
from rich.table import Table

console = Console()

pipeline_log: List[Dict[str, Any]] = []


def _shape(df: Any) -> tuple:
    if not isinstance(df, pd.DataFrame) or df.empty:
        return "N/A", "N/A"
    return int(df.shape[0]), int(df.shape[1])


def _fmt(val: Any) -> str:
    return f"{val:,}" if isinstance(val, int) else str(val)


def log_step(step_name: str, df: pd.DataFrame, dropped: Optional[int] = None) -> None:
    """
    Log pipeline step name + shape.

    Parameters:
        step_name: Description of the pipeline step
        df: DataFrame produced by the step
        dropped: Rows removed by the step, if any
    """
    rows_val, cols_val = _shape(df)

    pipeline_log.append(
        {"step": step_name, "rows": rows_val, "cols": cols_val, "dropped": dropped}
    )

    msg = f"[green]{step_name}[/green] [cyan]shape: {_fmt(rows_val)} x {_fmt(cols_val)}[/cyan]"
    if dropped:
        msg += f" [yellow](dropped {dropped:,})[/yellow]"
    console.print(msg)


def log_dropped(step_name: str, before: int, df: pd.DataFrame, reason: str) -> int:
    """Log a filtering step and return the number of rows it removed."""
    after = len(df)
    dropped = before - after
    log_step(f"{step_name} ({reason})", df, dropped=dropped)
    return dropped


def show_pipeline_table() -> None:
    """Pretty-print pipeline log as a table."""
    if not pipeline_log:
        console.print("[red]No pipeline steps logged yet.[/red]")
        return

    table = Table(title="Incident Pipeline Summary", show_lines=True)
    table.add_column("Step", style="cyan", no_wrap=True)
    table.add_column("Rows", style="green")
    table.add_column("Cols", style="yellow")
    table.add_column("Dropped", style="red")

    for entry in pipeline_log:
        dropped = entry.get("dropped")
        table.add_row(
            entry["step"],
            _fmt(entry["rows"]),
            _fmt(entry["cols"]),
            _fmt(dropped) if dropped is not None else "",
        )

    console.print(table)


def clear_pipeline_log() -> None:
    """Clear the pipeline log."""
    pipeline_log.clear()
    console.print("[yellow]Pipeline log cleared.[/yellow]")


__all__ = ["log_step", "log_dropped", "show_pipeline_table", "clear_pipeline_log", "pipeline_log"]
