# wandb utils for logging analysis tables

import pandas as pd
from pathlib import Path
from typing import Dict, Optional

from rich.console import Console

from config import WANDB_PROJECT

try:
    import wandb
    WANDB_AVAILABLE = True
except ImportError:
    WANDB_AVAILABLE = False

console = Console()


def log_table_artifact(
    output_path: Path,
    name: str,
    description: str,
    df: Optional[pd.DataFrame] = None,
) -> bool:
    """
    Log a result table as a W&B dataset artifact. When df is given and
    output_path does not exist yet, df is written there first.

    Returns True when the artifact was logged.
    """
    if not WANDB_AVAILABLE:
        console.print("[yellow]W&B not available (pip install wandb). Skipping artifact logging.[/yellow]")
        return False

    if wandb.run is None:
        console.print("[yellow]Warning: No active W&B run. Call wandb.init() first.[/yellow]")
        return False

    output_path = Path(output_path)
    if not output_path.exists():
        if df is None:
            raise FileNotFoundError(f"No table at {output_path} and no DataFrame to write")
        df.to_csv(output_path, index=False)

    artifact = wandb.Artifact(name, type="dataset", description=description)
    artifact.add_file(str(output_path))
    wandb.log_artifact(artifact)

    console.print(f"[green]W&B artifact logged:[/green] {name}")
    return True


def log_analysis_results(
    written: Dict[str, Path],
    ranked: pd.DataFrame,
    model_stats: Dict[str, float],
    project_name: str = WANDB_PROJECT,
) -> None:
    """
    Log the ranked coefficients, fit statistics and exported tables to W&B.

    Parameters:
        written: table name -> CSV path, as returned by export_results
        ranked: ranked coefficient table
        model_stats: CountModelFit.summary_stats()
        project_name: W&B project name
    """
    if not WANDB_AVAILABLE:
        console.print("[yellow]W&B not available. Skipping result logging.[/yellow]")
        return

    if wandb.run is None:
        console.print(f"[cyan]Initializing W&B run for project:[/cyan] {project_name}")
        wandb.init(project=project_name, job_type="incident_analysis")

    wandb.log({f"model/{k}": v for k, v in model_stats.items()})
    wandb.log({"ranked_coefficients": wandb.Table(dataframe=ranked)})

    for name, path in written.items():
        log_table_artifact(path, name=name, description=f"{name} table")

    console.print("[green]All analysis results logged to W&B[/green]")


__all__ = ["log_table_artifact", "log_analysis_results", "WANDB_AVAILABLE"]
