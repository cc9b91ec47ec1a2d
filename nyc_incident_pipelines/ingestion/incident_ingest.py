# Raw incident ingestion from local CSV / parquet exports
from pathlib import Path
from typing import List, Optional, Union
import pandas as pd

from rich.console import Console
from config import INCIDENTS_CSV
from nyc_incident_pipelines.utils.logging import log_step

console = Console()

PathLike = Union[str, Path]


def read_incident_file(path: PathLike) -> pd.DataFrame:
    """Read one incident export; CSV columns are kept as strings."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Incident file not found: {path}")

    console.print(f"[cyan]Reading:[/cyan] {path.name}")
    if path.suffix.lower() == ".parquet":
        return pd.read_parquet(path)
    if path.suffix.lower() in {".csv", ".txt"}:
        return pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""])
    raise ValueError(f"Unsupported incident file type: {path.suffix}")


def load_incidents(paths: Optional[List[PathLike]] = None) -> pd.DataFrame:
    """Read and stack one or more incident exports (defaults to the configured CSV)."""
    paths = [INCIDENTS_CSV] if not paths else list(paths)

    console.print("\n[bold cyan]Loading incident exports...[/bold cyan]")
    dfs = [read_incident_file(p) for p in paths]
    df = pd.concat(dfs, ignore_index=True) if len(dfs) > 1 else dfs[0]

    log_step(f"Loaded {len(paths)} incident file(s)", df)
    return df
