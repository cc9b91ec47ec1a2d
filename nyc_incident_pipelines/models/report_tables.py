# Writes the analysis tables consumed by the report / chart layer

import json
from pathlib import Path
from typing import Dict

import pandas as pd
from rich.console import Console

from config import TABLES_DIR, ensure_output_dirs

console = Console()


def export_results(results: dict, output_dir: Path = TABLES_DIR) -> Dict[str, Path]:
    """
    Write grouped counts, coefficient tables, summaries and fit statistics.

    Returns table name -> written path.
    """
    output_dir = ensure_output_dirs(output_dir)
    written: Dict[str, Path] = {}

    tables = {
        "grouped_counts": results["grouped_counts"],
        "coefficients": results["coefficients"],
        "ranked_coefficients": results["ranked"],
    }
    for name, df in tables.items():
        path = output_dir / f"{name}.csv"
        df.to_csv(path, index=False)
        written[name] = path

    for name, df in results["summaries"].items():
        path = output_dir / f"summary_{name}.csv"
        df.to_csv(path, index=not isinstance(df.index, pd.RangeIndex))
        written[f"summary_{name}"] = path

    fit = results["fit"]
    stats_path = output_dir / "model_stats.json"
    with open(stats_path, "w", encoding="utf-8") as f:
        json.dump(
            {
                **fit.summary_stats(),
                "alpha": fit.alpha,
                "reference_levels": {k: str(v) for k, v in fit.reference_levels.items()},
                "aliased_terms": fit.aliased,
            },
            f,
            indent=2,
        )
    written["model_stats"] = stats_path

    console.print(f"[green]Saved {len(written)} tables to[/green] {output_dir}")
    return written
