# Groups enriched incidents into counts per observed key combination (sparse grid)

from typing import List, Optional

import pandas as pd
from rich.console import Console

from config import GROUP_KEY, MODEL_TARGET
from nyc_incident_pipelines.utils.logging import log_dropped

console = Console()


def build_grouped_counts(
    df: pd.DataFrame,
    key: Optional[List[str]] = None,
    count_col: str = MODEL_TARGET,
) -> pd.DataFrame:
    """
    Count incidents per distinct combination of key values.

    Only combinations present in the input appear; nothing is filled with
    zero. Rows missing any key value (blank borough, unparseable time) are
    excluded.
    """
    key = list(GROUP_KEY if key is None else key)

    missing = [c for c in key if c not in df.columns]
    if missing:
        raise KeyError(f"Grouping columns not found: {missing}")

    before = len(df)
    observed = df.dropna(subset=key)
    log_dropped("Grouped counts input", before, observed, "missing key value")

    if observed.empty:
        console.print("[yellow]No rows with a complete grouping key.[/yellow]")
        return pd.DataFrame(
            {**{c: pd.Series(dtype=df[c].dtype) for c in key}, count_col: pd.Series(dtype="int64")}
        )

    counts = (
        observed.groupby(key, sort=True, observed=True)
        .size()
        .reset_index(name=count_col)
    )
    counts[count_col] = counts[count_col].astype("int64")

    console.print(
        f"[green]Grouped {len(observed):,} incidents into {len(counts):,} key combinations.[/green]"
    )
    return counts
