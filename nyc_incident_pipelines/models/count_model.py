# OLS count model: explains grouped incident counts by borough, season, time of day and calendar terms

from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import statsmodels.api as sm
from rich.console import Console

from config import ALPHA, MODEL_CATEGORICAL, MODEL_NUMERIC, MODEL_TARGET

console = Console()

INTERCEPT = "const"


class ModelFitError(ValueError):
    """Raised when the count model cannot be estimated from the grouped table."""

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason


class CountModelFit:
    """Fitted OLS count model plus the encoding decisions made to build it."""

    def __init__(self, result, reference_levels, aliased, alpha=ALPHA):
        """
        Args:
            result: statsmodels RegressionResults
            reference_levels: factor -> dropped reference level
            aliased: terms removed because they were exact linear combinations of earlier terms
            alpha: significance level for intervals and the significant flag
        """
        self.result = result
        self.reference_levels = reference_levels
        self.aliased = aliased
        self.alpha = alpha
        self.name = "OLS_Count_Model"

    def __repr__(self):
        return f"{self.name}(n={self.n_obs}, terms={len(self.terms)})"

    @property
    def terms(self) -> List[str]:
        return [t for t in self.result.params.index if t != INTERCEPT]

    @property
    def n_obs(self) -> int:
        return int(self.result.nobs)

    def summary_stats(self) -> Dict[str, float]:
        res = self.result
        return {
            "n_obs": self.n_obs,
            "n_params": int(len(res.params)),
            "df_resid": float(res.df_resid),
            "r_squared": float(res.rsquared),
            "adj_r_squared": float(res.rsquared_adj),
            "f_pvalue": float(res.f_pvalue) if res.f_pvalue is not None else float("nan"),
            "residual_std": float(np.sqrt(res.scale)),
        }


def _sorted_levels(values: pd.Series) -> list:
    levels = values.dropna().unique().tolist()
    try:
        return sorted(levels)
    except TypeError:
        return sorted(levels, key=str)


def build_design_matrix(
    counts: pd.DataFrame,
    categorical: List[str],
    numeric: List[str],
) -> Tuple[pd.DataFrame, Dict[str, object]]:
    """
    Explicit treatment coding: each categorical factor's levels are sorted,
    the first is the reference, and every other level gets an indicator
    named factor[T.level]. Numeric terms pass through. Adds the intercept.
    """
    X = pd.DataFrame(index=counts.index)
    reference_levels: Dict[str, object] = {}

    for factor in categorical:
        levels = _sorted_levels(counts[factor])
        if len(levels) < 2:
            raise ModelFitError(
                f"Factor '{factor}' has {len(levels)} level(s) {levels}; need at least 2 for a contrast.",
                reason="single_level",
            )
        reference_levels[factor] = levels[0]
        for level in levels[1:]:
            X[f"{factor}[T.{level}]"] = (counts[factor] == level).astype(float)

    for name in numeric:
        X[name] = pd.to_numeric(counts[name]).astype(float)

    X.insert(0, INTERCEPT, 1.0)
    return X, reference_levels


def drop_aliased_terms(X: pd.DataFrame) -> Tuple[pd.DataFrame, List[str]]:
    """Drop columns that add no rank, scanning left to right (intercept first)."""
    keep: List[str] = []
    aliased: List[str] = []
    rank = 0

    for col in X.columns:
        candidate = X[keep + [col]].to_numpy()
        new_rank = np.linalg.matrix_rank(candidate)
        if new_rank > rank:
            keep.append(col)
            rank = new_rank
        else:
            aliased.append(col)

    return X[keep], aliased


def fit_count_model(
    counts: pd.DataFrame,
    categorical: Optional[List[str]] = None,
    numeric: Optional[List[str]] = None,
    target: str = MODEL_TARGET,
    alpha: float = ALPHA,
) -> CountModelFit:
    """
    Fit count ~ categorical factors + numeric terms by ordinary least squares.

    Raises:
        ModelFitError: empty table, a factor with fewer than two levels, or
            fewer rows than parameters / no residual degrees of freedom.
    """
    categorical = list(MODEL_CATEGORICAL if categorical is None else categorical)
    numeric = list(MODEL_NUMERIC if numeric is None else numeric)

    if counts is None or len(counts) == 0:
        raise ModelFitError("Grouped-count table is empty; nothing to fit.", reason="empty")

    used = categorical + numeric + [target]
    missing = [c for c in used if c not in counts.columns]
    if missing:
        raise KeyError(f"Model columns not found in grouped counts: {missing}")

    data = counts.dropna(subset=used)
    if data.empty:
        raise ModelFitError("No complete rows left after dropping missing values.", reason="empty")

    X, reference_levels = build_design_matrix(data, categorical, numeric)
    y = data[target].astype(float)

    if len(X) < X.shape[1]:
        raise ModelFitError(
            f"{len(X)} rows for {X.shape[1]} parameters; the fit is rank deficient.",
            reason="rank_deficient",
        )

    X, aliased = drop_aliased_terms(X)
    if aliased:
        console.print(f"[yellow]Aliased terms dropped (exact collinearity):[/yellow] {aliased}")
    if INTERCEPT in aliased:
        raise ModelFitError("Intercept is aliased; design matrix is all zeros.", reason="rank_deficient")

    if len(X) <= X.shape[1]:
        raise ModelFitError(
            f"{len(X)} rows for {X.shape[1]} identifiable parameters; no residual degrees of freedom.",
            reason="rank_deficient",
        )

    result = sm.OLS(y, X).fit()
    fit = CountModelFit(result, reference_levels, aliased, alpha=alpha)

    stats = fit.summary_stats()
    console.print(
        f"[green]OLS fit:[/green] n={stats['n_obs']:,} params={stats['n_params']} "
        f"R²={stats['r_squared']:.3f} adj R²={stats['adj_r_squared']:.3f}"
    )
    return fit


def coefficient_table(fit: CountModelFit) -> pd.DataFrame:
    """Estimate, standard error, (1 - alpha) interval and p-value for each non-intercept term."""
    res = fit.result
    params = res.params.drop(INTERCEPT, errors="ignore")
    conf = res.conf_int(alpha=fit.alpha).loc[params.index]

    table = pd.DataFrame({
        "factor": params.index,
        "estimate": params.values,
        "std_error": res.bse.loc[params.index].values,
        "ci_lower": conf[0].values,
        "ci_upper": conf[1].values,
        "p_value": res.pvalues.loc[params.index].values,
    })
    table["significant"] = table["p_value"] < fit.alpha
    return table


def rank_coefficients(table: pd.DataFrame, top_n: Optional[int] = None) -> pd.DataFrame:
    """Sort terms by descending absolute estimate and keep the top N."""
    ranked = (
        table.assign(abs_estimate=table["estimate"].abs())
        .sort_values("abs_estimate", ascending=False, kind="mergesort")
        .drop(columns="abs_estimate")
        .reset_index(drop=True)
    )
    ranked.insert(0, "rank", np.arange(1, len(ranked) + 1))
    if top_n is not None:
        ranked = ranked.head(top_n)
    return ranked
