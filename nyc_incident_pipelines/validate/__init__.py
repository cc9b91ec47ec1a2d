# __init__ for validate utils


from .core import run_validation_checks, show_missing_comparison, show_missingness
from .count_checks import (
    counts_quality_report,
    validate_counts_schema,
    validate_counts_unique,
    validate_counts_positive,
)
from .orchestrator import run_validations, run_count_validations, create_snapshot
from .wandb_logging import log_table_artifact, log_analysis_results

__all__ = [
    # Core validation
    "run_validation_checks",
    "show_missing_comparison",
    "show_missingness",

    # Grouped-count validation
    "counts_quality_report",
    "validate_counts_schema",
    "validate_counts_unique",
    "validate_counts_positive",

    # Orchestrators
    "run_validations",
    "run_count_validations",
    "create_snapshot",

    # W&B logging
    "log_table_artifact",
    "log_analysis_results",
]
