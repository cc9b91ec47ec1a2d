"""
Utility functions for NYC incident pipelines.
"""

from .logging import log_step, log_dropped, show_pipeline_table, clear_pipeline_log, pipeline_log

__all__ = ["log_step", "log_dropped", "show_pipeline_table", "clear_pipeline_log", "pipeline_log"]
