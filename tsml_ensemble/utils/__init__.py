"""Utility modules."""

from tsml_ensemble.utils.config import get_nested, load_config, merge_configs, set_nested
from tsml_ensemble.utils.logging import log_failed_stage, setup_logging
from tsml_ensemble.utils.parallel import run_tasks

__all__ = [
    "load_config",
    "merge_configs",
    "get_nested",
    "set_nested",
    "setup_logging",
    "log_failed_stage",
    "run_tasks",
]
