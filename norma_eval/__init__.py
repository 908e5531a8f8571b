"""Scalability evaluation runner driving Norma over a matrix of DB
implementations and validator counts."""

__version__ = "0.1.0"

# Core components
from norma_eval.context import Configuration, RunContext, RunRecord
from norma_eval.process import ScopedProcess

# Execution
from norma_eval.runner.build import build_driver
from norma_eval.runner.execute import extract_result_path, run_evaluation, run_norma
from norma_eval.runner.aggregate import add_result
from norma_eval.report.diff import run_diff

__all__ = [
    # Version
    "__version__",
    # Core
    "Configuration",
    "RunContext",
    "RunRecord",
    "ScopedProcess",
    # Execution
    "build_driver",
    "run_norma",
    "extract_result_path",
    "add_result",
    "run_diff",
    "run_evaluation",
]
