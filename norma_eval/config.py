"""Evaluation matrix defaults and environment lookup."""

import os
from typing import Optional


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with optional default."""
    return os.environ.get(name, default)


# Evaluation Matrix
DEFAULT_SCENARIO = "./scenarios/eval/scalability.yml"
"""str: Scenario file passed to the driver for every configuration."""

DEFAULT_DB_IMPLS = [
    # "geth",
    "go-file",
]
"""list: DB implementations Opera is evaluated with, in run order."""

DEFAULT_NUM_VALIDATORS = [1, 2, 4, 6, 8]
"""list: Validator counts evaluated for each DB implementation, in run order."""

# External Commands
BUILD_COMMAND = ["make", "-j"]
"""list: Command building the driver; run from the Norma repository root."""

DRIVER_COMMAND = ["go", "run", "./driver/norma"]
"""list: Command prefix invoking the driver's sub-commands."""

# Driver Output
RESULT_PATH_PATTERN = r"Raw data was exported to (\S+)"
"""str: Regex capturing the measurement file path from the driver's output."""

SUMMARY_HEADER = "scenario, db, numValidators, measurements"

# Logging
ENV_LOG_LEVEL = "NORMA_EVAL_LOG_LEVEL"
ENV_LOG_DIR = "NORMA_EVAL_LOG_DIR"
