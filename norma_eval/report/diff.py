import subprocess
from typing import List

from norma_eval.exceptions import DriverInvocationError
from norma_eval.logging_config import get_logger

logger = get_logger("report")


def build_diff_command(driver_command: List[str], result_paths: List[str]) -> List[str]:
    """Driver 'diff' invocation over the result paths, in collection order."""
    return [*driver_command, "diff", *result_paths]


def run_diff(driver_command: List[str], result_paths: List[str]) -> int:
    """Render the comparison report and return the driver's exit status.

    Output goes straight to the console; the report location is printed by
    the driver itself. Empty paths are forwarded unchanged.
    """
    cmd = build_diff_command(driver_command, result_paths)
    missing = sum(1 for p in result_paths if not p)
    if missing:
        logger.warning(
            f"{missing} of {len(result_paths)} runs exported no raw data; "
            f"their empty paths are passed to diff as-is",
            extra={"missing": missing, "total": len(result_paths)},
        )

    print(f"Running {' '.join(cmd)} ..", flush=True)
    try:
        returncode = subprocess.run(cmd).returncode
    except OSError as e:
        raise DriverInvocationError(f"Failed to start '{' '.join(cmd)}': {e}") from e

    if returncode != 0:
        logger.warning(
            f"Report generation exited with status {returncode}",
            extra={"returncode": returncode},
        )
    return returncode
