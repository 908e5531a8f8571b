import shlex
import subprocess
import time
from typing import List

from norma_eval.exceptions import BuildError
from norma_eval.logging_config import get_logger

logger = get_logger("runner")


def build_driver(build_command: List[str]) -> bool:
    """Run the build command in the foreground and report whether it succeeded.

    A command that cannot be spawned counts as a failed build.
    """
    command_line = shlex.join(build_command)
    start_time = time.monotonic()
    try:
        returncode = subprocess.run(build_command).returncode
    except OSError as e:
        logger.error(
            f"Could not run build command '{command_line}': {e}",
            extra={"command": command_line, "error": str(e)},
        )
        return False

    build_time = time.monotonic() - start_time
    ok = returncode == 0
    log = logger.info if ok else logger.error
    log(
        f"Build '{command_line}' finished with status {returncode} in {build_time:.2f}s",
        extra={"command": command_line, "returncode": returncode, "build_time": build_time},
    )
    return ok


def require_build(build_command: List[str]) -> None:
    """Build the driver, raising BuildError on failure."""
    print("Building ... ", flush=True)
    if not build_driver(build_command):
        raise BuildError(f"Build command '{shlex.join(build_command)}' failed")
    print("OK", flush=True)
