import re
import time
from datetime import datetime
from typing import List, Tuple

from norma_eval.config import DRIVER_COMMAND, RESULT_PATH_PATTERN
from norma_eval.context import Configuration, RunContext, RunRecord
from norma_eval.exceptions import BuildError
from norma_eval.logging_config import get_logger
from norma_eval.process import ScopedProcess
from norma_eval.report.diff import run_diff
from norma_eval.runner.aggregate import add_result
from norma_eval.runner.build import require_build

logger = get_logger("runner")

_RESULT_PATH_RE = re.compile(RESULT_PATH_PATTERN)


def build_run_command(
    scenario: str,
    db_impl: str,
    num_validators: int,
    driver_command: List[str] = DRIVER_COMMAND,
) -> List[str]:
    label = Configuration(db_impl, num_validators).label
    return [
        *driver_command,
        "run",
        "--label", label,
        "--num-validators", str(num_validators),
        "--db-impl", db_impl,
        scenario,
    ]


def format_elapsed(seconds: float) -> str:
    """Format elapsed seconds as H:MM:SS, hours right-aligned to two places."""
    rt = int(seconds)
    return "%2d:%02d:%02d" % (rt // 3600, (rt % 3600) // 60, rt % 60)


def format_line_prefix(
    now: datetime, elapsed: float, scenario: str, db_impl: str, num_validators: int
) -> str:
    timestamp = now.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    return (
        f"{timestamp} | {format_elapsed(elapsed)} | {scenario} | "
        f"{db_impl} | {num_validators} | "
    )


def extract_result_path(output: str) -> str:
    """Return the last exported raw data path in the output, or '' if none."""
    matches = _RESULT_PATH_RE.findall(output)
    return matches[-1] if matches else ""


def run_norma(
    scenario: str,
    db_impl: str,
    num_validators: int,
    driver_command: List[str] = DRIVER_COMMAND,
) -> str:
    """Run one configuration, echoing its output live, and return its result path.

    The driver's exit status does not change the outcome: whatever path it
    reported (possibly '') is returned.
    """
    print(
        f"Running {scenario} with {db_impl} and {num_validators} validators ..",
        flush=True,
    )
    cmd = build_run_command(scenario, db_impl, num_validators, driver_command)
    print(f"Running {' '.join(cmd)}", flush=True)

    start_time = time.monotonic()
    out: List[str] = []
    with ScopedProcess(cmd) as proc:
        for line in proc.lines():
            prefix = format_line_prefix(
                datetime.now(), time.monotonic() - start_time,
                scenario, db_impl, num_validators,
            )
            text = line.rstrip("\r\n")
            print(prefix + text, flush=True)
            out.append(line)
        returncode = proc.wait()

    run_time = time.monotonic() - start_time
    if returncode != 0:
        logger.warning(
            f"Run {db_impl}/{num_validators} exited with status {returncode} "
            f"after {run_time:.2f}s",
            extra={
                "db_impl": db_impl,
                "num_validators": num_validators,
                "returncode": returncode,
                "run_time": run_time,
            },
        )

    result_path = extract_result_path("".join(out))
    if not result_path:
        logger.warning(
            f"Run {db_impl}/{num_validators} did not report an exported raw data file",
            extra={"db_impl": db_impl, "num_validators": num_validators},
        )
    else:
        logger.info(
            f"Run {db_impl}/{num_validators} completed in {run_time:.2f}s",
            extra={
                "db_impl": db_impl,
                "num_validators": num_validators,
                "result_path": result_path,
                "run_time": run_time,
            },
        )
    return result_path


def run_configurations(ctx: RunContext) -> List[RunRecord]:
    """Run every configuration of the matrix in order, recording each result."""
    for config in ctx.configurations():
        result_path = run_norma(
            ctx.scenario, config.db_impl, config.num_validators, ctx.driver_command
        )
        add_result(
            ctx,
            RunRecord(ctx.scenario, config.db_impl, config.num_validators, result_path),
        )
    return ctx.records


def plan(ctx: RunContext) -> List[Tuple[Configuration, List[str]]]:
    """The configurations and driver commands a run would execute, in order."""
    ctx.validate()
    return [
        (
            config,
            build_run_command(
                ctx.scenario, config.db_impl, config.num_validators, ctx.driver_command
            ),
        )
        for config in ctx.configurations()
    ]


def run_evaluation(ctx: RunContext, skip_build: bool = False) -> bool:
    """Build the driver, run the whole matrix and render the diff report.

    Returns False if the build failed, in which case nothing was run.
    """
    ctx.validate()
    if not skip_build:
        try:
            require_build(ctx.build_command)
        except BuildError as e:
            logger.error(str(e), extra={"error": str(e)})
            print("Build failed, aborting.", flush=True)
            return False

    overall_start = time.monotonic()
    run_configurations(ctx)
    run_diff(ctx.driver_command, ctx.result_paths)

    total_time = time.monotonic() - overall_start
    logger.info(
        f"Completed {len(ctx.records)} runs in {total_time:.2f}s",
        extra={"completed_runs": len(ctx.records), "total_time": total_time},
    )
    return True
