import argparse
from norma_eval.config import (
    DEFAULT_DB_IMPLS,
    DEFAULT_NUM_VALIDATORS,
    DEFAULT_SCENARIO,
    DRIVER_COMMAND,
)
from norma_eval.context import RunContext
from norma_eval.exceptions import NormaEvalError
from norma_eval.logging_config import get_logger, setup_logging
from norma_eval.report.diff import run_diff
from norma_eval.runner.execute import plan, run_evaluation

logger = get_logger("cli")


def _make_context(args) -> RunContext:
    return RunContext(
        scenario=args.scenario,
        db_impls=args.db_impl or list(DEFAULT_DB_IMPLS),
        num_validators=args.num_validators or list(DEFAULT_NUM_VALIDATORS),
    )


def _run(args):
    ctx = _make_context(args)
    if run_evaluation(ctx, skip_build=args.skip_build):
        print(f"Evaluated {len(ctx.records)} configurations of {ctx.scenario}")


def _plan(args):
    ctx = _make_context(args)
    for config, cmd in plan(ctx):
        print(f"{config.label}: {' '.join(cmd)}")


def _diff(args):
    run_diff(list(DRIVER_COMMAND), args.paths)


def _add_matrix_arguments(p):
    p.add_argument("--scenario", type=str, default=DEFAULT_SCENARIO,
                   help=f"Scenario file (default: {DEFAULT_SCENARIO})")
    p.add_argument("--db-impl", action="append", type=str,
                   help="DB implementation to evaluate; repeat for several")
    p.add_argument("--num-validators", action="append", type=int,
                   help="Validator count to evaluate; repeat for several")


def main(argv=None):
    p = argparse.ArgumentParser(prog="norma-eval", description="Norma scalability evaluation runner")
    p.add_argument("--log-level", type=str, help="Log level (or set NORMA_EVAL_LOG_LEVEL)")
    subs = p.add_subparsers(dest="cmd", required=True)

    p1 = subs.add_parser("run", help="Build Norma, run every configuration and diff the results")
    _add_matrix_arguments(p1)
    p1.add_argument("--skip-build", action="store_true", help="Do not run the build step")
    p1.set_defaults(func=_run)

    p2 = subs.add_parser("plan", help="Print the driver commands a run would execute")
    _add_matrix_arguments(p2)
    p2.set_defaults(func=_plan)

    p3 = subs.add_parser("diff", help="Render a comparison report over existing measurement files")
    p3.add_argument("paths", nargs="+", help="Measurement files in report order")
    p3.set_defaults(func=_diff)

    args = p.parse_args(argv)
    setup_logging(level=args.log_level)
    try:
        args.func(args)
    except NormaEvalError as e:
        logger.error(str(e), extra={"error": str(e)})
        raise SystemExit(1)


if __name__ == "__main__":
    main()
