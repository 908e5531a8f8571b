import sys
import textwrap

import pytest
from norma_eval.context import RunContext


def python_command(source: str):
    """Command running the given Python source; extra arguments land in sys.argv."""
    return [sys.executable, "-c", textwrap.dedent(source)]


@pytest.fixture
def fake_driver():
    """Driver stand-in printing a few lines and exporting raw data for its label."""
    return python_command(
        """
        import sys
        args = sys.argv[1:]
        label = args[args.index("--label") + 1]
        print("Starting evaluation " + label, flush=True)
        print("warning: slow disk", file=sys.stderr, flush=True)
        print("Raw data was exported to /tmp/norma_data_" + label + "/measurements.csv", flush=True)
        """
    )


@pytest.fixture
def silent_driver():
    """Driver stand-in that fails without exporting anything."""
    return python_command(
        """
        import sys
        print("Failed to start network", flush=True)
        sys.exit(3)
        """
    )


@pytest.fixture
def run_context(fake_driver):
    """Small evaluation context wired to the fake driver."""
    return RunContext(
        scenario="scenarios/test.yml",
        db_impls=["go-file", "geth"],
        num_validators=[1, 2],
        build_command=python_command("pass"),
        driver_command=fake_driver,
    )


@pytest.fixture(name="python_command")
def python_command_fixture():
    return python_command
