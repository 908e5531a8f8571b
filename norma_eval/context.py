"""Evaluation run context: configurations, run records and the record list."""

from dataclasses import dataclass, field
from itertools import product
from typing import Iterator, List

from norma_eval.config import (
    BUILD_COMMAND,
    DEFAULT_DB_IMPLS,
    DEFAULT_NUM_VALIDATORS,
    DEFAULT_SCENARIO,
    DRIVER_COMMAND,
    SUMMARY_HEADER,
)
from norma_eval.exceptions import ConfigurationError


@dataclass(frozen=True)
class Configuration:
    """One (DB implementation, validator count) pair of the matrix."""

    db_impl: str
    num_validators: int

    @property
    def label(self) -> str:
        return f"{self.db_impl}_{self.num_validators}v"


@dataclass(frozen=True)
class RunRecord:
    scenario: str
    db_impl: str
    num_validators: int
    result_path: str

    def to_line(self) -> str:
        return f"{self.scenario}, {self.db_impl}, {self.num_validators}, {self.result_path}"


@dataclass
class RunContext:
    """Evaluation run context owning the matrix and the collected records.

    The matrix lists are fixed once the run starts; ``records`` is append-only
    and only grows through ``norma_eval.runner.aggregate.add_result``.
    """

    scenario: str = DEFAULT_SCENARIO
    db_impls: List[str] = field(default_factory=lambda: list(DEFAULT_DB_IMPLS))
    num_validators: List[int] = field(
        default_factory=lambda: list(DEFAULT_NUM_VALIDATORS)
    )
    build_command: List[str] = field(default_factory=lambda: list(BUILD_COMMAND))
    driver_command: List[str] = field(default_factory=lambda: list(DRIVER_COMMAND))
    records: List[RunRecord] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ConfigurationError if the matrix cannot be evaluated."""
        if not self.scenario:
            raise ConfigurationError("No scenario configured")
        if not self.db_impls:
            raise ConfigurationError("No DB implementation configured")
        if not self.num_validators:
            raise ConfigurationError("No validator count configured")
        for count in self.num_validators:
            if isinstance(count, bool) or not isinstance(count, int) or count < 1:
                raise ConfigurationError(
                    f"Validator count must be a positive integer, got {count!r}"
                )
        if not self.driver_command:
            raise ConfigurationError("No driver command configured")

    def configurations(self) -> Iterator[Configuration]:
        """Enumerate the matrix: DB implementations outer, validator counts inner."""
        for db_impl, num_validators in product(self.db_impls, self.num_validators):
            yield Configuration(db_impl, num_validators)

    @property
    def result_paths(self) -> List[str]:
        return [r.result_path for r in self.records]

    def summary_lines(self) -> List[str]:
        return [SUMMARY_HEADER] + [r.to_line() for r in self.records]
