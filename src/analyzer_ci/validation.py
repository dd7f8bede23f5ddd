"""Per-field checks used for interactive feedback and pre-run validation."""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .errors import ConfigNotImplementedError, NumericFormatError
from .loaders import AnalyzerConfigLoad, CoordinatorConfigLoad, parse_issue_number
from .resolution import Resolution, is_present

_LOGGER = logging.getLogger(__name__)


class VerdictKind(str, Enum):
    OK = "ok"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Verdict:
    kind: VerdictKind
    message: str = ""

    @classmethod
    def ok(cls) -> Verdict:
        return cls(VerdictKind.OK)

    @classmethod
    def error(cls, message: str) -> Verdict:
        return cls(VerdictKind.ERROR, message)

    @property
    def is_ok(self) -> bool:
        return self.kind is VerdictKind.OK


@dataclass(frozen=True, slots=True)
class FieldFailure:
    field: str
    log_line: str
    verdict: Verdict


class Validator:
    """Synchronous checks over the raw step inputs."""

    def __init__(self, executor: Executor) -> None:
        self._executor = executor

    def check_issue_number(self, issue_number: str) -> Verdict:
        try:
            parse_issue_number(issue_number)
        except NumericFormatError:
            return Verdict.error("Not a number.")
        return Verdict.ok()

    def check_analyzer_config(self, document: str) -> Verdict:
        return self._check_load(AnalyzerConfigLoad.load, document)

    def check_coordinator_config(self, document: str) -> Verdict:
        return self._check_load(CoordinatorConfigLoad.load, document)

    def first_failure(
        self,
        issue_number: str,
        analyzer_config: str,
        coordinator_config: str,
    ) -> FieldFailure | None:
        """Return the first failing field, checked in the order the step uses."""

        checks: list[tuple[str, str, Callable[[], Verdict]]] = [
            (
                "github_issue_number",
                "Failed to handle github issue number",
                lambda: self.check_issue_number(issue_number),
            ),
            (
                "analyzer_config",
                "Failed to handle analyzer config",
                lambda: self.check_analyzer_config(analyzer_config),
            ),
            (
                "coordinator_config",
                "Failed to handle coordinator config",
                lambda: self.check_coordinator_config(coordinator_config),
            ),
        ]
        for field_name, log_line, check in checks:
            verdict = check()
            if not verdict.is_ok:
                _LOGGER.debug("Validation failed for %s: %s", field_name, verdict.message)
                return FieldFailure(field=field_name, log_line=log_line, verdict=verdict)
        return None

    def _check_load(
        self,
        load: Callable[[str, Executor], Future[Resolution[Any]]],
        document: str,
    ) -> Verdict:
        try:
            resolution = load(document, self._executor).result()
        except ConfigNotImplementedError:
            return Verdict.error("Not implemented.")
        except Exception as exc:
            return Verdict.error(f"Internal error, {exc}")
        return Verdict.ok() if is_present(resolution) else Verdict.error("Not a valid config.")
