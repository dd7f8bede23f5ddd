"""Hand a composed analysis request to the analysis capability."""

from __future__ import annotations

import logging
import concurrent.futures
from concurrent.futures import Executor, Future
from enum import Enum
from typing import Protocol

from .errors import UnknownExecutionError
from .models import AnalysisConfig

_LOGGER = logging.getLogger(__name__)


class Analysis(Protocol):
    def run(self, config: AnalysisConfig) -> None:
        ...


class DispatchMode(str, Enum):
    BACKGROUND = "background"
    FOREGROUND = "foreground"

    @classmethod
    def from_flag(cls, run_on_background: bool) -> DispatchMode:
        return cls.BACKGROUND if run_on_background else cls.FOREGROUND


class Dispatcher:
    """Submit analyses to the shared executor.

    Foreground dispatch blocks until the analysis finishes. With the default
    ``foreground_timeout`` of ``None`` there is no upper bound; the CI host's
    own step timeout is expected to cover hung analyses. Background dispatch
    returns at once and only reports failures through ``logging``.
    """

    def __init__(
        self,
        analysis: Analysis,
        executor: Executor,
        foreground_timeout: float | None = None,
    ) -> None:
        self._analysis = analysis
        self._executor = executor
        self._foreground_timeout = foreground_timeout

    def dispatch(self, config: AnalysisConfig, mode: DispatchMode) -> Future[None]:
        future = self._executor.submit(self._analysis.run, config)
        if mode is DispatchMode.BACKGROUND:
            future.add_done_callback(_log_background_outcome)
            _LOGGER.info("Analysis started in background")
            return future

        try:
            future.result(timeout=self._foreground_timeout)
        except concurrent.futures.TimeoutError as exc:
            if not future.done():
                raise UnknownExecutionError(
                    f"Analysis did not finish within {self._foreground_timeout}s"
                ) from exc
            # Finished right after the deadline, or the analysis raised TimeoutError itself.
            failure = future.exception()
            if failure is not None:
                raise UnknownExecutionError(f"Analysis failed, {failure}") from failure
        except Exception as exc:
            raise UnknownExecutionError(f"Analysis failed, {exc}") from exc
        _LOGGER.info("Analysis completed")
        return future


def _log_background_outcome(future: Future[None]) -> None:
    exc = future.exception()
    if exc is not None:
        _LOGGER.error("Background analysis failed: %s", exc, exc_info=exc)
    else:
        _LOGGER.info("Background analysis completed")
