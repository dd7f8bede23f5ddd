"""Concurrent resolution of analyzer and coordinator configs."""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from typing import Any

from .concurrency import join
from .errors import ConfigNotImplementedError, UnknownExecutionError
from .listener import BuildListener
from .loaders import AnalyzerConfigLoad, CoordinatorConfigLoad
from .models import AnalysisConfig, FileSystemSourceConfig, GitHubIssueReporterConfig
from .resolution import Absent, Present, Resolution

_LOGGER = logging.getLogger(__name__)


class AsyncComposer:
    """Load both configs in parallel and compose them into an ``AnalysisConfig``.

    Composition happens only when both documents resolve; otherwise the
    failing side is reported on the build listener and ``Absent`` is
    returned so nothing gets dispatched.
    """

    def __init__(self, executor: Executor) -> None:
        self._executor = executor

    def compose(
        self,
        analyzer_document: str,
        coordinator_document: str,
        source: FileSystemSourceConfig,
        reporter: GitHubIssueReporterConfig,
        listener: BuildListener,
    ) -> Resolution[AnalysisConfig]:
        analyzer_future = AnalyzerConfigLoad.load(analyzer_document, self._executor)
        coordinator_future = CoordinatorConfigLoad.load(coordinator_document, self._executor)
        join(analyzer_future, coordinator_future)

        analyzer = self._outcome("Analyzer", analyzer_future, listener)
        if isinstance(analyzer, Absent):
            return analyzer
        coordinator = self._outcome("Coordinator", coordinator_future, listener)
        if isinstance(coordinator, Absent):
            return coordinator

        try:
            config = AnalysisConfig(
                analyzer=analyzer.value,
                coordinator=coordinator.value,
                source=source,
                reporter=reporter,
            )
        except Exception as exc:
            raise UnknownExecutionError(f"Unable to compose analysis config: {exc}") from exc
        _LOGGER.debug("Composed analysis config: %s", config)
        return Present(config)

    def _outcome(
        self,
        section: str,
        future: Future[Resolution[Any]],
        listener: BuildListener,
    ) -> Resolution[Any]:
        try:
            resolution = future.result()
        except ConfigNotImplementedError as exc:
            listener.println(f"{section} config is not implemented.")
            return Absent(str(exc))
        except Exception as exc:
            raise UnknownExecutionError(f"Unknown error while loading {section.lower()} config, {exc}") from exc

        if isinstance(resolution, Absent):
            listener.println(f"Failed to load {section.lower()} config.")
            _LOGGER.info("%s", resolution.reason)
        return resolution
