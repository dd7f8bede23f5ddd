"""The CI build step: validate, compose, dispatch, never fail the build."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from pydantic import BaseModel, ConfigDict, SecretStr, ValidationError

from .composer import AsyncComposer
from .dispatcher import Dispatcher, DispatchMode
from .errors import NumericFormatError, UnknownExecutionError
from .listener import BuildListener
from .loaders import parse_issue_number
from .models import FileSystemSourceConfig, GitHubIssueReporterConfig
from .resolution import Present
from .validation import Validator

_LOGGER = logging.getLogger(__name__)


class StepInputs(BaseModel):
    """Raw values configured on the build step."""

    model_config = ConfigDict(frozen=True)

    github_base_url: str
    github_owner: str
    github_repo: str
    github_issue_number: str
    github_token: SecretStr
    analyzer_config: str
    coordinator_config: str
    run_on_background: bool = False
    source_include: str | None = None


@contextmanager
def error_sink(listener: BuildListener) -> Iterator[None]:
    """Turn any failure inside the block into a single build log line."""

    try:
        yield
    except Exception as exc:
        message = " ".join(str(exc).split()) or type(exc).__name__
        _LOGGER.debug("Analysis step failed", exc_info=True)
        try:
            listener.println(f"Failed to analyze, {message}")
        except Exception:
            _LOGGER.exception("Unable to report failure to the build listener")


class AnalyzerCIStep:
    def __init__(
        self,
        inputs: StepInputs,
        *,
        validator: Validator,
        composer: AsyncComposer,
        dispatcher: Dispatcher,
        enforce_validation: bool = False,
    ) -> None:
        self.inputs = inputs
        self._validator = validator
        self._composer = composer
        self._dispatcher = dispatcher
        self._enforce_validation = enforce_validation

    def perform(self, workspace: Path, listener: BuildListener) -> None:
        """Run one analysis for ``workspace``. Never raises."""

        with error_sink(listener):
            self._perform(Path(workspace), listener)

    def _perform(self, workspace: Path, listener: BuildListener) -> None:
        inputs = self.inputs
        listener.println("An analysis has been fired.")

        failure = self._validator.first_failure(
            inputs.github_issue_number,
            inputs.analyzer_config,
            inputs.coordinator_config,
        )
        if failure is not None:
            listener.println(failure.log_line)
            if self._enforce_validation:
                _LOGGER.info("Validation of %s failed; analysis skipped", failure.field)
                return

        source = FileSystemSourceConfig(root=workspace.absolute(), include=inputs.source_include)
        reporter = self._build_reporter()

        resolution = self._composer.compose(
            inputs.analyzer_config,
            inputs.coordinator_config,
            source,
            reporter,
            listener,
        )
        if not isinstance(resolution, Present):
            return

        config = resolution.value
        listener.println(f"Start to analyze target program.\n{config}\n")
        mode = DispatchMode.from_flag(inputs.run_on_background)
        self._dispatcher.dispatch(config, mode)
        if mode is DispatchMode.BACKGROUND:
            listener.println("Analysis is running in the background.")
        else:
            listener.println("Analysis completed.")

    def _build_reporter(self) -> GitHubIssueReporterConfig:
        inputs = self.inputs
        issue_number = parse_issue_number(inputs.github_issue_number)
        try:
            return GitHubIssueReporterConfig(
                base_url=inputs.github_base_url,
                owner=inputs.github_owner,
                repo=inputs.github_repo,
                issue_number=issue_number,
                token=inputs.github_token,
            )
        except ValidationError as exc:
            if any(error["loc"] == ("issue_number",) for error in exc.errors()):
                raise NumericFormatError(f"Issue number must be positive, got {issue_number}") from exc
            raise UnknownExecutionError(f"Invalid GitHub reporter settings: {exc}") from exc
