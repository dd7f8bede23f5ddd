"""Shared pytest fixtures for analyzer_ci tests."""

from __future__ import annotations

import json
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Generator

import pytest

from analyzer_ci.composer import AsyncComposer
from analyzer_ci.concurrency import shutdown_pool
from analyzer_ci.dispatcher import Dispatcher
from analyzer_ci.models import AnalysisConfig
from analyzer_ci.step import AnalyzerCIStep, StepInputs
from analyzer_ci.validation import Validator


# ============================================================================
# Test Doubles
# ============================================================================

class RecordingListener:
    """Build listener that keeps every line in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self._lock = threading.Lock()

    def println(self, message: str) -> None:
        with self._lock:
            self.lines.append(message)

    def matching(self, prefix: str) -> list[str]:
        return [line for line in self.lines if line.startswith(prefix)]


class RecordingAnalysis:
    """Analysis double that records configs and optionally blocks or fails."""

    def __init__(
        self,
        delay: float = 0.0,
        release: threading.Event | None = None,
        error: Exception | None = None,
    ) -> None:
        self.delay = delay
        self.release = release
        self.error = error
        self.configs: list[AnalysisConfig] = []
        self.completed = threading.Event()

    def run(self, config: AnalysisConfig) -> None:
        if self.release is not None:
            self.release.wait(timeout=5)
        if self.delay:
            time.sleep(self.delay)
        self.configs.append(config)
        if self.error is not None:
            raise self.error
        self.completed.set()


# ============================================================================
# Document Fixtures
# ============================================================================

@pytest.fixture
def analyzer_document() -> str:
    return json.dumps({"type": "pylint", "args": ["--disable=C"], "timeout_seconds": 600})


@pytest.fixture
def coordinator_document() -> str:
    return json.dumps({"type": "parallel", "passes": 2, "max_parallel": 2})


@pytest.fixture
def step_inputs(analyzer_document: str, coordinator_document: str) -> StepInputs:
    return StepInputs(
        github_base_url="https://api.github.com",
        github_owner="octo",
        github_repo="app",
        github_issue_number="42",
        github_token="ghp_secret",
        analyzer_config=analyzer_document,
        coordinator_config=coordinator_document,
        run_on_background=False,
    )


# ============================================================================
# Runtime Fixtures
# ============================================================================

@pytest.fixture
def executor() -> Generator[ThreadPoolExecutor, None, None]:
    """Return a private worker pool for one test."""
    pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="test-analyzer-ci")
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def shared_pool_reset() -> Generator[None, None, None]:
    """Make sure the process-wide pool starts and ends uninitialized."""
    shutdown_pool()
    yield
    shutdown_pool()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "workspace"
    root.mkdir()
    (root / "module.py").write_text("print('hello')\n")
    return root


@pytest.fixture
def make_step(
    executor: ThreadPoolExecutor,
    step_inputs: StepInputs,
) -> Callable[..., AnalyzerCIStep]:
    """Build a step wired to the test pool, overriding inputs as needed."""

    def _make(
        analysis: Any | None = None,
        *,
        dispatcher: Any | None = None,
        validator: Any | None = None,
        composer: Any | None = None,
        enforce_validation: bool = False,
        **overrides: Any,
    ) -> AnalyzerCIStep:
        inputs = step_inputs.model_copy(update=overrides) if overrides else step_inputs
        if dispatcher is None:
            dispatcher = Dispatcher(analysis or RecordingAnalysis(), executor)
        return AnalyzerCIStep(
            inputs,
            validator=validator or Validator(executor),
            composer=composer or AsyncComposer(executor),
            dispatcher=dispatcher,
            enforce_validation=enforce_validation,
        )

    return _make
