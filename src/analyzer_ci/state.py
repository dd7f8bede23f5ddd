"""Shared application state helpers for CLI entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .backends import load_analysis
from .composer import AsyncComposer
from .concurrency import init_pool
from .config import AppConfig, load_config
from .dispatcher import Analysis, Dispatcher
from .logging import configure_logging
from .step import AnalyzerCIStep, StepInputs
from .validation import Validator


@dataclass(slots=True)
class AppState:
    config: AppConfig
    validator: Validator
    composer: AsyncComposer
    dispatcher: Dispatcher

    def build_step(self, inputs: StepInputs) -> AnalyzerCIStep:
        return AnalyzerCIStep(
            inputs,
            validator=self.validator,
            composer=self.composer,
            dispatcher=self.dispatcher,
            enforce_validation=self.config.validation.enforce,
        )


def build_state(
    config_path: Optional[Path],
    *,
    analysis: Analysis | None = None,
    analysis_target: str | None = None,
) -> AppState:
    """Construct an application state bundle.

    Starts the shared worker pool, so this is meant to be called once per
    process. ``analysis`` overrides the capability named by
    ``analysis_target`` or the ``dispatch.analysis`` setting.
    """

    config = load_config(config_path)
    configure_logging(config.verbosity)  # type: ignore[arg-type]

    pool = init_pool(config.executor.max_workers)
    if analysis is None:
        analysis = load_analysis(analysis_target or config.dispatch.analysis)

    dispatcher = Dispatcher(analysis, pool, foreground_timeout=config.dispatch.foreground_timeout)
    return AppState(
        config=config,
        validator=Validator(pool),
        composer=AsyncComposer(pool),
        dispatcher=dispatcher,
    )
