"""Analysis capabilities the dispatcher can drive."""

from __future__ import annotations

import importlib
import logging
from typing import Any

from .dispatcher import Analysis
from .models import AnalysisConfig

_LOGGER = logging.getLogger(__name__)


class DryRunAnalysis:
    """Log the composed request without running any engine."""

    def __init__(self) -> None:
        self.runs: list[AnalysisConfig] = []

    def run(self, config: AnalysisConfig) -> None:
        _LOGGER.info("Dry run analysis:\n%s", config.model_dump_json(indent=2))
        self.runs.append(config)


class AnalysisLoadError(ImportError):
    """Raised when an analysis entry point cannot be resolved."""


def load_analysis(target: str | None) -> Analysis:
    """Resolve ``package.module:attribute`` into an analysis capability.

    Classes are instantiated without arguments; any other object is used
    as-is. ``None`` selects :class:`DryRunAnalysis`.
    """

    if not target:
        return DryRunAnalysis()

    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise AnalysisLoadError(f"Expected 'module:attribute', got {target!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise AnalysisLoadError(f"Unable to import {module_name}: {exc}") from exc

    obj: Any = module
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise AnalysisLoadError(f"{module_name} has no attribute {attribute}") from exc

    if isinstance(obj, type):
        obj = obj()
    if not callable(getattr(obj, "run", None)):
        raise AnalysisLoadError(f"{target} does not provide a run(config) method")
    return obj
