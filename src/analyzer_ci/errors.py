"""Exception types raised across the analysis pipeline."""

from __future__ import annotations


class AnalyzerCIError(Exception):
    """Base exception for all analyzer CI errors."""


class ConfigNotImplementedError(AnalyzerCIError):
    """Raised when a config document names a recognized but unsupported kind."""

    def __init__(self, section: str, kind: str) -> None:
        super().__init__(f"{section} type '{kind}' is not implemented")
        self.section = section
        self.kind = kind


class NumericFormatError(AnalyzerCIError, ValueError):
    """Raised when the GitHub issue number is not an integer."""


class UnknownExecutionError(AnalyzerCIError):
    """Raised for unexpected failures while loading, composing or dispatching."""
