"""Typed configuration objects composed into an analysis request.

This module defines frozen Pydantic v2 models for:
- Analyzer and coordinator configurations loaded from JSON documents
- The filesystem source location of the code under analysis
- The GitHub issue that receives analysis results
- The aggregate ``AnalysisConfig`` handed to the analysis capability
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class AnalyzerKind(str, Enum):
    """Supported analyzer engines."""

    PYLINT = "pylint"
    FLAKE8 = "flake8"
    MYPY = "mypy"
    ESLINT = "eslint"
    CHECKSTYLE = "checkstyle"
    CPPCHECK = "cppcheck"


class CoordinatorKind(str, Enum):
    """How multiple analyzer passes are driven."""

    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"


# Recognized kinds that no engine backs yet.
UNIMPLEMENTED_ANALYZERS = frozenset({"sonarqube", "spotbugs", "infer"})
UNIMPLEMENTED_COORDINATORS = frozenset({"distributed"})


class AnalyzerConfig(BaseModel):
    """Describes which code inspection engine to run and how."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: AnalyzerKind
    name: str | None = None
    args: tuple[str, ...] = ()
    report_format: str = "json"
    timeout_seconds: int | None = Field(default=None, gt=0)

    @property
    def display_name(self) -> str:
        return self.name or self.type.value


class CoordinatorConfig(BaseModel):
    """Describes how analyzer passes are orchestrated together."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: CoordinatorKind
    passes: int = Field(default=1, ge=1)
    max_parallel: int | None = Field(default=None, ge=1)
    fail_fast: bool = False


class FileSystemSourceConfig(BaseModel):
    """Root of the source tree to analyze."""

    model_config = ConfigDict(frozen=True)

    root: Path
    include: str | None = None


class GitHubIssueReporterConfig(BaseModel):
    """GitHub issue that receives analysis results."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    owner: str
    repo: str
    issue_number: int
    token: SecretStr

    @field_validator("issue_number")
    @classmethod
    def issue_number_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"issue number must be positive, got {v}")
        return v


class AnalysisConfig(BaseModel):
    """Everything the analysis capability needs for one run."""

    model_config = ConfigDict(frozen=True)

    analyzer: AnalyzerConfig
    coordinator: CoordinatorConfig
    source: FileSystemSourceConfig
    reporter: GitHubIssueReporterConfig

    def __str__(self) -> str:
        return (
            f"analyzer={self.analyzer.display_name} "
            f"coordinator={self.coordinator.type.value} (passes={self.coordinator.passes}) "
            f"source={self.source.root} "
            f"reporter={self.reporter.base_url}/{self.reporter.owner}/{self.reporter.repo}"
            f"#{self.reporter.issue_number}"
        )
