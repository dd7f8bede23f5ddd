"""Tests for configuration models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from analyzer_ci.models import (
    AnalysisConfig,
    AnalyzerConfig,
    AnalyzerKind,
    CoordinatorConfig,
    CoordinatorKind,
    FileSystemSourceConfig,
    GitHubIssueReporterConfig,
)


def _reporter(**overrides) -> GitHubIssueReporterConfig:
    values = dict(
        base_url="https://api.github.com",
        owner="octo",
        repo="app",
        issue_number=42,
        token="ghp_secret",
    )
    values.update(overrides)
    return GitHubIssueReporterConfig(**values)


class TestAnalyzerConfig:
    """Tests for AnalyzerConfig."""

    def test_defaults(self):
        config = AnalyzerConfig(type=AnalyzerKind.FLAKE8)

        assert config.args == ()
        assert config.report_format == "json"
        assert config.timeout_seconds is None
        assert config.display_name == "flake8"

    def test_is_frozen(self):
        config = AnalyzerConfig(type=AnalyzerKind.PYLINT)

        with pytest.raises(ValidationError):
            config.name = "other"

    def test_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            AnalyzerConfig.model_validate({"type": "pylint", "colour": "blue"})

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            AnalyzerConfig(type=AnalyzerKind.PYLINT, timeout_seconds=0)


class TestCoordinatorConfig:
    """Tests for CoordinatorConfig."""

    def test_defaults(self):
        config = CoordinatorConfig(type=CoordinatorKind.SEQUENTIAL)

        assert config.passes == 1
        assert config.max_parallel is None
        assert config.fail_fast is False

    def test_rejects_zero_passes(self):
        with pytest.raises(ValidationError):
            CoordinatorConfig(type=CoordinatorKind.PARALLEL, passes=0)


class TestGitHubIssueReporterConfig:
    """Tests for GitHubIssueReporterConfig."""

    def test_token_is_hidden(self):
        reporter = _reporter()

        assert "ghp_secret" not in repr(reporter)
        assert reporter.token.get_secret_value() == "ghp_secret"

    @pytest.mark.parametrize("issue_number", [0, -1])
    def test_issue_number_must_be_positive(self, issue_number):
        with pytest.raises(ValidationError):
            _reporter(issue_number=issue_number)


class TestAnalysisConfig:
    """Tests for the AnalysisConfig aggregate."""

    def test_structural_equality(self, tmp_path: Path):
        def build() -> AnalysisConfig:
            return AnalysisConfig(
                analyzer=AnalyzerConfig(type=AnalyzerKind.PYLINT),
                coordinator=CoordinatorConfig(type=CoordinatorKind.SEQUENTIAL),
                source=FileSystemSourceConfig(root=tmp_path),
                reporter=_reporter(),
            )

        assert build() == build()

    def test_str_mentions_parts_without_token(self, tmp_path: Path):
        config = AnalysisConfig(
            analyzer=AnalyzerConfig(type=AnalyzerKind.ESLINT, name="frontend lint"),
            coordinator=CoordinatorConfig(type=CoordinatorKind.PARALLEL, passes=3),
            source=FileSystemSourceConfig(root=tmp_path),
            reporter=_reporter(),
        )
        text = str(config)

        assert "frontend lint" in text
        assert "passes=3" in text
        assert "octo/app#42" in text
        assert "ghp_secret" not in text
