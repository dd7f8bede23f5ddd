"""Configuration loading and modelling."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "config" / "default_config.toml"
USER_CONFIG_PATH = Path("~/.config/analyzer-ci/config.toml").expanduser()


class ExecutorSettings(BaseModel):
    max_workers: int = Field(default=4, ge=1)


class DispatchSettings(BaseModel):
    run_on_background: bool = False
    # None waits for as long as the analysis takes.
    foreground_timeout: float | None = Field(default=None, gt=0)
    analysis: str | None = None


class ValidationSettings(BaseModel):
    enforce: bool = False


class GitHubSettings(BaseModel):
    base_url: str = "https://api.github.com"
    token_env: str = "GITHUB_TOKEN"


class OutputSettings(BaseModel):
    verbosity: str = "normal"


class AppConfig(BaseModel):
    executor: ExecutorSettings = Field(default_factory=ExecutorSettings)
    dispatch: DispatchSettings = Field(default_factory=DispatchSettings)
    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    raw: dict[str, Any] = Field(default_factory=dict)

    @property
    def verbosity(self) -> str:
        return self.output.verbosity


def _load_toml(path: Path) -> dict[str, Any]:
    import tomllib

    with path.open("rb") as fh:
        return tomllib.load(fh)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from defaults, optional user overrides and the environment."""

    load_dotenv()

    data: dict[str, Any] = {}
    if DEFAULT_CONFIG_PATH.exists():
        data = _merge(data, _load_toml(DEFAULT_CONFIG_PATH))

    resolved_path = config_path
    if resolved_path is None and USER_CONFIG_PATH.exists():
        resolved_path = USER_CONFIG_PATH

    if resolved_path and resolved_path.exists():
        data = _merge(data, _load_toml(resolved_path))

    env_workers = os.getenv("ANALYZER_CI_MAX_WORKERS")
    if env_workers:
        data = _merge(data, {"executor": {"max_workers": env_workers}})

    env_verbosity = os.getenv("ANALYZER_CI_VERBOSITY")
    if env_verbosity:
        data = _merge(data, {"output": {"verbosity": env_verbosity}})

    config = AppConfig(raw=data)

    if "executor" in data:
        config.executor = ExecutorSettings.model_validate(data["executor"])
    if "dispatch" in data:
        config.dispatch = DispatchSettings.model_validate(data["dispatch"])
    if "validation" in data:
        config.validation = ValidationSettings.model_validate(data["validation"])
    if "github" in data:
        config.github = GitHubSettings.model_validate(data["github"])
    if "output" in data:
        config.output = OutputSettings.model_validate(data["output"])

    return config
