"""analyzer_ci - Trigger code analysis runs from a CI build step."""

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

try:  # pragma: no cover - metadata probe
    __version__ = version("analyzer-ci")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0"
