"""Load analyzer and coordinator configs from JSON documents.

Loading runs on an executor and yields a ``Resolution``: malformed JSON,
documents of the wrong shape and unknown kinds all resolve to ``Absent``.
Only a recognized but unsupported kind fails the future, with
``ConfigNotImplementedError``.
"""

from __future__ import annotations

import json
import logging
import re
from concurrent.futures import Executor, Future
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import ConfigNotImplementedError, NumericFormatError
from .models import (
    UNIMPLEMENTED_ANALYZERS,
    UNIMPLEMENTED_COORDINATORS,
    AnalyzerConfig,
    CoordinatorConfig,
)
from .resolution import Absent, Present, Resolution

_LOGGER = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

ModelT = TypeVar("ModelT", bound=BaseModel)


class _JsonConfigLoad(Generic[ModelT]):
    section: str
    model: type[ModelT]
    unimplemented: frozenset[str]

    @classmethod
    def load(cls, document: str, executor: Executor) -> Future[Resolution[ModelT]]:
        return executor.submit(cls.parse, document)

    @classmethod
    def parse(cls, document: str) -> Resolution[ModelT]:
        try:
            raw: Any = json.loads(document)
        except (TypeError, ValueError, RecursionError) as exc:
            _LOGGER.debug("%s config is not valid JSON: %s", cls.section, exc)
            return Absent(f"{cls.section} config is not valid JSON")

        if not isinstance(raw, dict):
            return Absent(f"{cls.section} config must be a JSON object")

        kind = raw.get("type")
        if isinstance(kind, str) and kind in cls.unimplemented:
            raise ConfigNotImplementedError(cls.section, kind)

        try:
            return Present(cls.model.model_validate(raw))
        except ValidationError as exc:
            _LOGGER.debug("%s config rejected: %s", cls.section, exc)
            return Absent(f"{cls.section} config does not match a supported shape")


class AnalyzerConfigLoad(_JsonConfigLoad[AnalyzerConfig]):
    section = "Analyzer"
    model = AnalyzerConfig
    unimplemented = UNIMPLEMENTED_ANALYZERS


class CoordinatorConfigLoad(_JsonConfigLoad[CoordinatorConfig]):
    section = "Coordinator"
    model = CoordinatorConfig
    unimplemented = UNIMPLEMENTED_COORDINATORS


def parse_issue_number(text: str) -> int:
    """Parse a GitHub issue number as a signed 32-bit integer."""

    if not isinstance(text, str) or not _INTEGER_RE.fullmatch(text):
        raise NumericFormatError(f"For input string: {text!r}")
    value = int(text)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise NumericFormatError(f"For input string: {text!r} (out of range)")
    return value
