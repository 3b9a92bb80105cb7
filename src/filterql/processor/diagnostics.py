# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Collected processing messages bound to the element that caused them."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from filterql.kernel.loading import qualified_name


class DiagnosticKind(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    NOTE = "NOTE"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    message: str
    element: str | None = None

    def __str__(self) -> str:
        where = f" [{self.element}]" if self.element else ""
        return f"{self.kind.value}: {self.message}{where}"


class Diagnostics:
    """Ordered collector of :class:`Diagnostic` entries.

    Every entry is mirrored to the ``filterql.processor`` structlog logger.
    Elements may be classes, symbol members or plain strings.
    """

    def __init__(self, logger: Any = None) -> None:
        self._entries: list[Diagnostic] = []
        self._logger = logger or structlog.get_logger("filterql.processor")

    def error(self, message: str, element: Any = None) -> None:
        self._add(DiagnosticKind.ERROR, message, element)

    def warning(self, message: str, element: Any = None) -> None:
        self._add(DiagnosticKind.WARNING, message, element)

    def note(self, message: str, element: Any = None) -> None:
        self._add(DiagnosticKind.NOTE, message, element)

    @property
    def entries(self) -> list[Diagnostic]:
        return list(self._entries)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self._entries if d.kind is DiagnosticKind.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._entries if d.kind is DiagnosticKind.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(d.kind is DiagnosticKind.ERROR for d in self._entries)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def _add(self, kind: DiagnosticKind, message: str, element: Any) -> None:
        diagnostic = Diagnostic(kind, message, _describe(element))
        self._entries.append(diagnostic)
        if kind is DiagnosticKind.ERROR:
            self._logger.error("processor_error", message=message, element=diagnostic.element)
        elif kind is DiagnosticKind.WARNING:
            self._logger.warning("processor_warning", message=message, element=diagnostic.element)
        else:
            self._logger.info("processor_note", message=message, element=diagnostic.element)


def _describe(element: Any) -> str | None:
    if element is None or isinstance(element, str):
        return element
    if isinstance(element, type):
        return qualified_name(element)
    described = getattr(element, "qualified_name", None)
    if isinstance(described, str):
        return described
    return repr(element)
