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
"""Destinations for generated modules."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger("filterql.processor.writer")


class SourceWriter(Protocol):
    """Persists generated source under a dotted module name."""

    def write(self, module_name: str, source: str) -> str:
        """Store *source*; return where it went."""
        ...


class FileSourceWriter:
    """Writes ``a.b.c`` to ``<root>/a/b/c.py``.

    Package directories created on the way get an empty ``__init__.py`` so
    the generated module is importable.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def write(self, module_name: str, source: str) -> str:
        *packages, module = module_name.split(".")
        directory = self.root
        for package in packages:
            directory = directory / package
            if not directory.exists():
                directory.mkdir(parents=True)
                (directory / "__init__.py").write_text("", encoding="utf-8")
        path = directory / f"{module}.py"
        path.write_text(source, encoding="utf-8")
        logger.debug("source_written", module=module_name, path=str(path))
        return str(path)


class MemorySourceWriter:
    """Keeps generated sources in memory, in write order."""

    def __init__(self) -> None:
        self.sources: dict[str, str] = {}

    def write(self, module_name: str, source: str) -> str:
        self.sources[module_name] = source
        return module_name

    def __getitem__(self, module_name: str) -> str:
        return self.sources[module_name]

    def __contains__(self, module_name: object) -> bool:
        return module_name in self.sources
