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
"""Import bookkeeping for generated modules."""

from __future__ import annotations

import builtins
import importlib
import types
from typing import Annotated, Any, Union, get_args, get_origin

from filterql.kernel.exceptions import UnresolvableTypeError
from filterql.kernel.loading import load_class


def split_qualified_name(name: str) -> tuple[str, str]:
    """Split ``"app.models.Outer.Inner"`` into module and qualified class name.

    The class is imported to find where its module ends; names that cannot
    be imported are split at the last dot.
    """
    try:
        cls = load_class(name)
    except UnresolvableTypeError:
        module, _, qualname = name.rpartition(".")
        return module, qualname
    return cls.__module__, cls.__qualname__


class ImportTracker:
    """Collects ``from module import Name`` lines for a generated module.

    Each imported name is bound once; a second class with the same simple
    name from another module gets an ``Name_2`` style alias. Names imported
    by the template itself are reserved up front so they are never reused.
    """

    def __init__(self) -> None:
        self._bindings: dict[tuple[str, str], str] = {}
        self._taken: dict[str, tuple[str, str]] = {}
        self._reserved: set[tuple[str, str]] = set()

    def reserve(self, module: str, *names: str) -> None:
        """Record names the template imports from *module* on its own."""
        for name in names:
            key = (module, name)
            self._bindings[key] = name
            self._taken[name] = key
            self._reserved.add(key)

    def copy(self) -> ImportTracker:
        """Independent tracker with the same bindings, for tentative additions."""
        clone = ImportTracker()
        clone._bindings = dict(self._bindings)
        clone._taken = dict(self._taken)
        clone._reserved = set(self._reserved)
        return clone

    def add(self, module: str, name: str) -> str:
        """Import top-level *name* from *module*; return the local name to use."""
        key = (module, name)
        local = self._bindings.get(key)
        if local is not None:
            return local
        local = name
        index = 2
        while local in self._taken:
            local = f"{name}_{index}"
            index += 1
        self._bindings[key] = local
        self._taken[local] = key
        return local

    def add_qualified(self, qualified_name: str) -> str:
        """Import the class named ``module.QualName``; return its local reference."""
        module, qualname = split_qualified_name(qualified_name)
        return self.add_class_path(module, qualname)

    def add_class(self, cls: type) -> str:
        return self.add_class_path(cls.__module__, cls.__qualname__)

    def add_class_path(self, module: str, qualname: str) -> str:
        head, _, rest = qualname.partition(".")
        local = self._reserved_alias(module, head) or self.add(module, head)
        return f"{local}.{rest}" if rest else local

    def _reserved_alias(self, module: str, name: str) -> str | None:
        """Name of a reserved import bound to the same object as ``module.name``."""
        for reserved_module, reserved_name in self._reserved:
            if reserved_name != name or reserved_module == module:
                continue
            try:
                same = getattr(importlib.import_module(reserved_module), name, None) is getattr(
                    importlib.import_module(module), name, object()
                )
            except ImportError:
                continue
            if same:
                return name
        return None

    def annotation(self, hint: Any) -> str:
        """Render a type hint as source text, importing what it references."""
        if hint is Any:
            return self.add("typing", "Any")
        if hint is None or hint is type(None):
            return "None"
        origin = get_origin(hint)
        if origin is Annotated:
            return self.annotation(get_args(hint)[0])
        if origin is Union or origin is types.UnionType:
            return " | ".join(self.annotation(arg) for arg in get_args(hint))
        if origin is not None:
            args = ", ".join(self.annotation(arg) for arg in get_args(hint))
            return f"{self.annotation(origin)}[{args}]"
        if isinstance(hint, type):
            if hint.__module__ == "builtins" and getattr(builtins, hint.__name__, None) is hint:
                return hint.__name__
            return self.add_class(hint)
        return self.add("typing", "Any")

    def render(self) -> str:
        """``from`` lines for every non-reserved import, sorted by module."""
        by_module: dict[str, list[str]] = {}
        for (module, name), local in self._bindings.items():
            if (module, name) in self._reserved:
                continue
            entry = name if local == name else f"{name} as {local}"
            by_module.setdefault(module, []).append(entry)
        return "\n".join(
            f"from {module} import {', '.join(sorted(by_module[module]))}" for module in sorted(by_module)
        )
