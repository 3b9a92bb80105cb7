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
"""Resolve dotted class names to classes."""

from __future__ import annotations

import importlib
from typing import Any

from filterql.kernel.exceptions import UnresolvableTypeError


def qualified_name(obj: Any) -> str:
    """Return ``module.QualName`` for a class or function."""
    return f"{obj.__module__}.{obj.__qualname__}"


def load_class(name: str) -> type:
    """Import the class named by a dotted path such as ``"app.models.Person"``.

    Nested classes are supported (``"app.models.Outer.Inner"``): the longest
    importable module prefix is imported and the remainder is walked as
    attributes.

    Raises:
        UnresolvableTypeError: If no module prefix imports or the attribute
            path does not end in a class.
    """
    parts = name.split(".")
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj: Any = importlib.import_module(module_name)
        except ImportError:
            continue
        try:
            for attr in parts[split:]:
                obj = getattr(obj, attr)
        except AttributeError:
            raise UnresolvableTypeError(name, f"no attribute {attr!r} in {module_name}") from None
        if not isinstance(obj, type):
            raise UnresolvableTypeError(name, "not a class")
        return obj
    raise UnresolvableTypeError(name)


def as_class(ref: type | str) -> type:
    """Return *ref* if it is already a class, else :func:`load_class` it."""
    if isinstance(ref, type):
        return ref
    return load_class(ref)
