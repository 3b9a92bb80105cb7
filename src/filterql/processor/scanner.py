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
"""Discovery of ``@projection`` classes in a package tree."""

from __future__ import annotations

import importlib
import pkgutil
import types

from filterql.api.projection import is_projection


def scan_projections(package_name: str) -> list[type]:
    """Import *package_name* and its submodules; return their projections.

    Modules are visited in sorted order and classes in definition order, so
    the result is stable across runs. Only classes defined in the visited
    module count; re-exports are ignored.
    """
    module = importlib.import_module(package_name)
    modules = [module]
    if hasattr(module, "__path__"):
        names = sorted(
            name for _finder, name, _ispkg in pkgutil.walk_packages(module.__path__, prefix=module.__name__ + ".")
        )
        modules.extend(importlib.import_module(name) for name in names)

    projections: list[type] = []
    for mod in modules:
        for cls in scan_module_projections(mod):
            if cls not in projections:
                projections.append(cls)
    return projections


def scan_module_projections(module: types.ModuleType) -> list[type]:
    """Projection classes defined in *module*, in definition order."""
    return [
        obj
        for obj in vars(module).values()
        if is_projection(obj) and obj.__module__ == module.__name__
    ]
