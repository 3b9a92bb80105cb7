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
"""Name conversions shared by the analyzer and the generators."""

from __future__ import annotations

import keyword
import re

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_SNAKE_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_KEBAB_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")

# Attributes of the generated reference enum that a constant must not shadow
RESERVED_REFERENCE_NAMES = frozenset({"name", "value", "value_type", "supported_operators", "entity_type"})


def upper_snake_case(name: str) -> str:
    """``firstName`` / ``first_name`` -> ``FIRST_NAME``."""
    return _CAMEL_BOUNDARY.sub(r"\1_\2", name).upper()


def snake_case(name: str) -> str:
    """``AddressDTO`` -> ``address_dto``; ``PersonDTO`` -> ``person_dto``."""
    return _SNAKE_BOUNDARY.sub("_", name).lower()


def kebab_case(name: str) -> str:
    """``PersonDTO`` -> ``person-dto``; ``myEntityName`` -> ``my-entity-name``.

    The first character is lowered before the boundary pass, so a leading
    capital never produces a leading dash.
    """
    if not name:
        return name
    camel = name[0].lower() + name[1:]
    return _KEBAB_BOUNDARY.sub(r"\1-\2", camel).lower()


def simple_name(qualified_name: str) -> str:
    """``app.models.Person`` -> ``Person``."""
    return qualified_name.rsplit(".", 1)[-1]


def parent_module(module_name: str) -> str:
    """``app.dto.person`` -> ``app.dto``; a top-level module has no parent."""
    return module_name.rpartition(".")[0]


def is_valid_reference_name(name: str) -> bool:
    """Whether *name* can be used as an enum member name in generated code."""
    return (
        name.isidentifier()
        and not keyword.iskeyword(name)
        and not name.startswith("_")
        and name not in RESERVED_REFERENCE_NAMES
    )


def reference_module_for(projection_module: str, projection_simple_name: str) -> str:
    """Module of the reference type generated for a projection.

    ``("app.dto.person", "PersonDTO")`` -> ``"app.dto.person_dto_ref"``.
    """
    package = parent_module(projection_module)
    name = f"{snake_case(projection_simple_name)}_ref"
    return f"{package}.{name}" if package else name
