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
"""Lookup of shared provider instances for instance-bound computed properties."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class InstanceResolver(Protocol):
    """Resolves the shared instance of a class, optionally by name."""

    def resolve(self, type_: type[T], name: str | None = None) -> T: ...


def invoke(
    resolver: InstanceResolver,
    type_: type,
    name: str | None,
    method: str,
    op: str,
    args: Sequence[Any],
) -> Any:
    """Call ``method(op, args)`` on the instance of *type_* held by *resolver*."""
    instance = resolver.resolve(type_, name)
    return getattr(instance, method)(op, list(args))
