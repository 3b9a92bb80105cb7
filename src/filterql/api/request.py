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
"""Search request types received by generated endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from filterql.api.op import Op
from filterql.kernel.exceptions import UnsupportedOperatorError

R = TypeVar("R")


@dataclass(frozen=True)
class Pagination:
    """Requested page window.

    Attributes:
        page: 1-based page number.
        size: Maximum items per page.
        sort: Sort keys; a ``-`` prefix means descending.
    """

    page: int = 1
    size: int = 20
    sort: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.size < 1:
            raise ValueError(f"size must be >= 1, got {self.size}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


@dataclass(frozen=True)
class FilterDefinition(Generic[R]):
    """A single condition: *ref* *operator* *value*.

    The operator must be one the reference supports; references generated
    by filterql expose ``supported_operators()`` for this check.
    """

    ref: R
    operator: Op
    value: Any = None

    def __post_init__(self) -> None:
        supported = getattr(self.ref, "supported_operators", None)
        if supported is not None and self.operator not in supported():
            raise UnsupportedOperatorError(
                f"Operator {self.operator.value} is not supported by {self.ref!r}",
                code="UNSUPPORTED_OPERATOR",
                context={"ref": str(self.ref), "operator": self.operator.value},
            )


@dataclass(frozen=True)
class FilterRequest(Generic[R]):
    """A search request over the properties of reference type ``R``.

    Attributes:
        filters: Named conditions.
        combine_with: Boolean expression over the filter keys, such as
            ``"name & (city | zip)"``; empty means all filters ANDed.
        projection: Fields to include in projected results; empty means all.
        pagination: Page window, or ``None`` for the service default.
    """

    filters: Mapping[str, FilterDefinition[R]] = field(default_factory=dict)
    combine_with: str = ""
    projection: tuple[str, ...] = ()
    pagination: Pagination | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", MappingProxyType(dict(self.filters)))

    def with_filter(self, key: str, definition: FilterDefinition[R], *, combine: str = "&") -> FilterRequest[R]:
        """Return a copy with *definition* added under *key*.

        An existing ``combine_with`` expression is extended with ``combine``
        so the new condition applies on top of it.
        """
        filters = dict(self.filters)
        filters[key] = definition
        combine_with = self.combine_with
        if combine_with:
            combine_with = f"({combine_with}) {combine} {key}"
        return replace(self, filters=filters, combine_with=combine_with)

    def with_pagination(self, pagination: Pagination) -> FilterRequest[R]:
        return replace(self, pagination=pagination)
