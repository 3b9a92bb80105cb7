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
"""Paginated search results."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class PaginationInfo:
    """Pagination metadata for a result page.

    Attributes:
        page: Current page number (1-based).
        size: Maximum items per page.
        total: Total number of items across all pages.
    """

    page: int
    size: int
    total: int

    @property
    def total_pages(self) -> int:
        """Total number of pages."""
        if self.total == 0:
            return 0
        return math.ceil(self.total / self.size)

    @property
    def has_next(self) -> bool:
        """Whether there is a next page."""
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        """Whether there is a previous page."""
        return self.page > 1


@dataclass(frozen=True)
class PaginatedData(Generic[T]):
    """A page of search results."""

    data: list[T]
    pagination: PaginationInfo

    def map(self, func: Callable[[T], U]) -> PaginatedData[U]:
        """Transform items using a mapping function, preserving pagination metadata."""
        return PaginatedData(data=[func(item) for item in self.data], pagination=self.pagination)
