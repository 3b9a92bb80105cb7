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
"""Port for the search backend called by generated endpoints."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

from filterql.api.page import PaginatedData
from filterql.api.request import FilterRequest

R = TypeVar("R")


@runtime_checkable
class SearchService(Protocol):
    """Executes a filter request against the entity behind *ref_type*."""

    def search(self, ref_type: type[R], request: FilterRequest[R]) -> PaginatedData[Any]: ...
