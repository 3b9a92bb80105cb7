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
"""Request pipes applied before the person search."""

from __future__ import annotations

from filterql.api import FilterDefinition, FilterRequest, Op
from filterql_samples.person_dto_ref import PersonDTORef


class BasePipes:
    @staticmethod
    def tenant_isolation(req: FilterRequest[PersonDTORef]) -> FilterRequest[PersonDTORef]:
        return req.with_filter("tenant", FilterDefinition(PersonDTORef.HAS_ORG, Op.EQ, True))

    @staticmethod
    def soft_delete(req: FilterRequest[PersonDTORef]) -> FilterRequest[PersonDTORef]:
        return req


class UserPipes(BasePipes):
    def active_users_only(self, req: FilterRequest[PersonDTORef]) -> FilterRequest[PersonDTORef]:
        return req.with_filter("active", FilterDefinition(PersonDTORef.ACTIVE, Op.EQ, True))

    def count_filters(self, req: FilterRequest[PersonDTORef]) -> int:
        return len(req.filters)
