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
"""Person projection exposed through pipes and the default search service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Annotated, ClassVar

from filterql.api import MethodRef, Op, Provider, exposed_as, exposure, not_filterable, projection
from filterql_samples.address_dto import AddressDTO
from filterql_samples.entities import Person
from filterql_samples.handlers import AdminRightResolver
from filterql_samples.providers import NameFields, UserTenancyResolvers

PIPES = "filterql_samples.pipes.UserPipes"


@exposure(
    "users",
    base_path="/api/v1",
    pipes=[
        MethodRef("tenant_isolation", PIPES),
        MethodRef("soft_delete", PIPES),
        MethodRef("active_users_only", PIPES),
    ],
)
@projection(
    from_=Person,
    providers=[
        Provider(AdminRightResolver),
        Provider(UserTenancyResolvers, name="userTenancyResolvers"),
        Provider(NameFields),
    ],
)
@dataclass
class PersonDTO:
    SCHEMA_VERSION: ClassVar[int] = 1

    id: int
    username: Annotated[str, exposed_as("USERNAME", operators=[Op.EQ, Op.MATCHES, Op.NE, Op.IN])]
    email: Annotated[str | None, exposed_as("EMAIL", operators=[Op.EQ, Op.MATCHES, Op.NE])]
    first_name: Annotated[str | None, exposed_as("FIRST_NAME", operators=[Op.EQ, Op.MATCHES, Op.IN])]
    last_name: Annotated[str | None, exposed_as("LAST_NAME", operators=[Op.EQ, Op.MATCHES, Op.IN, Op.IS_NULL])]
    age: int | None
    active: bool
    registered_at: datetime
    birth_date: Annotated[date | None, exposed_as(operators=[Op.EQ, Op.GT, Op.LT, Op.RANGE])]
    address: AddressDTO | None = None
    password_hash: Annotated[str, not_filterable] = ""
    _etag: str = ""
