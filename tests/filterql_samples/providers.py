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
"""Computed property providers."""

from __future__ import annotations

from typing import Any

from sqlalchemy import or_

from filterql.api import Op, PredicateResolver, exposed_as
from filterql.container import component
from filterql_samples.entities import Address, Person


class GeometryFields:
    @staticmethod
    @exposed_as("WITHIN_GEOMETRY", operators=[Op.MATCHES])
    def address_in_geometry_area(op: str, args: list[Any]) -> PredicateResolver[Address]:
        return PredicateResolver(lambda root, q: q.where(root.country.in_(args)))


@component
class UserTenancyResolvers:
    """Instance-bound resolvers; the current organization comes from the instance."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[Any]]] = []

    @exposed_as("HAS_ORG", operators=[Op.EQ])
    def is_within_current_org(self, op: str, args: list[Any]) -> PredicateResolver[Person]:
        self.calls.append((op, args))
        has_org = bool(args[0]) if args else False
        if has_org:
            return PredicateResolver(lambda root, q: q.where(root.email.is_not(None)))
        return PredicateResolver(lambda root, q: q.where(root.email.is_(None)))

    def not_exposed(self, op: str, args: list[Any]) -> PredicateResolver[Person]:
        return PredicateResolver.noop()


class NameFields:
    @classmethod
    @exposed_as("FULL_NAME", operators=[Op.MATCHES])
    def full_name_matches(cls, op: str, args: list[Any]) -> PredicateResolver[Person]:
        pattern = f"%{args[0]}%" if args else "%"
        return PredicateResolver(
            lambda root, q: q.where(or_(root.first_name.like(pattern), root.last_name.like(pattern)))
        )
