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
"""Tests for reflection-based symbol queries."""

from __future__ import annotations

from typing import Any, Optional

import pytest

from filterql.api import ExposedAs, FilterRequest, NotFilterable, Op, PredicateResolver
from filterql.kernel.exceptions import UnresolvableTypeError
from filterql.processor.symbols import EMPTY, MemberKind, Parameter, ReflectionSymbolQuery, type_text
from filterql_samples.entities import Address, Person
from filterql_samples.person_dto import PersonDTO
from filterql_samples.person_dto_ref import PersonDTORef
from filterql_samples.pipes import BasePipes, UserPipes
from filterql_samples.providers import GeometryFields, NameFields, UserTenancyResolvers


class Unresolvable:
    def broken(self, op: str, args: list[Any]) -> NotDefinedAnywhere:  # noqa: F821
        raise NotImplementedError


@pytest.fixture
def symbols():
    return ReflectionSymbolQuery()


class TestMembersOf:
    def test_fields_in_declaration_order(self, symbols):
        names = [m.name for m in symbols.members_of(PersonDTO)]
        assert names == [
            "SCHEMA_VERSION",
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "age",
            "active",
            "registered_at",
            "birth_date",
            "address",
            "password_hash",
            "_etag",
        ]

    def test_field_details(self, symbols):
        members = {m.name: m for m in symbols.members_of(PersonDTO)}
        assert members["SCHEMA_VERSION"].is_static
        assert members["_etag"].is_private
        assert members["username"].kind is MemberKind.FIELD
        assert members["username"].declared_type is str
        assert symbols.tag_on(members["username"], ExposedAs).operators == (Op.EQ, Op.MATCHES, Op.NE, Op.IN)
        assert symbols.tag_on(members["password_hash"], NotFilterable) is not None
        assert symbols.tag_on(members["id"], ExposedAs) is None

    def test_instance_method(self, symbols):
        members = {m.name: m for m in symbols.members_of(UserTenancyResolvers)}
        assert set(members) == {"is_within_current_org", "not_exposed"}
        method = members["is_within_current_org"]
        assert method.kind is MemberKind.METHOD
        assert not method.is_static
        assert method.parameters == (Parameter("op", str), Parameter("args", list[Any]))
        assert method.declared_type == PredicateResolver[Person]
        assert method.tags == (ExposedAs("HAS_ORG", (Op.EQ,)),)

    def test_static_method(self, symbols):
        (method,) = symbols.members_of(GeometryFields)
        assert method.is_static
        assert method.declared_type == PredicateResolver[Address]
        assert [p.name for p in method.parameters] == ["op", "args"]

    def test_class_method_drops_cls(self, symbols):
        (method,) = symbols.members_of(NameFields)
        assert method.is_static
        assert [p.name for p in method.parameters] == ["op", "args"]
        assert method.tags == (ExposedAs("FULL_NAME", (Op.MATCHES,)),)

    def test_unresolvable_annotation_is_recorded(self, symbols):
        (method,) = symbols.members_of(Unresolvable)
        assert method.resolution_error is not None
        assert "NotDefinedAnywhere" in method.resolution_error
        assert method.declared_type is EMPTY

    def test_qualified_name(self, symbols):
        (method,) = symbols.members_of(GeometryFields)
        assert method.qualified_name == "filterql_samples.providers.GeometryFields.address_in_geometry_area"


class TestFindMethod:
    def test_inherited_method(self, symbols):
        member = symbols.find_method(UserPipes, "tenant_isolation")
        assert member.owner is BasePipes
        assert member.is_static
        assert member.declared_type == FilterRequest[PersonDTORef]

    def test_own_method(self, symbols):
        member = symbols.find_method(UserPipes, "active_users_only")
        assert member.owner is UserPipes
        assert not member.is_static

    def test_missing_method(self, symbols):
        assert symbols.find_method(UserPipes, "missing") is None


class TestResolveType:
    def test_dotted_name(self, symbols):
        assert symbols.resolve_type("filterql_samples.pipes.UserPipes") is UserPipes

    def test_unknown(self, symbols):
        with pytest.raises(UnresolvableTypeError):
            symbols.resolve_type("filterql_samples.pipes.Missing")


class TestIsSameGeneric:
    @pytest.mark.parametrize(
        ("actual", "expected"),
        [
            (PredicateResolver[Person], PredicateResolver[Person]),
            (list[Any], list[Any]),
            (str, str),
            (str | None, Optional[str]),
            (dict[str, Any], dict[str, Any]),
            (FilterRequest[PersonDTORef], FilterRequest[PersonDTORef]),
        ],
    )
    def test_same(self, symbols, actual, expected):
        assert symbols.is_same_generic(actual, expected)

    @pytest.mark.parametrize(
        ("actual", "expected"),
        [
            (PredicateResolver[Address], PredicateResolver[Person]),
            (PredicateResolver, PredicateResolver[Person]),
            (list[str], list[Any]),
            (list, list[Any]),
            (EMPTY, PredicateResolver[Person]),
            (dict[str, Any], dict[str, int]),
        ],
    )
    def test_different(self, symbols, actual, expected):
        assert not symbols.is_same_generic(actual, expected)


class TestTypeText:
    def test_generic(self):
        assert type_text(PredicateResolver[Person]) == "PredicateResolver[Person]"
        assert type_text(list[Any]) == "list[Any]"

    def test_union(self):
        assert type_text(str | None) == "str | None"
