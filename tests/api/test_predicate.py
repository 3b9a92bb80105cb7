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
"""Tests for PredicateResolver composition over SQLAlchemy selects."""

from sqlalchemy import select

from filterql.api import PredicateResolver, PredicateResolverMapping
from filterql_samples.entities import Person


def _where(resolver: PredicateResolver[Person]) -> str:
    return str(resolver.resolve(Person, select(Person)).whereclause)


is_admin = PredicateResolver(lambda root, q: q.where(root.username == "admin"))
is_adult = PredicateResolver(lambda root, q: q.where(root.age >= 18))


class TestPredicateResolver:
    def test_resolve_applies_predicate(self):
        assert _where(is_admin) == "persons.username = :username_1"

    def test_and_chains_both(self):
        clause = _where(is_admin & is_adult)
        assert "persons.username = :username_1" in clause
        assert "AND" in clause
        assert "persons.age >= :age_1" in clause

    def test_or_combines_clauses(self):
        clause = _where(is_admin | is_adult)
        assert " OR " in clause

    def test_or_with_noop_keeps_other_side(self):
        assert _where(is_admin | PredicateResolver.noop()) == "persons.username = :username_1"

    def test_invert_negates(self):
        assert _where(~is_admin) == "persons.username != :username_1"

    def test_invert_noop_leaves_query(self):
        query = select(Person)
        assert (~PredicateResolver.noop()).resolve(Person, query) is query

    def test_noop_leaves_query(self):
        query = select(Person)
        assert PredicateResolver.noop().resolve(Person, query) is query


class TestPredicateResolverMapping:
    def test_passes_operator_and_argument_list(self):
        seen = []

        def factory(op, args):
            seen.append((op, args))
            return is_admin

        mapping = PredicateResolverMapping(factory)
        assert mapping.resolve("EQ", (True,)) is is_admin
        assert seen == [("EQ", [True])]

    def test_callable(self):
        mapping = PredicateResolverMapping(lambda op, args: is_adult)
        assert mapping("GT", []) is is_adult
