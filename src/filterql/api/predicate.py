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
"""Composable query predicates returned by computed properties.

A :class:`PredicateResolver` wraps a callable that receives the entity class
(``root``) and a SQLAlchemy ``Select`` and returns the ``Select`` with the
property's WHERE clause applied. Resolvers compose with ``&`` (AND), ``|``
(OR) and ``~`` (NOT)::

    def full_name_matches(op: str, args: list[Any]) -> PredicateResolver[Person]:
        pattern = f"%{args[0]}%"
        return PredicateResolver(
            lambda root, q: q.where(or_(root.first_name.like(pattern), root.last_name.like(pattern)))
        )
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, not_, or_

E = TypeVar("E")


class PredicateResolver(Generic[E]):
    """Deferred predicate over entity ``E``."""

    __slots__ = ("_predicate",)

    def __init__(self, predicate: Callable[[type[E], Select[Any]], Select[Any]]) -> None:
        self._predicate = predicate

    def resolve(self, root: type[E], query: Select[Any]) -> Select[Any]:
        """Apply this predicate to *query*."""
        return self._predicate(root, query)

    def __and__(self, other: PredicateResolver[E]) -> PredicateResolver[E]:
        left, right = self._predicate, other._predicate
        return PredicateResolver(lambda root, q: right(root, left(root, q)))

    def __or__(self, other: PredicateResolver[E]) -> PredicateResolver[E]:
        left_pred, right_pred = self._predicate, other._predicate

        def or_predicate(root: type[E], query: Select[Any]) -> Select[Any]:
            left_clause = left_pred(root, query).whereclause
            right_clause = right_pred(root, query).whereclause
            if left_clause is not None and right_clause is not None:
                return query.where(or_(left_clause, right_clause))
            if left_clause is not None:
                return query.where(left_clause)
            if right_clause is not None:
                return query.where(right_clause)
            return query

        return PredicateResolver(or_predicate)

    def __invert__(self) -> PredicateResolver[E]:
        pred = self._predicate

        def not_predicate(root: type[E], query: Select[Any]) -> Select[Any]:
            clause = pred(root, query).whereclause
            if clause is not None:
                return query.where(not_(clause))
            return query

        return PredicateResolver(not_predicate)

    @staticmethod
    def noop() -> PredicateResolver[Any]:
        """A predicate that leaves the query untouched."""
        return PredicateResolver(lambda root, q: q)


class PredicateResolverMapping(Generic[E]):
    """Binds a computed property to the routine producing its predicate.

    Generated filter contexts return one of these for every computed
    property; calling it with the request's operator and arguments yields
    the :class:`PredicateResolver` to apply.
    """

    __slots__ = ("_factory",)

    def __init__(self, factory: Callable[[str, list[Any]], PredicateResolver[E]]) -> None:
        self._factory = factory

    def resolve(self, op: str, args: Sequence[Any]) -> PredicateResolver[E]:
        return self._factory(op, list(args))

    __call__ = resolve
