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
"""Read-only view of the declared-type graph used by the analyzer.

:class:`SymbolQuery` is the only way the discovery code inspects classes, so
a host can supply members from somewhere other than live reflection. The
default :class:`ReflectionSymbolQuery` reads imported classes through
``inspect`` and ``typing``.
"""

from __future__ import annotations

import inspect
import sys
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, ClassVar, Protocol, TypeVar, Union, get_args, get_origin

from filterql.api.projection import tags_of
from filterql.kernel.loading import as_class, qualified_name

TagT = TypeVar("TagT")

EMPTY = inspect.Parameter.empty


class MemberKind(str, Enum):
    FIELD = "FIELD"
    METHOD = "METHOD"


@dataclass(frozen=True)
class Parameter:
    name: str
    annotation: Any = EMPTY


@dataclass(frozen=True)
class Member:
    """A field or method declared directly on a class.

    Attributes:
        owner: The declaring class.
        name: Attribute name.
        kind: Field or method.
        declared_type: Field annotation, or method return annotation
            (``inspect.Parameter.empty`` when absent).
        tags: Metadata attached by ``Annotated`` or by tag decorators.
        is_static: ``ClassVar`` field, ``staticmethod`` or ``classmethod``.
        is_private: Name starts with an underscore.
        parameters: Method parameters after ``self``/``cls``.
        resolution_error: Why the annotations could not be evaluated, if so.
    """

    owner: type
    name: str
    kind: MemberKind
    declared_type: Any = EMPTY
    tags: tuple[Any, ...] = ()
    is_static: bool = False
    is_private: bool = False
    parameters: tuple[Parameter, ...] = ()
    resolution_error: str | None = None

    @property
    def qualified_name(self) -> str:
        return f"{qualified_name(self.owner)}.{self.name}"


class SymbolQuery(Protocol):
    """Capability the analyzer and the endpoint validation read classes through."""

    def members_of(self, cls: type) -> list[Member]:
        """Own fields (declaration order) followed by own methods (declaration order)."""
        ...

    def tag_on(self, member: Member, tag_type: type[TagT]) -> TagT | None: ...

    def resolve_type(self, name: type | str) -> type:
        """Resolve a class or dotted name; raises :class:`UnresolvableTypeError`."""
        ...

    def is_same_generic(self, actual: Any, expected: Any) -> bool: ...

    def find_method(self, cls: type, name: str) -> Member | None:
        """Look *name* up through the class hierarchy."""
        ...


class ReflectionSymbolQuery:
    """:class:`SymbolQuery` over live classes."""

    def members_of(self, cls: type) -> list[Member]:
        members = self._fields_of(cls)
        for name, raw in vars(cls).items():
            member = self._method_member(cls, name, raw)
            if member is not None:
                members.append(member)
        return members

    def tag_on(self, member: Member, tag_type: type[TagT]) -> TagT | None:
        for tag in member.tags:
            if isinstance(tag, tag_type):
                return tag
        return None

    def resolve_type(self, name: type | str) -> type:
        return as_class(name)

    def is_same_generic(self, actual: Any, expected: Any) -> bool:
        if actual is expected:
            return True
        actual_origin, expected_origin = get_origin(actual), get_origin(expected)
        if actual_origin is None and expected_origin is None:
            return _same_class(actual, expected)
        if actual_origin is None or expected_origin is None:
            return False
        if _is_union(actual_origin) and _is_union(expected_origin):
            return self._same_args(actual, expected)
        return _same_class(actual_origin, expected_origin) and self._same_args(actual, expected)

    def find_method(self, cls: type, name: str) -> Member | None:
        for klass in cls.__mro__:
            if klass is object or name not in vars(klass):
                continue
            return self._method_member(klass, name, vars(klass)[name])
        return None

    def _same_args(self, actual: Any, expected: Any) -> bool:
        actual_args, expected_args = get_args(actual), get_args(expected)
        return len(actual_args) == len(expected_args) and all(
            self.is_same_generic(a, e) for a, e in zip(actual_args, expected_args)
        )

    def _fields_of(self, cls: type) -> list[Member]:
        own = inspect.get_annotations(cls)
        try:
            hints = typing.get_type_hints(cls, include_extras=True)
        except Exception:  # unresolvable forward reference, retried per field
            hints = None

        members: list[Member] = []
        for name, raw in own.items():
            error = None
            if hints is not None:
                hint = hints.get(name, raw)
            else:
                try:
                    hint = _evaluate_annotation(cls, raw)
                except Exception as exc:
                    hint = raw
                    error = f"{type(exc).__name__}: {exc}"
            is_static = get_origin(hint) is ClassVar or (isinstance(hint, str) and "ClassVar" in hint)
            tags: tuple[Any, ...] = ()
            declared = hint
            if get_origin(hint) is Annotated:
                declared, *metadata = get_args(hint)
                tags = tuple(metadata)
            members.append(
                Member(
                    owner=cls,
                    name=name,
                    kind=MemberKind.FIELD,
                    declared_type=declared,
                    tags=tags,
                    is_static=is_static,
                    is_private=name.startswith("_"),
                    resolution_error=error,
                )
            )
        return members

    def _method_member(self, owner: type, name: str, raw: Any) -> Member | None:
        if name.startswith("__") and name.endswith("__"):
            return None
        is_static = isinstance(raw, (staticmethod, classmethod))
        func = raw.__func__ if is_static else raw
        if not inspect.isfunction(func):
            return None

        tags = tags_of(raw) + tuple(t for t in tags_of(func) if t not in tags_of(raw))
        params = list(inspect.signature(func).parameters.values())
        if not isinstance(raw, staticmethod) and params:
            params = params[1:]

        error = None
        try:
            hints = typing.get_type_hints(func)
        except Exception as exc:  # unresolvable forward reference
            hints = {}
            error = f"{type(exc).__name__}: {exc}"

        return Member(
            owner=owner,
            name=name,
            kind=MemberKind.METHOD,
            declared_type=hints.get("return", EMPTY),
            tags=tags,
            is_static=is_static,
            is_private=name.startswith("_"),
            parameters=tuple(Parameter(p.name, hints.get(p.name, EMPTY)) for p in params),
            resolution_error=error,
        )


def type_text(annotation: Any) -> str:
    """Short readable form of an annotation, e.g. ``PredicateResolver[Person]``."""
    if annotation is Any:
        return "Any"
    if annotation is type(None):
        return "None"
    origin = get_origin(annotation)
    if origin is not None:
        args = ", ".join(type_text(a) for a in get_args(annotation))
        if _is_union(origin):
            return " | ".join(type_text(a) for a in get_args(annotation))
        return f"{type_text(origin)}[{args}]"
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation)


def _evaluate_annotation(cls: type, annotation: Any) -> Any:
    """Evaluate one string annotation in the namespace of *cls*."""
    if not isinstance(annotation, str):
        return annotation
    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    return eval(annotation, globalns, dict(vars(cls)))  # noqa: S307


def _is_union(origin: Any) -> bool:
    return origin is Union or origin is types.UnionType


def _same_class(actual: Any, expected: Any) -> bool:
    if actual is expected:
        return True
    if isinstance(actual, type) and isinstance(expected, type):
        return qualified_name(actual) == qualified_name(expected)
    return False


__all__ = [
    "EMPTY",
    "Member",
    "MemberKind",
    "Parameter",
    "ReflectionSymbolQuery",
    "SymbolQuery",
    "type_text",
]
