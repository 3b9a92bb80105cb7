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
"""Projection declarations: ``@projection``, ``exposed_as`` and ``not_filterable``.

A projection is a class whose annotated attributes describe the subset of an
entity exposed for filtering::

    @projection(from_=Person, providers=[Provider(UserTenancyResolvers)])
    class PersonDTO:
        id: int
        username: Annotated[str, exposed_as("USERNAME", operators=[Op.EQ, Op.MATCHES])]
        password_hash: Annotated[str, not_filterable]

Computed properties live on provider classes as methods tagged with
``@exposed_as``::

    class UserTenancyResolvers:
        @exposed_as("HAS_ORG", operators=[Op.EQ])
        def is_within_current_org(self, op: str, args: list[Any]) -> PredicateResolver[Person]:
            ...
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from filterql.api.op import Op

T = TypeVar("T", bound=type)
F = TypeVar("F", bound=Callable[..., Any])

_PROJECTION_ATTR = "__filterql_projection__"
_TAGS_ATTR = "__filterql_tags__"


@dataclass(frozen=True)
class Provider:
    """A class contributing computed properties to a projection.

    Attributes:
        type: The provider class, or its dotted qualified name.
        name: Optional bean name used to pick one of several instances.
    """

    type: type | str
    name: str | None = None


@dataclass(frozen=True)
class ProjectionConfig:
    """Configuration attached to a class by :func:`projection`."""

    from_: type | str
    providers: tuple[Provider, ...] = ()


@dataclass(frozen=True)
class ExposedAs:
    """Exposure tag for a projection field or a provider method.

    Used as ``Annotated`` metadata on fields and as a decorator on methods.
    An empty *value* falls back to the upper-snake-case field name; empty
    *operators* fall back to the defaults for the field's type.
    """

    value: str = ""
    operators: tuple[Op, ...] = ()

    def __call__(self, func: F) -> F:
        tags = list(getattr(func, _TAGS_ATTR, ()))
        tags.append(self)
        setattr(func, _TAGS_ATTR, tuple(tags))
        return func


@dataclass(frozen=True)
class NotFilterable:
    """Marks a projection field as hidden from filtering."""


not_filterable = NotFilterable()


def exposed_as(value: str = "", *, operators: Sequence[Op] = ()) -> ExposedAs:
    """Create an :class:`ExposedAs` tag."""
    return ExposedAs(value=value, operators=tuple(operators))


def projection(
    *,
    from_: type | str,
    providers: Sequence[Provider | type | str] = (),
) -> Callable[[T], T]:
    """Class decorator declaring a filterable projection of *from_*.

    Args:
        from_: The backing entity class (or its dotted name).
        providers: Classes contributing computed properties, in lookup order.
            Bare classes are wrapped in :class:`Provider` without a name.
    """
    config = ProjectionConfig(
        from_=from_,
        providers=tuple(p if isinstance(p, Provider) else Provider(p) for p in providers),
    )

    def decorator(cls: T) -> T:
        setattr(cls, _PROJECTION_ATTR, config)
        return cls

    return decorator


def is_projection(cls: Any) -> bool:
    """Check if *cls* itself (not a base class) is declared as a projection."""
    return isinstance(cls, type) and isinstance(vars(cls).get(_PROJECTION_ATTR), ProjectionConfig)


def projection_config(cls: type) -> ProjectionConfig | None:
    """Return the configuration declared on *cls*, or ``None``."""
    config = vars(cls).get(_PROJECTION_ATTR)
    return config if isinstance(config, ProjectionConfig) else None


def tags_of(func: Any) -> tuple[Any, ...]:
    """Return the tags attached to a function by tag decorators."""
    return tuple(getattr(func, _TAGS_ATTR, ()))
