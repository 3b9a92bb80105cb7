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
"""``@exposure`` — publish a projection through a generated search endpoint."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

T = TypeVar("T", bound=type)

_EXPOSURE_ATTR = "__filterql_exposure__"


class Strategy(str, Enum):
    """Result shape of a generated search endpoint.

    PROJECTED: ``PaginatedData[dict[str, Any]]`` of projected rows.
    PAGINATED: ``PaginatedData[<Projection>]``.
    LIST: ``list[<Projection>]``.
    CUSTOM: whatever the configured handler returns.
    """

    PROJECTED = "PROJECTED"
    PAGINATED = "PAGINATED"
    LIST = "LIST"
    CUSTOM = "CUSTOM"


@dataclass(frozen=True)
class MethodRef:
    """Reference to a pipe or handler method.

    Attributes:
        value: Method name.
        type: Declaring class or its dotted name; ``None`` means the
            projection class itself.
    """

    value: str
    type: type | str | None = None


@dataclass(frozen=True)
class Exposure:
    """Endpoint configuration attached by :func:`exposure`."""

    value: str = ""
    base_path: str = ""
    endpoint_name: str = ""
    strategy: Strategy = Strategy.PROJECTED
    pipes: tuple[MethodRef, ...] = ()
    handler: MethodRef | None = None


def exposure(
    value: str = "",
    *,
    base_path: str = "",
    endpoint_name: str = "",
    strategy: Strategy = Strategy.PROJECTED,
    pipes: Sequence[MethodRef] = (),
    handler: MethodRef | None = None,
) -> Callable[[T], T]:
    """Class decorator exposing a projection through a search endpoint.

    Usage::

        @exposure("users", base_path="/api/v1", pipes=[MethodRef("tenant_isolation", UserPipes)])
        @projection(from_=Person)
        class PersonDTO: ...

    Args:
        value: Resource name; defaults to the kebab-cased class name.
        base_path: Path prefix for the endpoint.
        endpoint_name: Controller method name; defaults to ``search_<snake_name>``.
        strategy: Result shape of the endpoint.
        pipes: Request transformations applied in order before dispatch.
        handler: Method replacing the default search service dispatch.
    """
    config = Exposure(
        value=value,
        base_path=base_path,
        endpoint_name=endpoint_name,
        strategy=strategy,
        pipes=tuple(pipes),
        handler=handler,
    )

    def decorator(cls: T) -> T:
        setattr(cls, _EXPOSURE_ATTR, config)
        return cls

    return decorator


def exposure_of(cls: type) -> Exposure | None:
    """Return the exposure declared on *cls* itself, or ``None``."""
    config = vars(cls).get(_EXPOSURE_ATTR)
    return config if isinstance(config, Exposure) else None
