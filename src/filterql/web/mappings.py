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
"""HTTP mapping decorators recorded on generated controllers.

The decorators only attach routing metadata; mounting the controller in a
web framework is left to the host application.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T", bound=type)
F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class RouteInfo:
    """Routing metadata of one handler method."""

    method: str
    path: str
    status_code: int = 200


def request_mapping(path: str) -> Callable[[T], T]:
    """Class-level decorator that sets the base path for all handler methods."""

    def decorator(cls: T) -> T:
        cls.__filterql_request_mapping__ = path.rstrip("/")  # type: ignore[attr-defined]
        return cls

    return decorator


def _make_method_mapping(method: str) -> Callable[..., Any]:
    """Factory that creates an HTTP method mapping decorator."""

    def mapping(path: str = "", *, status_code: int = 200) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            func.__filterql_mapping__ = RouteInfo(method, path, status_code)  # type: ignore[attr-defined]
            return func

        return decorator

    mapping.__name__ = f"{method.lower()}_mapping"
    mapping.__qualname__ = f"{method.lower()}_mapping"
    return mapping


get_mapping = _make_method_mapping("GET")
post_mapping = _make_method_mapping("POST")


def routes_of(controller: type) -> list[tuple[str, RouteInfo]]:
    """List ``(method name, route)`` pairs of *controller* in declaration order.

    Route paths are prefixed with the class-level ``request_mapping`` path.
    """
    prefix = getattr(controller, "__filterql_request_mapping__", "")
    routes: list[tuple[str, RouteInfo]] = []
    for name, member in vars(controller).items():
        info = getattr(member, "__filterql_mapping__", None)
        if isinstance(info, RouteInfo):
            routes.append((name, RouteInfo(info.method, prefix + info.path, info.status_code)))
    return routes
