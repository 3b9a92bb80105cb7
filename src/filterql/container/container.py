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
"""Lightweight container resolving shared instances by type and bean name."""

from __future__ import annotations

import difflib
import inspect
import typing
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Annotated, Any, TypeVar, cast, get_args, get_origin

from filterql.api.resolver import InstanceResolver
from filterql.container.exceptions import BeanCreationException, NoSuchBeanError, NoUniqueBeanError

T = TypeVar("T")


@dataclass
class Registration:
    """Metadata for a registered bean."""

    provides: type
    factory: Callable[..., Any] | None = None
    instance: Any = field(default=None, repr=False)
    name: str = ""
    primary: bool = False


class Container:
    """Singleton bean container implementing :class:`InstanceResolver`.

    Classes are registered directly or produced by ``@bean`` methods of a
    ``@configuration`` class. Constructor and factory parameters are
    injected from their type hints. The container registers itself as the
    ``InstanceResolver`` so generated filter contexts can reach provider
    instances through it.
    """

    def __init__(self) -> None:
        self._registrations: list[Registration] = []
        self._named: dict[str, Registration] = {}
        self._resolving: dict[int, None] = {}
        self.register_instance(self, provides=InstanceResolver)

    def register(self, cls: type, *, name: str = "") -> None:
        """Register a class; it is instantiated on first resolution."""
        bean_name = name or getattr(cls, "__filterql_bean_name__", "")
        self._add(
            Registration(
                provides=cls,
                name=bean_name,
                primary=getattr(cls, "__filterql_primary__", False),
            )
        )

    def register_instance(self, instance: Any, *, provides: type | None = None, name: str = "") -> None:
        """Register an already created object."""
        self._add(Registration(provides=provides or type(instance), instance=instance, name=name))

    def load_configuration(self, config_cls: type) -> list[str]:
        """Register *config_cls* and every ``@bean`` method it declares.

        Returns:
            The names of the registered beans.
        """
        self.register(config_cls)
        config = self.resolve(config_cls)
        names: list[str] = []
        for attr, member in inspect.getmembers(config_cls, inspect.isfunction):
            if not getattr(member, "__filterql_bean__", False):
                continue
            factory = getattr(config, attr)
            provides = typing.get_type_hints(factory).get("return", object)
            if get_origin(provides) is not None:
                provides = get_origin(provides)
            bean_name = getattr(member, "__filterql_bean_name__", attr)
            self._add(Registration(provides=provides, factory=factory, name=bean_name))
            names.append(bean_name)
        return names

    def resolve(self, type_: type[T], name: str | None = None) -> T:
        """Resolve the instance of *type_*, or the bean called *name*."""
        if name:
            reg = self._named.get(name)
            if reg is None:
                raise NoSuchBeanError(
                    bean_type=type_,
                    bean_name=name,
                    suggestions=difflib.get_close_matches(name, list(self._named), n=5, cutoff=0.4),
                )
            return cast(T, self._instance_of(reg))

        candidates = [reg for reg in self._registrations if _provides(reg, type_)]
        if not candidates:
            raise NoSuchBeanError(bean_type=type_, suggestions=self._similar_type_names(type_))
        if len(candidates) == 1:
            return cast(T, self._instance_of(candidates[0]))
        primaries = [reg for reg in candidates if reg.primary]
        if len(primaries) == 1:
            return cast(T, self._instance_of(primaries[0]))
        exact = [reg for reg in candidates if reg.provides is type_]
        if len(exact) == 1:
            return cast(T, self._instance_of(exact[0]))
        raise NoUniqueBeanError(bean_type=type_, candidates=[reg.provides for reg in candidates])

    def resolve_by_name(self, name: str) -> Any:
        """Resolve a bean by its registered name."""
        return self.resolve(object, name)

    def contains(self, name: str) -> bool:
        """Check if a named bean exists."""
        return name in self._named

    def _add(self, reg: Registration) -> None:
        self._registrations.append(reg)
        if reg.name:
            self._named[reg.name] = reg

    def _instance_of(self, reg: Registration) -> Any:
        if reg.instance is not None:
            return reg.instance
        key = id(reg)
        if key in self._resolving:
            raise BeanCreationException(reg.name or reg.provides.__qualname__, "circular dependency")
        self._resolving[key] = None
        try:
            target = reg.factory if reg.factory is not None else reg.provides
            reg.instance = target(**self._injected_kwargs(target, reg))
        finally:
            self._resolving.pop(key, None)
        return reg.instance

    def _injected_kwargs(self, target: Callable[..., Any], reg: Registration) -> dict[str, Any]:
        func = target.__init__ if isinstance(target, type) else target  # type: ignore[misc]
        if func is object.__init__:
            return {}
        hints = typing.get_type_hints(func, include_extras=True)
        hints.pop("return", None)
        sig = inspect.signature(func)

        kwargs: dict[str, Any] = {}
        for param_name, param_type in hints.items():
            param = sig.parameters.get(param_name)
            if param is None:
                continue
            base_type = get_args(param_type)[0] if get_origin(param_type) is Annotated else param_type
            try:
                kwargs[param_name] = self.resolve(base_type)
            except (NoSuchBeanError, NoUniqueBeanError):
                if param.default is not inspect.Parameter.empty:
                    continue
                raise NoSuchBeanError(
                    bean_type=base_type if isinstance(base_type, type) else None,
                    required_by=f"{getattr(target, '__qualname__', reg.name)}()",
                    parameter=f"{param_name}: {getattr(base_type, '__name__', repr(base_type))}",
                ) from None
        return kwargs

    def _similar_type_names(self, type_: type) -> list[str]:
        name = getattr(type_, "__name__", "")
        if not name:
            return []
        registered = [reg.provides.__name__ for reg in self._registrations]
        return difflib.get_close_matches(name, registered, n=5, cutoff=0.4)


def _provides(reg: Registration, type_: type) -> bool:
    if reg.provides is type_:
        return True
    try:
        return isinstance(reg.provides, type) and issubclass(reg.provides, type_)
    except TypeError:
        return False
