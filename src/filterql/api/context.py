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
"""Filter contexts produced by generated registration modules."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from filterql.api.predicate import PredicateResolverMapping
from filterql.kernel.exceptions import UnknownPropertyReferenceError

R = TypeVar("R", bound=Enum)

PropertyMapping = Union[str, PredicateResolverMapping[Any]]


class FilterContext(Generic[R]):
    """Binds a reference type to its entity and to a property mapping.

    The mapping returns, for each reference constant, either the entity
    attribute path of a direct property or the
    :class:`PredicateResolverMapping` of a computed one.
    """

    def __init__(
        self,
        reference_type: type[R],
        entity_class: type,
        mapping: Callable[[R], PropertyMapping],
    ) -> None:
        self.reference_type = reference_type
        self.entity_class = entity_class
        self._mapping = mapping

    def mapping_for(self, ref: R) -> PropertyMapping:
        if not isinstance(ref, self.reference_type):
            raise UnknownPropertyReferenceError(
                f"{ref!r} is not a member of {self.reference_type.__name__}",
                code="UNKNOWN_PROPERTY_REFERENCE",
                context={"reference_type": self.reference_type.__name__, "ref": repr(ref)},
            )
        return self._mapping(ref)

    def is_computed(self, ref: R) -> bool:
        return isinstance(self.mapping_for(ref), PredicateResolverMapping)

    def __repr__(self) -> str:
        return f"FilterContext({self.reference_type.__name__}, {self.entity_class.__name__})"
