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
"""Immutable metadata describing the filterable properties of a projection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from filterql.api.op import Op
from filterql.kernel.exceptions import InvalidFieldMetadataError
from filterql.kernel.loading import qualified_name
from filterql.processor.naming import reference_module_for, snake_case


class FieldKind(str, Enum):
    DIRECT = "DIRECT"
    COMPUTED = "COMPUTED"


@dataclass(frozen=True)
class ComputedFieldDetails:
    """Where the routine behind a computed property lives.

    Attributes:
        provider_type_name: Qualified name of the class declaring the routine.
        provider_instance_key: Bean name used to pick the provider instance;
            ``None`` selects the default instance. Ignored for static routines.
        is_static: Whether the routine is callable without an instance.
    """

    provider_type_name: str
    provider_instance_key: str | None = None
    is_static: bool = False


@dataclass(frozen=True)
class FieldMetadata:
    """One filterable property of a projection.

    Attributes:
        reference_name: Constant name in the generated reference type.
        source_name: Projection field name, or routine name when computed.
        operators: Allowed operators, in declaration order. Never empty.
        computed: Routine location; present iff the property is computed.
    """

    reference_name: str
    source_name: str
    operators: tuple[Op, ...]
    computed: ComputedFieldDetails | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "operators", tuple(self.operators))
        if not self.reference_name:
            raise InvalidFieldMetadataError(
                f"Property '{self.source_name}' has an empty reference name",
                code="EMPTY_REFERENCE_NAME",
            )
        if not self.operators:
            raise InvalidFieldMetadataError(
                f"Property '{self.reference_name}' declares no operators",
                code="EMPTY_OPERATORS",
                context={"reference_name": self.reference_name},
            )

    @classmethod
    def direct(cls, reference_name: str, field_name: str, operators: tuple[Op, ...]) -> FieldMetadata:
        return cls(reference_name, field_name, operators)

    @classmethod
    def computed_field(
        cls,
        reference_name: str,
        method_name: str,
        operators: tuple[Op, ...],
        provider_type_name: str,
        provider_instance_key: str | None,
        is_static: bool,
    ) -> FieldMetadata:
        return cls(
            reference_name,
            method_name,
            operators,
            ComputedFieldDetails(provider_type_name, provider_instance_key, is_static),
        )

    @property
    def kind(self) -> FieldKind:
        return FieldKind.COMPUTED if self.computed is not None else FieldKind.DIRECT

    @property
    def is_computed(self) -> bool:
        return self.computed is not None


@dataclass(frozen=True)
class ProjectionDescriptor:
    """A discovered projection and the names derived from it.

    The reference type of ``app.dto.person.PersonDTO`` is ``PersonDTORef``,
    generated into module ``app.dto.person_dto_ref``.
    """

    projection: type
    entity_type_name: str
    fields: tuple[FieldMetadata, ...]

    @property
    def qualified_name(self) -> str:
        return qualified_name(self.projection)

    @property
    def module(self) -> str:
        return self.projection.__module__

    @property
    def simple_name(self) -> str:
        return self.projection.__name__

    @property
    def snake_name(self) -> str:
        return snake_case(self.simple_name)

    @property
    def reference_type_name(self) -> str:
        return f"{self.simple_name}Ref"

    @property
    def reference_module(self) -> str:
        return reference_module_for(self.module, self.simple_name)

    @property
    def reference_qualified_name(self) -> str:
        return f"{self.reference_module}.{self.reference_type_name}"

    @property
    def has_instance_providers(self) -> bool:
        return any(f.computed is not None and not f.computed.is_static for f in self.fields)
