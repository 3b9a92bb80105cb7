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
"""Discovery of the filterable properties of a projection."""

from __future__ import annotations

from typing import Any

import structlog

from filterql.api.predicate import PredicateResolver
from filterql.api.projection import ExposedAs, NotFilterable, projection_config
from filterql.kernel.exceptions import ProcessorException, UnresolvableTypeError
from filterql.kernel.loading import qualified_name
from filterql.processor.diagnostics import Diagnostics
from filterql.processor.metadata import FieldMetadata
from filterql.processor.naming import is_valid_reference_name, upper_snake_case
from filterql.processor.supported_types import DefaultOperatorStrategy, SupportedType
from filterql.processor.symbols import EMPTY, Member, MemberKind, SymbolQuery, type_text

logger = structlog.get_logger("filterql.processor.analyzer")

COMPUTED_PARAMETER_TYPES: tuple[Any, ...] = (str, list[Any])


class FieldAnalyzer:
    """Builds the ordered :class:`FieldMetadata` list of a projection.

    Direct properties come first, in field declaration order, followed by
    the computed properties of each provider in configuration order. A
    reference name already taken is dropped silently (first wins).
    Malformed computed properties are reported to *diagnostics* and skipped.
    """

    def __init__(
        self,
        symbols: SymbolQuery,
        diagnostics: Diagnostics,
        operator_strategy: DefaultOperatorStrategy | None = None,
    ) -> None:
        self._symbols = symbols
        self._diagnostics = diagnostics
        self._operator_strategy = operator_strategy or DefaultOperatorStrategy()

    def analyze_projection(self, projection_cls: type) -> list[FieldMetadata]:
        """Discover the properties of *projection_cls*.

        Raises:
            ProcessorException: If the class is not a projection.
            UnresolvableTypeError: If the backing entity cannot be resolved.
        """
        config = projection_config(projection_cls)
        if config is None:
            raise ProcessorException(
                f"{qualified_name(projection_cls)} is not decorated with @projection",
                code="NOT_A_PROJECTION",
            )
        entity = self._symbols.resolve_type(config.from_)

        fields: list[FieldMetadata] = []
        seen: set[str] = set()

        def add(metadata: FieldMetadata) -> None:
            if metadata.reference_name in seen:
                logger.debug(
                    "duplicate_reference_dropped",
                    projection=projection_cls.__name__,
                    reference_name=metadata.reference_name,
                    source=metadata.source_name,
                )
                return
            seen.add(metadata.reference_name)
            fields.append(metadata)

        for member in self._symbols.members_of(projection_cls):
            if member.kind is MemberKind.FIELD:
                direct = self._direct_field(member)
                if direct is not None:
                    add(direct)

        for provider in config.providers:
            try:
                provider_cls = self._symbols.resolve_type(provider.type)
            except UnresolvableTypeError as exc:
                self._diagnostics.error(f"Invalid provider: {exc}", projection_cls)
                continue
            for member in self._symbols.members_of(provider_cls):
                if member.kind is not MemberKind.METHOD:
                    continue
                computed = self._computed_field(member, provider_cls, provider.name, entity)
                if computed is not None:
                    add(computed)

        return fields

    def _direct_field(self, member: Member) -> FieldMetadata | None:
        if member.is_static or member.is_private:
            return None
        if member.resolution_error is not None:
            self._diagnostics.error(f"Cannot resolve annotation of property: {member.resolution_error}", member)
            return None
        if self._symbols.tag_on(member, NotFilterable) is not None:
            return None

        tag = self._symbols.tag_on(member, ExposedAs)
        reference_name = tag.value if tag is not None and tag.value else upper_snake_case(member.name)
        if not is_valid_reference_name(reference_name):
            self._diagnostics.error(f"Invalid reference name '{reference_name}'", member)
            return None

        if tag is not None and tag.operators:
            operators = tag.operators
        else:
            supported = SupportedType.from_annotation(member.declared_type)
            operators = self._operator_strategy.default_operators(supported)
        return FieldMetadata.direct(reference_name, member.name, operators)

    def _computed_field(
        self,
        member: Member,
        provider_cls: type,
        instance_key: str | None,
        entity: type,
    ) -> FieldMetadata | None:
        tag = self._symbols.tag_on(member, ExposedAs)
        if tag is None or member.is_private:
            return None

        problem = self._signature_problem(member, entity)
        if problem is not None:
            self._diagnostics.error(problem, member)
            return None

        reference_name = tag.value or upper_snake_case(member.name)
        if not is_valid_reference_name(reference_name):
            self._diagnostics.error(f"Invalid reference name '{reference_name}'", member)
            return None
        if not tag.operators:
            self._diagnostics.error(
                f"Computed property '{reference_name}' must declare at least one operator",
                member,
            )
            return None

        return FieldMetadata.computed_field(
            reference_name,
            member.name,
            tag.operators,
            qualified_name(provider_cls),
            instance_key,
            member.is_static,
        )

    def _signature_problem(self, member: Member, entity: type) -> str | None:
        if member.resolution_error is not None:
            return f"Cannot resolve annotations of computed property: {member.resolution_error}"

        expected_return = PredicateResolver[entity]  # type: ignore[valid-type]
        if not self._symbols.is_same_generic(member.declared_type, expected_return):
            found = "nothing" if member.declared_type is EMPTY else type_text(member.declared_type)
            return f"Computed property must return {type_text(expected_return)}, found: {found}"

        found_params = [p.annotation for p in member.parameters]
        if len(found_params) != len(COMPUTED_PARAMETER_TYPES) or not all(
            self._symbols.is_same_generic(actual, expected)
            for actual, expected in zip(found_params, COMPUTED_PARAMETER_TYPES)
        ):
            found = ", ".join("?" if a is EMPTY else type_text(a) for a in found_params)
            return f"Computed property must have parameters (op: str, args: list[Any]), found: ({found})"
        return None

