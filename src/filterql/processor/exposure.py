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
"""Endpoint naming and pipe/handler signature validation for ``@exposure``."""

from __future__ import annotations

from typing import Any

from filterql.api.exposure import Exposure, MethodRef, Strategy
from filterql.api.page import PaginatedData
from filterql.api.request import FilterRequest
from filterql.kernel.exceptions import SignatureValidationError
from filterql.processor.metadata import ProjectionDescriptor
from filterql.processor.naming import kebab_case
from filterql.processor.symbols import EMPTY, Member, SymbolQuery, type_text


def resource_name(descriptor: ProjectionDescriptor, exposure: Exposure) -> str:
    return exposure.value.strip() or kebab_case(descriptor.simple_name)


def base_path(exposure: Exposure) -> str:
    return exposure.base_path.strip().rstrip("/")


def endpoint_name(descriptor: ProjectionDescriptor, exposure: Exposure) -> str:
    return exposure.endpoint_name.strip() or f"search_{descriptor.snake_name}"


def filter_request_type(reference_type: type) -> Any:
    return FilterRequest[reference_type]  # type: ignore[valid-type]


def strategy_return_type(strategy: Strategy, projection: type) -> Any:
    """Return annotation a handler must declare for *strategy*; ``None`` for CUSTOM."""
    if strategy is Strategy.PROJECTED:
        return PaginatedData[dict[str, Any]]
    if strategy is Strategy.PAGINATED:
        return PaginatedData[projection]  # type: ignore[valid-type]
    if strategy is Strategy.LIST:
        return list[projection]  # type: ignore[valid-type]
    return None


def method_owner(symbols: SymbolQuery, ref: MethodRef, projection: type) -> type:
    """Class declaring *ref*; the projection itself when no type is given."""
    if ref.type is None:
        return projection
    return symbols.resolve_type(ref.type)


def validate_pipe_method(
    symbols: SymbolQuery,
    owner: type,
    method_name: str,
    reference_type: type,
) -> Member:
    """Find a pipe ``(req: FilterRequest[Ref]) -> FilterRequest[Ref]`` on *owner*.

    Raises:
        SignatureValidationError: If the method is missing or has another shape.
    """
    expected = filter_request_type(reference_type)
    member = _public_method(symbols, owner, method_name, "Pipe")
    _check_single_request_parameter(symbols, member, expected, "Pipe")
    if not symbols.is_same_generic(member.declared_type, expected):
        raise SignatureValidationError(
            f"Pipe {member.qualified_name} must return {type_text(expected)}, "
            f"found: {_found(member.declared_type)}",
            code="INVALID_PIPE_SIGNATURE",
        )
    return member


def validate_handler_method(
    symbols: SymbolQuery,
    owner: type,
    method_name: str,
    strategy: Strategy,
    projection: type,
    reference_type: type,
) -> Member:
    """Find a handler taking ``FilterRequest[Ref]`` and returning the strategy's shape.

    Raises:
        SignatureValidationError: If the method is missing or has another shape.
    """
    member = _public_method(symbols, owner, method_name, "Handler")
    _check_single_request_parameter(symbols, member, filter_request_type(reference_type), "Handler")
    expected_return = strategy_return_type(strategy, projection)
    if expected_return is not None and not symbols.is_same_generic(member.declared_type, expected_return):
        raise SignatureValidationError(
            f"Handler {member.qualified_name} must return {type_text(expected_return)} "
            f"for strategy {strategy.value}, found: {_found(member.declared_type)}",
            code="INVALID_HANDLER_SIGNATURE",
        )
    return member


def _public_method(symbols: SymbolQuery, owner: type, method_name: str, role: str) -> Member:
    member = symbols.find_method(owner, method_name)
    if member is None or member.is_private:
        raise SignatureValidationError(
            f"{role} method '{method_name}' not found on {owner.__qualname__}",
            code="METHOD_NOT_FOUND",
            context={"owner": owner.__qualname__, "method": method_name},
        )
    if member.resolution_error is not None:
        raise SignatureValidationError(
            f"Cannot resolve annotations of {member.qualified_name}: {member.resolution_error}",
            code="UNRESOLVABLE_ANNOTATIONS",
        )
    return member


def _check_single_request_parameter(symbols: SymbolQuery, member: Member, expected: Any, role: str) -> None:
    params = member.parameters
    if len(params) != 1 or not symbols.is_same_generic(params[0].annotation, expected):
        found = ", ".join(_found(p.annotation) for p in params)
        raise SignatureValidationError(
            f"{role} {member.qualified_name} must take exactly one parameter of type "
            f"{type_text(expected)}, found: ({found})",
            code="INVALID_PARAMETERS",
        )


def _found(annotation: Any) -> str:
    return "?" if annotation is EMPTY else type_text(annotation)
