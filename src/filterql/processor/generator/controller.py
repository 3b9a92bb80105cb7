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
"""Generates the request-handler module with one search endpoint per projection."""

from __future__ import annotations

from typing import Any

import structlog

from filterql.api.exposure import Exposure, MethodRef, Strategy
from filterql.kernel.exceptions import SignatureValidationError, UnresolvableTypeError
from filterql.processor.diagnostics import Diagnostics
from filterql.processor.exposure import (
    base_path,
    endpoint_name,
    method_owner,
    resource_name,
    validate_handler_method,
    validate_pipe_method,
)
from filterql.processor.generator.imports import ImportTracker
from filterql.processor.generator.template_engine import TemplateEngine
from filterql.processor.metadata import ProjectionDescriptor
from filterql.processor.symbols import EMPTY, Member, SymbolQuery

logger = structlog.get_logger("filterql.processor.controller")

CONTROLLER_TEMPLATE = "search-controller.py.tpl"
ENDPOINT_TEMPLATE = "search-endpoint.py.tpl"
CLASS_NAME = "FilterQlController"


class FilterControllerGenerator:
    """Accumulates search endpoints and renders the controller module.

    Pipes and handlers are validated against the projection's reference
    type before any text is produced. A rejected pipe is reported and left
    out of the endpoint; a rejected handler drops the whole endpoint.
    """

    def __init__(
        self,
        symbols: SymbolQuery,
        diagnostics: Diagnostics,
        engine: TemplateEngine | None = None,
    ) -> None:
        self._symbols = symbols
        self._diagnostics = diagnostics
        self._engine = engine or TemplateEngine()
        self._imports = self._new_imports()
        self._endpoints: list[str] = []
        self._method_names: dict[str, str] = {}

    @property
    def endpoint_count(self) -> int:
        return len(self._endpoints)

    def register(self, descriptor: ProjectionDescriptor, exposure: Exposure) -> bool:
        """Add the search endpoint of *descriptor*.

        Imports needed by the endpoint are only kept when it is added.

        Returns:
            Whether an endpoint was added.

        Raises:
            TemplateException: If the endpoint template cannot be rendered.
        """
        projection = descriptor.projection
        method_name = endpoint_name(descriptor, exposure)
        imports = self._imports.copy()
        ref_type = imports.add(descriptor.reference_module, descriptor.reference_type_name)

        pipes = ""
        handler: tuple[Member, str] | None = None
        if exposure.pipes or exposure.handler is not None:
            try:
                reference_type = self._symbols.resolve_type(descriptor.reference_qualified_name)
            except UnresolvableTypeError as exc:
                self._diagnostics.error(f"Cannot validate endpoint '{method_name}': {exc}", projection)
                return False
            for pipe in exposure.pipes:
                call = self._pipe_call(pipe, descriptor, reference_type, imports)
                if call is not None:
                    pipes += f"        req = {call}(req)\n"
            if exposure.handler is not None:
                handler = self._handler(exposure.handler, exposure.strategy, descriptor, reference_type, imports)
                if handler is None:
                    return False

        if handler is not None:
            member, target = handler
            dispatch = f"{target}(req)"
            if exposure.strategy is Strategy.CUSTOM:
                return_type = (
                    imports.annotation(Any)
                    if member.declared_type is EMPTY
                    else imports.annotation(member.declared_type)
                )
            else:
                return_type = self._return_type(exposure.strategy, projection, imports)
        else:
            dispatch = f"self.search_service.search({ref_type}, req)"
            if exposure.strategy is Strategy.LIST:
                dispatch += ".data"
            return_type = self._return_type(exposure.strategy, projection, imports)

        endpoint = self._engine.process(
            self._engine.load_template(ENDPOINT_TEMPLATE),
            {
                "path": f"{base_path(exposure)}/{resource_name(descriptor, exposure)}/search",
                "method_name": method_name,
                "ref_type": ref_type,
                "return_type": return_type,
                "pipes": pipes,
                "dispatch": dispatch,
            },
        )

        if endpoint in self._endpoints:
            logger.debug("duplicate_endpoint_skipped", method=method_name)
            return False
        owner = self._method_names.get(method_name)
        if owner is not None:
            self._diagnostics.error(
                f"Endpoint method '{method_name}' is already generated for {owner}",
                projection,
            )
            return False
        self._method_names[method_name] = descriptor.qualified_name
        self._endpoints.append(endpoint)
        self._imports = imports
        return True

    def generate(self) -> str:
        """Render the controller module containing every registered endpoint."""
        source = self._engine.process(
            self._engine.load_template(CONTROLLER_TEMPLATE),
            {
                "class_name": CLASS_NAME,
                "imports": self._imports.render(),
                "endpoints": "".join(self._endpoints),
            },
        )
        return source.rstrip("\n") + "\n"

    def _pipe_call(
        self,
        pipe: MethodRef,
        descriptor: ProjectionDescriptor,
        reference_type: type,
        imports: ImportTracker,
    ) -> str | None:
        try:
            owner = method_owner(self._symbols, pipe, descriptor.projection)
            member = validate_pipe_method(self._symbols, owner, pipe.value, reference_type)
        except (UnresolvableTypeError, SignatureValidationError) as exc:
            self._diagnostics.error(f"Invalid pipe '{pipe.value}': {exc}", descriptor.projection)
            return None
        return self._call_target(owner, member, imports)

    def _handler(
        self,
        handler: MethodRef,
        strategy: Strategy,
        descriptor: ProjectionDescriptor,
        reference_type: type,
        imports: ImportTracker,
    ) -> tuple[Member, str] | None:
        try:
            owner = method_owner(self._symbols, handler, descriptor.projection)
            member = validate_handler_method(
                self._symbols,
                owner,
                handler.value,
                strategy,
                descriptor.projection,
                reference_type,
            )
        except (UnresolvableTypeError, SignatureValidationError) as exc:
            self._diagnostics.error(f"Invalid handler '{handler.value}': {exc}", descriptor.projection)
            return None
        return member, self._call_target(owner, member, imports)

    @staticmethod
    def _call_target(owner: type, member: Member, imports: ImportTracker) -> str:
        owner_ref = imports.add_class(owner)
        if member.is_static:
            return f"{owner_ref}.{member.name}"
        return f"self.instance_resolver.resolve({owner_ref}, None).{member.name}"

    @staticmethod
    def _return_type(strategy: Strategy, projection: type, imports: ImportTracker) -> str:
        if strategy is Strategy.PROJECTED:
            return "PaginatedData[dict[str, Any]]"
        if strategy is Strategy.PAGINATED:
            return f"PaginatedData[{imports.add_class(projection)}]"
        if strategy is Strategy.LIST:
            return f"list[{imports.add_class(projection)}]"
        return "Any"

    @staticmethod
    def _new_imports() -> ImportTracker:
        imports = ImportTracker()
        imports.reserve("typing", "Any")
        imports.reserve("filterql.api", "FilterRequest", "InstanceResolver", "PaginatedData", "SearchService")
        imports.reserve("filterql.container", "rest_controller")
        imports.reserve("filterql.web", "Body", "post_mapping")
        imports.reserve("__generated__", CLASS_NAME)
        return imports
