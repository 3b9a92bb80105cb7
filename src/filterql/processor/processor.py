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
"""Round-based orchestration of discovery and source generation.

Generation runs in three rounds so later artefacts can import earlier ones:

1. every projection is analyzed and its reference type is written;
2. registration blocks and search endpoints are registered, validating
   pipes and handlers against the now importable reference types;
3. the registration and controller modules are written.
"""

from __future__ import annotations

import importlib
from collections.abc import Iterable

import structlog

from filterql.api.exposure import exposure_of
from filterql.api.projection import projection_config
from filterql.config.properties.generator import GeneratorProperties
from filterql.kernel.exceptions import ProcessorException, TemplateException
from filterql.kernel.loading import qualified_name
from filterql.processor.analyzer import FieldAnalyzer
from filterql.processor.diagnostics import Diagnostics
from filterql.processor.generator.context_config import FilterContextGenerator
from filterql.processor.generator.controller import FilterControllerGenerator
from filterql.processor.generator.reference_type import ReferenceTypeGenerator
from filterql.processor.generator.template_engine import TemplateEngine
from filterql.processor.metadata import ProjectionDescriptor
from filterql.processor.symbols import ReflectionSymbolQuery, SymbolQuery
from filterql.processor.writer import SourceWriter

logger = structlog.get_logger("filterql.processor")


class ExposureProcessor:
    """Drives discovery and generation for a set of projection classes.

    All pass state lives on the instance: the pending projections (in
    arrival order) and flags recording which rounds have completed.
    """

    def __init__(
        self,
        writer: SourceWriter,
        *,
        properties: GeneratorProperties | None = None,
        symbols: SymbolQuery | None = None,
        diagnostics: Diagnostics | None = None,
        engine: TemplateEngine | None = None,
    ) -> None:
        self.writer = writer
        self.properties = properties or GeneratorProperties()
        self.symbols = symbols or ReflectionSymbolQuery()
        self.diagnostics = diagnostics or Diagnostics()
        engine = engine or TemplateEngine()

        self._analyzer = FieldAnalyzer(self.symbols, self.diagnostics)
        self._reference_generator = ReferenceTypeGenerator(engine)
        self._context_generator = FilterContextGenerator(engine)
        self._controller_generator = FilterControllerGenerator(self.symbols, self.diagnostics, engine)

        self._pending: dict[type, ProjectionDescriptor] = {}
        self._references_generated = False
        self._artefacts_registered = False
        self._artefacts_written = False
        self.written: list[str] = []

    @property
    def descriptors(self) -> list[ProjectionDescriptor]:
        return list(self._pending.values())

    def process(self, projections: Iterable[type], processing_over: bool = False) -> None:
        """Run the next round.

        Args:
            projections: Projection classes of this round; only the first
                round reads them.
            processing_over: Whether this is the final round.
        """
        if processing_over:
            if not self._artefacts_registered:
                self._register_artefacts()
            self._write_artefacts()
            return
        if not self._references_generated:
            for projection in projections:
                self._generate_reference(projection)
            self._references_generated = True
        elif not self._artefacts_registered:
            self._register_artefacts()

    def run(self, projections: Iterable[type]) -> Diagnostics:
        """Run every round over *projections* and return the diagnostics."""
        self.process(list(projections))
        self.process([])
        self.process([], processing_over=True)
        return self.diagnostics

    def _generate_reference(self, projection: type) -> None:
        if projection in self._pending:
            return
        try:
            fields = self._analyzer.analyze_projection(projection)
            entity = self.symbols.resolve_type(_entity_ref(projection))
        except ProcessorException as exc:
            self.diagnostics.error(str(exc), projection)
            return

        descriptor = ProjectionDescriptor(
            projection=projection,
            entity_type_name=qualified_name(entity),
            fields=tuple(fields),
        )
        owner = self._reference_owner(descriptor.reference_module)
        if owner is not None:
            self.diagnostics.error(
                f"Reference type module '{descriptor.reference_module}' is already generated for {owner}",
                projection,
            )
            return
        if not fields:
            self.diagnostics.warning(
                f"Projection {descriptor.simple_name} exposes no filterable properties",
                projection,
            )

        try:
            source = self._reference_generator.generate(
                descriptor.module,
                descriptor.simple_name,
                descriptor.reference_type_name,
                descriptor.fields,
            )
        except TemplateException as exc:
            self.diagnostics.error(f"Failed to generate {descriptor.reference_type_name}: {exc}", projection)
            return
        self._write(descriptor.reference_module, source)
        self._pending[projection] = descriptor
        logger.info(
            "reference_type_generated",
            projection=descriptor.qualified_name,
            reference_type=descriptor.reference_qualified_name,
            fields=len(fields),
        )

    def _register_artefacts(self) -> None:
        importlib.invalidate_caches()
        bean_owners: dict[str, str] = {}
        for descriptor in self._pending.values():
            bean_name = f"context_of_{descriptor.snake_name}"
            owner = bean_owners.get(bean_name)
            if owner is not None:
                self.diagnostics.error(
                    f"Filter context bean '{bean_name}' is already generated for {owner}",
                    descriptor.projection,
                )
                continue
            bean_owners[bean_name] = descriptor.qualified_name
            try:
                self._context_generator.register(
                    descriptor.module,
                    descriptor.qualified_name,
                    descriptor.fields,
                    descriptor.entity_type_name,
                )
            except TemplateException as exc:
                self.diagnostics.error(f"Failed to generate filter context: {exc}", descriptor.projection)

            exposure = exposure_of(descriptor.projection)
            if exposure is None:
                continue
            try:
                self._controller_generator.register(descriptor, exposure)
            except TemplateException as exc:
                self.diagnostics.error(f"Failed to generate search endpoint: {exc}", descriptor.projection)
        self._artefacts_registered = True

    def _write_artefacts(self) -> None:
        if self._artefacts_written or not self._pending:
            return
        self._artefacts_written = True
        try:
            self._write(self.properties.context_module_name, self._context_generator.generate())
        except TemplateException as exc:
            self.diagnostics.error(f"Failed to generate {self.properties.context_module_name}: {exc}")
        try:
            self._write(self.properties.controller_module_name, self._controller_generator.generate())
        except TemplateException as exc:
            self.diagnostics.error(f"Failed to generate {self.properties.controller_module_name}: {exc}")

    def _reference_owner(self, reference_module: str) -> str | None:
        for pending in self._pending.values():
            if pending.reference_module == reference_module:
                return pending.qualified_name
        return None

    def _write(self, module_name: str, source: str) -> None:
        self.written.append(self.writer.write(module_name, source))
        logger.debug("module_written", module=module_name)


def _entity_ref(projection: type) -> type | str:
    config = projection_config(projection)
    if config is None:
        raise ProcessorException(f"{qualified_name(projection)} is not decorated with @projection")
    return config.from_
