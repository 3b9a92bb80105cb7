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
"""Generates the registration module holding one filter context per projection."""

from __future__ import annotations

from collections.abc import Sequence

from filterql.processor.generator.imports import ImportTracker
from filterql.processor.generator.template_engine import TemplateEngine
from filterql.processor.metadata import FieldMetadata
from filterql.processor.naming import reference_module_for, simple_name, snake_case

CONFIG_TEMPLATE = "filter-context-config.py.tpl"
INSTANCE_TEMPLATE = "filter-context-instance.py.tpl"
CLASS_NAME = "FilterQlContextConfig"


class FilterContextGenerator:
    """Accumulates ``@bean`` factories and renders them into one module.

    Every :meth:`register` call adds a block; blocks are not de-duplicated.
    Direct properties map to their field name; computed properties map to a
    ``PredicateResolverMapping`` calling the provider routine, statically or
    through the ``InstanceResolver`` with the configured instance key.
    """

    def __init__(self, engine: TemplateEngine | None = None) -> None:
        self._engine = engine or TemplateEngine()
        self._imports = self._new_imports()
        self._blocks: list[str] = []

    @property
    def block_count(self) -> int:
        return len(self._blocks)

    def register(
        self,
        package_name: str,
        projection_qualified_name: str,
        fields: Sequence[FieldMetadata],
        entity_type_name: str,
    ) -> None:
        """Add the factory block of one projection.

        Args:
            package_name: Module holding the projection.
            projection_qualified_name: ``module.ClassName`` of the projection.
            fields: Discovered properties, in order.
            entity_type_name: Qualified name of the backing entity.

        Raises:
            TemplateException: If the block template cannot be rendered;
                no block is added in that case.
        """
        projection_name = simple_name(projection_qualified_name)
        ref_module = reference_module_for(package_name, projection_name)
        ref_type = self._imports.add(ref_module, f"{projection_name}Ref")
        entity_type = self._imports.add_qualified(entity_type_name)

        cases = ""
        needs_resolver = False
        for f in fields:
            cases += f"            if ref is {ref_type}.{f.reference_name}:\n"
            details = f.computed
            if details is None:
                cases += f'                return "{f.source_name}"\n'
                continue
            provider = self._imports.add_qualified(details.provider_type_name)
            if details.is_static:
                call = f"{provider}.{f.source_name}(op, args)"
            else:
                needs_resolver = True
                key = "None" if details.provider_instance_key is None else repr(details.provider_instance_key)
                call = f'invoke(instance_resolver, {provider}, {key}, "{f.source_name}", op, args)'
            cases += (
                "                return PredicateResolverMapping(\n"
                f"                    lambda op, args: {call}\n"
                "                )\n"
            )

        block = self._engine.process(
            self._engine.load_template(INSTANCE_TEMPLATE),
            {
                "bean_suffix": snake_case(projection_name),
                "resolver_parameter": ", instance_resolver: InstanceResolver" if needs_resolver else "",
                "ref_type": ref_type,
                "entity_type": entity_type,
                "cases": cases,
            },
        )
        self._blocks.append(block)

    def generate(self) -> str:
        """Render the module containing every registered block."""
        source = self._engine.process(
            self._engine.load_template(CONFIG_TEMPLATE),
            {
                "class_name": CLASS_NAME,
                "imports": self._imports.render(),
                "contexts": "".join(self._blocks),
            },
        )
        return source.rstrip("\n") + "\n"

    @staticmethod
    def _new_imports() -> ImportTracker:
        imports = ImportTracker()
        imports.reserve("filterql.api", "FilterContext", "InstanceResolver", "PredicateResolverMapping", "invoke")
        imports.reserve("filterql.container", "bean", "configuration")
        imports.reserve("__generated__", CLASS_NAME)
        return imports
