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
"""Generates the reference enum listing a projection's filterable properties."""

from __future__ import annotations

from collections.abc import Sequence

from filterql.processor.generator.imports import ImportTracker
from filterql.processor.generator.template_engine import TemplateEngine
from filterql.processor.metadata import FieldMetadata

TEMPLATE = "property-ref.py.tpl"


class ReferenceTypeGenerator:
    """Renders ``property-ref.py.tpl`` for one projection.

    Members follow discovery order. Direct properties report their declared
    type through ``ProjectionRegistry``; computed ones report ``object``.
    """

    def __init__(self, engine: TemplateEngine | None = None) -> None:
        self._engine = engine or TemplateEngine()

    def generate(
        self,
        package_name: str,
        projection_simple_name: str,
        reference_type_name: str,
        fields: Sequence[FieldMetadata],
    ) -> str:
        """Render the reference module.

        Args:
            package_name: Module the projection class is imported from.
            projection_simple_name: Class name of the projection.
            reference_type_name: Name of the generated enum.
            fields: Discovered properties, in order.
        """
        imports = ImportTracker()
        imports.reserve("enum", "Enum")
        imports.reserve("typing", "Any")
        imports.reserve("filterql.api", "Op", "ProjectionRegistry")
        imports.reserve(reference_type_name, reference_type_name)
        projection = imports.add(package_name, projection_simple_name)

        constants = "".join(f'    {f.reference_name} = "{f.reference_name}"\n' for f in fields)

        value_type_body = ""
        if any(not f.is_computed for f in fields):
            value_type_body += f"        pm = ProjectionRegistry.get_metadata_for({projection})\n"
        operators_body = ""
        for f in fields:
            member = f"{reference_type_name}.{f.reference_name}"
            if f.is_computed:
                value_type = "object"
            else:
                value_type = f'pm.get_direct_mapping("{f.source_name}").dto_field_type'
            value_type_body += f"        if self is {member}:\n            return {value_type}\n"
            operators = ", ".join(f"Op.{op.name}" for op in f.operators)
            operators_body += f"        if self is {member}:\n            return frozenset({{{operators}}})\n"

        return self._engine.process(
            self._engine.load_template(TEMPLATE),
            {
                "projection_name": projection,
                "ref_type": reference_type_name,
                "imports": imports.render(),
                "constants": f"\n{constants}" if constants else "",
                "value_type_body": value_type_body,
                "operators_body": operators_body,
            },
        )
