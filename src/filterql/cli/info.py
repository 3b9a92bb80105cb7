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
"""'filterql info' — List the projections of a package and their properties."""

from __future__ import annotations

import click
from rich.table import Table

from filterql.api.exposure import exposure_of
from filterql.cli.console import console, print_diagnostics
from filterql.cli.generate import collect_projections
from filterql.kernel.exceptions import ProcessorException
from filterql.kernel.loading import qualified_name
from filterql.processor.analyzer import FieldAnalyzer
from filterql.processor.diagnostics import Diagnostics
from filterql.processor.metadata import ProjectionDescriptor
from filterql.processor.symbols import ReflectionSymbolQuery


@click.command()
@click.argument("packages", nargs=-1, required=True)
def info_command(packages: tuple[str, ...]) -> None:
    """Show the filterable properties of the projections in PACKAGES."""
    diagnostics = Diagnostics()
    analyzer = FieldAnalyzer(ReflectionSymbolQuery(), diagnostics)

    projections = collect_projections(packages)
    if not projections:
        console.print(f"[warning]No projections found in {', '.join(packages)}[/warning]")
        return

    for projection in projections:
        try:
            fields = analyzer.analyze_projection(projection)
        except ProcessorException as exc:
            diagnostics.error(str(exc), projection)
            continue
        descriptor = ProjectionDescriptor(projection, "", tuple(fields))
        exposed = "exposed" if exposure_of(projection) is not None else "not exposed"

        table = Table(
            title=f"\n{qualified_name(projection)} [dim]({descriptor.reference_type_name}, {exposed})[/dim]",
            border_style="dim",
        )
        table.add_column("Reference", style="info")
        table.add_column("Source")
        table.add_column("Kind")
        table.add_column("Operators", style="dim")
        for f in fields:
            source = f.source_name if f.computed is None else f"{f.computed.provider_type_name}.{f.source_name}"
            table.add_row(f.reference_name, source, f.kind.value, ", ".join(op.value for op in f.operators))
        console.print(table)

    print_diagnostics(diagnostics)
