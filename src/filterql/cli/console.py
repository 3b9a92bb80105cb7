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
"""Shared Rich console for CLI output."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from filterql.processor.diagnostics import Diagnostic, DiagnosticKind

FILTERQL_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "filterql": "bold magenta",
    "dim": "dim",
})

console = Console(theme=FILTERQL_THEME)

_KIND_STYLES = {
    DiagnosticKind.ERROR: "error",
    DiagnosticKind.WARNING: "warning",
    DiagnosticKind.NOTE: "info",
}


def print_banner() -> None:
    """Print the filterql banner."""
    from filterql import __version__

    console.print("[filterql]filterql[/filterql] [dim]:: projection filter generator ::[/dim]")
    console.print(f"  [dim](v{__version__}) | Apache 2.0 License[/dim]\n")


def print_written(paths: Iterable[str]) -> None:
    """Print a table of the generated modules."""
    table = Table(title="Generated", border_style="dim")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Location", style="info")
    for index, path in enumerate(paths, start=1):
        table.add_row(str(index), path)
    console.print(table)


def print_diagnostics(diagnostics: Iterable[Diagnostic]) -> None:
    """Print diagnostics, one table row each; nothing when there are none."""
    entries = list(diagnostics)
    if not entries:
        return
    table = Table(title="Diagnostics", border_style="dim", show_lines=True)
    table.add_column("Kind", min_width=7)
    table.add_column("Message", min_width=30)
    table.add_column("Element", style="dim")
    for entry in entries:
        style = _KIND_STYLES[entry.kind]
        table.add_row(f"[{style}]{entry.kind.value}[/{style}]", entry.message, entry.element or "")
    console.print(table)
