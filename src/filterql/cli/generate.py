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
"""'filterql generate' — Generate reference types, filter contexts and endpoints."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from filterql.cli.console import console, print_diagnostics, print_written
from filterql.config.properties.generator import GeneratorProperties
from filterql.core.config import Config
from filterql.logging.structlog_adapter import StructlogAdapter
from filterql.processor.processor import ExposureProcessor
from filterql.processor.scanner import scan_projections
from filterql.processor.writer import FileSourceWriter


def load_config(config_path: str | None) -> Config:
    """Load the given config file, or the filterql.yaml sources of the working directory."""
    if config_path:
        return Config.from_file(config_path)
    return Config.from_sources(Path.cwd())


def collect_projections(packages: tuple[str, ...]) -> list[type]:
    """Scan every package, keeping the first occurrence of each projection."""
    projections: list[type] = []
    for package in packages:
        try:
            found = scan_projections(package)
        except ImportError as exc:
            console.print(f"[error]Cannot import package '{package}':[/error] {exc}")
            raise SystemExit(1) from None
        projections.extend(p for p in found if p not in projections)
    return projections


@click.command()
@click.argument("packages", nargs=-1, required=True)
@click.option("--output", "-o", type=click.Path(file_okay=False), default=None, help="Source root to write into.")
@click.option("--base-package", default=None, help="Package of the registration and controller modules.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML or TOML configuration file.",
)
def generate_command(
    packages: tuple[str, ...],
    output: str | None,
    base_package: str | None,
    config_path: str | None,
) -> None:
    """Generate sources for the projections found in PACKAGES."""
    config = load_config(config_path)
    StructlogAdapter().configure(config)

    props = config.bind(GeneratorProperties)
    if output:
        props.output_dir = output
    if base_package:
        props.base_package = base_package

    output_root = Path(props.output_dir).resolve()
    output_root.mkdir(parents=True, exist_ok=True)
    # generated reference types must be importable for pipe and handler checks
    if str(output_root) not in sys.path:
        sys.path.insert(0, str(output_root))

    projections = collect_projections(packages)
    if not projections:
        console.print(f"[warning]No projections found in {', '.join(packages)}[/warning]")
        return

    console.print(f"[info]Processing {len(projections)} projection(s)[/info]")
    processor = ExposureProcessor(FileSourceWriter(output_root), properties=props)
    diagnostics = processor.run(projections)

    print_written(processor.written)
    print_diagnostics(diagnostics)

    if diagnostics.has_errors:
        console.print(f"[error]Generation finished with {len(diagnostics.errors)} error(s)[/error]")
        raise SystemExit(1)
    console.print("[success]Generation complete[/success]")
