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
"""Generator configuration properties."""

from __future__ import annotations

from dataclasses import dataclass

from filterql.core.config import config_properties


@config_properties(prefix="filterql.generator")
@dataclass
class GeneratorProperties:
    """Configuration for source generation (filterql.generator.*).

    Attributes:
        output_dir: Source root the generated modules are written under.
            Reference types land next to their projection, so this is
            normally the root the projection packages are imported from.
        base_package: Package holding the registration and controller modules.
        context_module: Module name of the registration module.
        controller_module: Module name of the request-handler module.
    """

    output_dir: str = "."
    base_package: str = "filterql_generated"
    context_module: str = "context_config"
    controller_module: str = "controller"

    @property
    def context_module_name(self) -> str:
        return f"{self.base_package}.{self.context_module}"

    @property
    def controller_module_name(self) -> str:
        return f"{self.base_package}.{self.controller_module}"
