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
"""Source generators for reference types, filter contexts and search endpoints."""

from filterql.processor.generator.context_config import FilterContextGenerator
from filterql.processor.generator.controller import FilterControllerGenerator
from filterql.processor.generator.imports import ImportTracker
from filterql.processor.generator.reference_type import ReferenceTypeGenerator
from filterql.processor.generator.template_engine import TemplateEngine

__all__ = [
    "FilterContextGenerator",
    "FilterControllerGenerator",
    "ImportTracker",
    "ReferenceTypeGenerator",
    "TemplateEngine",
]
