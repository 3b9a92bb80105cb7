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
"""Discovery of filterable projections and generation of their sources."""

from filterql.processor.analyzer import FieldAnalyzer
from filterql.processor.diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from filterql.processor.metadata import ComputedFieldDetails, FieldKind, FieldMetadata, ProjectionDescriptor
from filterql.processor.processor import ExposureProcessor
from filterql.processor.scanner import scan_projections
from filterql.processor.supported_types import DefaultOperatorStrategy, SupportedType
from filterql.processor.symbols import Member, MemberKind, ReflectionSymbolQuery, SymbolQuery
from filterql.processor.writer import FileSourceWriter, MemorySourceWriter, SourceWriter

__all__ = [
    "ComputedFieldDetails",
    "DefaultOperatorStrategy",
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
    "ExposureProcessor",
    "FieldAnalyzer",
    "FieldKind",
    "FieldMetadata",
    "FileSourceWriter",
    "Member",
    "MemberKind",
    "MemorySourceWriter",
    "ProjectionDescriptor",
    "ReflectionSymbolQuery",
    "SourceWriter",
    "SupportedType",
    "SymbolQuery",
    "scan_projections",
]
