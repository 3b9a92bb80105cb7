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
"""filterql declaration API and the runtime types used by generated code."""

from filterql.api.context import FilterContext
from filterql.api.exposure import Exposure, MethodRef, Strategy, exposure, exposure_of
from filterql.api.op import Op
from filterql.api.page import PaginatedData, PaginationInfo
from filterql.api.predicate import PredicateResolver, PredicateResolverMapping
from filterql.api.projection import (
    ExposedAs,
    NotFilterable,
    Provider,
    exposed_as,
    is_projection,
    not_filterable,
    projection,
    projection_config,
)
from filterql.api.registry import DirectMapping, ProjectionMetadata, ProjectionRegistry
from filterql.api.request import FilterDefinition, FilterRequest, Pagination
from filterql.api.resolver import InstanceResolver, invoke
from filterql.api.service import SearchService

__all__ = [
    "DirectMapping",
    "ExposedAs",
    "Exposure",
    "FilterContext",
    "FilterDefinition",
    "FilterRequest",
    "InstanceResolver",
    "MethodRef",
    "NotFilterable",
    "Op",
    "PaginatedData",
    "Pagination",
    "PaginationInfo",
    "PredicateResolver",
    "PredicateResolverMapping",
    "ProjectionMetadata",
    "ProjectionRegistry",
    "Provider",
    "SearchService",
    "Strategy",
    "exposed_as",
    "exposure",
    "exposure_of",
    "invoke",
    "is_projection",
    "not_filterable",
    "projection",
    "projection_config",
]
