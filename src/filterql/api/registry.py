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
"""Persistence-mapping registry consulted by generated reference types."""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Annotated, Any, ClassVar, get_args, get_origin, get_type_hints

from filterql.api.projection import projection_config
from filterql.kernel.exceptions import UnknownPropertyReferenceError
from filterql.kernel.loading import as_class


@dataclass(frozen=True)
class DirectMapping:
    """Maps a projection field onto an entity attribute path."""

    path: str
    dto_field_type: Any


@dataclass(frozen=True)
class ProjectionMetadata:
    """Entity class and direct field mappings of one projection."""

    entity_class: type
    direct_mappings: Mapping[str, DirectMapping] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "direct_mappings", MappingProxyType(dict(self.direct_mappings)))

    def get_direct_mapping(self, name: str) -> DirectMapping:
        try:
            return self.direct_mappings[name]
        except KeyError:
            raise UnknownPropertyReferenceError(
                f"No direct mapping for field '{name}' on {self.entity_class.__name__} projection",
                code="UNKNOWN_DIRECT_MAPPING",
                context={"field": name},
            ) from None


class ProjectionRegistry:
    """Class-level registry of :class:`ProjectionMetadata` by projection class.

    Metadata is registered explicitly with :meth:`register`, or derived on
    first lookup from the ``@projection`` declaration: the entity is the
    declared ``from_`` class and every own annotated field maps onto the
    entity attribute of the same name.
    """

    _metadata: ClassVar[dict[type, ProjectionMetadata]] = {}

    @classmethod
    def register(cls, projection: type, metadata: ProjectionMetadata) -> None:
        cls._metadata[projection] = metadata

    @classmethod
    def get_metadata_for(cls, projection: type) -> ProjectionMetadata:
        metadata = cls._metadata.get(projection)
        if metadata is None:
            metadata = cls._derive(projection)
            cls._metadata[projection] = metadata
        return metadata

    @classmethod
    def clear(cls) -> None:
        cls._metadata.clear()

    @staticmethod
    def _derive(projection: type) -> ProjectionMetadata:
        config = projection_config(projection)
        if config is None:
            raise UnknownPropertyReferenceError(
                f"{projection.__qualname__} is not a registered projection",
                code="UNKNOWN_PROJECTION",
                context={"projection": projection.__qualname__},
            )
        own = inspect.get_annotations(projection)
        hints = get_type_hints(projection, include_extras=True)
        mappings: dict[str, DirectMapping] = {}
        for name in own:
            hint = hints.get(name, Any)
            if get_origin(hint) is ClassVar or name.startswith("_"):
                continue
            if get_origin(hint) is Annotated:
                hint = get_args(hint)[0]
            mappings[name] = DirectMapping(path=name, dto_field_type=hint)
        return ProjectionMetadata(entity_class=as_class(config.from_), direct_mappings=mappings)
