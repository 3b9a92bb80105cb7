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
"""Type classification and default operators for direct projection fields."""

from __future__ import annotations

import datetime
import decimal
import enum
import types
import uuid
from typing import Annotated, Any, Union, get_args, get_origin

from filterql.api.op import Op


class SupportedType(enum.Enum):
    """Category of a field's value type."""

    STRING = "STRING"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    DECIMAL = "DECIMAL"
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIME = "TIME"
    ENUM = "ENUM"
    UUID = "UUID"
    UNKNOWN = "UNKNOWN"

    @property
    def is_numeric(self) -> bool:
        return self in (SupportedType.INTEGER, SupportedType.FLOAT, SupportedType.DECIMAL)

    @property
    def is_temporal(self) -> bool:
        return self in (SupportedType.DATE, SupportedType.DATETIME, SupportedType.TIME)

    @classmethod
    def from_annotation(cls, annotation: Any) -> SupportedType:
        """Classify a field annotation.

        ``Annotated[X, ...]`` and ``Optional[X]`` are unwrapped first. Other
        unions and unresolved (string) annotations are ``UNKNOWN``.
        """
        hint = unwrap(annotation)
        if not isinstance(hint, type):
            return cls.UNKNOWN
        # bool is an int subclass and datetime a date subclass: exact lookup first
        exact = _EXACT_TYPES.get(hint)
        if exact is not None:
            return exact
        if issubclass(hint, enum.Enum):
            return cls.ENUM
        for base, supported in _EXACT_TYPES.items():
            if issubclass(hint, base):
                return supported
        return cls.UNKNOWN


_EXACT_TYPES: dict[type, SupportedType] = {
    str: SupportedType.STRING,
    bool: SupportedType.BOOLEAN,
    int: SupportedType.INTEGER,
    float: SupportedType.FLOAT,
    decimal.Decimal: SupportedType.DECIMAL,
    datetime.datetime: SupportedType.DATETIME,
    datetime.date: SupportedType.DATE,
    datetime.time: SupportedType.TIME,
    uuid.UUID: SupportedType.UUID,
}


def unwrap(annotation: Any) -> Any:
    """Strip ``Annotated`` and a single ``None`` member of a union."""
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation = get_args(annotation)[0]
            continue
        if origin is Union or origin is types.UnionType:
            non_none = [a for a in get_args(annotation) if a is not type(None)]
            if len(non_none) == 1:
                annotation = non_none[0]
                continue
        return annotation


_NULL_CHECKS = (Op.IS_NULL, Op.NOT_NULL)
_EQUALITY = (Op.EQ, Op.NE)
_MEMBERSHIP = (Op.IN, Op.NOT_IN)
_ORDERING = (Op.GT, Op.GTE, Op.LT, Op.LTE, Op.RANGE, Op.NOT_RANGE)


class DefaultOperatorStrategy:
    """Operators attached to a direct field whose tag does not list any."""

    def default_operators(self, supported_type: SupportedType) -> tuple[Op, ...]:
        if supported_type is SupportedType.STRING:
            return _EQUALITY + (Op.MATCHES, Op.NOT_MATCHES) + _MEMBERSHIP + _NULL_CHECKS
        if supported_type.is_numeric or supported_type.is_temporal:
            return _EQUALITY + _ORDERING + _MEMBERSHIP + _NULL_CHECKS
        if supported_type is SupportedType.BOOLEAN:
            return _EQUALITY + _NULL_CHECKS
        if supported_type in (SupportedType.ENUM, SupportedType.UUID):
            return _EQUALITY + _MEMBERSHIP + _NULL_CHECKS
        return _EQUALITY + _NULL_CHECKS
