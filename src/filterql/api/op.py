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
"""Comparison operators accepted by filterable properties."""

from __future__ import annotations

from enum import Enum


class Op(str, Enum):
    """Comparison operator tag.

    Members are ``str`` subclasses so they serialize as their name in
    request payloads (``{"op": "MATCHES"}``).
    """

    EQ = "EQ"
    NE = "NE"
    GT = "GT"
    GTE = "GTE"
    LT = "LT"
    LTE = "LTE"
    MATCHES = "MATCHES"
    NOT_MATCHES = "NOT_MATCHES"
    IN = "IN"
    NOT_IN = "NOT_IN"
    IS_NULL = "IS_NULL"
    NOT_NULL = "NOT_NULL"
    RANGE = "RANGE"
    NOT_RANGE = "NOT_RANGE"
