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
"""Exception hierarchy for filterql.

Every error raised by the generator or by the runtime support types derives
from :class:`FilterQLException`, so callers can catch a single base class or
target a specific subtree (templates, processing, filtering).
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FilterQLException(Exception):
    """Base exception for all filterql errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "TEMPLATE_MISSING_VARIABLE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Template Exceptions
# =============================================================================


class TemplateException(FilterQLException):
    """Template loading or rendering failures."""


class TemplateNotFoundError(TemplateException):
    """A bundled template resource does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Template not found: {name}",
            code="TEMPLATE_NOT_FOUND",
            context={"template": name},
        )
        self.name = name


class MissingTemplateVariableError(TemplateException):
    """A placeholder has no entry in the rendering context."""

    def __init__(self, key: str) -> None:
        super().__init__(
            f"Missing template variable: {key}",
            code="TEMPLATE_MISSING_VARIABLE",
            context={"key": key},
        )
        self.key = key


class InvalidTemplateVariableError(TemplateException):
    """A placeholder is bound to ``None`` in the rendering context."""

    def __init__(self, key: str) -> None:
        super().__init__(
            f"Invalid template variable: {key} is None",
            code="TEMPLATE_INVALID_VARIABLE",
            context={"key": key},
        )
        self.key = key


# =============================================================================
# Processing Exceptions
# =============================================================================


class ProcessorException(FilterQLException):
    """Errors raised while discovering projections or generating sources."""


class SignatureValidationError(ProcessorException):
    """A computed property, pipe or handler does not have the required signature."""


class UnresolvableTypeError(ProcessorException):
    """A configured type name cannot be resolved to a class."""

    def __init__(self, name: str, reason: str = "") -> None:
        message = f"Cannot find class: {name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, code="UNRESOLVABLE_TYPE", context={"type": name})
        self.name = name


class InvalidFieldMetadataError(ProcessorException):
    """Field metadata violates one of its invariants."""


# =============================================================================
# Filtering Exceptions
# =============================================================================


class FilterException(FilterQLException):
    """Errors raised by the runtime filtering types used in generated code."""


class UnknownPropertyReferenceError(FilterException):
    """A property reference does not belong to the expected reference type."""


class UnsupportedOperatorError(FilterException):
    """An operator is not allowed on the referenced property."""
