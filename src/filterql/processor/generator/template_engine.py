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
"""Strict ``${name}`` substitution over bundled source templates.

Templates are plain text resources shipped in ``filterql/processor/templates``
and located through a Jinja2 :class:`~jinja2.PackageLoader`. Rendering does
not use Jinja2 syntax: every ``${name}`` whose name is made of letters, digits
and underscores is a placeholder. Each one must be bound to a non-``None``
value, and values are inserted verbatim.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, PackageLoader, TemplateNotFound

from filterql.kernel.exceptions import (
    InvalidTemplateVariableError,
    MissingTemplateVariableError,
    TemplateNotFoundError,
)

PLACEHOLDER_PATTERN = re.compile(r"\$\{([A-Za-z0-9_]+)\}")


def _get_env() -> Environment:
    """Create the environment locating the bundled templates."""
    return Environment(
        loader=PackageLoader("filterql.processor", "templates"),
        keep_trailing_newline=True,
    )


class TemplateEngine:
    """Loads templates and fills their placeholders.

    Example::

        engine = TemplateEngine()
        engine.process("Hello ${name}!", {"name": "World"})  # "Hello World!"
    """

    def __init__(self, env: Environment | None = None) -> None:
        self._env = env or _get_env()

    def load_template(self, name: str) -> str:
        """Return the raw text of the bundled template *name*.

        Raises:
            TemplateNotFoundError: If no such template is bundled.
        """
        loader = self._env.loader
        if loader is None:
            raise TemplateNotFoundError(name)
        try:
            source, _filename, _uptodate = loader.get_source(self._env, name)
        except TemplateNotFound:
            raise TemplateNotFoundError(name) from None
        return source

    def process(self, template: str, context: Mapping[str, Any] | None = None) -> str:
        """Replace every ``${key}`` in *template* with ``str(context[key])``.

        Raises:
            MissingTemplateVariableError: A placeholder key is not in *context*.
            InvalidTemplateVariableError: A placeholder key is bound to ``None``.
        """

        def replace(match: re.Match[str]) -> str:
            key = match.group(1)
            if context is None or key not in context:
                raise MissingTemplateVariableError(key)
            value = context[key]
            if value is None:
                raise InvalidTemplateVariableError(key)
            return str(value)

        return PLACEHOLDER_PATTERN.sub(replace, template)

    render = process
