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
"""Tests for the diagnostics collector."""

from filterql.processor.diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from filterql.processor.symbols import ReflectionSymbolQuery
from filterql_samples.person_dto import PersonDTO
from filterql_samples.providers import GeometryFields


class RecordingLogger:
    def __init__(self):
        self.events = []

    def error(self, event, **kw):
        self.events.append(("error", event, kw))

    def warning(self, event, **kw):
        self.events.append(("warning", event, kw))

    def info(self, event, **kw):
        self.events.append(("info", event, kw))


class TestDiagnostics:
    def test_collects_in_order(self):
        diagnostics = Diagnostics(RecordingLogger())
        diagnostics.warning("first")
        diagnostics.error("second")
        diagnostics.note("third")
        assert [d.kind for d in diagnostics] == [DiagnosticKind.WARNING, DiagnosticKind.ERROR, DiagnosticKind.NOTE]
        assert len(diagnostics) == 3
        assert diagnostics.has_errors
        assert [d.message for d in diagnostics.errors] == ["second"]
        assert [d.message for d in diagnostics.warnings] == ["first"]

    def test_empty(self):
        diagnostics = Diagnostics(RecordingLogger())
        assert not diagnostics.has_errors
        assert diagnostics.entries == []

    def test_mirrors_to_logger(self):
        logger = RecordingLogger()
        diagnostics = Diagnostics(logger)
        diagnostics.error("bad pipe", PersonDTO)
        assert logger.events == [
            ("error", "processor_error", {"message": "bad pipe", "element": "filterql_samples.person_dto.PersonDTO"})
        ]

    def test_describes_members(self):
        diagnostics = Diagnostics(RecordingLogger())
        (member,) = ReflectionSymbolQuery().members_of(GeometryFields)
        diagnostics.error("bad", member)
        assert diagnostics.entries[0].element == "filterql_samples.providers.GeometryFields.address_in_geometry_area"

    def test_str(self):
        assert str(Diagnostic(DiagnosticKind.ERROR, "bad", "app.PersonDTO")) == "ERROR: bad [app.PersonDTO]"
        assert str(Diagnostic(DiagnosticKind.NOTE, "done")) == "NOTE: done"
