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
"""Tests for search controller generation."""

from __future__ import annotations

from typing import Any

import pytest

from filterql.api import Exposure, FilterRequest, MethodRef, PaginatedData, Strategy
from filterql.processor.diagnostics import Diagnostics
from filterql.processor.generator.controller import CLASS_NAME, FilterControllerGenerator
from filterql.processor.metadata import ProjectionDescriptor
from filterql.processor.symbols import ReflectionSymbolQuery
from filterql.web import RouteInfo, routes_of
from filterql_samples.address_dto import AddressDTO
from filterql_samples.person_dto import PersonDTO
from filterql_samples.person_dto_ref import PersonDTORef

PIPES = "filterql_samples.pipes.UserPipes"


class PersonHandlers:
    def as_list(self, req: FilterRequest[PersonDTORef]) -> list[PersonDTO]:
        return []

    def as_page(self, req: FilterRequest[PersonDTORef]) -> PaginatedData[PersonDTO]:
        raise NotImplementedError

    @staticmethod
    def custom(req: FilterRequest[PersonDTORef]) -> dict[str, int]:
        return {}

    def untyped(self, req: FilterRequest[PersonDTORef]):
        return None


@pytest.fixture
def diagnostics():
    return Diagnostics()


@pytest.fixture
def generator(diagnostics):
    return FilterControllerGenerator(ReflectionSymbolQuery(), diagnostics)


@pytest.fixture
def person():
    return ProjectionDescriptor(PersonDTO, "filterql_samples.entities.Person", ())


@pytest.fixture
def address():
    return ProjectionDescriptor(AddressDTO, "filterql_samples.entities.Address", ())


def _register_samples(generator, person, address):
    assert generator.register(person, PersonDTO.__filterql_exposure__)
    assert generator.register(address, AddressDTO.__filterql_exposure__)


class TestSampleEndpoints:
    def test_pipes_run_in_order_before_search(self, generator, person, address, diagnostics):
        _register_samples(generator, person, address)
        assert (
            '    @post_mapping("/api/v1/users/search")\n'
            "    def search_person_dto(self, req: Body[FilterRequest[PersonDTORef]]) -> PaginatedData[dict[str, Any]]:\n"
            "        req = UserPipes.tenant_isolation(req)\n"
            "        req = UserPipes.soft_delete(req)\n"
            "        req = self.instance_resolver.resolve(UserPipes, None).active_users_only(req)\n"
            "        return self.search_service.search(PersonDTORef, req)\n"
        ) in generator.generate()
        assert not diagnostics.has_errors

    def test_handler_replaces_search(self, generator, person, address):
        _register_samples(generator, person, address)
        assert (
            '    @post_mapping("/api/v1/addresses/search")\n'
            "    def search_address_dto(self, req: Body[FilterRequest[AddressDTORef]]) -> PaginatedData[AddressDTO]:\n"
            "        return self.instance_resolver.resolve(AdminRightResolver, None).handle_address_search(req)\n"
        ) in generator.generate()

    def test_imports(self, generator, person, address):
        _register_samples(generator, person, address)
        source = generator.generate()
        assert "from filterql_samples.person_dto_ref import PersonDTORef\n" in source
        assert "from filterql_samples.pipes import UserPipes\n" in source
        assert "from filterql_samples.handlers import AdminRightResolver\n" in source
        assert "from filterql_samples.address_dto import AddressDTO\n" in source

    def test_generated_module_declares_routes(self, generator, person, address):
        _register_samples(generator, person, address)
        namespace: dict = {"__name__": "generated_controller"}
        exec(compile(generator.generate(), "<generated>", "exec"), namespace)
        assert routes_of(namespace[CLASS_NAME]) == [
            ("search_person_dto", RouteInfo("POST", "/api/v1/users/search")),
            ("search_address_dto", RouteInfo("POST", "/api/v1/addresses/search")),
        ]


class TestDefaults:
    def test_plain_exposure(self, generator, person):
        assert generator.register(person, Exposure())
        source = generator.generate()
        assert '    @post_mapping("/person-dto/search")\n' in source
        assert "        return self.search_service.search(PersonDTORef, req)\n" in source

    def test_paginated_without_handler(self, generator, person):
        generator.register(person, Exposure("people", strategy=Strategy.PAGINATED))
        assert "-> PaginatedData[PersonDTO]:" in generator.generate()

    def test_list_without_handler_unwraps_page(self, generator, person):
        generator.register(person, Exposure("people", strategy=Strategy.LIST))
        source = generator.generate()
        assert "-> list[PersonDTO]:" in source
        assert "        return self.search_service.search(PersonDTORef, req).data\n" in source

    def test_empty_controller(self, generator):
        source = generator.generate()
        assert f"class {CLASS_NAME}:" in source
        assert source.endswith("        self.instance_resolver = instance_resolver\n")


class TestHandlers:
    def test_list_handler(self, generator, person, diagnostics):
        exposure = Exposure("people", strategy=Strategy.LIST, handler=MethodRef("as_list", PersonHandlers))
        assert generator.register(person, exposure)
        source = generator.generate()
        assert "-> list[PersonDTO]:" in source
        assert "        return self.instance_resolver.resolve(PersonHandlers, None).as_list(req)\n" in source
        assert not diagnostics.has_errors

    def test_list_strategy_rejects_page_handler(self, generator, person, diagnostics):
        exposure = Exposure("people", strategy=Strategy.LIST, handler=MethodRef("as_page", PersonHandlers))
        assert not generator.register(person, exposure)
        assert generator.endpoint_count == 0
        assert "for strategy LIST" in diagnostics.errors[0].message

    def test_custom_handler_return_type(self, generator, person):
        exposure = Exposure("people", strategy=Strategy.CUSTOM, handler=MethodRef("custom", PersonHandlers))
        generator.register(person, exposure)
        source = generator.generate()
        assert "-> dict[str, int]:" in source
        assert "        return PersonHandlers.custom(req)\n" in source

    def test_custom_handler_without_annotation(self, generator, person):
        exposure = Exposure("people", strategy=Strategy.CUSTOM, handler=MethodRef("untyped", PersonHandlers))
        generator.register(person, exposure)
        assert "-> Any:" in generator.generate()

    def test_missing_handler_omits_endpoint(self, generator, person, diagnostics):
        exposure = Exposure("people", handler=MethodRef("missing", PersonHandlers))
        assert not generator.register(person, exposure)
        assert "def search_person_dto" not in generator.generate()
        assert "Invalid handler 'missing'" in diagnostics.errors[0].message

    def test_dropped_endpoint_leaves_no_imports(self, generator, person):
        exposure = Exposure(
            "people",
            pipes=(MethodRef("soft_delete", PIPES),),
            handler=MethodRef("missing", PersonHandlers),
        )
        assert not generator.register(person, exposure)
        source = generator.generate()
        assert "PersonDTORef" not in source
        assert "UserPipes" not in source
        assert "PersonHandlers" not in source

    def test_unresolvable_handler_type(self, generator, person, diagnostics):
        exposure = Exposure("people", handler=MethodRef("handle", "nowhere.Handlers"))
        assert not generator.register(person, exposure)
        assert "nowhere.Handlers" in diagnostics.errors[0].message


class TestPipes:
    def test_invalid_pipe_is_left_out(self, generator, person, diagnostics):
        exposure = Exposure(
            "people",
            pipes=(MethodRef("soft_delete", PIPES), MethodRef("count_filters", PIPES)),
        )
        assert generator.register(person, exposure)
        source = generator.generate()
        assert "        req = UserPipes.soft_delete(req)\n" in source
        assert "count_filters" not in source
        assert len(diagnostics.errors) == 1
        assert diagnostics.errors[0].message.startswith("Invalid pipe 'count_filters'")

    def test_unresolvable_reference_type(self, generator, diagnostics):
        class Unreferenced:
            pass

        descriptor = ProjectionDescriptor(Unreferenced, "filterql_samples.entities.Person", ())
        exposure = Exposure(pipes=(MethodRef("soft_delete", PIPES),))
        assert not generator.register(descriptor, exposure)
        assert diagnostics.errors[0].message.startswith("Cannot validate endpoint 'search_unreferenced'")


class TestDuplicates:
    def test_identical_endpoint_added_once(self, generator, person, address):
        _register_samples(generator, person, address)
        assert not generator.register(person, PersonDTO.__filterql_exposure__)
        assert generator.endpoint_count == 2
        assert generator.generate().count("def search_person_dto(") == 1

    def test_method_name_clash_is_reported(self, generator, person, address, diagnostics):
        assert generator.register(person, Exposure("people", endpoint_name="search"))
        assert not generator.register(address, Exposure("addresses", endpoint_name="search"))
        assert generator.endpoint_count == 1
        assert diagnostics.errors[0].message == (
            "Endpoint method 'search' is already generated for filterql_samples.person_dto.PersonDTO"
        )
