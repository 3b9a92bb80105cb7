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
"""Tests for @projection, @exposed_as and @exposure declarations."""

from filterql.api import (
    ExposedAs,
    MethodRef,
    Op,
    Provider,
    Strategy,
    exposed_as,
    exposure,
    exposure_of,
    is_projection,
    projection,
    projection_config,
)
from filterql.api.projection import tags_of
from filterql_samples.address_dto import AddressDTO
from filterql_samples.entities import Person
from filterql_samples.person_dto import PersonDTO
from filterql_samples.providers import GeometryFields, NameFields, UserTenancyResolvers


class TestProjection:
    def test_sample_is_projection(self):
        assert is_projection(PersonDTO)
        assert not is_projection(Person)
        assert not is_projection("PersonDTO")

    def test_config_records_entity_and_providers(self):
        config = projection_config(PersonDTO)
        assert config is not None
        assert config.from_ is Person
        assert config.providers[1] == Provider(UserTenancyResolvers, name="userTenancyResolvers")

    def test_bare_provider_classes_are_wrapped(self):
        @projection(from_=Person, providers=[NameFields])
        class Inline:
            id: int

        assert projection_config(Inline).providers == (Provider(NameFields),)

    def test_declaration_is_not_inherited(self):
        class Child(AddressDTO):
            pass

        assert not is_projection(Child)
        assert projection_config(Child) is None
        assert exposure_of(Child) is None


class TestExposedAs:
    def test_factory_normalizes_operators(self):
        tag = exposed_as("FULL_NAME", operators=[Op.MATCHES])
        assert tag == ExposedAs("FULL_NAME", (Op.MATCHES,))

    def test_defaults_are_empty(self):
        tag = exposed_as()
        assert tag.value == ""
        assert tag.operators == ()

    def test_decorator_attaches_tag(self):
        tags = tags_of(GeometryFields.address_in_geometry_area)
        assert tags == (ExposedAs("WITHIN_GEOMETRY", (Op.MATCHES,)),)

    def test_untagged_function_has_no_tags(self):
        assert tags_of(UserTenancyResolvers.not_exposed) == ()


class TestExposure:
    def test_reads_sample_exposure(self):
        config = exposure_of(PersonDTO)
        assert config is not None
        assert config.value == "users"
        assert config.base_path == "/api/v1"
        assert config.strategy is Strategy.PROJECTED
        assert [p.value for p in config.pipes] == ["tenant_isolation", "soft_delete", "active_users_only"]
        assert config.handler is None

    def test_handler_reference(self):
        config = exposure_of(AddressDTO)
        assert config.strategy is Strategy.PAGINATED
        assert config.handler == MethodRef("handle_address_search", "filterql_samples.handlers.AdminRightResolver")

    def test_defaults(self):
        @exposure()
        class Bare:
            pass

        config = exposure_of(Bare)
        assert config.value == ""
        assert config.endpoint_name == ""
        assert config.pipes == ()

    def test_method_ref_defaults_to_projection_class(self):
        assert MethodRef("normalize").type is None

    def test_not_exposed(self):
        assert exposure_of(Person) is None
