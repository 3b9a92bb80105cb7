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
"""Tests for filter requests and result pages."""

import pytest

from filterql.api import FilterDefinition, FilterRequest, Op, PaginatedData, Pagination, PaginationInfo
from filterql.kernel.exceptions import UnsupportedOperatorError
from filterql_samples.person_dto_ref import PersonDTORef


class TestPagination:
    def test_offset(self):
        assert Pagination(page=3, size=10).offset == 20

    @pytest.mark.parametrize(("page", "size"), [(0, 10), (1, 0)])
    def test_rejects_non_positive(self, page, size):
        with pytest.raises(ValueError):
            Pagination(page=page, size=size)


class TestFilterDefinition:
    def test_accepts_supported_operator(self):
        definition = FilterDefinition(PersonDTORef.USERNAME, Op.MATCHES, "ad%")
        assert definition.value == "ad%"

    def test_rejects_unsupported_operator(self):
        with pytest.raises(UnsupportedOperatorError, match="GT"):
            FilterDefinition(PersonDTORef.USERNAME, Op.GT, 1)

    def test_plain_references_are_not_checked(self):
        assert FilterDefinition("anything", Op.GT, 1).operator is Op.GT


class TestFilterRequest:
    def test_filters_are_read_only(self):
        request = FilterRequest({"name": FilterDefinition(PersonDTORef.USERNAME, Op.EQ, "bob")})
        with pytest.raises(TypeError):
            request.filters["other"] = None  # type: ignore[index]

    def test_with_filter_returns_copy(self):
        request = FilterRequest()
        updated = request.with_filter("active", FilterDefinition(PersonDTORef.ACTIVE, Op.EQ, True))
        assert dict(request.filters) == {}
        assert list(updated.filters) == ["active"]
        assert updated.combine_with == ""

    def test_with_filter_extends_expression(self):
        request = FilterRequest(
            {
                "a": FilterDefinition(PersonDTORef.USERNAME, Op.EQ, "bob"),
                "b": FilterDefinition(PersonDTORef.EMAIL, Op.EQ, "bob@example.com"),
            },
            combine_with="a | b",
        )
        updated = request.with_filter("tenant", FilterDefinition(PersonDTORef.HAS_ORG, Op.EQ, True))
        assert updated.combine_with == "(a | b) & tenant"

    def test_with_pagination(self):
        request = FilterRequest().with_pagination(Pagination(page=2))
        assert request.pagination.offset == 20


class TestPaginationInfo:
    def test_total_pages(self):
        assert PaginationInfo(page=1, size=20, total=45).total_pages == 3
        assert PaginationInfo(page=1, size=20, total=0).total_pages == 0

    def test_navigation(self):
        info = PaginationInfo(page=2, size=20, total=45)
        assert info.has_next
        assert info.has_previous
        assert not PaginationInfo(page=3, size=20, total=45).has_next


class TestPaginatedData:
    def test_map_keeps_pagination(self):
        info = PaginationInfo(page=1, size=2, total=2)
        page = PaginatedData(data=[1, 2], pagination=info).map(str)
        assert page.data == ["1", "2"]
        assert page.pagination is info
