"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Unit tests for endpoints and request descriptors.
"""

from dataclasses import FrozenInstanceError, dataclass
from typing import Optional

import pytest

from netstack.core.endpoint import Endpoint, RequestDescriptor
from netstack.core.mock_source import InMemoryMockSource
from netstack.exceptions import InvalidRequestError
from netstack.users import AllUsers, GetUser, UserEndpoint


@dataclass(frozen=True)
class SearchEndpoint(Endpoint):
    term: str
    page: int = 1

    host = "api.example.com"
    method = "post"

    @property
    def path(self) -> str:
        return "search/items"

    @property
    def query_items(self):
        return [("q", self.term), ("page", self.page), ("a", "z")]

    @property
    def headers(self):
        return {"Accept": "application/json", "X-Page": self.page}


@dataclass(frozen=True)
class MockOnlyEndpoint(Endpoint):
    mock_name = "fixture"
    mock_extension = "txt"

    @property
    def path(self) -> Optional[str]:
        return None


class TestUserEndpoints:
    def test_all_builds_descriptor(self):
        descriptor = UserEndpoint.All().build_request()
        assert descriptor == RequestDescriptor(
            method="GET",
            url="http://www.mocky.io/v2/58177efc1000008c01cc7fc2",
            headers={},
        )

    def test_get_carries_user_id_query(self):
        descriptor = UserEndpoint.Get(user_id=10).build_request()
        assert descriptor.method == "GET"
        assert descriptor.url == "http://www.mocky.io/v2/58177ddc1000008901cc7fbf?userId=10"

    def test_variants_are_exposed_on_family(self):
        assert UserEndpoint.All is AllUsers
        assert UserEndpoint.Get is GetUser

    def test_building_is_deterministic(self):
        endpoint = GetUser(user_id=7)
        assert endpoint.build_request() == endpoint.build_request()
        assert GetUser(user_id=7).build_request() == endpoint.build_request()

    def test_endpoints_are_immutable_values(self):
        endpoint = GetUser(user_id=1)
        with pytest.raises(FrozenInstanceError):
            endpoint.user_id = 2  # type: ignore[misc]
        assert GetUser(user_id=1) == endpoint

    def test_mock_resources(self):
        assert AllUsers().mock_resource == "users.json"
        assert GetUser(user_id=10).mock_resource == "user.json"


class TestEndpointBuilding:
    def test_query_order_is_preserved(self):
        url = SearchEndpoint(term="red shoes", page=2).url()
        assert url == "https://api.example.com/search/items?q=red+shoes&page=2&a=z"

    def test_method_is_normalized_and_headers_stringified(self):
        descriptor = SearchEndpoint(term="x", page=3).build_request()
        assert descriptor.method == "POST"
        assert descriptor.headers == {"Accept": "application/json", "X-Page": "3"}

    def test_missing_path_is_invalid_request(self):
        with pytest.raises(InvalidRequestError, match="does not describe a live request"):
            MockOnlyEndpoint().build_request()

    def test_construction_never_fails(self):
        """Problems only surface when the descriptor is built."""

        @dataclass(frozen=True)
        class Broken(Endpoint):
            scheme = "ftp"
            host = "files.example.com"

            @property
            def path(self):
                return "/x"

        endpoint = Broken()
        with pytest.raises(InvalidRequestError, match="unsupported scheme"):
            endpoint.build_request()

    @pytest.mark.parametrize("host", ["", "bad host", "example.com/path"])
    def test_invalid_host(self, host):
        @dataclass(frozen=True)
        class HostEndpoint(Endpoint):
            @property
            def path(self):
                return "/"

        HostEndpoint.host = host
        with pytest.raises(InvalidRequestError, match="invalid host"):
            HostEndpoint().build_request()

    def test_invalid_method(self):
        @dataclass(frozen=True)
        class WeirdMethod(Endpoint):
            host = "example.com"
            method = "GET /"

            @property
            def path(self):
                return "/"

        with pytest.raises(InvalidRequestError, match="invalid HTTP method"):
            WeirdMethod().build_request()

    def test_header_injection_rejected(self):
        @dataclass(frozen=True)
        class InjectedHeader(Endpoint):
            host = "example.com"

            @property
            def path(self):
                return "/"

            @property
            def headers(self):
                return {"X-Test": "a\r\nInjected: 1"}

        with pytest.raises(InvalidRequestError, match="invalid header"):
            InjectedHeader().build_request()

    def test_no_query_means_no_question_mark(self):
        assert "?" not in AllUsers().url()


class TestMockPayload:
    def test_payload_found(self):
        source = InMemoryMockSource({"user.json": b"{}"})
        assert GetUser(user_id=10).mock_payload(source) == b"{}"

    def test_payload_absent(self):
        assert GetUser(user_id=10).mock_payload(InMemoryMockSource()) is None

    def test_custom_extension(self):
        source = InMemoryMockSource({"fixture.txt": "hello"})
        assert MockOnlyEndpoint().mock_payload(source) == b"hello"

    def test_endpoint_without_mock_name(self):
        source = InMemoryMockSource({"None.json": b"{}"})
        assert SearchEndpoint(term="x").mock_resource is None
        assert SearchEndpoint(term="x").mock_payload(source) is None
