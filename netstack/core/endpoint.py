"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Declarative endpoint description.

An ``Endpoint`` knows two unrelated things: how to build a live request
descriptor and which mock resource stands in for its response. Either may
be absent. Absence is only reported when the Webservice uses it, so
constructing an endpoint never fails.

Example::

    @dataclass(frozen=True)
    class Get(Endpoint):
        user_id: int

        scheme = "https"
        host = "api.example.com"
        mock_name = "user"

        @property
        def path(self):
            return f"/users/{self.user_id}"
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Mapping, Optional, Sequence, Tuple
from urllib.parse import quote, urlencode, urlunsplit

from netstack.exceptions import InvalidRequestError

if TYPE_CHECKING:
    from netstack.core.mock_source import MockSource

QueryItems = Sequence[Tuple[str, object]]

_METHOD_RE = re.compile(r"^[A-Z]+$")
_SUPPORTED_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully resolved request consumed once by a transport."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)


class Endpoint(ABC):
    """
    Base class for endpoint variants.

    Subclasses override the attributes below as plain class attributes or
    properties. ``path`` returning ``None`` means the variant has no live
    request; ``mock_name`` being ``None`` means it has no mock payload.
    """

    scheme: str = "https"
    host: str = ""
    method: str = "GET"
    mock_name: Optional[str] = None
    mock_extension: str = "json"

    @property
    @abstractmethod
    def path(self) -> Optional[str]:
        """Path component, or None when the endpoint has no live request."""
        ...

    @property
    def query_items(self) -> Optional[QueryItems]:
        """Ordered query parameters."""
        return None

    @property
    def headers(self) -> Mapping[str, str]:
        return {}

    @property
    def mock_resource(self) -> Optional[str]:
        """Resource name looked up in a mock source."""
        if not self.mock_name:
            return None
        if not self.mock_extension:
            return self.mock_name
        return f"{self.mock_name}.{self.mock_extension}"

    def url(self) -> str:
        """
        Compose the request URL.

        Query parameters keep their declaration order.

        Raises:
            InvalidRequestError: If scheme, host or path cannot form a URL
        """
        path = self.path
        if path is None:
            raise InvalidRequestError(
                f"{type(self).__name__} does not describe a live request"
            )
        scheme = (self.scheme or "").lower()
        if scheme not in _SUPPORTED_SCHEMES:
            raise InvalidRequestError(
                f"{type(self).__name__}: unsupported scheme '{self.scheme}'"
            )
        if not self.host or any(ch in self.host for ch in "/?# "):
            raise InvalidRequestError(
                f"{type(self).__name__}: invalid host '{self.host}'"
            )

        if not path.startswith("/"):
            path = "/" + path

        query = ""
        items = self.query_items
        if items:
            query = urlencode([(str(name), str(value)) for name, value in items])

        return urlunsplit((scheme, self.host, quote(path, safe="/%:@!$&'()*+,;=-._~"), query, ""))

    def build_request(self) -> RequestDescriptor:
        """
        Materialize the request descriptor.

        A pure function of the variant's fields.

        Returns:
            RequestDescriptor for the transport

        Raises:
            InvalidRequestError: If the descriptor cannot be built
        """
        method = (self.method or "").upper()
        if not _METHOD_RE.match(method):
            raise InvalidRequestError(
                f"{type(self).__name__}: invalid HTTP method '{self.method}'"
            )

        headers: Dict[str, str] = {}
        for name, value in self.headers.items():
            value = str(value)
            if not name or any(ch in name for ch in "\r\n:") or "\r" in value or "\n" in value:
                raise InvalidRequestError(
                    f"{type(self).__name__}: invalid header '{name}'"
                )
            headers[name] = value

        return RequestDescriptor(method=method, url=self.url(), headers=headers)

    def mock_payload(self, source: "MockSource") -> Optional[bytes]:
        """
        Look up the pre-recorded response body for this endpoint.

        Args:
            source: Mock source to read from

        Returns:
            Payload bytes, or None when no mock is registered
        """
        resource = self.mock_resource
        if resource is None:
            return None
        return source.load(resource)
