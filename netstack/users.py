"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

User endpoints and model.

Reference endpoint family for the mocky.io user fixtures::

    webservice.request(UserEndpoint.All(), List[User], on_users)
    webservice.mock_request(UserEndpoint.Get(user_id=10), User, on_user)
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from netstack.core.endpoint import Endpoint


class User(BaseModel):
    id: int
    username: str
    email: str


class UserEndpoint(Endpoint):
    """Base of the user endpoint family."""

    scheme = "http"
    host = "www.mocky.io"
    method = "GET"


@dataclass(frozen=True)
class AllUsers(UserEndpoint):
    """List every user."""

    mock_name = "users"

    @property
    def path(self) -> str:
        return "/v2/58177efc1000008c01cc7fc2"


@dataclass(frozen=True)
class GetUser(UserEndpoint):
    """Fetch a single user by id."""

    user_id: int

    mock_name = "user"

    @property
    def path(self) -> str:
        return "/v2/58177ddc1000008901cc7fbf"

    @property
    def query_items(self):
        return [("userId", self.user_id)]


UserEndpoint.All = AllUsers
UserEndpoint.Get = GetUser
