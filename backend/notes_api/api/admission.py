"""Rate Admission — spends rate budget before FastAPI touches the request.

Invariants:
    - admit_request() runs before body parsing, dependency resolution and auth,
      so malformed bodies and bad tokens still cost budget
    - A denial raises RateLimitedError inside the route, where the global
      NotesApiError handler turns it into the 429 envelope
    - Only routers built with route_class=RateAdmittedRoute are gated
      (health probes are not)

Design Decisions:
    - APIRoute subclass instead of a router dependency: FastAPI decodes the
      JSON body before it resolves dependencies
    - Limiter and settings are looked up through app.dependency_overrides so
      tests swap them exactly as they swap any other dependency
"""

from typing import Callable

from fastapi import Request, Response
from fastapi.routing import APIRoute

from notes_api.api.dependencies import client_identity, get_rate_limiter
from notes_api.config import get_settings
from notes_api.core.domain_types import ClientId


def _provided(request: Request, dependency: Callable):
    overrides = getattr(request.app, "dependency_overrides", {})
    return overrides.get(dependency, dependency)()


def admit_request(request: Request) -> ClientId:
    """Identify the caller and count the request; raises RateLimitedError on denial."""
    settings = _provided(request, get_settings)
    client_id = client_identity(request, settings.trust_forwarded_for)
    request.state.client_id = client_id
    _provided(request, get_rate_limiter).admit(client_id)
    return client_id


class RateAdmittedRoute(APIRoute):
    """APIRoute whose handler is gated by rate admission."""

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def admitted_handler(request: Request) -> Response:
            admit_request(request)
            return await handler(request)

        return admitted_handler
