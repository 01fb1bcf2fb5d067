"""Identity middleware: restores the caller from the credential cookie.

Runs once per request before routing. The resolved CallerContext is stored on
`request.state.caller` for guards to read. When the credential's user no
longer exists, the cookie is deleted on the way out.
"""

from collections.abc import Callable

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from staybook.config import AuthSettings
from staybook.services.identity import IdentityResolver


class IdentityMiddleware(BaseHTTPMiddleware):
    """Attach a CallerContext to every request."""

    def __init__(
        self,
        app: ASGIApp,
        resolver_factory: Callable[[], IdentityResolver],
        settings_factory: Callable[[], AuthSettings],
    ) -> None:
        super().__init__(app)
        self.resolver_factory = resolver_factory
        self.settings_factory = settings_factory

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        cookie_name = self.settings_factory().cookie_name
        resolver = self.resolver_factory()

        # Store lookups are blocking boto3 calls
        caller = await run_in_threadpool(
            resolver.resolve, request.cookies.get(cookie_name)
        )
        request.state.caller = caller

        response = await call_next(request)

        if caller.clear_credential:
            response.delete_cookie(cookie_name)
        return response
