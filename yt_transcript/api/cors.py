"""CORS response headers middleware.

Browser clients call the transcript endpoints cross-origin, so every
response carries the configured CORS headers, whether or not the
request was a preflight or sent an Origin header.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from yt_transcript.settings import settings


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Adds the configured CORS headers to every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process request and decorate the response.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler in the chain.

        Returns:
            Downstream response with CORS headers set.
        """
        response = await call_next(request)
        for name, value in settings.cors.headers.items():
            response.headers[name] = value
        return response
