"""HTTP client for YouTube upstreams.

Thin httpx wrapper shared by the caption strategies. It applies
the configured identity (User-Agent, consent cookies), a per-strategy
timeout, and converts transport and status errors into the
extraction error taxonomy.
"""

import json
from types import TracebackType
from typing import Any

import httpx

from yt_transcript.extraction.errors import NetworkFailure, ParseFailure, QuotaExceeded
from yt_transcript.settings import settings


class YouTubeHttpClient:
    """Short-lived HTTP session for one strategy attempt.

    Use as a context manager; the underlying httpx.Client is closed
    on exit so no cookie state leaks between requests.

    Attributes:
        timeout: Timeout applied to every call, in seconds.
        requests_made: Number of requests sent.
    """

    def __init__(
        self,
        timeout: float,
        transport: httpx.BaseTransport | None = None,
        headers: dict[str, str] | None = None,
        cookies: dict[str, str] | None = None,
    ) -> None:
        """Initialize client.

        Args:
            timeout: Timeout in seconds.
            transport: Optional transport (httpx.MockTransport in tests).
            headers: Extra default headers.
            cookies: Cookies sent with every request.
        """
        self.timeout = timeout
        self.requests_made = 0
        default_headers = {
            "User-Agent": settings.youtube.user_agent,
            "Accept-Language": "en-US,en;q=0.9",
        }
        default_headers.update(headers or {})
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers=default_headers,
            cookies=cookies if cookies is not None else settings.youtube.cookies,
            follow_redirects=True,
        )

    def __enter__(self) -> "YouTubeHttpClient":
        """Context manager entry."""
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    # -------------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------------

    def get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """GET a URL and return the final response (redirects followed).

        Raises:
            NetworkFailure: On transport error, timeout or non-2xx status.
        """
        return self._send("GET", url, params=params)

    def get_text(self, url: str, params: dict[str, Any] | None = None) -> str:
        """GET a URL and return the body as text.

        Raises:
            NetworkFailure: On transport error, timeout or non-2xx status.
        """
        return self._send("GET", url, params=params).text

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            NetworkFailure: On transport error, timeout or non-2xx status.
            ParseFailure: When the body is not JSON.
        """
        return self._decode_json(self._send("GET", url, params=params))

    def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST a JSON payload and decode the JSON answer.

        Raises:
            NetworkFailure: On transport error, timeout or non-2xx status.
            ParseFailure: When the body is not JSON.
        """
        response = self._send("POST", url, params=params, json=payload, headers=headers)
        return self._decode_json(response)

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request and map failures to NetworkFailure."""
        self.requests_made += 1
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise NetworkFailure(f"{_host(url)} timed out after {self.timeout:g}s") from e
        except httpx.HTTPError as e:
            raise NetworkFailure(f"{_host(url)} unreachable: {type(e).__name__}") from e

        self._handle_response_errors(response)
        return response

    # -------------------------------------------------------------------------
    # Error Handling
    # -------------------------------------------------------------------------

    def _handle_response_errors(self, response: httpx.Response) -> None:
        """Handle HTTP response errors.

        Args:
            response: HTTP response object.

        Raises:
            QuotaExceeded: On 403 quota exceeded.
            NetworkFailure: On any other non-2xx status.
        """
        if response.is_success:
            return

        host = _host(str(response.request.url))
        if response.status_code == 403:
            reason = self._extract_error_reason(response)
            if "quota" in reason.lower():
                raise QuotaExceeded(f"API quota exceeded: {reason}")
            raise NetworkFailure(f"{host} returned 403 ({reason})")

        raise NetworkFailure(f"{host} returned {response.status_code}")

    @staticmethod
    def _extract_error_reason(response: httpx.Response) -> str:
        """Extract error reason from a Google API error body.

        Args:
            response: Error response.

        Returns:
            Error reason string.
        """
        try:
            errors = response.json().get("error", {}).get("errors", [])
            if errors:
                return errors[0].get("reason", "Unknown error")
        except (json.JSONDecodeError, AttributeError):
            pass
        return "Unknown error"

    @staticmethod
    def _decode_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except json.JSONDecodeError as e:
            host = _host(str(response.request.url))
            raise ParseFailure(f"{host} returned non-JSON body") from e


def _host(url: str) -> str:
    return httpx.URL(url).host or url
