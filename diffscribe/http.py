"""Blocking HTTP transport shared by the GitHub and Models clients."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from http.client import HTTPException
from typing import Callable, Dict, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .errors import RemoteError


@dataclass
class HttpRequest:
    """Represents a single outbound HTTP call."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    timeout: Optional[float] = None


@dataclass(frozen=True)
class HttpResponse:
    """Status code and decoded text of a completed HTTP call."""

    status: int
    text: str


Transport = Callable[[HttpRequest], HttpResponse]


def json_body(payload: object) -> bytes:
    """Encode ``payload`` as a UTF-8 JSON request body."""
    return json.dumps(payload).encode("utf-8")


def send(request: HttpRequest) -> HttpResponse:
    """Perform ``request`` and return the response, whatever its status.

    Error statuses are returned rather than raised so callers can compare
    against the status they expect. Connection-level failures raise
    ``RemoteError`` without a status code.
    """
    http_request = Request(
        request.url,
        data=request.body,
        headers=request.headers,
        method=request.method,
    )
    kwargs: dict[str, object] = {}
    if request.timeout is not None:
        kwargs["timeout"] = request.timeout

    try:
        with urlopen(http_request, **kwargs) as response:  # type: ignore[arg-type]
            raw = response.read()
            status = response.status
    except HTTPError as exc:
        status = exc.code
        try:
            raw = exc.read()
        except (OSError, HTTPException):
            raw = b""
    except URLError as exc:
        raise RemoteError(
            f"{request.method} {request.url} failed", body=str(exc.reason)
        ) from exc
    except (OSError, HTTPException) as exc:
        # Timeouts, resets and truncated reads surface after the request is sent.
        raise RemoteError(
            f"{request.method} {request.url} failed",
            body=str(exc) or exc.__class__.__name__,
        ) from exc

    return HttpResponse(status=status, text=(raw or b"").decode("utf-8", errors="replace"))


__all__ = ["HttpRequest", "HttpResponse", "Transport", "json_body", "send"]
