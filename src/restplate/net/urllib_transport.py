from __future__ import annotations

"""HTTP transport implementation using urllib.

The transport is intentionally minimal and synchronous. It supports:
- Custom User-Agent via constructor.
- Optional SSL context provider callback per request URL.
- HTTP error statuses returned as Response objects instead of exceptions.
"""

import ssl
import urllib.error
import urllib.request
from typing import Callable, Optional

from restplate.constants import DEFAULT_TIMEOUT
from restplate.core.interfaces.net import HTTPTransportProtocol
from restplate.core.models import Request, Response


def ssl_context_for(url: str, *, insecure: bool = False) -> Optional[ssl.SSLContext]:
    """Return a permissive SSL context when *insecure* is set and the URL is HTTPS."""
    if not url.lower().startswith('https'):
        return None
    if insecure:
        ctx = ssl.create_default_context()
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
        return ctx
    return None


class UrllibHTTPTransport(HTTPTransportProtocol):
    """urllib-based HTTP transport that satisfies HTTPTransportProtocol."""

    def __init__(
        self,
        *,
        user_agent: Optional[str] = None,
        ssl_ctx_provider: Optional[Callable[[str], Optional[ssl.SSLContext]]] = None,
    ) -> None:
        self._ua = user_agent
        self._ssl_ctx_for = ssl_ctx_provider or (lambda _url: None)

    def request(self, req: Request) -> Response:
        """Perform an HTTP request and return a Response."""
        headers = req.flat_headers()
        if self._ua and not req.header('User-Agent'):
            headers['User-Agent'] = self._ua

        url_req = urllib.request.Request(req.url, data=req.body, headers=headers, method=req.method or 'GET')
        timeout = float(req.timeout) if req.timeout is not None else DEFAULT_TIMEOUT
        ctx = self._ssl_ctx_for(req.url)

        try:
            with urllib.request.urlopen(url_req, timeout=timeout, context=ctx) as resp:  # nosec B310 (intended usage)
                body = resp.read()
                status = getattr(resp, 'status', None) or int(resp.getcode())
                headers_map = dict(resp.headers.items())
                final_url = resp.geturl()
        except urllib.error.HTTPError as err:
            body = err.read() or b''
            status = err.code
            headers_map = dict(err.headers.items()) if err.headers else {}
            final_url = err.geturl() or req.url

        return Response(status=status, headers=headers_map, body=body, url=final_url, request=req)
