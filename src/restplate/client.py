from __future__ import annotations

"""
client – Resolves RequestTemplates and sends them through an HTTP transport.

    client = Client(ClientConfig.from_env())
    resp = client.execute(tpl, {'owner': 'octo', 'repo': 'hello'})

The transport is pluggable (any HTTPTransportProtocol); by default a
UrllibHTTPTransport is built from the configuration. Failures raised by the
transport are wrapped in TransportError, template problems propagate as-is.
"""

from typing import Any, Mapping, Optional

from restplate.config import ClientConfig
from restplate.core.interfaces.logging import LoggerLikeProtocol
from restplate.core.interfaces.net import HTTPTransportProtocol
from restplate.core.models import Response
from restplate.errors import RestplateError, TransportError
from restplate.logging.helpers import get_logger, trace_io
from restplate.net.urllib_transport import UrllibHTTPTransport, ssl_context_for
from restplate.request_template import RequestTemplate


class Client:
    """Execute request templates with a shared configuration and transport."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[HTTPTransportProtocol] = None,
        logger: Optional[LoggerLikeProtocol] = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._log = logger or get_logger('client')
        if transport is None:
            insecure = self._config.insecure_tls
            transport = UrllibHTTPTransport(
                user_agent=self._config.user_agent,
                ssl_ctx_provider=lambda url: ssl_context_for(url, insecure=insecure),
            )
        self._transport = transport

    @property
    def config(self) -> ClientConfig:
        return self._config

    def template(self, method: str, uri: str, *, target: str = '') -> RequestTemplate:
        """Start a RequestTemplate carrying the configured charset and query settings."""
        cfg = self._config
        base = RequestTemplate(
            charset=cfg.charset,
            decode_slash=cfg.decode_slash,
            collection_format=cfg.collection_format,
        )
        return base.with_method(method).with_target(target).with_uri(uri)

    def execute(self, template: RequestTemplate, variables: Mapping[str, Any]) -> Response:
        """Resolve *template* with *variables* and send it.

        Raises:
            RequestTemplateError: the template cannot be resolved into a request.
            TransportError: the transport failed before producing a response.
        """
        resolved = template.resolve(variables)
        request = resolved.request(timeout=self._config.timeout)
        self._log.debug('%s %s', request.method, request.url)
        trace_io(self._log, 'request', url=request.url, headers=request.flat_headers())

        try:
            response = self._transport.request(request)
        except RestplateError:
            raise
        except Exception as exc:
            self._log.error('%s %s failed: %s', request.method, request.url, exc)
            raise TransportError(request.url, exc) from exc

        self._log.info('%s %s -> %d', request.method, request.url, response.status)
        trace_io(self._log, 'response', status=response.status, size=len(response.body or b''))
        return response
