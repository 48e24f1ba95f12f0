from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

# restplate.template must be initialized before collection_format.
from restplate.template import (
    BodyTemplate,
    HeaderTemplate,
    QueryTemplate,
    Template,
    UriTemplate,
)
from restplate.client import Client
from restplate.collection_format import CollectionFormat
from restplate.config import ClientConfig
from restplate.constants import DEFAULT_CHARSET
from restplate.core.interfaces.net import HTTPTransportProtocol
from restplate.core.models import Request, Response
from restplate.errors import (
    PatternMismatchError,
    RequestTemplateError,
    RestplateError,
    TemplateError,
    TransportError,
)
from restplate.request_template import RequestTemplate, request_template

__version__ = '1.0.0'


def expand_uri(template: str, variables: Mapping[str, Any], *, charset: str = DEFAULT_CHARSET) -> str:
    """Expand a URI template in one call; unresolved expressions stay encoded."""
    return UriTemplate.create(template, charset).expand(variables) or ''


def client_factory(
    *,
    config: Optional[ClientConfig] = None,
    transport: Optional[HTTPTransportProtocol] = None,
    logger: Optional[logging.Logger] = None,
) -> Client:
    """Factory helper that returns a Client.

    Falls back to ClientConfig.from_env() when no configuration is provided.
    """
    return Client(config or ClientConfig.from_env(), transport=transport, logger=logger)


__all__ = [
    'BodyTemplate',
    'Client',
    'ClientConfig',
    'CollectionFormat',
    'HeaderTemplate',
    'PatternMismatchError',
    'QueryTemplate',
    'Request',
    'RequestTemplate',
    'RequestTemplateError',
    'Response',
    'RestplateError',
    'Template',
    'TemplateError',
    'TransportError',
    'UriTemplate',
    'client_factory',
    'expand_uri',
    'request_template',
]
