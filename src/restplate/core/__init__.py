"""Public surface for restplate.core: request/response models and Protocols."""

from restplate.core.interfaces import (
    CollectionJoinerProtocol,
    ExpandableProtocol,
    HTTPTransportProtocol,
    LoggerFactoryProtocol,
    LoggerLikeProtocol,
)
from restplate.core.models import Request, Response

__all__ = [
    "CollectionJoinerProtocol",
    "ExpandableProtocol",
    "HTTPTransportProtocol",
    "LoggerFactoryProtocol",
    "LoggerLikeProtocol",
    "Request",
    "Response",
]
