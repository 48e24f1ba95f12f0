from .logging import LoggerFactoryProtocol, LoggerLikeProtocol
from .net import HTTPTransportProtocol
from .templating import CollectionJoinerProtocol, ExpandableProtocol

__all__ = [
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
    'HTTPTransportProtocol',
    'CollectionJoinerProtocol',
    'ExpandableProtocol',
]
