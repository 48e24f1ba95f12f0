from __future__ import annotations
from typing import Protocol, runtime_checkable

from restplate.core.models import Request, Response


@runtime_checkable
class HTTPTransportProtocol(Protocol):
    def request(self, req: Request) -> Response:
        ...
