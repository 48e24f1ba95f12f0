from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from restplate.constants import DEFAULT_CHARSET

Headers = Mapping[str, Tuple[str, ...]]


@dataclass(frozen=True)
class Request:
    method: str
    url: str
    headers: Headers = field(default_factory=dict)
    body: Optional[bytes] = None
    charset: str = DEFAULT_CHARSET
    timeout: Optional[float] = None

    def header(self, name: str) -> Tuple[str, ...]:
        """Return the values of header *name* (case-insensitive)."""
        key = name.lower()
        for hname, values in self.headers.items():
            if hname.lower() == key:
                return tuple(values)
        return ()

    def flat_headers(self) -> dict:
        """Headers folded into one comma-separated value per name."""
        return {name: ', '.join(values) for name, values in self.headers.items()}


@dataclass(frozen=True)
class Response:
    status: int
    headers: Mapping[str, str]
    body: bytes
    url: str
    request: Optional[Request] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self, charset: Optional[str] = None) -> str:
        enc = charset or (self.request.charset if self.request else DEFAULT_CHARSET)
        return self.body.decode(enc, errors='replace')
