from __future__ import annotations
from typing import Any, Iterable, List, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class ExpandableProtocol(Protocol):
    """Anything that turns a variable mapping into text (or None when absent)."""

    def expand(self, variables: Mapping[str, Any]) -> Optional[str]:
        ...

    @property
    def variables(self) -> List[str]:
        ...


@runtime_checkable
class CollectionJoinerProtocol(Protocol):
    """Strategy that renders a multi-valued query parameter."""

    def join(self, name: str, values: Iterable[Optional[str]], charset: str = ...) -> str:
        ...
