"""Protocols for collaborators the client talks through."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Issues one POST per call to the carrier endpoint."""

    async def post_json(self, payload: dict[str, Any]) -> Any: ...

    async def post_bytes(self, payload: dict[str, Any]) -> bytes: ...

    async def aclose(self) -> None: ...
