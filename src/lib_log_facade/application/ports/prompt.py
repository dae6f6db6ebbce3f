"""Port for the optional interactive prompt capability."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PromptPort(Protocol):
    """Ask the user a question and return the answer."""

    def __call__(self, message: str, **options: Any) -> Any: ...


__all__ = ["PromptPort"]
