# libs/http/codec.py
from __future__ import annotations
import json
from typing import Any, Protocol


class JsonCodec(Protocol):
    def encode(self, value: Any) -> str: ...

    def decode(self, text: str) -> Any:
        """Must raise ValueError when `text` is not valid JSON."""
        ...


class StdJsonCodec:
    """JsonCodec backed by the standard json module."""

    def encode(self, value: Any) -> str:
        return json.dumps(value)

    def decode(self, text: str) -> Any:
        # json.JSONDecodeError is a ValueError
        return json.loads(text)
