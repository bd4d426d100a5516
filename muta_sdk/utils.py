"""
Utility helpers for the Muta SDK.
"""
import inspect
import json
import os
from typing import Any, Awaitable, TypeVar, Union

T = TypeVar("T")


def to_hex(value: Union[bytes, bytearray, str, int]) -> str:
    """
    Render a value as a 0x-prefixed hex string.

    Args:
        value: Raw bytes, an int, or a hex string with or without the 0x prefix

    Returns:
        Lower-case hex string with 0x prefix

    Raises:
        ValueError: If a string is not valid hex
        TypeError: For unsupported types
    """
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, bool):
        raise TypeError("Cannot convert bool to hex")
    if isinstance(value, int):
        return hex(value)
    if isinstance(value, str):
        stripped = value[2:] if value[:2].lower() == "0x" else value
        # validates the digits
        bytes.fromhex(stripped if len(stripped) % 2 == 0 else "0" + stripped)
        return "0x" + stripped.lower()
    raise TypeError(f"Cannot convert {type(value).__name__} to hex")


def hex_to_bytes(value: Union[str, bytes, bytearray]) -> bytes:
    """Decode a hex string (0x prefix optional) into bytes; bytes pass through."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    stripped = value[2:] if value[:2].lower() == "0x" else value
    if len(stripped) % 2:
        stripped = "0" + stripped
    return bytes.fromhex(stripped)


def hex_to_int(value: Union[str, int]) -> int:
    """Parse a Uint64 hex scalar as returned by the node."""
    if isinstance(value, int):
        return value
    return int(value, 16)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def safe_parse_json(value: Any) -> Any:
    """
    Decode JSON text, returning the input unchanged when it is not JSON.

    Services are free to return plain strings, so a failed decode is not an
    error. ``NaN`` and ``Infinity`` are not JSON and stay strings.
    """
    if not isinstance(value, (str, bytes, bytearray)):
        return value
    try:
        return json.loads(value, parse_constant=_reject_constant)
    except ValueError:
        return value


def random_nonce() -> str:
    """32 random bytes as hex, used to make every transaction unique"""
    return to_hex(os.urandom(32))


def capitalize(text: str) -> str:
    """Upper-case the first character only ("metadata" -> "Metadata")."""
    return text[:1].upper() + text[1:]


async def maybe_await(value: Union[T, Awaitable[T]]) -> T:
    """Await ``value`` if it is awaitable, so sync and async callables mix freely."""
    if inspect.isawaitable(value):
        return await value
    return value
