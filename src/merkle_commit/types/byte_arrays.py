"""
Fixed-length byte types.

Digests travel through the code as `bytes` subclasses with an exact length,
so a truncated or oversized value is rejected the moment it is constructed
rather than when it is first hashed or compared.
"""

from __future__ import annotations

from typing import Any, ClassVar, Iterable, SupportsIndex

from pydantic.annotated_handlers import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self


def _coerce_to_bytes(value: Any) -> bytes:
    """
    Coerce a variety of inputs to raw bytes.

    Accepts:
      - `bytes` / `bytearray` / `memoryview` (returned as immutable `bytes`)
      - Hex strings, with or without a '0x' prefix (e.g. "0xdeadbeef" or "deadbeef")
      - Iterables of integers in [0, 255]

    Raises:
      ValueError if conversion is not possible or out-of-range.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        # bytes.fromhex validates the hex characters.
        return bytes.fromhex(value.removeprefix("0x"))
    if isinstance(value, Iterable):
        try:
            return bytes(bytearray(value))
        except TypeError as exc:
            raise ValueError(f"Cannot convert iterable to bytes: {exc}") from exc
    # `bytes(int)` would silently allocate zeroes, so integers are refused here.
    raise ValueError(f"Cannot convert {type(value).__name__} to bytes")


class BaseBytes(bytes):
    """
    A base class for fixed-length byte types that inherits from `bytes`.

    Subclasses set:
      - `LENGTH`: exact number of bytes the instance must contain.

    Instances are immutable byte objects with strict length checking.
    """

    LENGTH: ClassVar[int]
    """The exact number of bytes (overridden by subclasses)."""

    def __new__(cls, value: Any = b"") -> Self:
        """
        Create and validate a new instance.

        Args:
            value: Any value coercible to bytes (see `_coerce_to_bytes`).

        Raises:
            ValueError: If the resulting byte length differs from `LENGTH`.
        """
        if not hasattr(cls, "LENGTH"):
            raise TypeError(f"{cls.__name__} must define LENGTH")

        b = _coerce_to_bytes(value)
        if len(b) != cls.LENGTH:
            raise ValueError(f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(b)}")
        return super().__new__(cls, b)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Hook into Pydantic's validation system.

        1. If the input is already an instance of the class, accept it.
        2. Otherwise, coerce the input (raw bytes or a hex string) through the
           class constructor, which enforces the exact length.
        3. When dumping to JSON, emit a lowercase hex string.

        JSON input can never be an instance already, so it goes straight to
        the constructor.
        """
        from_value_validator = core_schema.no_info_plain_validator_function(cls)

        return core_schema.json_or_python_schema(
            json_schema=from_value_validator,
            python_schema=core_schema.union_schema(
                [
                    # Case 1: The value is already the correct type.
                    core_schema.is_instance_schema(cls),
                    # Case 2: The value needs to be coerced and length-checked.
                    from_value_validator,
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda x: x.hex(), when_used="json"
            ),
        )

    def __repr__(self) -> str:
        """Return a string representation of the bytes."""
        tname = type(self).__name__
        return f"{tname}({self.hex()})"

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return hash((type(self), bytes(self)))

    def hex(self, sep: str | bytes | None = None, bytes_per_sep: SupportsIndex = 1) -> str:
        """Return the hexadecimal string representation of the underlying bytes."""
        return bytes(self).hex() if sep is None else bytes(self).hex(sep, bytes_per_sep)


class Digest(BaseBytes):
    """A SHA-256 output: exactly 32 bytes."""

    LENGTH = 32
