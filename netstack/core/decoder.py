"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

JSON response decoding.

Turns raw response bytes into a value of the caller's result type using
pydantic ``TypeAdapter``. Any type pydantic can validate works as a result
type: ``BaseModel`` subclasses, dataclasses, ``TypedDict`` and containers
such as ``list[User]``.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Type, TypeVar

from pydantic import PydanticUserError, TypeAdapter, ValidationError

from netstack.core.result import Failure, Result, Success
from netstack.exceptions import DecodeError
from netstack.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _type_name(result_type: Any) -> str:
    return getattr(result_type, "__name__", None) or repr(result_type)


class Decoder:
    """
    Pure bytes-to-value converter.

    The same bytes and result type always produce the same outcome. Adapters
    are built once per result type and reused.
    """

    def __init__(self) -> None:
        self._adapters: Dict[Any, TypeAdapter] = {}
        self._lock = threading.Lock()

    def _adapter_for(self, result_type: Any) -> TypeAdapter:
        with self._lock:
            adapter = self._adapters.get(result_type)
            if adapter is None:
                adapter = TypeAdapter(result_type)
                self._adapters[result_type] = adapter
            return adapter

    def decode(self, data: bytes, result_type: Type[T]) -> Result[T]:
        """
        Decode ``data`` as JSON into ``result_type``.

        Args:
            data: Raw response body
            result_type: Target type

        Returns:
            ``Success(value)``, or ``Failure(DecodeError)`` with the pydantic
            error attached as the cause. ``DecodeError.malformed`` tells
            invalid JSON apart from a shape mismatch.
        """
        name = _type_name(result_type)
        try:
            value = self._adapter_for(result_type).validate_json(data)
        except PydanticUserError as exc:
            # No schema can be generated for result_type
            return Failure(DecodeError(f"Cannot decode into {name}: {exc}", cause=exc))
        except ValidationError as exc:
            malformed = any(err.get("type") == "json_invalid" for err in exc.errors())
            reason = "malformed JSON" if malformed else "shape mismatch"
            logger.debug(
                "decode_failed",
                result_type=name,
                reason=reason,
                error_count=exc.error_count(),
            )
            return Failure(
                DecodeError(
                    f"Failed to decode {name} ({reason}): {exc}",
                    cause=exc,
                    malformed=malformed,
                )
            )
        except Exception as exc:
            # Custom validators may raise anything; pydantic lets non-validation errors through
            logger.debug("decode_failed", result_type=name, reason="validator error", error=repr(exc))
            return Failure(DecodeError(f"Failed to decode {name}: {exc!r}", cause=exc))

        return Success(value)

    def encode(self, value: Any, result_type: Type[T]) -> bytes:
        """Serialize ``value`` as ``result_type`` to JSON bytes."""
        return self._adapter_for(result_type).dump_json(value)
