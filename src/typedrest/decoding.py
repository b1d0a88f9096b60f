r"""Turn raw response bodies into the type requested by the caller.

The caller declares the shape it wants through ``result_type`` and a
decode strategy is selected from it:

- ``bytes``: the body is returned unchanged
- ``str``: the body is decoded as UTF-8 text
- ``int``, ``float``, ``bool``, ``Decimal``: the text is parsed as a
  literal of that type
- ``typing.Any``, ``object``: the body is parsed as JSON and the parsed
  tree is returned as is
- anything else: the body is parsed as JSON and validated into an
  instance of ``result_type`` with pydantic (``dict``, ``list``, models,
  dataclasses, ``list[Model]``...). A shape mismatch raises
  ``DeserializationError``

Non-success responses are never decoded: their body text becomes the
error message of the ``Response``.
"""

from __future__ import annotations

__all__ = ["DecodeStrategy", "ResponseDecoder", "select_strategy"]

import json
import logging
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError

from typedrest.exceptions import ConversionError, DeserializationError
from typedrest.models import Response

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

logger: logging.Logger = logging.getLogger(__name__)


class DecodeStrategy(Enum):
    r"""Closed set of the ways a response body can be decoded."""

    BYTES = "bytes"
    TEXT = "text"
    SCALAR = "scalar"
    RAW_JSON = "raw_json"
    TYPED = "typed"


def _parse_bool(text: str) -> bool:
    value = text.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    msg = f"invalid literal for bool: {text!r}"
    raise ValueError(msg)


_SCALAR_PARSERS: dict[Any, Callable[[str], Any]] = {
    int: int,
    float: float,
    bool: _parse_bool,
    Decimal: lambda text: Decimal(text.strip()),
}

_STRATEGIES: dict[Any, DecodeStrategy] = {
    bytes: DecodeStrategy.BYTES,
    str: DecodeStrategy.TEXT,
    Any: DecodeStrategy.RAW_JSON,
    object: DecodeStrategy.RAW_JSON,
    **dict.fromkeys(_SCALAR_PARSERS, DecodeStrategy.SCALAR),
}


def select_strategy(result_type: Any) -> DecodeStrategy:
    r"""Select the decode strategy for a requested result type.

    Args:
        result_type: The type requested by the caller.

    Returns:
        The decode strategy.

    Example:
        ```pycon
        >>> from typing import Any
        >>> from typedrest.decoding import select_strategy
        >>> select_strategy(bytes)
        <DecodeStrategy.BYTES: 'bytes'>
        >>> select_strategy(int)
        <DecodeStrategy.SCALAR: 'scalar'>
        >>> select_strategy(Any)
        <DecodeStrategy.RAW_JSON: 'raw_json'>
        >>> select_strategy(list[int])
        <DecodeStrategy.TYPED: 'typed'>

        ```
    """
    try:
        return _STRATEGIES.get(result_type, DecodeStrategy.TYPED)
    except TypeError:
        # unhashable annotations can only be validated by pydantic
        return DecodeStrategy.TYPED


class ResponseDecoder:
    r"""Decode response bodies according to the requested result type.

    Subclass it, or pass another object with the same methods through
    ``ClientConfig(decoder=...)``, to customize decoding.

    Example:
        ```pycon
        >>> from typing import Any
        >>> from typedrest.decoding import ResponseDecoder
        >>> decoder = ResponseDecoder()
        >>> decoder.decode(b"42", int)
        42
        >>> decoder.decode(b'{"id": 1}', dict)
        {'id': 1}
        >>> decoder.decode(b'{"id": 1}', Any)
        {'id': 1}
        >>> response = decoder.decode_response(404, {}, b"not found", dict)
        >>> response.error
        'not found'

        ```
    """

    def __init__(self) -> None:
        self._adapters: dict[Any, TypeAdapter[Any]] = {}
        self._decoders: dict[DecodeStrategy, Callable[[bytes, Any], Any]] = {
            DecodeStrategy.BYTES: self.decode_bytes,
            DecodeStrategy.TEXT: self.decode_text,
            DecodeStrategy.SCALAR: self.decode_scalar,
            DecodeStrategy.RAW_JSON: self.decode_raw_json,
            DecodeStrategy.TYPED: self.decode_typed,
        }

    def decode_response(
        self,
        status_code: int,
        headers: Mapping[str, str],
        content: bytes,
        result_type: Any,
        *,
        url: str = "",
        method: str = "",
    ) -> Response[Any]:
        r"""Build the ``Response`` of a call.

        Args:
            status_code: The HTTP status code.
            headers: The response headers.
            content: The raw response body.
            result_type: The type requested by the caller.
            url: The requested URL.
            method: The HTTP method of the request.

        Returns:
            A ``Response`` whose ``content`` is populated on success and
            whose ``error`` is populated otherwise.

        Raises:
            ConversionError: If a scalar result cannot be parsed, or a
                text result is not valid UTF-8.
            DeserializationError: If a JSON result cannot be parsed or
                does not match ``result_type``.
        """
        response: Response[Any] = Response(
            status_code=status_code, headers=headers, url=url, method=method
        )
        if 200 <= status_code < 300:
            response.content = self.decode(content, result_type)
        else:
            response.error = content.decode("utf-8", errors="replace")
        return response

    def decode(self, content: bytes, result_type: Any) -> Any:
        r"""Decode a successful response body into ``result_type``."""
        strategy = select_strategy(result_type)
        logger.debug(f"Decoding {len(content)} bytes with strategy {strategy.name}")
        return self._decoders[strategy](content, result_type)

    def decode_bytes(self, content: bytes, result_type: Any) -> bytes:
        return content

    def decode_text(self, content: bytes, result_type: Any) -> str:
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"response body is not valid UTF-8 text: {exc}"
            raise ConversionError(msg, result_type=result_type, content=content) from exc

    def decode_scalar(self, content: bytes, result_type: Any) -> Any:
        text = content.decode("utf-8", errors="replace")
        try:
            return _SCALAR_PARSERS[result_type](text)
        except (ValueError, ArithmeticError) as exc:
            msg = f"cannot convert {text!r} to {result_type.__name__}"
            raise ConversionError(msg, result_type=result_type, content=content) from exc

    def decode_raw_json(self, content: bytes, result_type: Any) -> Any:
        if not content.strip():
            return None
        try:
            return json.loads(content)
        except ValueError as exc:
            msg = f"response body is not valid JSON: {exc}"
            raise DeserializationError(msg, result_type=result_type, content=content) from exc

    def decode_typed(self, content: bytes, result_type: Any) -> Any:
        if not content.strip():
            return None
        try:
            return self.get_adapter(result_type).validate_json(content)
        except ValidationError as exc:
            msg = f"cannot deserialize response body into {result_type!r}: {exc}"
            raise DeserializationError(msg, result_type=result_type, content=content) from exc

    def get_adapter(self, result_type: Any) -> TypeAdapter[Any]:
        r"""Return the cached pydantic ``TypeAdapter`` of a result type."""
        try:
            return self._adapters[result_type]
        except KeyError:
            adapter = self._adapters[result_type] = TypeAdapter(result_type)
            return adapter
        except TypeError:
            return TypeAdapter(result_type)
