from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import pytest
from coola.equality import objects_are_equal
from pydantic import BaseModel

from typedrest.decoding import DecodeStrategy, ResponseDecoder, select_strategy
from typedrest.exceptions import ConversionError, DecodeError, DeserializationError

POSTS = b'[{"id": 1, "title": "Post 1"}, {"id": 2, "title": "Post 2"}, {"id": 3, "title": "Post 3"}]'


class Blog(BaseModel):
    id: int
    title: str


@dataclass
class UserWithId:
    Id: int
    Name: str


@pytest.fixture
def decoder() -> ResponseDecoder:
    return ResponseDecoder()


#####################################
#     Tests for select_strategy     #
#####################################


@pytest.mark.parametrize(
    ("result_type", "strategy"),
    [
        (bytes, DecodeStrategy.BYTES),
        (str, DecodeStrategy.TEXT),
        (int, DecodeStrategy.SCALAR),
        (float, DecodeStrategy.SCALAR),
        (bool, DecodeStrategy.SCALAR),
        (Decimal, DecodeStrategy.SCALAR),
        (Any, DecodeStrategy.RAW_JSON),
        (object, DecodeStrategy.RAW_JSON),
        (dict, DecodeStrategy.TYPED),
        (list, DecodeStrategy.TYPED),
        (Blog, DecodeStrategy.TYPED),
        (UserWithId, DecodeStrategy.TYPED),
        (list[Blog], DecodeStrategy.TYPED),
        (dict[str, int], DecodeStrategy.TYPED),
    ],
)
def test_select_strategy(result_type: Any, strategy: DecodeStrategy) -> None:
    assert select_strategy(result_type) == strategy


############################################
#     Tests for ResponseDecoder.decode     #
############################################


def test_decode_bytes_unchanged(decoder: ResponseDecoder) -> None:
    assert decoder.decode(b"\xff\x00binary", bytes) == b"\xff\x00binary"


def test_decode_text(decoder: ResponseDecoder) -> None:
    assert decoder.decode(POSTS, str) == POSTS.decode()


def test_decode_text_not_json(decoder: ResponseDecoder) -> None:
    assert decoder.decode("plain text, not JSON é".encode(), str) == "plain text, not JSON é"


def test_decode_text_invalid_utf8(decoder: ResponseDecoder) -> None:
    with pytest.raises(ConversionError, match=r"not valid UTF-8") as exc_info:
        decoder.decode(b"\xff\xfe", str)
    assert exc_info.value.result_type is str
    assert exc_info.value.content == b"\xff\xfe"
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


@pytest.mark.parametrize(
    ("content", "result_type", "expected"),
    [
        (b"42", int, 42),
        (b" 42\n", int, 42),
        (b"-7", int, -7),
        (b"3.5", float, 3.5),
        (b"1e3", float, 1000.0),
        (b"true", bool, True),
        (b"False", bool, False),
        (b"12.30", Decimal, Decimal("12.30")),
    ],
)
def test_decode_scalar(
    decoder: ResponseDecoder, content: bytes, result_type: Any, expected: Any
) -> None:
    value = decoder.decode(content, result_type)
    assert value == expected
    assert type(value) is result_type


@pytest.mark.parametrize(
    ("content", "result_type"),
    [(b"abc", int), (b"3.5", int), (b"", int), (b"x", float), (b"yes", bool), (b"1", bool), (b"?", Decimal)],
)
def test_decode_scalar_conversion_error(
    decoder: ResponseDecoder, content: bytes, result_type: Any
) -> None:
    with pytest.raises(ConversionError, match=r"cannot convert") as exc_info:
        decoder.decode(content, result_type)
    assert exc_info.value.result_type is result_type
    assert exc_info.value.content == content


def test_decode_raw_json_array(decoder: ResponseDecoder) -> None:
    value = decoder.decode(POSTS, Any)
    assert isinstance(value, list)
    assert len(value) == 3
    assert objects_are_equal(value, json.loads(POSTS))


def test_decode_raw_json_object(decoder: ResponseDecoder) -> None:
    assert objects_are_equal(
        decoder.decode(b'{"a": {"b": [1, 2.5, null]}}', Any), {"a": {"b": [1, 2.5, None]}}
    )


def test_decode_raw_json_empty_body(decoder: ResponseDecoder) -> None:
    assert decoder.decode(b"", Any) is None


def test_decode_raw_json_invalid(decoder: ResponseDecoder) -> None:
    with pytest.raises(DeserializationError, match=r"not valid JSON"):
        decoder.decode(b"{not json", Any)


def test_decode_typed_plain_dict(decoder: ResponseDecoder) -> None:
    assert objects_are_equal(
        decoder.decode(b'{"a": {"b": [1, 2.5, null]}}', dict), {"a": {"b": [1, 2.5, None]}}
    )


@pytest.mark.parametrize(
    ("content", "result_type"), [(b"[1, 2]", dict), (b'{"a": 1}', list), (b"3", list)]
)
def test_decode_typed_plain_container_mismatch(
    decoder: ResponseDecoder, content: bytes, result_type: Any
) -> None:
    with pytest.raises(DeserializationError, match=r"cannot deserialize"):
        decoder.decode(content, result_type)


def test_decode_typed_list_of_models(decoder: ResponseDecoder) -> None:
    blogs = decoder.decode(POSTS, list[Blog])
    assert blogs == [
        Blog(id=1, title="Post 1"),
        Blog(id=2, title="Post 2"),
        Blog(id=3, title="Post 3"),
    ]


def test_decode_typed_dataclass(decoder: ResponseDecoder) -> None:
    user = decoder.decode(b'{"Id": 101, "Name": "John Doe"}', UserWithId)
    assert user == UserWithId(Id=101, Name="John Doe")


def test_decode_typed_shape_mismatch(decoder: ResponseDecoder) -> None:
    with pytest.raises(DeserializationError, match=r"cannot deserialize") as exc_info:
        decoder.decode(b'{"id": "one"}', Blog)
    assert exc_info.value.result_type is Blog


def test_decode_typed_invalid_json(decoder: ResponseDecoder) -> None:
    with pytest.raises(DeserializationError):
        decoder.decode(b"<html></html>", Blog)


def test_decode_typed_empty_body(decoder: ResponseDecoder) -> None:
    assert decoder.decode(b"  ", Blog) is None


def test_decode_errors_are_decode_errors(decoder: ResponseDecoder) -> None:
    with pytest.raises(DecodeError):
        decoder.decode(b"abc", int)


def test_decode_typed_adapter_is_cached(decoder: ResponseDecoder) -> None:
    assert decoder.get_adapter(list[Blog]) is decoder.get_adapter(list[Blog])


#####################################################
#     Tests for ResponseDecoder.decode_response     #
#####################################################


def test_decode_response_success(decoder: ResponseDecoder) -> None:
    response = decoder.decode_response(
        200,
        {"content-type": "application/json"},
        b'{"Id": 101, "Name": "John Doe"}',
        UserWithId,
        url="https://api.example.com/posts",
        method="POST",
    )
    assert response.status_code == 200
    assert response.headers == {"content-type": "application/json"}
    assert response.content == UserWithId(Id=101, Name="John Doe")
    assert response.error is None
    assert response.url == "https://api.example.com/posts"
    assert response.method == "POST"


@pytest.mark.parametrize("status_code", [201, 204, 299])
def test_decode_response_success_range(decoder: ResponseDecoder, status_code: int) -> None:
    assert decoder.decode_response(status_code, {}, b"1", int).content == 1


@pytest.mark.parametrize("status_code", [400, 401, 404, 409, 500, 503])
@pytest.mark.parametrize("result_type", [bytes, str, int, Any, Blog, list[Blog]])
def test_decode_response_error_never_decodes(
    decoder: ResponseDecoder, status_code: int, result_type: Any
) -> None:
    response = decoder.decode_response(status_code, {}, b"not found", result_type)
    assert response.status_code == status_code
    assert response.error == "not found"
    assert response.content is None


def test_decode_response_error_keeps_json_as_text(decoder: ResponseDecoder) -> None:
    response = decoder.decode_response(422, {}, b'{"detail": "invalid"}', dict)
    assert response.error == '{"detail": "invalid"}'


def test_decode_response_error_utf8(decoder: ResponseDecoder) -> None:
    assert decoder.decode_response(500, {}, "échec".encode(), Any).error == "échec"


@pytest.mark.parametrize("status_code", [301, 304, 100])
def test_decode_response_non_2xx_is_error(decoder: ResponseDecoder, status_code: int) -> None:
    response = decoder.decode_response(status_code, {}, b"moved", Any)
    assert response.error == "moved"
    assert not response.is_success


def test_decode_response_custom_decoder() -> None:
    class UpperDecoder(ResponseDecoder):
        def decode_text(self, content: bytes, result_type: Any) -> str:
            return content.decode().upper()

    assert UpperDecoder().decode_response(200, {}, b"abc", str).content == "ABC"


def test_decode_response_headers_case_insensitive(decoder: ResponseDecoder) -> None:
    response = decoder.decode_response(200, {"content-type": "text/plain"}, b"ok", str)
    assert response.headers["Content-Type"] == "text/plain"
    assert response.headers["content-type"] == "text/plain"
