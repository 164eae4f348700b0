import base64
import json
import struct
from datetime import datetime, timezone

import pytest

from pumpfun_watch.tokens import (
    CreateTokenInfo,
    TokenDataError,
    append_to_json_file,
    b58encode,
    parse_create_token_data,
)

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
PROGRAM_ID = "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P"
NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def b58decode(text):
    number = 0
    for char in text:
        number = number * 58 + ALPHABET.index(char)
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    zeros = len(text) - len(text.lstrip("1"))
    return b"\x00" * zeros + body


def lp(text):
    raw = text.encode("utf-8") if isinstance(text, str) else text
    return struct.pack("<I", len(raw)) + raw


def make_payload(name="Test", symbol="TST", uri="https://example.com/meta.json", keys=None):
    keys = keys or [bytes([1]) * 32, bytes([2]) * 32, bytes([3]) * 32]
    raw = b"\xaa" * 8 + lp(name) + lp(symbol) + lp(uri) + b"".join(keys)
    return base64.b64encode(raw).decode("ascii")


def sample_info(name="Coin"):
    return CreateTokenInfo(
        name=name,
        symbol="CN",
        uri="https://example.com/c.json",
        mint=b58encode(bytes([4]) * 32),
        bonding_curve=b58encode(bytes([5]) * 32),
        user=b58encode(bytes([6]) * 32),
        created_at="2024-01-02 03:04:05",
    )


def test_b58_all_zero_key_is_system_program():
    assert b58encode(bytes(32)) == "1" * 32


def test_b58_empty():
    assert b58encode(b"") == ""


def test_b58_roundtrip_program_id():
    raw = b58decode(PROGRAM_ID)
    assert len(raw) == 32
    assert b58encode(raw) == PROGRAM_ID


@pytest.mark.parametrize("raw", [b"\x00\x00\xff", b"hello", bytes(range(32))])
def test_b58_roundtrip(raw):
    assert b58decode(b58encode(raw)) == raw


def test_parse_create_token_data():
    info = parse_create_token_data(make_payload(), now=NOW)
    assert info.name == "Test"
    assert info.symbol == "TST"
    assert info.uri == "https://example.com/meta.json"
    assert b58decode(info.mint) == bytes([1]) * 32
    assert b58decode(info.bonding_curve) == bytes([2]) * 32
    assert b58decode(info.user) == bytes([3]) * 32
    assert info.created_at == NOW.strftime("%Y-%m-%d %H:%M:%S")


def test_parse_unicode_name():
    info = parse_create_token_data(make_payload(name="Café 🚀"), now=NOW)
    assert info.name == "Café 🚀"


def test_parse_default_time_format():
    info = parse_create_token_data(make_payload())
    parsed = datetime.strptime(info.created_at, "%Y-%m-%d %H:%M:%S")
    assert parsed.year >= 2024


def test_parse_invalid_base64():
    with pytest.raises(TokenDataError, match="base64"):
        parse_create_token_data("not*base64!", now=NOW)


def test_parse_short_data_without_discriminator():
    data = base64.b64encode(b"\x00\x00\x00\x00").decode()
    with pytest.raises(TokenDataError, match="symbol length"):
        parse_create_token_data(data, now=NOW)


def test_parse_empty_data():
    with pytest.raises(TokenDataError, match="name length"):
        parse_create_token_data("", now=NOW)


def test_parse_name_too_long():
    raw = b"\x00" * 8 + struct.pack("<I", 100) + b"abc"
    with pytest.raises(TokenDataError, match="need 100 bytes"):
        parse_create_token_data(base64.b64encode(raw).decode(), now=NOW)


def test_parse_invalid_utf8_symbol():
    raw = b"\x00" * 8 + lp("ok") + lp(b"\xff\xfe") + lp("u") + bytes(96)
    with pytest.raises(TokenDataError, match="Invalid UTF-8 in symbol"):
        parse_create_token_data(base64.b64encode(raw).decode(), now=NOW)


def test_parse_missing_public_keys():
    raw = b"\x00" * 8 + lp("a") + lp("b") + lp("c") + bytes(95)
    with pytest.raises(TokenDataError, match="public keys"):
        parse_create_token_data(base64.b64encode(raw).decode(), now=NOW)


def test_dict_roundtrip():
    info = sample_info()
    assert CreateTokenInfo.from_dict(info.to_dict()) == info
    assert list(info.to_dict()) == [
        "name", "symbol", "uri", "mint", "bonding_curve", "user", "created_at",
    ]


def test_from_dict_rejects_missing_field():
    data = sample_info().to_dict()
    del data["user"]
    with pytest.raises(TokenDataError):
        CreateTokenInfo.from_dict(data)


def test_append_creates_and_grows(tmp_path):
    path = tmp_path / "log.json"
    first = append_to_json_file(sample_info("One"), path)
    assert [i.name for i in first] == ["One"]
    second = append_to_json_file(sample_info("Two"), path)
    assert [i.name for i in second] == ["One", "Two"]
    stored = json.loads(path.read_text(encoding="utf-8"))
    assert [r["name"] for r in stored["results"]] == ["One", "Two"]
    assert stored["results"][1] == sample_info("Two").to_dict()


def test_append_resets_corrupt_file(tmp_path, capsys):
    path = tmp_path / "log.json"
    path.write_text("{ not json", encoding="utf-8")
    results = append_to_json_file(sample_info(), path)
    assert results == [sample_info()]
    assert "Results logged to" in capsys.readouterr().out
    assert len(json.loads(path.read_text(encoding="utf-8"))["results"]) == 1