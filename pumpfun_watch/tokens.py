"""Decoding of token-creation event data and the JSON launch log."""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import asdict, dataclass, fields
from datetime import datetime, timezone
from pathlib import Path

DEFAULT_LOG_PATH = "create_token_log.json"

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_DISCRIMINATOR_LEN = 8
_PUBKEY_LEN = 32
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class TokenDataError(ValueError):
    """Raised when token-creation event data cannot be decoded."""


@dataclass(frozen=True)
class CreateTokenInfo:
    """A token launch as announced by the create instruction's event."""

    name: str
    symbol: str
    uri: str
    mint: str
    bonding_curve: str
    user: str
    created_at: str

    def to_dict(self) -> dict[str, str]:
        """Return the fields as a JSON-ready mapping, in declaration order."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data) -> CreateTokenInfo:
        """Build an instance from a mapping; every field must be a string."""
        if not isinstance(data, dict):
            raise TokenDataError("token record must be an object")
        values = {}
        for field in fields(cls):
            value = data.get(field.name)
            if not isinstance(value, str):
                raise TokenDataError(f"token record field {field.name!r} missing or not a string")
            values[field.name] = value
        return cls(**values)


def b58encode(data: bytes) -> str:
    """Encode bytes with the Bitcoin base58 alphabet."""
    data = bytes(data)
    stripped = data.lstrip(b"\x00")
    leading_zeros = len(data) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_B58_ALPHABET[remainder])
    return "1" * leading_zeros + "".join(reversed(digits))


class _Reader:
    def __init__(self, buffer: bytes, start: int) -> None:
        self._buffer = buffer
        self._cursor = start

    def _take(self, size: int, what: str) -> bytes:
        end = self._cursor + size
        if end > len(self._buffer):
            raise TokenDataError(what)
        chunk = self._buffer[self._cursor:end]
        self._cursor = end
        return chunk

    def string(self, label: str, lower: str) -> str:
        length = int.from_bytes(self._take(4, f"Data too short for {label} length"), "little")
        raw = self._take(length, f"Data too short for {label}: need {length} bytes")
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TokenDataError(f"Invalid UTF-8 in {lower}: {exc}") from exc

    def pubkey(self) -> str:
        return b58encode(self._take(_PUBKEY_LEN, "Data too short for public keys"))

    def require(self, size: int, what: str) -> None:
        if self._cursor + size > len(self._buffer):
            raise TokenDataError(what)


def parse_create_token_data(data: str, now: datetime | None = None) -> CreateTokenInfo:
    """Decode a base64 create event into a CreateTokenInfo.

    The creation time is taken from ``now`` (UTC) or the current time.
    """
    try:
        decoded = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise TokenDataError(f"Failed to decode base64: {exc}") from exc

    start = _DISCRIMINATOR_LEN if len(decoded) > _DISCRIMINATOR_LEN else 0
    reader = _Reader(decoded, start)

    name = reader.string("name", "name")
    symbol = reader.string("symbol", "symbol")
    uri = reader.string("URI", "uri")

    reader.require(_PUBKEY_LEN * 3, "Data too short for public keys")
    mint = reader.pubkey()
    bonding_curve = reader.pubkey()
    user = reader.pubkey()

    moment = now if now is not None else datetime.now(timezone.utc)
    return CreateTokenInfo(
        name=name,
        symbol=symbol,
        uri=uri,
        mint=mint,
        bonding_curve=bonding_curve,
        user=user,
        created_at=moment.strftime(_TIME_FORMAT),
    )


def _load_results(path: Path) -> list[CreateTokenInfo]:
    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    try:
        document = json.loads(contents)
        records = document["results"]
        if not isinstance(records, list):
            return []
        return [CreateTokenInfo.from_dict(record) for record in records]
    except (ValueError, KeyError, TypeError):
        return []


def append_to_json_file(token_info: CreateTokenInfo, path=DEFAULT_LOG_PATH) -> list[CreateTokenInfo]:
    """Append a launch to the JSON log, starting afresh if it is missing or unreadable.

    Returns the full list of launches now stored.
    """
    target = Path(path)
    results = _load_results(target)
    results.append(token_info)
    document = {"results": [info.to_dict() for info in results]}
    target.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"Results logged to {target}")
    return results