"""Reading and writing the RESP wire format."""

from __future__ import annotations

import re
from typing import BinaryIO, Iterable, Protocol

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"
_CRLF = b"\r\n"
_INTEGER = re.compile(rb"[+-]?[0-9]+")


class ProtocolError(ValueError):
    """Raised when incoming data does not follow the expected RESP shape."""


class _Writer(Protocol):
    def write(self, data: bytes) -> object: ...


def _read_line(reader: BinaryIO) -> bytes:
    """Read one line up to and including ``\\n``; raise EOFError if it is cut short."""
    line = reader.readline()
    if not line.endswith(b"\n"):
        raise EOFError("connection closed before end of line")
    return line


def _strip_crlf(line: bytes) -> bytes:
    return line[: -len(_CRLF)] if line.endswith(_CRLF) else line


def _decode(raw: bytes) -> str:
    return raw.decode(_ENCODING, _ERRORS)


def _encode(text: str) -> bytes:
    return text.encode(_ENCODING, _ERRORS)


def parse_array(reader: BinaryIO) -> list[str]:
    """Parse one RESP array of bulk strings from a binary line reader.

    The declared length of each bulk string is not checked: the payload is the
    following line with its trailing CRLF removed.
    """
    line = _read_line(reader)
    if not line.startswith(b"*"):
        raise ProtocolError(f"expected *, got {line!r}")

    count_text = _strip_crlf(line[1:])
    if not _INTEGER.fullmatch(count_text):
        raise ProtocolError(f"invalid array length {count_text!r}")
    count = int(count_text)
    if count < 0:
        raise ProtocolError(f"negative array length {count}")

    result: list[str] = []
    for _ in range(count):
        header = _read_line(reader)
        if not header.startswith(b"$"):
            raise ProtocolError(f"expected $, got {header!r}")
        result.append(_decode(_strip_crlf(_read_line(reader))))
    return result


def write_simple_string(writer: _Writer, s: str) -> None:
    """Write a RESP simple string: ``+s\\r\\n``."""
    writer.write(b"+" + _encode(s) + _CRLF)


def write_bulk_string(writer: _Writer, s: str) -> None:
    """Write a RESP bulk string: ``$len\\r\\ns\\r\\n`` with the length in bytes."""
    payload = _encode(s)
    writer.write(b"$" + str(len(payload)).encode("ascii") + _CRLF + payload + _CRLF)


def write_error(writer: _Writer, s: str) -> None:
    """Write a RESP error: ``-s\\r\\n``."""
    writer.write(b"-" + _encode(s) + _CRLF)


def write_array(writer: _Writer, items: Iterable[str]) -> None:
    """Write a RESP array whose elements are bulk strings."""
    items = list(items)
    writer.write(b"*" + str(len(items)).encode("ascii") + _CRLF)
    for item in items:
        write_bulk_string(writer, item)