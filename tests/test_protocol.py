import io

import pytest

from kvresp.protocol import (
    ProtocolError,
    parse_array,
    write_array,
    write_bulk_string,
    write_error,
    write_simple_string,
)


def test_parse_simple_command():
    reader = io.BytesIO(b"*2\r\n$4\r\nECHO\r\n$5\r\nhello\r\n")
    assert parse_array(reader) == ["ECHO", "hello"]


def test_parse_consecutive_arrays():
    reader = io.BytesIO(b"*1\r\n$4\r\nPING\r\n*3\r\n$3\r\nSET\r\n$1\r\nk\r\n$1\r\nv\r\n")
    assert parse_array(reader) == ["PING"]
    assert parse_array(reader) == ["SET", "k", "v"]


def test_parse_empty_array():
    assert parse_array(io.BytesIO(b"*0\r\n")) == []


def test_parse_empty_input_raises_eof():
    with pytest.raises(EOFError):
        parse_array(io.BytesIO(b""))


def test_parse_truncated_array_raises_eof():
    with pytest.raises(EOFError):
        parse_array(io.BytesIO(b"*2\r\n$4\r\nECHO\r\n"))


def test_parse_partial_line_raises_eof():
    with pytest.raises(EOFError):
        parse_array(io.BytesIO(b"*1\r\n$4\r\nPI"))


def test_parse_missing_star():
    with pytest.raises(ProtocolError):
        parse_array(io.BytesIO(b"+PING\r\n"))


def test_parse_bad_count():
    with pytest.raises(ProtocolError):
        parse_array(io.BytesIO(b"*x\r\n"))


def test_parse_negative_count():
    with pytest.raises(ProtocolError):
        parse_array(io.BytesIO(b"*-1\r\n"))


def test_parse_missing_dollar():
    with pytest.raises(ProtocolError):
        parse_array(io.BytesIO(b"*1\r\n:4\r\nPING\r\n"))


def test_protocol_error_is_value_error():
    with pytest.raises(ValueError):
        parse_array(io.BytesIO(b"hello\r\n"))


def test_write_simple_string():
    buf = io.BytesIO()
    write_simple_string(buf, "PONG")
    assert buf.getvalue() == b"+PONG\r\n"


def test_write_error():
    buf = io.BytesIO()
    write_error(buf, "ERR failed")
    assert buf.getvalue() == b"-ERR failed\r\n"


def test_write_bulk_string():
    buf = io.BytesIO()
    write_bulk_string(buf, "hello")
    assert buf.getvalue() == b"$5\r\nhello\r\n"


def test_write_empty_bulk_string():
    buf = io.BytesIO()
    write_bulk_string(buf, "")
    assert buf.getvalue() == b"$0\r\n\r\n"


def test_bulk_length_counts_bytes():
    buf = io.BytesIO()
    write_bulk_string(buf, "héllo")
    header, payload, tail = buf.getvalue().split(b"\r\n")
    assert tail == b""
    assert int(header[1:]) == len(payload)
    assert payload.decode("utf-8") == "héllo"


def test_write_array_round_trip():
    items = ["SET", "key", "value with spaces", "ünïcode"]
    buf = io.BytesIO()
    write_array(buf, items)
    out = buf.getvalue()
    assert out.startswith(b"*4\r\n")
    assert parse_array(io.BytesIO(out)) == items


def test_write_empty_array():
    buf = io.BytesIO()
    write_array(buf, [])
    assert parse_array(io.BytesIO(buf.getvalue())) == []


def test_write_array_accepts_generator():
    buf = io.BytesIO()
    write_array(buf, (s for s in ["a", "b"]))
    assert parse_array(io.BytesIO(buf.getvalue())) == ["a", "b"]