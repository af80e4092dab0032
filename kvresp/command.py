"""Dispatch of client commands against the shared store."""

from __future__ import annotations

from typing import Callable, Protocol

from kvresp.db import WrongTypeError, get_db
from kvresp.protocol import (
    write_array,
    write_bulk_string,
    write_error,
    write_simple_string,
)


class _Writer(Protocol):
    def write(self, data: bytes) -> object: ...


_Handler = Callable[[_Writer, "list[str]"], None]
_COMMANDS: dict[str, _Handler] = {}


def _command(name: str) -> Callable[[_Handler], _Handler]:
    def register(handler: _Handler) -> _Handler:
        _COMMANDS[name] = handler
        return handler

    return register


@_command("PING")
def _ping(conn: _Writer, args: list[str]) -> None:
    if len(args) > 1:
        write_bulk_string(conn, args[1])
    else:
        write_simple_string(conn, "PONG")


@_command("ECHO")
def _echo(conn: _Writer, args: list[str]) -> None:
    if len(args) != 2:
        write_error(conn, "ERR wrong number of arguments for 'echo' command")
        return
    write_bulk_string(conn, args[1])


@_command("SET")
def _set(conn: _Writer, args: list[str]) -> None:
    if len(args) != 3:
        write_simple_string(conn, "ERR wrong number of arguments for 'set' command")
        return
    get_db().set_string(args[1], args[2])
    write_simple_string(conn, "OK")


@_command("GET")
def _get(conn: _Writer, args: list[str]) -> None:
    if len(args) != 2:
        write_bulk_string(conn, "ERR wrong number of arguments for 'get' command")
        return
    value = get_db().get_string(args[1])
    write_bulk_string(conn, "" if value is None else value)


@_command("HMSET")
def _hmset(conn: _Writer, args: list[str]) -> None:
    if len(args) < 4 or (len(args) - 2) % 2 != 0:
        write_error(conn, "ERR wrong number of arguments for 'hmset' command")
        return
    key = args[1]
    store = get_db()
    for field, value in zip(args[2::2], args[3::2]):
        try:
            store.hset_field(key, field, value)
        except WrongTypeError:
            write_error(conn, "ERR failed to set hash")
            return
    write_simple_string(conn, "OK")


@_command("HGET")
def _hget(conn: _Writer, args: list[str]) -> None:
    if len(args) != 3:
        write_error(conn, "ERR wrong number of arguments for 'hget' command")
        return
    value = get_db().hget_field(args[1], args[2])
    write_bulk_string(conn, "" if value is None else value)


@_command("SADD")
def _sadd(conn: _Writer, args: list[str]) -> None:
    if len(args) < 3:
        write_error(conn, "ERR wrong number of arguments for 'sadd' command")
        return
    try:
        get_db().sadd(args[1], args[2])
    except WrongTypeError:
        write_error(conn, "ERR failed to add member to set")
        return
    write_bulk_string(conn, "OK")


@_command("SMEMBERS")
def _smembers(conn: _Writer, args: list[str]) -> None:
    if len(args) != 2:
        write_error(conn, "ERR wrong number of arguments for 'smembers' command")
        return
    members = get_db().smembers(args[1])
    if members is None:
        write_error(conn, "ERR failed to get members from set")
        return
    write_array(conn, members)


@_command("LPUSH")
def _lpush(conn: _Writer, args: list[str]) -> None:
    if len(args) != 3:
        write_error(conn, "ERR wrong number of arguments for 'lpush' command")
        return
    try:
        values = get_db().lpush(args[1], args[2])
    except WrongTypeError:
        write_error(conn, "ERR failed to push value to list")
        return
    write_array(conn, values)
    write_simple_string(conn, "OK")


@_command("LGET")
def _lget(conn: _Writer, args: list[str]) -> None:
    if len(args) != 2:
        write_error(conn, "ERR wrong number of arguments for 'lget' command")
        return
    values = get_db().lget(args[1])
    if values is None:
        write_error(conn, "ERR failed to get list by index")
        return
    write_array(conn, values)


def handle_command(conn: _Writer, cmd: str, args: list[str]) -> None:
    """Run ``cmd`` (case-insensitive) with the full request ``args`` and write the reply to ``conn``."""
    handler = _COMMANDS.get(cmd.upper())
    if handler is None:
        write_simple_string(conn, f"ERR unknown command '{cmd}'")
        return
    handler(conn, args)