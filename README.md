# kvresp

kvresp is a small in-memory key-value server that speaks the RESP protocol. Clients such as `redis-cli` can connect to it. It stores strings, hashes, sets and lists in memory.

## Installation

```
pip install .
```

## Running the server

```
kvresp-server
```

```
kvresp-server --host 127.0.0.1 --port 7000
```

- `--host` sets the address to bind. The default is all interfaces.
- `--port` sets the TCP port. The default is 6379.

Ctrl-C or SIGTERM stops the server. If the port cannot be bound, the command logs the reason and exits with status 1.

## Requests

Each request is a RESP array of bulk strings. The parser does not check the declared length of each bulk string. It takes the payload as the next line, with the trailing CRLF removed. If a request is malformed, the server logs it and closes the connection.

## Supported commands

Command names are case-insensitive.

| Command | Reply |
|---|---|
| `PING [message]` | `+PONG`, or the message as a bulk string |
| `ECHO message` | the message as a bulk string |
| `SET key value` | `+OK` |
| `GET key` | the value as a bulk string. If the key is missing or does not hold a string, an empty bulk string |
| `HMSET key field value [field value ...]` | `+OK`. If the key holds another type, `-ERR failed to set hash` |
| `HGET key field` | the field value as a bulk string. If the field cannot be found, an empty bulk string |
| `SADD key member` | `OK` as a bulk string. If the key holds another type, `-ERR failed to add member to set` |
| `SMEMBERS key` | the members as an array of bulk strings. If the key is missing or is not a set, an error |
| `LPUSH key value` | appends the value to the tail of the list. The reply is the whole list as an array, followed by `+OK` |
| `LGET key` | the list as an array of bulk strings. If the key is missing or is not a list, an error |

These cases get a non-standard reply:

- An unknown command gets the simple string `+ERR unknown command '<name>'`.
- `SET` with the wrong number of arguments gets its error text as a simple string.
- `GET` with the wrong number of arguments gets its error text as a bulk string.

## Using the pieces as a library

You can use the storage and protocol layers on their own:

```python
import io
from kvresp.db import get_db
from kvresp.protocol import parse_array, write_array

db = get_db()
db.set_string("greeting", "hello")
print(db.get_string("greeting"))   # hello

db.lpush("queue", "a")
print(db.lpush("queue", "b"))      # ['a', 'b']

out = io.BytesIO()
write_array(out, db.lget("queue"))
print(out.getvalue())              # b'*2\r\n$1\r\na\r\n$1\r\nb\r\n'

request = io.BytesIO(b"*2\r\n$4\r\nECHO\r\n$2\r\nhi\r\n")
print(parse_array(request))        # ['ECHO', 'hi']
```

- `kvresp.db.DB` is the store.
  - The getters (`get_string`, `hget_field`, `smembers`, `lget`) return `None` when the key is missing or holds another type.
  - The writers `hset_field`, `sadd` and `lpush` raise `kvresp.db.WrongTypeError` when the key holds another type.
- `get_db()` returns the store shared by the whole process.
- `kvresp.protocol.parse_array` raises `EOFError` when the input ends early. It raises `ProtocolError` when the input is malformed.
- `kvresp.command.handle_command(conn, cmd, args)` runs one command against the shared store. It writes the reply to any object that has a `write(bytes)` method.
- `kvresp.server.Server` wraps a listening socket and serves each client on its own thread.
  - `start()` accepts clients until the server is stopped.
  - `stop()`, called from another thread, closes the listener and waits for open connections to finish.

## What it does not do

The server keeps everything in memory. Data is lost when the process exits. Keys do not expire. The server has no commands to delete keys or to remove elements from hashes, sets or lists. Only the commands listed above are supported.

## Running the tests

```
pip install .[test]
pytest
```