"""TCP server speaking RESP, and the command that runs it."""

from __future__ import annotations

import argparse
import logging
import signal
import socket
import threading

from kvresp.command import handle_command
from kvresp.protocol import ProtocolError, parse_array

log = logging.getLogger(__name__)

_ACCEPT_POLL_SECONDS = 0.2
_DEFAULT_PORT = 6379


class _SocketWriter:
    """Adapts a socket to the ``write(bytes)`` interface used by the protocol writers."""

    def __init__(self, conn: socket.socket) -> None:
        self._conn = conn

    def write(self, data: bytes) -> int:
        self._conn.sendall(data)
        return len(data)


class Server:
    """Serves clients accepted from a listening socket, one thread per connection."""

    def __init__(self, listener: socket.socket) -> None:
        self._listener = listener
        self._quit = threading.Event()
        self._workers: set[threading.Thread] = set()
        self._workers_lock = threading.Lock()

    def start(self) -> None:
        """Accept connections until stopped; accept failures not caused by stopping are raised."""
        self._listener.settimeout(_ACCEPT_POLL_SECONDS)
        while True:
            try:
                conn, _ = self._listener.accept()
            except TimeoutError:
                if self._quit.is_set():
                    return None
                continue
            except OSError:
                if self._quit.is_set():
                    return None
                raise
            worker = threading.Thread(target=self._serve, args=(conn,), daemon=True)
            with self._workers_lock:
                self._workers.add(worker)
            worker.start()

    def _serve(self, conn: socket.socket) -> None:
        try:
            self._handle_conn(conn)
        finally:
            with self._workers_lock:
                self._workers.discard(threading.current_thread())

    def _handle_conn(self, conn: socket.socket) -> None:
        conn.settimeout(None)
        writer = _SocketWriter(conn)
        with conn, conn.makefile("rb") as reader:
            while True:
                try:
                    request = parse_array(reader)
                except EOFError:
                    return
                except (ProtocolError, ValueError) as exc:
                    log.warning("parse error: %s", exc)
                    return
                except OSError:
                    return
                if not request:
                    continue
                try:
                    handle_command(writer, request[0], request)
                except OSError:
                    return

    def _close_listener(self) -> None:
        self._quit.set()
        self._listener.close()

    def stop(self) -> None:
        """Stop accepting, close the listener and wait for open connections to finish."""
        self._close_listener()
        with self._workers_lock:
            workers = list(self._workers)
        for worker in workers:
            worker.join()


def main(argv: list[str] | None = None) -> int:
    """Run the server until SIGINT or SIGTERM."""
    parser = argparse.ArgumentParser(prog="kvresp", description="In-memory key-value server speaking RESP.")
    parser.add_argument("--host", default="", help="address to bind (default: all interfaces)")
    parser.add_argument("--port", type=int, default=_DEFAULT_PORT, help="TCP port (default: %(default)s)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    try:
        listener = socket.create_server((args.host, args.port))
    except OSError as exc:
        log.error("cannot listen on %s:%d: %s", args.host, args.port, exc)
        return 1
    log.info("listening on %s:%d", args.host, args.port)

    server = Server(listener)
    stop_requested = threading.Event()

    def _on_signal(signum: int, frame: object) -> None:
        stop_requested.set()

    signal.signal(signal.SIGINT, _on_signal)
    signal.signal(signal.SIGTERM, _on_signal)

    threading.Thread(target=server.start, daemon=True).start()
    stop_requested.wait()

    log.info("shutting down...")
    server._close_listener()
    return 0