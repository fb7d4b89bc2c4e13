"""Single-instance detection and messaging between local processes."""

from __future__ import annotations

import errno
import logging
import os
import re
import socket
import struct
import sys
import tempfile
import time
from typing import Callable

from ttkkit.lockedfile import LockedFile, LockMode

logger = logging.getLogger(__name__)

_ACK = b"ack"
_HEADER = struct.Struct(">I")
_NULL_LENGTH = 0xFFFFFFFF
_RETRY_DELAY = 0.25
_HEADER_TIMEOUT = 30.0
_BODY_TIMEOUT = 2.0
_ACK_TIMEOUT = 1.0
_USE_UNIX_SOCKET = hasattr(socket, "AF_UNIX") and os.name != "nt"

_CRC_TABLE = (
    0x0000, 0x1081, 0x2102, 0x3183, 0x4204, 0x5285, 0x6306, 0x7387,
    0x8408, 0x9489, 0xA50A, 0xB58B, 0xC60C, 0xD68D, 0xE70E, 0xF78F,
)


def qt_checksum(data: str | bytes | bytearray) -> int:
    """CRC-16 (ISO 3309 / X.25) of *data*; text is taken as UTF-8."""
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    crc = 0xFFFF
    for byte in raw:
        crc = ((crc >> 4) & 0x0FFF) ^ _CRC_TABLE[(crc ^ byte) & 15]
        crc = ((crc >> 4) & 0x0FFF) ^ _CRC_TABLE[(crc ^ (byte >> 4)) & 15]
    return ~crc & 0xFFFF


def _default_id() -> str:
    program = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    path = os.path.abspath(program).replace(os.sep, "/")
    return path.lower() if os.name == "nt" else path


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    """Read up to *size* bytes, stopping early only when the peer closes."""
    chunks = []
    remaining = size
    while remaining:
        chunk = sock.recv(min(remaining, 65536))
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


class LocalPeer:
    """One end of a single-instance link identified by an application id.

    The first peer to call :meth:`is_client` for an id becomes the server
    and listens for messages; later peers are clients and can send them.
    """

    def __init__(self, id: str = "", directory: str | os.PathLike[str] | None = None) -> None:
        self._id = id or _default_id()
        prefix = id if id else self._id.rsplit("/", 1)[-1]
        prefix = re.sub("[^a-zA-Z]", "", prefix)[:6]

        name = f"qtsingleapp-{prefix}-{qt_checksum(self._id):x}"
        if hasattr(os, "getuid"):
            name += f"-{os.getuid():x}"
        self._socket_name = name

        root = os.path.abspath(os.fspath(directory) if directory is not None else tempfile.gettempdir())
        self._socket_path = os.path.join(root, name)
        self._server: socket.socket | None = None
        self._callbacks: list[Callable[[str], None]] = []
        self._lock_file = LockedFile(os.path.join(root, name + "-lockfile"))
        self._lock_file.open("r+")

    def __enter__(self) -> "LocalPeer":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def application_id(self) -> str:
        """The id shared by all instances of the application."""
        return self._id

    def socket_name(self) -> str:
        """The name of the local socket the server listens on."""
        return self._socket_name

    def connect(self, callback: Callable[[str], None]) -> None:
        """Register a listener for messages received by the server."""
        self._callbacks.append(callback)

    def is_client(self) -> bool:
        """Tell whether another instance already holds the server role.

        The first call that wins the lock starts listening.
        """
        if self._lock_file.is_locked():
            return False
        if not self._lock_file.lock(LockMode.WRITE_LOCK, block=False):
            return True
        self._listen()
        return False

    def _listen(self) -> None:
        try:
            self._server = self._unix_server() if _USE_UNIX_SOCKET else self._tcp_server()
        except OSError as error:
            logger.warning("Application: listen on local socket failed, %s", error)
            self._server = None

    def _unix_server(self) -> socket.socket:
        server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            try:
                server.bind(self._socket_path)
            except OSError as error:
                if error.errno != errno.EADDRINUSE:
                    raise
                os.remove(self._socket_path)
                server.bind(self._socket_path)
            server.listen()
        except OSError:
            server.close()
            raise
        return server

    def _tcp_server(self) -> socket.socket:
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            server.bind(("127.0.0.1", 0))
            server.listen()
            with open(self._socket_path, "w", encoding="ascii") as handle:
                handle.write(str(server.getsockname()[1]))
        except OSError:
            server.close()
            raise
        return server

    def _connect_once(self, timeout: float) -> socket.socket:
        if _USE_UNIX_SOCKET:
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            address: object = self._socket_path
        else:
            with open(self._socket_path, encoding="ascii") as handle:
                port = int(handle.read().strip())
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            address = ("127.0.0.1", port)
        sock.settimeout(timeout)
        try:
            sock.connect(address)
        except OSError:
            sock.close()
            raise
        return sock

    def _connect(self, timeout: float) -> socket.socket | None:
        for attempt in range(2):
            try:
                return self._connect_once(timeout)
            except (OSError, ValueError):
                if attempt == 0:
                    time.sleep(_RETRY_DELAY)
        return None

    def send_message(self, message: str, timeout: float = 5.0) -> bool:
        """Send *message* to the running server; True once it is acknowledged.

        Returns False when this peer is the server itself or the message
        could not be delivered within *timeout* seconds.
        """
        if not self.is_client():
            return False
        sock = self._connect(timeout / 2)
        if sock is None:
            return False
        payload = message.encode("utf-8")
        with sock:
            try:
                sock.settimeout(timeout)
                sock.sendall(_HEADER.pack(len(payload)) + payload)
                return _recv_exact(sock, len(_ACK)) == _ACK
            except OSError:
                return False

    def receive_connection(self, timeout: float | None = None) -> str | None:
        """Accept one client and return its message, or None.

        Waits up to *timeout* seconds (for ever when None) for a client.
        Listeners receive the message after it has been acknowledged.
        """
        if self._server is None:
            return None
        self._server.settimeout(timeout)
        try:
            conn, _ = self._server.accept()
        except OSError:
            return None

        with conn:
            try:
                conn.settimeout(_HEADER_TIMEOUT)
                header = _recv_exact(conn, _HEADER.size)
            except OSError:
                header = b""
            if len(header) < _HEADER.size:
                logger.warning("LocalPeer: peer disconnected")
                return None

            (length,) = _HEADER.unpack(header)
            if length == _NULL_LENGTH:
                length = 0
            try:
                conn.settimeout(_BODY_TIMEOUT)
                body = _recv_exact(conn, length)
            except OSError as error:
                logger.warning("LocalPeer: message reception failed %s", error)
                return None
            if len(body) < length:
                logger.warning("LocalPeer: message reception failed")
                return None

            message = body.decode("utf-8", errors="replace")
            try:
                conn.settimeout(_ACK_TIMEOUT)
                conn.sendall(_ACK)
                conn.recv(1)  # wait for the client to read the ack and close
            except OSError:
                pass

        for callback in list(self._callbacks):
            callback(message)
        return message

    def close(self) -> None:
        """Stop listening and release the server role."""
        if self._server is not None:
            self._server.close()
            self._server = None
            try:
                os.remove(self._socket_path)
            except OSError:
                pass
        self._lock_file.close()