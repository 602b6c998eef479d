"""
Tests for daemon/connector.py - default unix socket connector.

Uses a real asyncio unix server in a temporary directory.
"""

import asyncio
import logging
import shutil
import socket
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from turbod.daemon.connector import (
    BaseConnector,
    ClientDescriptor,
    ClientOptions,
    DaemonClient,
    UnixSocketConnector,
)
from turbod.daemon.errors import DaemonConnectionError, DaemonNotRunningError


def make_descriptor(sock_path: Path, opts: ClientOptions = ClientOptions()) -> ClientDescriptor:
    return ClientDescriptor(
        logger=logging.getLogger("turbod.test.TurbodClient"),
        bin=Path("/usr/local/bin/turbo"),
        opts=opts,
        sock_path=sock_path,
        pid_path=sock_path.with_name("turbod.pid"),
        log_path=Path("/data/logs/0123456789abcdef-proj.log"),
        turbo_version="1.10.0",
    )


class TestBaseConnector(unittest.TestCase):
    """Test cases for the connector contract."""

    def test_cannot_instantiate_abstract_connector(self):
        with self.assertRaises(TypeError):
            BaseConnector()

    def test_descriptor_is_immutable(self):
        descriptor = make_descriptor(Path("/tmp/turbod/x/turbod.sock"))
        with self.assertRaises(AttributeError):
            descriptor.turbo_version = "2.0.0"


@unittest.skipIf(sys.platform == "win32", "unix sockets only")
class TestUnixSocketConnector(unittest.IsolatedAsyncioTestCase):
    """Test cases for UnixSocketConnector."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp(prefix="td")
        self.sock_path = Path(self.temp_dir) / "turbod.sock"

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    async def test_connects_to_listening_daemon(self):
        accepted = asyncio.Event()

        async def handle(reader, writer):
            accepted.set()
            writer.close()

        server = await asyncio.start_unix_server(handle, path=str(self.sock_path))
        try:
            client = await UnixSocketConnector().connect(make_descriptor(self.sock_path))
            self.assertIsInstance(client, DaemonClient)
            self.assertEqual(client.socket_path, self.sock_path)

            await asyncio.wait_for(accepted.wait(), 5)
            async with client:
                self.assertFalse(client.closed)
            self.assertTrue(client.closed)
        finally:
            server.close()
            await server.wait_closed()

    async def test_connects_with_timeout(self):
        async def handle(reader, writer):
            writer.close()

        server = await asyncio.start_unix_server(handle, path=str(self.sock_path))
        try:
            descriptor = make_descriptor(self.sock_path, ClientOptions(server_timeout=5.0))
            client = await UnixSocketConnector().connect(descriptor)
            await client.close()
        finally:
            server.close()
            await server.wait_closed()

    async def test_zero_timeout_bounds_the_attempt(self):
        self.sock_path.touch()

        async def never_connects(path):
            await asyncio.Event().wait()

        descriptor = make_descriptor(self.sock_path, ClientOptions(server_timeout=0))
        with patch("turbod.daemon.connector.asyncio.open_unix_connection", new=never_connects):
            with self.assertRaises(DaemonConnectionError) as context:
                await asyncio.wait_for(UnixSocketConnector().connect(descriptor), 5)

        self.assertIn("Timed out", str(context.exception))

    async def test_missing_socket_raises_not_running(self):
        with self.assertRaises(DaemonNotRunningError):
            await UnixSocketConnector().connect(make_descriptor(self.sock_path))

    async def test_stale_socket_raises_not_running(self):
        stale = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        stale.bind(str(self.sock_path))
        stale.close()

        with self.assertRaises(DaemonNotRunningError) as context:
            await UnixSocketConnector().connect(make_descriptor(self.sock_path))
        self.assertIsInstance(context.exception, DaemonConnectionError)


if __name__ == "__main__":
    unittest.main()
