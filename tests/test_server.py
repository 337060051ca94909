"""Tests for app.server port probing."""

import socket
import unittest
from unittest.mock import patch

from app import server


class TestFindFreePort(unittest.TestCase):
    def test_occupied_port_is_skipped(self) -> None:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(("127.0.0.1", 0))
            sock.listen(1)
            taken = sock.getsockname()[1]
            self.assertFalse(server.port_is_free("127.0.0.1", taken))
            port = server.find_free_port("127.0.0.1", taken)
        self.assertGreater(port, taken)

    def test_first_free_port_is_returned_unchanged(self) -> None:
        with patch.object(server, "port_is_free", return_value=True):
            self.assertEqual(server.find_free_port("127.0.0.1", 8080), 8080)

    def test_walks_upward_until_free(self) -> None:
        with patch.object(server, "port_is_free", side_effect=[False, False, True]):
            self.assertEqual(server.find_free_port("127.0.0.1", 9000), 9002)

    def test_exhausted_range_raises(self) -> None:
        with patch.object(server, "port_is_free", return_value=False):
            with self.assertRaises(server.NoFreePortError):
                server.find_free_port("127.0.0.1", 65530)

    def test_main_reports_no_free_port(self) -> None:
        with patch.object(server, "find_free_port", side_effect=server.NoFreePortError("none")), \
                patch.object(server.uvicorn, "run") as run:
            self.assertEqual(server.main(), 1)
        run.assert_not_called()

    def test_main_serves_on_probed_port(self) -> None:
        with patch.object(server, "find_free_port", return_value=8123), \
                patch.object(server.uvicorn, "run") as run:
            self.assertEqual(server.main(), 0)
        self.assertEqual(run.call_args.kwargs["port"], 8123)


if __name__ == "__main__":
    unittest.main()
