"""Tests for port availability (infra/ports.py) and the preview pre-flight check.

``psutil`` is mocked for ownership lookups; availability is probed
against real sockets bound to ephemeral ports.

Coverage:
* ``is_port_free`` on a free and on a listening port.
* ``blame`` resolves the listening process, or gives up quietly.
* ``check_port`` returns silently or exits 1 with an actionable message.
"""

from __future__ import annotations

import asyncio
import socket
import sys
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import psutil
import pytest

from kit_cli.cli import exit_codes
from kit_cli.cli.preflight import check_port
from kit_cli.infra.ports import blame, is_port_free


def _listening_socket() -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("", 0))
    sock.listen(1)
    return sock


def _conn(port: int, pid: int | None = 4242, status: str = psutil.CONN_LISTEN) -> SimpleNamespace:
    return SimpleNamespace(
        laddr=SimpleNamespace(ip="0.0.0.0", port=port),
        status=status,
        pid=pid,
    )


# ---------------------------------------------------------------------------
# is_port_free
# ---------------------------------------------------------------------------

class TestIsPortFree:
    def test_listening_port_is_not_free(self) -> None:
        with _listening_socket() as sock:
            port = sock.getsockname()[1]
            assert is_port_free(port) is False

    def test_released_port_is_free(self) -> None:
        with _listening_socket() as sock:
            port = sock.getsockname()[1]
        assert is_port_free(port) is True

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX address reuse semantics")
    def test_time_wait_connections_do_not_occupy_port(self) -> None:
        with _listening_socket() as server:
            port = server.getsockname()[1]
            with socket.create_connection(("127.0.0.1", port)) as client:
                accepted, _ = server.accept()
                # closing the server side first leaves it in TIME_WAIT
                accepted.close()
                client.recv(1)
        assert is_port_free(port) is True


# ---------------------------------------------------------------------------
# blame
# ---------------------------------------------------------------------------

class TestBlame:
    @patch("kit_cli.infra.ports.psutil.Process")
    @patch("kit_cli.infra.ports.psutil.net_connections")
    def test_names_listening_process(
        self,
        mock_connections: MagicMock,
        mock_process: MagicMock,
    ) -> None:
        mock_connections.return_value = [_conn(8080, pid=1), _conn(3000, pid=4242)]
        mock_process.return_value.name.return_value = "node"

        assert blame(3000) == "node"
        mock_process.assert_called_once_with(4242)

    @patch("kit_cli.infra.ports.psutil.net_connections")
    def test_ignores_non_listening_connections(self, mock_connections: MagicMock) -> None:
        mock_connections.return_value = [_conn(3000, status=psutil.CONN_ESTABLISHED)]
        assert blame(3000) is None

    @patch("kit_cli.infra.ports.psutil.net_connections")
    def test_connection_without_pid(self, mock_connections: MagicMock) -> None:
        mock_connections.return_value = [_conn(3000, pid=None)]
        assert blame(3000) is None

    @patch("kit_cli.infra.ports.psutil.net_connections", side_effect=psutil.AccessDenied())
    def test_access_denied_listing(self, _mock_connections: MagicMock) -> None:
        assert blame(3000) is None

    @patch("kit_cli.infra.ports.psutil.Process", side_effect=psutil.NoSuchProcess(4242))
    @patch("kit_cli.infra.ports.psutil.net_connections")
    def test_process_vanished(
        self,
        mock_connections: MagicMock,
        _mock_process: MagicMock,
    ) -> None:
        mock_connections.return_value = [_conn(3000)]
        assert blame(3000) is None


# ---------------------------------------------------------------------------
# check_port
# ---------------------------------------------------------------------------

class TestCheckPort:
    @patch("kit_cli.infra.ports.blame")
    @patch("kit_cli.infra.ports.is_port_free", return_value=True)
    def test_free_port_returns_silently(
        self,
        _mock_free: MagicMock,
        mock_blame: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert asyncio.run(check_port(3000)) is None
        mock_blame.assert_not_called()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    @patch("kit_cli.infra.ports.blame", return_value="node")
    @patch("kit_cli.infra.ports.is_port_free", return_value=False)
    def test_occupied_port_names_owner(
        self,
        _mock_free: MagicMock,
        _mock_blame: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            asyncio.run(check_port(3000))
        assert exc_info.value.code == exit_codes.GENERAL_ERROR

        err = capsys.readouterr().err
        assert "Port 3000 is occupied" in err
        assert "Terminate process" in err
        assert "node" in err
        assert "--port" in err

    @patch("kit_cli.infra.ports.blame", return_value=None)
    @patch("kit_cli.infra.ports.is_port_free", return_value=False)
    def test_occupied_port_without_owner(
        self,
        _mock_free: MagicMock,
        _mock_blame: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            asyncio.run(check_port(3000))
        assert exc_info.value.code == exit_codes.GENERAL_ERROR

        err = capsys.readouterr().err
        assert "Terminate the process occupying the port" in err
        assert "--port" in err
