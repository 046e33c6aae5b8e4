"""Unit tests for the run_local and start_server scripts."""

import unittest
from unittest.mock import patch

import run_local
import start_server


class TestRunLocal(unittest.TestCase):
    """Tests for run_local script."""

    @patch("run_local.execute_from_command_line")
    def test_main_calls_runlocal(self, mock_execute):
        """Test that main() runs the runlocal command."""
        run_local.main()

        args = mock_execute.call_args[0][0]
        self.assertEqual(args[1:], ["runlocal"])


class TestStartServer(unittest.TestCase):
    """Tests for start_server script."""

    @patch("start_server.run")
    def test_main_runs_gunicorn_with_project_wsgi(self, mock_run):
        """Test the gunicorn argv."""
        with patch("start_server.sys") as mock_sys:
            start_server.main()

        mock_run.assert_called_once()
        self.assertIn("checkin_notifications.wsgi:application", mock_sys.argv)
