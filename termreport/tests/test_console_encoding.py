"""Tests for termreport.console_encoding."""

import os
from unittest import mock

from termreport.console_encoding import configure_utf8_output


class TestConfigureUtf8Output:

    @mock.patch("termreport.console_encoding.sys")
    def test_noop_off_windows(self, mock_sys):
        mock_sys.platform = "linux"
        configure_utf8_output()
        mock_sys.stdout.reconfigure.assert_not_called()
        mock_sys.stderr.reconfigure.assert_not_called()

    @mock.patch("termreport.console_encoding.sys")
    def test_reconfigures_streams_on_windows(self, mock_sys):
        mock_sys.platform = "win32"
        configure_utf8_output()
        mock_sys.stdout.reconfigure.assert_called_once_with(encoding="utf-8", errors="replace")
        mock_sys.stderr.reconfigure.assert_called_once_with(encoding="utf-8", errors="replace")

    @mock.patch.dict(os.environ, {"MSYSTEM": "MINGW64"}, clear=False)
    @mock.patch("termreport.console_encoding.sys")
    def test_git_bash_environment_untouched(self, mock_sys):
        mock_sys.platform = "win32"
        for key in ("LANG", "LC_ALL", "LC_CTYPE", "PYTHONUTF8", "PYTHONIOENCODING"):
            os.environ.pop(key, None)
        before = dict(os.environ)
        configure_utf8_output()
        assert dict(os.environ) == before

    @mock.patch("termreport.console_encoding.sys")
    def test_unreconfigurable_stream_left_alone(self, mock_sys):
        mock_sys.platform = "win32"
        mock_sys.stdout.reconfigure.side_effect = ValueError("detached")
        configure_utf8_output()
        mock_sys.stderr.reconfigure.assert_called_once()
