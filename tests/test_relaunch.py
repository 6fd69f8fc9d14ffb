"""Tests for the relaunch protocol."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest

from options_window.errors import RelaunchError
from options_window.relaunch import LaunchMode, classify, run_relaunch, script_path_for_link
from options_window.services.shell import artifact_paths, write_script


@pytest.fixture
def relaunch_pair(tmp_path, fake_executable):
    """A script/link pair as the terminal strategy leaves them."""
    script, link = artifact_paths(tmp_path, "Ab3dEf6hIj9lMn2pQr5tUv8xYz1bCd")
    os.symlink(fake_executable, link)
    return script, link


class TestClassify:
    @pytest.mark.parametrize(
        "argv0",
        ["/run/user/1000/options-window_abc.cmd", "options-window_abc.cmd", "x.cmd"],
    )
    def test_relaunch(self, argv0):
        assert classify(argv0) is LaunchMode.SCRIPT_RELAUNCH

    @pytest.mark.parametrize(
        "argv0",
        ["/usr/bin/options-window", "options-window", "/tmp/x.sh", "/tmp/cmd", "/tmp/x.cmd.bak"],
    )
    def test_normal(self, argv0):
        assert classify(argv0) is LaunchMode.NORMAL


class TestScriptPath:
    def test_strips_cmd_and_appends_sh(self):
        assert script_path_for_link("/run/user/1000/options-window_abc.cmd") == (
            "/run/user/1000/options-window_abc.sh"
        )

    def test_keeps_non_ascii_bytes(self):
        link = "/tmp/dir-\udcff/options-window_Zz9.cmd"
        assert script_path_for_link(link) == "/tmp/dir-\udcff/options-window_Zz9.sh"


class TestRunRelaunch:
    def test_removes_link_and_runs_script(self, tmp_path, relaunch_pair):
        script, link = relaunch_pair
        marker = tmp_path / "marker"
        write_script(script, f'touch "{marker}"')

        assert run_relaunch(str(link)) == 0

        assert not os.path.lexists(link)
        assert not script.exists()
        assert marker.exists()

    def test_returns_script_status(self, relaunch_pair):
        script, link = relaunch_pair
        write_script(script, "exit 3")
        assert run_relaunch(str(link)) == 3

    def test_missing_link_is_not_fatal(self, tmp_path, caplog):
        script, link = artifact_paths(tmp_path, "nolink")
        marker = tmp_path / "marker"
        write_script(script, f'touch "{marker}"')

        with caplog.at_level(logging.WARNING, logger="options_window.relaunch"):
            assert run_relaunch(str(link)) == 0

        assert "Couldn't delete link" in caplog.text
        assert marker.exists()

    def test_waits_for_script(self, relaunch_pair):
        _, link = relaunch_pair
        with patch("options_window.relaunch.subprocess.Popen") as popen:
            popen.return_value.wait.return_value = 0
            run_relaunch(str(link))
        popen.assert_called_once_with(["/bin/sh", script_path_for_link(str(link))])
        popen.return_value.wait.assert_called_once_with()

    def test_spawn_failure_is_fatal(self, relaunch_pair):
        _, link = relaunch_pair
        with patch("options_window.relaunch.subprocess.Popen", side_effect=OSError("boom")):
            with pytest.raises(RelaunchError, match="spawn"):
                run_relaunch(str(link))
        assert not os.path.lexists(link)

    def test_wait_failure_is_fatal(self, relaunch_pair):
        _, link = relaunch_pair
        with patch("options_window.relaunch.subprocess.Popen") as popen:
            popen.return_value.wait.side_effect = OSError("wait failed")
            with pytest.raises(RelaunchError):
                run_relaunch(str(link))
