"""Tests for the ssh/scp transport."""

import subprocess

import pytest

from kbpub.transport import NOT_FOUND, SshTransport, remote_path, shell_quote


class Completed:
    def __init__(self, returncode):
        self.returncode = returncode


@pytest.fixture
def recorded(monkeypatch):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return Completed(0)

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls


def test_shell_quote():
    assert shell_quote("") == "''"
    assert shell_quote("/srv/kb") == "'/srv/kb'"
    assert shell_quote("/srv/it's/kb") == "'/srv/it'\"'\"'s/kb'"


def test_remote_path_keeps_glob_unquoted():
    assert remote_path("/srv/my kb/kb", "*.html") == "'/srv/my kb/kb'/*.html"
    assert remote_path("/srv/kb/", "searchindex.js") == "'/srv/kb'/searchindex.js"


def test_ssh_default_port(recorded):
    rc = SshTransport().run_remote_command("host", "rm -f '/srv/kb'/*.html")
    assert rc == 0
    assert recorded == [["ssh", "host", "rm -f '/srv/kb'/*.html"]]


def test_scp_with_port_and_extra_args(recorded):
    transport = SshTransport(port=2222, extra_args=["-o", "BatchMode=yes"])
    transport.copy_files(["book/a.html", "book/b.html"], "user@host", "/srv/kb")
    transport.run_remote_command("user@host", "true")
    assert recorded == [
        ["scp", "-P", "2222", "-o", "BatchMode=yes", "book/a.html", "book/b.html", "user@host:/srv/kb"],
        ["ssh", "-p", "2222", "-o", "BatchMode=yes", "user@host", "true"],
    ]


def test_returns_exit_code(monkeypatch):
    monkeypatch.setattr(subprocess, "run", lambda cmd, **kw: Completed(255))
    assert SshTransport().run_remote_command("host", "true") == 255


def test_missing_binary(monkeypatch, capsys):
    def missing(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "run", missing)
    assert SshTransport().copy_files(["a.html"], "host", "/srv/kb") == NOT_FOUND
    assert "scp not found" in capsys.readouterr().out


def test_verbose_echoes_command(recorded, capsys):
    SshTransport(verbose=True).run_remote_command("host", "true")
    assert "$ ssh host true" in capsys.readouterr().out
