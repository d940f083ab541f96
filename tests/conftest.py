"""Shared fixtures: a fake project, a fake mdbook, and a fake remote."""

import fnmatch
import os
import shlex

import pytest

BOOK_FILES = ["index.html", "chapter1.html", "searchindex.js", "searchindex.json"]


class FakeTransport:
    """Records every call; returns `fail_rc` on call number `fail_at` (1-based)."""

    def __init__(self, fail_at=None, fail_rc=1):
        self.calls = []
        self.fail_at = fail_at
        self.fail_rc = fail_rc

    def _result(self):
        return self.fail_rc if len(self.calls) == self.fail_at else 0

    def run_remote_command(self, host, command):
        self.calls.append(("ssh", host, command))
        return self._result()

    def copy_files(self, paths, host, dest_dir):
        self.calls.append(("scp", list(paths), host, dest_dir))
        return self._result()


class FakeRemote(FakeTransport):
    """A transport backed by an in-memory remote directory listing."""

    def __init__(self, files=()):
        super().__init__()
        self.files = set(files)

    def run_remote_command(self, host, command):
        rc = super().run_remote_command(host, command)
        # "rm -f '<dir>'/<pattern>"
        pattern = shlex.split(command)[-1].rsplit("/", 1)[-1]
        self.files = {f for f in self.files if not fnmatch.fnmatch(f, pattern)}
        return rc

    def copy_files(self, paths, host, dest_dir):
        rc = super().copy_files(paths, host, dest_dir)
        self.files.update(os.path.basename(p) for p in paths)
        return rc


class FakeBuild:
    """Stands in for mdbook: writes `files` into book/ and returns `rc`."""

    def __init__(self, files=BOOK_FILES, rc=0):
        self.files = files
        self.rc = rc
        self.calls = []

    def __call__(self, cmd, cwd):
        self.calls.append((list(cmd), cwd))
        if self.rc == 0:
            out = os.path.join(cwd, "book")
            os.makedirs(out, exist_ok=True)
            for name in self.files:
                with open(os.path.join(out, name), "w") as f:
                    f.write(name)
        return self.rc


def answers(*replies):
    """A reader for confirm() that plays back `replies`, then hits EOF."""
    replies = list(replies)
    prompts = []

    def reader(prompt):
        prompts.append(prompt)
        if not replies:
            raise EOFError
        return replies.pop(0)

    reader.prompts = prompts
    return reader


@pytest.fixture
def project(tmp_path):
    """An empty project root (has a .gitignore)."""
    (tmp_path / ".gitignore").write_text("book/\n")
    return tmp_path


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def fake_build():
    return FakeBuild()
