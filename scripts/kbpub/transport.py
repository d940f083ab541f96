"""
Remote transport: run commands on, and copy files to, the web server.

RemoteTransport is the interface the publisher talks to. SshTransport
implements it with the system ssh/scp clients, so the user's ssh config,
agent and keys apply unchanged. Both return the process exit code.
"""

import subprocess
from abc import ABC, abstractmethod

# Exit code reported when ssh/scp is not installed (same as the shell)
NOT_FOUND = 127


def shell_quote(s):
    """
    Quote a string for the remote POSIX shell.

    Single quotes, with embedded single quotes written as '"'"'.
    """
    if s == "":
        return "''"
    return "'" + s.replace("'", "'\"'\"'") + "'"


def remote_path(directory, name):
    """
    Build `directory/name` for a remote command line.

    The directory is quoted, the name is not, so a glob such as *.html
    still expands on the remote side.
    """
    return f"{shell_quote(directory.rstrip('/') or '/')}/{name}"


class RemoteTransport(ABC):
    """
    Abstract remote transport.

    Subclasses implement:
        run_remote_command(host, command)   -> exit code
        copy_files(paths, host, dest_dir)   -> exit code
    """

    @abstractmethod
    def run_remote_command(self, host, command):
        ...

    @abstractmethod
    def copy_files(self, paths, host, dest_dir):
        ...


class SshTransport(RemoteTransport):
    """Thin wrapper around system ssh/scp. Local stdio is inherited."""

    def __init__(self, port=22, extra_args=None, verbose=False):
        self.port = int(port or 22)
        self.extra_args = list(extra_args or [])
        self.verbose = verbose

    # ── Command builders ───────────────────────────────────

    def ssh_cmd(self, host, command):
        cmd = ["ssh"]
        if self.port != 22:
            cmd.extend(["-p", str(self.port)])
        cmd.extend(self.extra_args)
        cmd.extend([host, command])
        return cmd

    def scp_cmd(self, paths, host, dest_dir):
        cmd = ["scp"]
        if self.port != 22:
            cmd.extend(["-P", str(self.port)])
        cmd.extend(self.extra_args)
        cmd.extend(paths)
        cmd.append(f"{host}:{dest_dir}")
        return cmd

    # ── Execution ──────────────────────────────────────────

    def log(self, msg):
        if self.verbose:
            print(msg)

    def exec_cmd(self, cmd):
        self.log(f"  $ {' '.join(cmd)}")
        try:
            return subprocess.run(cmd).returncode
        except FileNotFoundError:
            print(f"  ✗ {cmd[0]} not found")
            return NOT_FOUND

    def run_remote_command(self, host, command):
        return self.exec_cmd(self.ssh_cmd(host, command))

    def copy_files(self, paths, host, dest_dir):
        return self.exec_cmd(self.scp_cmd(list(paths), host, dest_dir))
