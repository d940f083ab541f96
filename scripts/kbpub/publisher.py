"""
Publish sequence.

    Confirming → Building → DeletingRemote → Uploading → Done

Any step can fail; the failure is raised and nothing after it runs.
There are no retries and no rollback, so a failure mid-transfer can
leave the remote directory partly deleted or partly uploaded.
"""

import os

from kbpub.builder import SEARCH_INDEX_FILES
from kbpub.confirm import confirm, require_confirmation
from kbpub.errors import TransferFailed, exit_status
from kbpub.transport import remote_path

# States
CONFIRMING = "Confirming"
BUILDING = "Building"
DELETING_REMOTE = "DeletingRemote"
UPLOADING = "Uploading"
DONE = "Done"
FAILED = "Failed"

OVERWRITE_WARNING = "This will overwrite the files for the mdBook on your server."


def delete_commands(remote_dir):
    """The three remote rm commands, in order."""
    return [
        f"rm -f {remote_path(remote_dir, name)}"
        for name in ["*.html"] + SEARCH_INDEX_FILES
    ]


class Publisher:
    """
    Drives one publish run.

    Usage:
        publisher = Publisher(invocation, builder, transport)
        publisher.run()        # raises a PublishError on failure
    """

    def __init__(self, invocation, builder, transport, confirm_fn=confirm):
        self.invocation = invocation
        self.builder = builder
        self.transport = transport
        self.confirm_fn = confirm_fn
        self.state = CONFIRMING

    # ── Logging ────────────────────────────────────────────

    def header(self, title):
        print(f"\n{'─' * 60}")
        print(f"  {title}")
        print(f"{'─' * 60}")

    # ── Steps ──────────────────────────────────────────────

    def confirm(self):
        self.state = CONFIRMING
        print()
        print(OVERWRITE_WARNING)
        print()
        require_confirmation("Proceed?", self.confirm_fn)
        print()

    def build(self):
        self.state = BUILDING
        self.header("Building book")
        output = self.builder.build()
        print(f"  ✓ Built {len(output)} files")
        return output

    def delete_remote(self):
        self.state = DELETING_REMOTE
        self.header(f"Removing old files: {self.invocation.destination}")
        host = self.invocation.hostname
        for command in delete_commands(self.invocation.remote_dir):
            rc = self.transport.run_remote_command(host, command)
            self.check(rc, f"ssh {host} {command}")

    def upload(self, output):
        self.state = UPLOADING
        self.header(f"Uploading: {self.invocation.destination}")
        host = self.invocation.hostname
        batches = [output.html_files] + [[path] for path in output.search_index_files]
        for paths in batches:
            rc = self.transport.copy_files(paths, host, self.invocation.remote_dir)
            label = f"{len(paths)} html files" if len(paths) > 1 else os.path.basename(paths[0])
            self.check(rc, f"scp {label}")

    def check(self, rc, label):
        if rc != 0:
            print(f"  ✗ {label} failed (exit {rc})")
            raise TransferFailed(
                f"{label} failed (exit {rc}) during {self.state}; "
                "the remote directory may be incomplete",
                exit_status(rc),
                step=label,
            )
        print(f"  ✓ {label}")

    # ── Run ────────────────────────────────────────────────

    def run(self):
        try:
            self.confirm()
            output = self.build()
            self.delete_remote()
            self.upload(output)
        except Exception:
            self.state = FAILED
            raise
        self.state = DONE
        print(f"\n{'─' * 60}")
        print(f"  Done. Published to {self.invocation.destination}")
