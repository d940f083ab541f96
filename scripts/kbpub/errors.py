"""
Error taxonomy for the publish workflow.

Every error is fatal. Library code raises; cli.main() turns the error
into a message and exits with `exit_code`.
"""


class PublishError(Exception):
    """Base for all publish failures."""

    exit_code = 1

    def __init__(self, message="", exit_code=None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(PublishError):
    """Malformed, missing, duplicated, or unrecognized flags."""
    pass


class UnsafeDestinationError(PublishError):
    """The remote directory is not a folder named 'kb'."""
    pass


class NotProjectRootError(PublishError):
    """The working directory is not the project root."""
    pass


class UserAborted(PublishError):
    """The operator declined the confirmation prompt."""
    pass


class BuildFailed(PublishError):
    """The book build failed, or produced an incomplete output set."""
    pass


class TransferFailed(PublishError):
    """A remote delete or copy command exited non-zero."""

    def __init__(self, message="", exit_code=None, step=None):
        super().__init__(message, exit_code)
        self.step = step


def exit_status(rc):
    """Map a subprocess return code to a process exit status (signals as 128+N)."""
    return rc if rc >= 0 else 128 - rc
