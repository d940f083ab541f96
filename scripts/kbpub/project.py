"""
Project root detection.

The build command runs in the project root, which is recognised by a
marker file (.gitignore unless publish.yaml says otherwise).
"""

import os

from kbpub.errors import NotProjectRootError


def is_project_root(path, marker):
    return os.path.exists(os.path.join(path, marker))


def require_project_root(path, marker):
    """Return the absolute project root, or raise NotProjectRootError."""
    path = os.path.abspath(path)
    if not is_project_root(path, marker):
        raise NotProjectRootError(f"{path} is not the project root.")
    return path
