"""
Book build step.

Runs the static-site generator (mdbook by default) in the project root
and collects the files the publisher uploads:

    <output_dir>/*.html
    <output_dir>/searchindex.js
    <output_dir>/searchindex.json
"""

import glob
import os
import re
import subprocess

from kbpub.errors import BuildFailed, exit_status

SEARCH_INDEX_FILES = ["searchindex.js", "searchindex.json"]

NOT_FOUND = 127


def natural_sort_key(s):
    """Sort strings with embedded numbers naturally (2.html before 10.html)."""
    return [
        int(text) if text.isdigit() else text.lower()
        for text in re.split(r"(\d+)", s)
    ]


class BuildOutput:
    """The generated files that get published."""

    def __init__(self, html_files, search_index_files):
        self.html_files = html_files
        self.search_index_files = search_index_files

    @property
    def all_files(self):
        return self.html_files + self.search_index_files

    def __len__(self):
        return len(self.all_files)


def run_subprocess(cmd, cwd):
    """Default runner: inherit stdio, return the exit code."""
    return subprocess.run(cmd, cwd=cwd).returncode


class BookBuilder:
    """
    Runs the book build command and checks its output.

    `runner(cmd, cwd) -> exit code` is swappable so tests can stand in
    for mdbook.
    """

    def __init__(self, command, project_root, output_dir, runner=run_subprocess, verbose=False):
        self.command = list(command)
        self.project_root = project_root
        self.output_dir = output_dir
        self.runner = runner
        self.verbose = verbose

    def log(self, msg):
        if self.verbose:
            print(msg)

    def build(self):
        """Run the build. Raises BuildFailed; returns the BuildOutput."""
        self.log(f"  $ {' '.join(self.command)}")
        try:
            rc = self.runner(self.command, self.project_root)
        except FileNotFoundError:
            raise BuildFailed(f"{self.command[0]} not found", NOT_FOUND)

        if rc != 0:
            raise BuildFailed(f"Book build failed (exit {rc})", exit_status(rc))

        return self.collect()

    def collect(self):
        """Gather the output set. Raises BuildFailed if anything is missing."""
        if not os.path.isdir(self.output_dir):
            raise BuildFailed(f"Build output directory {self.output_dir} not found")

        html_files = sorted(
            glob.glob(os.path.join(self.output_dir, "*.html")),
            key=natural_sort_key,
        )
        if not html_files:
            raise BuildFailed(f"No .html files in {self.output_dir}")

        search_index = [os.path.join(self.output_dir, name) for name in SEARCH_INDEX_FILES]
        missing = [os.path.basename(p) for p in search_index if not os.path.isfile(p)]
        if missing:
            raise BuildFailed(
                f"Build output missing: {', '.join(missing)} (in {self.output_dir})"
            )

        self.log(f"  Output: {len(html_files)} html files + search index")
        return BuildOutput(html_files, search_index)
