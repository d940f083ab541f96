"""
Publish configuration.

Two layers:
    Invocation       per-run values parsed from the command line, immutable
    PublishSettings  optional publish.yaml in the project root, with defaults
"""

import os
import shlex
import sys
from dataclasses import dataclass

try:
    import yaml
except ImportError:
    print("Error: PyYAML is required. Install with: pip install pyyaml")
    sys.exit(1)


SETTINGS_FILE = "publish.yaml"

# Defaults applied if missing
DEFAULTS = {
    "build_command": "mdbook build",
    "output_dir": "book",
    "project_marker": ".gitignore",
    "ssh": {},
}

SSH_DEFAULTS = {
    "port": 22,
    "extra_args": "",
}

# The remote directory must end with this, since we run rm against it
SAFE_SUFFIX = "/kb"


class ConfigError(Exception):
    """Raised when publish.yaml is invalid."""
    pass


@dataclass(frozen=True)
class Invocation:
    """Validated command-line configuration for a single run."""

    hostname: str
    remote_dir: str
    verbose: bool = False

    @property
    def destination(self):
        """The scp destination, HOST:DIR."""
        return f"{self.hostname}:{self.remote_dir}"


class PublishSettings:
    """
    Loaded publish.yaml settings.

    Usage:
        settings = PublishSettings.load(project_root)
        settings.build_args     # ["mdbook", "build"]
        settings.ssh["port"]    # 22
    """

    def __init__(self, data, project_root):
        self._data = data
        self.project_root = project_root

    @classmethod
    def load(cls, project_root):
        """Load publish.yaml from the project root. A missing file means defaults."""
        yaml_path = os.path.join(project_root, SETTINGS_FILE)
        data = {}

        if os.path.exists(yaml_path):
            with open(yaml_path) as f:
                try:
                    data = yaml.safe_load(f)
                except yaml.YAMLError as e:
                    raise ConfigError(f"{SETTINGS_FILE} is not valid YAML: {e}")

            # An empty file loads as None
            if data is None:
                data = {}
            if not isinstance(data, dict):
                raise ConfigError(
                    f"{SETTINGS_FILE} must be a YAML mapping, got {type(data).__name__}"
                )

        for key, default in DEFAULTS.items():
            data.setdefault(key, default if not isinstance(default, (list, dict)) else type(default)(default))

        if not isinstance(data["ssh"], dict):
            raise ConfigError(f"{SETTINGS_FILE}: 'ssh' must be a mapping")
        for key, default in SSH_DEFAULTS.items():
            data["ssh"].setdefault(key, default)

        port = data["ssh"]["port"]
        if isinstance(port, bool) or not isinstance(port, int):
            raise ConfigError(f"{SETTINGS_FILE}: ssh.port must be an integer, got {port!r}")

        for key in ["output_dir", "project_marker"]:
            if not isinstance(data[key], str) or not data[key]:
                raise ConfigError(f"{SETTINGS_FILE}: {key} must be a non-empty string")

        if not isinstance(data["build_command"], (str, list)):
            raise ConfigError(f"{SETTINGS_FILE}: build_command must be a string or a list")

        settings = cls(data, project_root)
        if not settings.build_args:
            raise ConfigError(f"{SETTINGS_FILE}: build_command must not be empty")
        settings.ssh_extra_args  # raises on bad quoting

        return settings

    # ── Attribute access ───────────────────────────────────

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(f"PublishSettings has no field '{name}'")

    # ── Convenience ────────────────────────────────────────

    @property
    def build_args(self):
        """The build command as an argv list."""
        cmd = self.build_command
        if isinstance(cmd, (list, tuple)):
            return [str(part) for part in cmd]
        try:
            return shlex.split(str(cmd))
        except ValueError as e:
            raise ConfigError(f"{SETTINGS_FILE}: cannot parse build_command: {e}")

    @property
    def output_path(self):
        """Absolute path of the local build output directory."""
        return os.path.join(self.project_root, self.output_dir)

    @property
    def ssh_extra_args(self):
        extra = (self.ssh.get("extra_args") or "")
        if isinstance(extra, (list, tuple)):
            return [str(arg) for arg in extra]
        try:
            return shlex.split(str(extra))
        except ValueError as e:
            raise ConfigError(f"{SETTINGS_FILE}: cannot parse ssh.extra_args: {e}")

    def summary(self, invocation):
        """Print a short run summary."""
        print(f"\n  Host:   {invocation.hostname}")
        print(f"  Remote: {invocation.remote_dir}")
        print(f"  Build:  {' '.join(self.build_args)}")
        print(f"  Output: {self.output_path}")
