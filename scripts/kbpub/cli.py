"""
Command line for the publisher.

    publish.py --hostname HOSTNAME --scp-loc SCP_LOCATION [-v]
    publish.py -h | --help

Parses and validates the flags, checks we are in the project root,
then hands over to Publisher. Every failure ends in a non-zero exit.
"""

import argparse
import os
import sys
import traceback

from kbpub.builder import BookBuilder, run_subprocess
from kbpub.config import SAFE_SUFFIX, ConfigError, Invocation, PublishSettings
from kbpub.confirm import confirm
from kbpub.errors import (
    BuildFailed,
    NotProjectRootError,
    TransferFailed,
    UnsafeDestinationError,
    UsageError,
    UserAborted,
)
from kbpub.project import require_project_root
from kbpub.publisher import Publisher
from kbpub.transport import SshTransport

PROG = "publish.py"

ERROR_LOG = "publish_error.log"


# ── Argument Parser ────────────────────────────────────────────────────


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


class StoreOnce(argparse.Action):
    """Store a value, refusing a second occurrence of the flag."""

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest, None) is not None:
            raise argparse.ArgumentError(self, "may only be given once")
        setattr(namespace, self.dest, values)


def build_parser():
    parser = UsageParser(
        prog=PROG,
        description="Builds the mdBook and publishes it to your server.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
        epilog="""
examples:
  %(prog)s --hostname kb.example.com --scp-loc /srv/nginx/kb
  %(prog)s --hostname 10.0.0.5 -s /var/www/kb -v
        """,
    )
    parser.add_argument(
        "--hostname",
        action=StoreOnce,
        metavar="HOSTNAME",
        help="Either the hostname or IP address of the remote server",
    )
    parser.add_argument(
        "-s", "--scp-loc",
        dest="scp_loc",
        action=StoreOnce,
        metavar="SCP_LOCATION",
        help="This is typically going to be NGINX_ROOT/kb",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Echo each external command"
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show this help")
    return parser


def usage_text(parser=None):
    return (parser or build_parser()).format_help()


def parse_invocation(argv, parser=None):
    """
    Parse and validate argv into an Invocation.

    Raises UsageError for bad flags or missing values, and
    UnsafeDestinationError when SCP_LOCATION is not a 'kb' folder.
    """
    parser = parser or build_parser()
    args = parser.parse_args(argv)

    if args.help:
        raise UsageError()
    if not args.scp_loc:
        raise UsageError("--scp-loc is required")
    if not args.hostname:
        raise UsageError("--hostname is required")
    # ssh/scp would read it as an option
    if args.hostname.startswith("-"):
        raise UsageError(f"invalid hostname {args.hostname!r}")

    if not args.scp_loc.endswith(SAFE_SUFFIX):
        raise UnsafeDestinationError(
            f"SCP_LOCATION {args.scp_loc} is not a folder named 'kb'"
        )

    return Invocation(hostname=args.hostname, remote_dir=args.scp_loc, verbose=args.verbose)


def print_unsafe_warning():
    print()
    print("SCP_LOCATION is not a folder named 'kb'!")
    print("This could be fine, but dangerous to continue since we run a rm command on the SCP_LOCATION.")
    print("If you intended to do this, do so manually.")
    print()


# ── Main ───────────────────────────────────────────────────────────────


def main(argv=None, confirm_fn=confirm, transport=None, runner=run_subprocess, cwd=None):
    """
    Run the publish command. Returns the process exit code.

    confirm_fn, transport and runner replace the interactive prompt,
    ssh/scp and the build subprocess respectively.
    """
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]

    try:
        invocation = parse_invocation(argv, parser)
    except UsageError as e:
        print(usage_text(parser))
        if str(e):
            print(f"Error: {e}")
        return e.exit_code
    except UnsafeDestinationError as e:
        print_unsafe_warning()
        return e.exit_code

    try:
        project_root = os.path.abspath(cwd or os.getcwd())
        settings = PublishSettings.load(project_root)
        require_project_root(project_root, settings.project_marker)
    except NotProjectRootError as e:
        print(f"E: {e}", file=sys.stderr)
        return e.exit_code
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    if invocation.verbose:
        settings.summary(invocation)

    if transport is None:
        transport = SshTransport(
            port=settings.ssh["port"],
            extra_args=settings.ssh_extra_args,
            verbose=invocation.verbose,
        )

    builder = BookBuilder(
        settings.build_args,
        project_root,
        settings.output_path,
        runner=runner,
        verbose=invocation.verbose,
    )
    publisher = Publisher(invocation, builder, transport, confirm_fn=confirm_fn)

    try:
        publisher.run()
    except UserAborted as e:
        return e.exit_code
    except BuildFailed as e:
        print(f"  ✗ {e}")
        print("  Nothing was changed on the server.")
        return e.exit_code
    except TransferFailed as e:
        print(f"\n  Error: {e}")
        return e.exit_code

    return 0


def run():
    """Console entry point: main() plus interrupt and crash handling."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except Exception as e:
        with open(ERROR_LOG, "w") as f:
            traceback.print_exc(file=f)
        print(f"\nUnexpected error: {e}")
        print(f"Full traceback written to {ERROR_LOG}")
        sys.exit(1)
