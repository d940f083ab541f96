#!/usr/bin/env python3
"""
Build the knowledge-base mdBook and publish it to your server.

Usage:
    python scripts/publish.py --hostname HOSTNAME --scp-loc SCP_LOCATION
    python scripts/publish.py --hostname kb.example.com -s /srv/nginx/kb -v

Run from the project root. SCP_LOCATION must end in /kb: the old
*.html and search index files there are deleted before the upload.

Requires: mdbook, ssh, scp, PyYAML
"""

import os
import sys

# Ensure kbpub is importable from the scripts/ directory
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from kbpub.cli import run


if __name__ == "__main__":
    run()
