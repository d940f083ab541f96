"""
kbpub: build the knowledge-base mdBook and publish it over ssh/scp.

Public API:
    from kbpub.cli import main, parse_invocation
    from kbpub.config import Invocation, PublishSettings
    from kbpub.builder import BookBuilder
    from kbpub.transport import RemoteTransport, SshTransport
    from kbpub.publisher import Publisher
"""
