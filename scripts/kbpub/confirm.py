"""
Interactive yes/no confirmation.
"""

from kbpub.errors import UserAborted

YES = ("y", "Y")
NO = ("n", "N")


def confirm(question, reader=input):
    """
    Ask `question` until the reply is a single y/Y or n/N.

    Returns True for yes, False for no. End of input counts as no.
    Anything else re-asks.
    """
    while True:
        try:
            reply = reader(f"{question} (y/n): ")
        except EOFError:
            print()
            return False

        reply = reply.strip()
        if reply in YES:
            return True
        if reply in NO:
            return False


def require_confirmation(question, confirm_fn=confirm):
    """Run `confirm_fn`; raise UserAborted unless it says yes."""
    if not confirm_fn(question):
        raise UserAborted("Publish declined")
