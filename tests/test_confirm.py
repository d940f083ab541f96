"""Tests for the yes/no prompt."""

import pytest

from kbpub.confirm import confirm, require_confirmation
from kbpub.errors import UserAborted

from conftest import answers


@pytest.mark.parametrize("reply", ["y", "Y", " y\n"])
def test_yes(reply):
    assert confirm("Proceed?", reader=answers(reply)) is True


@pytest.mark.parametrize("reply", ["n", "N"])
def test_no(reply):
    assert confirm("Proceed?", reader=answers(reply)) is False


def test_reasks_until_recognised():
    reader = answers("", "yes", "q", "nope", "x", "n")
    assert confirm("Proceed?", reader=reader) is False
    assert reader.prompts == ["Proceed? (y/n): "] * 6


def test_reasks_then_yes():
    reader = answers("1", "Yy", "y")
    assert confirm("Proceed?", reader=reader) is True
    assert len(reader.prompts) == 3


def test_eof_is_no():
    assert confirm("Proceed?", reader=answers("what")) is False


def test_require_confirmation_raises_on_no():
    with pytest.raises(UserAborted):
        require_confirmation("Proceed?", lambda q: False)
    require_confirmation("Proceed?", lambda q: True)
