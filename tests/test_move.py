import pytest

from loa.core import InvalidMoveTextError, Move, sq


def test_parse_builds_non_capturing_move():
    move = Move.parse("a1-b2")
    assert move == Move(sq("a1"), sq("b2"))
    assert move.origin is sq("a1")
    assert move.dest is sq("b2")
    assert not move.capture
    assert str(move) == "a1-b2"
    assert move.length == 1


@pytest.mark.parametrize("text", ["a1b2", "a1-z9", "a1-", "", "a1--b2", "a1 b2"])
def test_parse_rejects_malformed_text(text):
    with pytest.raises(InvalidMoveTextError):
        Move.parse(text)


def test_capture_move_keeps_squares():
    move = Move.mv(sq("c3"), sq("c6"))
    capture = move.capture_move()
    assert capture.capture
    assert capture.origin is move.origin
    assert capture.dest is move.dest
    assert capture != move
    assert not move.capture
