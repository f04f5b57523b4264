import pytest

from loa.core import ALL_SQUARES, InvalidSquareError, parse_square, sq


def test_squares_are_shared_instances():
    assert sq(4, 3) is sq("e4")
    assert sq("e4") is ALL_SQUARES[28]
    assert sq("e4").index == 28
    assert [s.index for s in ALL_SQUARES] == list(range(64))


@pytest.mark.parametrize("text", ["i1", "a9", "a0", "a", "a10", "A1", "", " e4"])
def test_parse_square_rejects_malformed_designators(text):
    with pytest.raises(InvalidSquareError):
        parse_square(text)


def test_sq_rejects_off_board_coordinates():
    with pytest.raises(InvalidSquareError):
        sq(8, 0)
    with pytest.raises(InvalidSquareError):
        sq(0, -1)


def test_adjacent_counts():
    assert len(sq("a1").adjacent()) == 3
    assert len(sq("a4").adjacent()) == 5
    assert len(sq("e4").adjacent()) == 8
    assert set(sq("a1").adjacent()) == {sq("a2"), sq("b1"), sq("b2")}


def test_direction_and_distance():
    a1 = sq("a1")
    assert a1.direction(sq("a8")) == 0
    assert a1.direction(sq("h8")) == 1
    assert a1.direction(sq("h1")) == 2
    assert sq("h8").direction(a1) == 5
    assert a1.direction(sq("b3")) == -1
    assert a1.direction(a1) == -1
    assert a1.distance(sq("h8")) == 7
    assert sq("c2").distance(sq("c5")) == 3
    assert a1.is_valid_move(sq("d4"))
    assert not a1.is_valid_move(sq("c4"))


def test_move_dest():
    assert sq("a1").move_dest(0, 7) is sq("a8")
    assert sq("d4").move_dest(3, 2) is sq("f2")
    assert sq("a1").move_dest(4, 1) is None
    assert sq("h8").move_dest(1, 1) is None


def test_square_name():
    assert str(sq(0, 0)) == "a1"
    assert sq(7, 7).name == "h8"
