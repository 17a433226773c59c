"""Tests for hexants.world.geometry."""

import pytest

from hexants.world.geometry import Direction, Position, TurnDirection


class TestDirection:
    """Tests for hex facings and turning."""

    def test_ordinals(self) -> None:
        assert [d.value for d in Direction] == [0, 1, 2, 3, 4, 5]

    def test_turn_right_wraps(self) -> None:
        assert Direction.UP_RIGHT.turn_right() == Direction.RIGHT
        assert Direction.RIGHT.turn_right() == Direction.DOWN_RIGHT

    def test_turn_left_wraps(self) -> None:
        assert Direction.RIGHT.turn_left() == Direction.UP_RIGHT
        assert Direction.LEFT.turn_left() == Direction.DOWN_LEFT

    @pytest.mark.parametrize("turn", list(TurnDirection))
    @pytest.mark.parametrize("start", list(Direction))
    def test_six_turns_return_to_start(
        self,
        start: Direction,
        turn: TurnDirection,
    ) -> None:
        d = start
        for _ in range(6):
            d = d.apply_turn(turn)
        assert d == start

    def test_left_undoes_right(self) -> None:
        for d in Direction:
            assert d.turn_right().turn_left() == d


class TestPosition:
    """Tests for hex neighbour offsets."""

    @pytest.mark.parametrize(
        ("direction", "expected"),
        [
            (Direction.RIGHT, Position(6, 5)),
            (Direction.DOWN_RIGHT, Position(5, 6)),
            (Direction.DOWN_LEFT, Position(4, 6)),
            (Direction.LEFT, Position(4, 5)),
            (Direction.UP_LEFT, Position(5, 4)),
            (Direction.UP_RIGHT, Position(6, 4)),
        ],
    )
    def test_translate(self, direction: Direction, expected: Position) -> None:
        assert Position(5, 5).translate(direction) == expected

    def test_translate_may_leave_grid(self) -> None:
        assert Position(0, 0).translate(Direction.UP_LEFT) == Position(0, -1)

    def test_opposite_steps_cancel(self) -> None:
        start = Position(3, 3)
        for d in Direction:
            back = d.turn_right().turn_right().turn_right()
            assert start.translate(d).translate(back) == start
