"""Tests for game.py - movement, wraparound, food and collisions."""

import random

import numpy as np
import pytest

from wrapsnake.config import FOOD_REWARD
from wrapsnake.game import (
    BODY, EMPTY, FOOD, HEAD,
    Direction, GameState, Phase, TickOutcome,
    is_opposite, new_game_state, spawn_food, wrap,
)


class TestReset:
    """Tests for starting a game."""

    def test_reset_centres_three_cell_snake(self):
        """Snake starts at the grid centre, three cells long, extending left."""
        state = GameState(grid_size=20, rng=random.Random(1))
        state.reset()
        assert state.snake == [(10, 10), (9, 10), (8, 10)]
        assert state.direction is Direction.RIGHT
        assert state.pending is Direction.RIGHT
        assert state.score == 0
        assert state.running
        assert state.final_score is None

    def test_reset_places_food_off_the_snake(self):
        """Initial food is on the grid and not under the snake."""
        state = new_game_state(grid_size=10, seed=3)
        fx, fy = state.food
        assert 0 <= fx < 10 and 0 <= fy < 10
        assert state.food not in state.snake

    def test_reset_overwrites_a_finished_game(self, dying_state):
        """Reset after game over starts a clean running game."""
        dying_state.tick()
        assert dying_state.phase is Phase.GAME_OVER
        dying_state.reset(grid_size=8)
        assert dying_state.running
        assert dying_state.score == 0
        assert dying_state.final_score is None
        assert dying_state.snake == [(4, 4), (3, 4), (2, 4)]

    def test_reset_rejects_tiny_grid(self):
        """A grid narrower than the starting snake is refused."""
        with pytest.raises(ValueError):
            GameState().reset(grid_size=2)

    def test_fresh_state_is_not_started(self):
        state = GameState()
        assert state.phase is Phase.NOT_STARTED
        assert not state.running
        assert state.tick() is TickOutcome.IDLE

    def test_same_seed_same_food(self):
        assert new_game_state(seed=7).food == new_game_state(seed=7).food


class TestMovement:
    """Tests for plain moves and wraparound."""

    def test_move_keeps_length(self, make_state):
        """Without food the head advances and the tail is dropped."""
        state = make_state([(2, 2), (1, 2), (0, 2)], food=(4, 4))
        assert state.tick() is TickOutcome.MOVED
        assert state.snake == [(3, 2), (2, 2), (1, 2)]

    @pytest.mark.parametrize(
        "snake, direction, expected_head",
        [
            ([(0, 2), (1, 2), (2, 2)], Direction.LEFT, (4, 2)),
            ([(4, 2), (3, 2), (2, 2)], Direction.RIGHT, (0, 2)),
            ([(2, 0), (2, 1), (2, 2)], Direction.UP, (2, 4)),
            ([(2, 4), (2, 3), (2, 2)], Direction.DOWN, (2, 0)),
        ],
    )
    def test_wraps_at_every_edge(self, make_state, snake, direction, expected_head):
        state = make_state(snake, direction=direction, food=(0, 0))
        assert state.tick() is TickOutcome.MOVED
        assert state.head == expected_head
        assert len(state.snake) == 3

    def test_wrap_helper(self):
        assert wrap((-1, 3), 5) == (4, 3)
        assert wrap((5, 0), 5) == (0, 0)
        assert wrap((2, -1), 5) == (2, 4)
        assert wrap((2, 2), 5) == (2, 2)


class TestDirection:
    """Tests for turning and the anti-reversal rule."""

    def test_reversal_is_ignored(self, make_state):
        state = make_state([(2, 2), (1, 2), (0, 2)], food=(4, 4))
        assert state.set_direction(Direction.LEFT) is False
        assert state.pending is Direction.RIGHT
        state.tick()
        assert state.direction is Direction.RIGHT

    @pytest.mark.parametrize("turn", [Direction.UP, Direction.DOWN])
    def test_perpendicular_turn_is_taken(self, make_state, turn):
        state = make_state([(2, 2), (1, 2), (0, 2)], food=(4, 4))
        assert state.set_direction(turn) is True
        state.tick()
        assert state.direction is turn
        assert state.head == (2, 2 + turn.dy)

    def test_latest_request_before_tick_wins(self, make_state):
        """Only one pending slot: the last accepted request is used."""
        state = make_state([(2, 2), (1, 2), (0, 2)], food=(4, 4))
        state.set_direction(Direction.UP)
        state.set_direction(Direction.DOWN)
        state.tick()
        assert state.head == (2, 3)

    def test_two_quick_turns_cannot_reverse(self, make_state):
        """UP then LEFT within one tick: LEFT is checked against the committed RIGHT."""
        state = make_state([(2, 2), (1, 2), (0, 2)], food=(4, 4))
        state.set_direction(Direction.UP)
        state.set_direction(Direction.LEFT)
        assert state.pending is Direction.UP
        assert state.tick() is TickOutcome.MOVED
        assert state.head == (2, 1)

    def test_opposites(self):
        assert Direction.UP.opposite() is Direction.DOWN
        assert Direction.LEFT.opposite() is Direction.RIGHT
        assert is_opposite(Direction.RIGHT, Direction.LEFT)
        assert not is_opposite(Direction.RIGHT, Direction.UP)
        assert not is_opposite(Direction.RIGHT, Direction.RIGHT)


class TestFood:
    """Tests for eating, scoring and food placement."""

    def test_eating_grows_by_one_and_scores(self, make_state):
        state = make_state([(2, 2), (1, 2), (0, 2)], food=(3, 2))
        assert state.tick() is TickOutcome.ATE
        assert state.snake == [(3, 2), (2, 2), (1, 2), (0, 2)]
        assert state.score == FOOD_REWARD == 10
        assert state.food is not None
        assert state.food not in state.snake

    def test_score_after_k_foods(self, make_state):
        state = make_state([(3, 0), (2, 0), (1, 0)], grid_size=10)
        for k in range(1, 5):
            hx, hy = state.head
            state.food = (hx + 1, hy)
            assert state.tick() is TickOutcome.ATE
            assert state.score == 10 * k
        assert len(state.snake) == 7

    def test_spawn_finds_the_last_free_cell(self):
        snake = [(x, y) for y in range(3) for x in range(3) if (x, y) != (1, 1)]
        assert spawn_food(snake, 3, random.Random(0)) == (1, 1)

    def test_spawn_on_full_board_gives_none(self):
        snake = [(x, y) for y in range(3) for x in range(3)]
        assert spawn_food(snake, 3, random.Random(0)) is None

    def test_spawn_never_lands_on_snake(self):
        snake = [(0, 0), (1, 0), (2, 0), (3, 0), (3, 1), (3, 2), (2, 2)]
        for seed in range(50):
            assert spawn_food(snake, 4, random.Random(seed)) not in snake

    def test_food_stays_free_over_a_long_game(self):
        """Steer in a square and check every regenerated food."""
        state = new_game_state(grid_size=8, seed=11)
        turns = [Direction.DOWN, Direction.LEFT, Direction.UP, Direction.RIGHT]
        for i in range(200):
            if i % 5 == 0:
                state.set_direction(turns[(i // 5) % 4])
            outcome = state.tick()
            if outcome is TickOutcome.DIED:
                break
            assert state.food not in state.snake


class TestCollision:
    """Tests for self-collision and the game-over state."""

    def test_turning_into_body_ends_game(self, dying_state):
        before = list(dying_state.snake)
        assert dying_state.tick() is TickOutcome.DIED
        assert dying_state.phase is Phase.GAME_OVER
        assert not dying_state.running
        assert dying_state.final_score == 30
        assert dying_state.snake == before

    def test_no_mutation_after_game_over(self, dying_state):
        dying_state.tick()
        snapshot = (list(dying_state.snake), dying_state.food, dying_state.score, dying_state.direction)
        for _ in range(3):
            assert dying_state.tick() is TickOutcome.IDLE
        assert (list(dying_state.snake), dying_state.food, dying_state.score, dying_state.direction) == snapshot

    def test_tail_cell_counts_as_collision(self, make_state):
        """The scan covers every segment, including the tail about to move."""
        state = make_state(
            [(2, 2), (2, 1), (3, 1), (3, 2)],
            direction=Direction.DOWN,
            pending=Direction.RIGHT,
            grid_size=6,
        )
        assert state.tick() is TickOutcome.DIED

    def test_collision_across_the_wrap(self, make_state):
        state = make_state([(4, 0), (3, 0), (2, 0), (1, 0), (0, 0)], food=(2, 2))
        assert state.tick() is TickOutcome.DIED


class TestBoard:
    """Tests for the numpy board view."""

    def test_board_codes(self, make_state):
        state = make_state([(2, 2), (1, 2), (0, 2)], food=(4, 0))
        board = state.board()
        assert board.shape == (5, 5)
        assert board.dtype == np.int8
        assert board[2, 2] == HEAD
        assert board[2, 1] == BODY and board[2, 0] == BODY
        assert board[0, 4] == FOOD
        assert np.count_nonzero(board == EMPTY) == 25 - 4

    def test_board_of_fresh_game(self, state):
        board = state.board()
        assert np.count_nonzero(board == HEAD) == 1
        assert np.count_nonzero(board == BODY) == 2
        assert np.count_nonzero(board == FOOD) == 1
