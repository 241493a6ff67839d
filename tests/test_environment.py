"""Tests for the can world dynamics, rewards and percepts."""

import numpy as np
import pytest

from environment import Action, CanWorldEnv, Cell, Percept
from environment.constants import ACTION_DELTAS, REWARD_CAN, REWARD_CRASH, REWARD_NO_CAN
from environment.generation import exits_grid, random_grid


MOVES = [Action.MOVE_NORTH, Action.MOVE_SOUTH, Action.MOVE_EAST, Action.MOVE_WEST]


class TestConstruction:
    """Fixed and randomized construction."""

    def test_fixed_constructor_is_empty(self):
        """The plain constructor gives an empty grid with the robot where asked."""
        env = CanWorldEnv(dimension=4, n_cans=5, robot_pos=(2, 3))
        assert env.can_count() == 0
        assert env.robot_pos == (2, 3)
        assert env.crashes == 0

    @pytest.mark.parametrize("dimension,n_cans", [(1, 0), (1, 1), (3, 0), (3, 4), (3, 9), (10, 20), (10, 100)])
    def test_randomized_places_exact_can_count(self, dimension, n_cans):
        """Randomized grids hold exactly the requested number of cans."""
        env = CanWorldEnv.randomized(dimension, n_cans, seed=dimension * 100 + n_cans)
        assert env.can_count() == n_cans
        assert int(np.count_nonzero(env.grid == Cell.CAN)) == n_cans
        assert not np.any(env.grid == Cell.WALL)
        x, y = env.robot_pos
        assert 0 <= x < dimension and 0 <= y < dimension

    def test_random_grid_cells_are_distinct(self, rng):
        """Cans land on distinct coordinates."""
        grid = random_grid(5, 12, rng)
        positions = list(zip(*np.nonzero(grid == Cell.CAN)))
        assert len(positions) == 12
        assert len(set(positions)) == 12

    def test_too_many_cans_fails_fast(self):
        """Asking for more cans than cells is a configuration error."""
        with pytest.raises(ValueError):
            CanWorldEnv(dimension=3, n_cans=10)
        with pytest.raises(ValueError):
            CanWorldEnv.randomized(2, 5)

    @pytest.mark.parametrize("kwargs", [
        {"dimension": 0, "n_cans": 0},
        {"dimension": 3, "n_cans": -1},
        {"dimension": 3, "n_cans": 0, "robot_pos": (3, 0)},
        {"dimension": 3, "n_cans": 0, "robot_pos": (0, -1)},
        {"dimension": 3, "n_cans": 0, "render_mode": "rgb_array"},
    ])
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(ValueError):
            CanWorldEnv(**kwargs)

    def test_reset_is_reproducible_with_seed(self):
        env_a = CanWorldEnv(dimension=6, n_cans=8)
        env_b = CanWorldEnv(dimension=6, n_cans=8)
        obs_a, _ = env_a.reset(seed=7)
        obs_b, _ = env_b.reset(seed=7)
        assert obs_a == obs_b
        assert env_a.robot_pos == env_b.robot_pos
        assert np.array_equal(env_a.grid, env_b.grid)

    def test_reset_clears_counters(self):
        env = CanWorldEnv(dimension=2, n_cans=0, robot_pos=(0, 0))
        env.step(Action.MOVE_NORTH)
        assert env.crashes == 1
        env.reset(seed=0)
        assert env.crashes == 0
        assert env.steps == 0
        assert env.cans_collected == 0


class TestObserve:
    """Percepts built from the grid."""

    def test_top_left_corner(self, empty_3x3):
        """Off-grid neighbours read as walls, the current cell as empty."""
        empty_3x3.grid[0, 1] = Cell.CAN  # east of the robot
        p = empty_3x3.observe()
        assert p.north == Cell.WALL
        assert p.west == Cell.WALL
        assert p.current == Cell.EMPTY
        assert p.south == Cell.EMPTY
        assert p.east == Cell.CAN

    def test_bottom_right_corner(self, empty_3x3):
        empty_3x3.robot_pos = (2, 2)
        empty_3x3.grid[1, 2] = Cell.CAN  # north of the robot
        p = empty_3x3.observe()
        assert p == Percept(
            current=Cell.EMPTY, north=Cell.CAN, south=Cell.WALL, east=Cell.WALL, west=Cell.EMPTY
        )

    def test_single_cell_grid_sees_only_walls(self):
        env = CanWorldEnv(dimension=1, n_cans=0)
        env.grid[0, 0] = Cell.CAN
        p = env.observe()
        assert p.current == Cell.CAN
        assert (p.north, p.south, p.east, p.west) == (Cell.WALL,) * 4

    def test_observe_has_no_side_effects(self):
        env = CanWorldEnv.randomized(5, 10, seed=3)
        grid_before = env.grid.copy()
        first = env.observe()
        second = env.observe()
        assert first == second
        assert np.array_equal(env.grid, grid_before)

    def test_percept_is_in_observation_space(self):
        env = CanWorldEnv.randomized(5, 10, seed=3)
        assert env.observation_space.contains(env.observe())


class TestPickUp:
    """Picking up cans."""

    def test_pick_up_can_then_nothing(self, empty_3x3):
        """First pickup collects the can, the second is penalised and changes nothing."""
        empty_3x3.grid[0, 0] = Cell.CAN
        assert empty_3x3.can_count() == 1

        assert empty_3x3.reward(Action.PICK_UP) == REWARD_CAN
        _, reward, _, _, info = empty_3x3.step(Action.PICK_UP)
        assert reward == REWARD_CAN
        assert empty_3x3.grid[0, 0] == Cell.EMPTY
        assert empty_3x3.can_count() == 0
        assert info["cans_collected"] == 1

        grid_before = empty_3x3.grid.copy()
        _, reward, _, _, _ = empty_3x3.step(Action.PICK_UP)
        assert reward == REWARD_NO_CAN
        assert np.array_equal(empty_3x3.grid, grid_before)
        assert empty_3x3.robot_pos == (0, 0)
        assert empty_3x3.cans_collected == 1
        assert empty_3x3.crashes == 0

    def test_reward_does_not_change_state(self, empty_3x3):
        empty_3x3.grid[0, 0] = Cell.CAN
        empty_3x3.reward(Action.PICK_UP)
        empty_3x3.reward(Action.MOVE_NORTH)
        assert empty_3x3.can_count() == 1
        assert empty_3x3.crashes == 0

    def test_can_count_never_increases(self):
        env = CanWorldEnv.randomized(6, 15, seed=11)
        action_rng = np.random.default_rng(11)
        previous = env.can_count()
        for _ in range(300):
            env.step(int(action_rng.integers(len(Action))))
            assert env.can_count() <= previous
            previous = env.can_count()
        assert env.can_count() == 15 - env.cans_collected


class TestMovement:
    """Movement and crashes at every edge."""

    @pytest.mark.parametrize("robot_pos,action", [
        ((0, 0), Action.MOVE_NORTH),
        ((0, 0), Action.MOVE_WEST),
        ((2, 2), Action.MOVE_SOUTH),
        ((2, 2), Action.MOVE_EAST),
        ((1, 0), Action.MOVE_NORTH),
        ((1, 2), Action.MOVE_SOUTH),
        ((2, 1), Action.MOVE_EAST),
        ((0, 1), Action.MOVE_WEST),
    ])
    def test_crash_leaves_position_and_counts(self, robot_pos, action):
        """Each crash costs -5, keeps the robot in place and counts once."""
        env = CanWorldEnv(dimension=3, n_cans=0, robot_pos=robot_pos)
        for attempt in range(1, 4):
            assert env.reward(action) == REWARD_CRASH
            _, reward, _, _, info = env.step(action)
            assert reward == REWARD_CRASH
            assert env.robot_pos == robot_pos
            assert env.crashes == attempt
            assert info["crashes"] == attempt

    @pytest.mark.parametrize("action", MOVES)
    def test_move_from_center(self, action):
        env = CanWorldEnv(dimension=3, n_cans=0, robot_pos=(1, 1))
        _, reward, _, _, _ = env.step(action)
        dx, dy = ACTION_DELTAS[action]
        assert reward == 0.0
        assert env.robot_pos == (1 + dx, 1 + dy)
        assert env.crashes == 0

    def test_north_is_row_above(self):
        env = CanWorldEnv(dimension=3, n_cans=0, robot_pos=(1, 1))
        env.grid[0, 1] = Cell.CAN
        assert env.observe().north == Cell.CAN
        env.step(Action.MOVE_NORTH)
        assert env.observe().current == Cell.CAN

    @pytest.mark.parametrize("dimension", [1, 2, 5])
    def test_crash_rule_is_symmetric(self, dimension):
        """A move exits the grid exactly when its target coordinate is out of range."""
        for x in range(dimension):
            for y in range(dimension):
                for action in MOVES:
                    dx, dy = ACTION_DELTAS[action]
                    expected = not (0 <= x + dx < dimension and 0 <= y + dy < dimension)
                    assert exits_grid(dimension, (x, y), action) == expected
                assert not exits_grid(dimension, (x, y), Action.PICK_UP)

    def test_single_cell_every_move_crashes(self):
        env = CanWorldEnv(dimension=1, n_cans=0)
        for action in MOVES:
            assert env.reward(action) == REWARD_CRASH
            env.step(action)
        assert env.crashes == 4
        assert env.robot_pos == (0, 0)

    def test_invalid_action_rejected(self, empty_3x3):
        with pytest.raises(AssertionError):
            empty_3x3.step(7)


class TestEpisode:
    """Step budget, info and rendering."""

    def test_truncates_at_max_steps(self):
        env = CanWorldEnv.randomized(4, 4, seed=1, max_steps=5)
        for i in range(1, 6):
            _, _, terminated, truncated, info = env.step(Action.PICK_UP)
            assert not terminated
            assert truncated == (i == 5)
            assert info["steps"] == i

    def test_no_truncation_without_budget(self, empty_3x3):
        for _ in range(50):
            _, _, terminated, truncated, _ = empty_3x3.step(Action.PICK_UP)
        assert not terminated and not truncated

    def test_render_ansi(self):
        env = CanWorldEnv(dimension=3, n_cans=0, robot_pos=(1, 0), render_mode="ansi")
        env.grid[2, 2] = Cell.CAN
        text = env.render()
        assert text == "_ R _\n_ _ _\n_ _ C"
        assert str(env) == text

    def test_render_robot_on_can(self):
        env = CanWorldEnv(dimension=2, n_cans=0, robot_pos=(0, 0), render_mode="ansi")
        env.grid[0, 0] = Cell.CAN
        assert env.render().splitlines()[0] == "@ _"
