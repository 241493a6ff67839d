"""Epsilon schedules."""

from __future__ import annotations

SCHEDULES = ("linear", "exponential", "constant")


def linear_epsilon(episode: int, start: float, end: float, decay_episodes: int) -> float:
    """Linear epsilon decay.

    - At episode 0: epsilon = start
    - At episode decay_episodes: epsilon = end
    - After that: epsilon stays at end
    """
    episode = int(episode)
    decay_episodes = max(1, int(decay_episodes))
    if episode >= decay_episodes:
        return float(end)
    t = episode / decay_episodes
    return float(start + (end - start) * t)


def exponential_epsilon(episode: int, start: float, end: float, decay: float) -> float:
    """Multiply by `decay` once per episode, never going below `end`."""
    return float(max(end, start * decay ** int(episode)))


def constant_epsilon(episode: int, start: float) -> float:
    return float(start)


def epsilon_for_episode(
    schedule: str,
    episode: int,
    *,
    start: float,
    end: float,
    decay: float,
    decay_episodes: int,
) -> float:
    """Epsilon for `episode` (0-based) under the named schedule."""
    if schedule == "linear":
        return linear_epsilon(episode, start, end, decay_episodes)
    if schedule == "exponential":
        return exponential_epsilon(episode, start, end, decay)
    if schedule == "constant":
        return constant_epsilon(episode, start)
    raise ValueError(f"Unknown epsilon schedule: {schedule!r} (expected one of {SCHEDULES})")


def validate_schedule(
    schedule: str, *, start: float, end: float, decay: float, decay_episodes: int
) -> None:
    """Reject schedules that would leave [0, 1] at any episode."""
    if schedule not in SCHEDULES:
        raise ValueError(f"Unknown epsilon schedule: {schedule!r} (expected one of {SCHEDULES})")
    for name, value in (("start", start), ("end", end)):
        if not 0.0 <= float(value) <= 1.0:
            raise ValueError(f"epsilon {name} must be in [0, 1], got {value}")
    if schedule == "exponential" and not 0.0 <= float(decay) <= 1.0:
        raise ValueError(f"epsilon decay must be in [0, 1], got {decay}")
    if schedule == "linear" and int(decay_episodes) < 0:
        raise ValueError(f"decay_episodes must be non-negative, got {decay_episodes}")
