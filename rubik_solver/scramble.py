"""Random scrambles for tests, the CLI and benchmarks."""

from __future__ import annotations

import numpy as np

from .cubie import CubeState
from .moves import N_MOVES, TURN_TYPES


def random_moves(steps: int, seed: int | None = None, rng: np.random.Generator | None = None) -> list[int]:
    """Random move codes that never turn the same face twice in a row."""
    if isinstance(steps, bool) or not isinstance(steps, int) or steps < 0:
        raise ValueError("Scramble steps must be a non-negative integer")
    if rng is None:
        rng = np.random.default_rng(seed)

    all_moves = np.arange(N_MOVES, dtype=np.int32)
    moves: list[int] = []
    prev_face: int | None = None
    for _ in range(steps):
        if prev_face is not None:
            candidates = all_moves[all_moves // TURN_TYPES != prev_face]
        else:
            candidates = all_moves
        move = int(rng.choice(candidates))
        moves.append(move)
        prev_face = move // TURN_TYPES
    return moves


def scramble(
    steps: int,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
    start: CubeState | None = None,
) -> tuple[CubeState, list[int]]:
    moves = random_moves(steps, seed=seed, rng=rng)
    state = CubeState.identity() if start is None else start
    return state.apply_moves(moves), moves
