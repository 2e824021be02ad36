"""Iterative-deepening A* over the 18-move face-turn metric."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .cubie import CubeState
from .heuristic import estimate
from .moves import N_MOVES, TURN_TYPES

DEFAULT_MAX_DEPTH = 35

# Face of each move code; avoids check_move() in the hot loop.
_MOVE_FACES = tuple(m // TURN_TYPES for m in range(N_MOVES))


class SearchStatus(str, Enum):
    FOUND = "found"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class SolverConfig:
    max_depth: int = DEFAULT_MAX_DEPTH
    verify_solvable: bool = True

    def __post_init__(self):
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 0:
            raise ValueError("max_depth must be a non-negative integer")


@dataclass(frozen=True)
class SearchResult:
    status: SearchStatus
    moves: tuple[int, ...]
    iterations: int
    nodes: int
    final_bound: float

    @property
    def solved(self) -> bool:
        return self.status is SearchStatus.FOUND


@dataclass(frozen=True)
class _Probe:
    """Outcome of one bounded DFS: either a solution or the next bound to try."""

    found: bool
    next_bound: float = math.inf
    moves: tuple[int, ...] = ()


class _Search:
    def __init__(self, bound: int):
        self.bound = bound
        self.path: list[int] = []
        self.nodes = 0

    def dfs(self, state: CubeState, g: int, last_face: int | None) -> _Probe:
        self.nodes += 1
        f = g + estimate(state)
        if f > self.bound:
            return _Probe(found=False, next_bound=f)
        if state.is_solved():
            return _Probe(found=True, moves=tuple(self.path))

        best = math.inf
        for move in range(N_MOVES):
            face = _MOVE_FACES[move]
            if face == last_face:
                continue
            child = state.apply_move(move)
            self.path.append(move)
            try:
                probe = self.dfs(child, g + 1, face)
            finally:
                self.path.pop()
            if probe.found:
                return probe
            if probe.next_bound < best:
                best = probe.next_bound
        return _Probe(found=False, next_bound=best)


def ida_star(start: CubeState, config: SolverConfig | None = None) -> SearchResult:
    """Search for a move sequence solving ``start``.

    Bounds grow to the smallest rejected ``g + h`` of the previous pass. The
    search gives up with ``EXHAUSTED`` once that bound exceeds
    ``config.max_depth``, or straight away for a state outside the cube group
    when ``config.verify_solvable`` is set.
    """
    config = config or SolverConfig()
    if config.verify_solvable and not start.is_solvable():
        return SearchResult(SearchStatus.EXHAUSTED, (), iterations=0, nodes=0, final_bound=math.inf)

    bound: float = estimate(start)
    iterations = 0
    nodes = 0
    while bound <= config.max_depth:
        search = _Search(int(bound))
        probe = search.dfs(start, 0, None)
        iterations += 1
        nodes += search.nodes
        if probe.found:
            return SearchResult(SearchStatus.FOUND, probe.moves, iterations, nodes, bound)
        bound = probe.next_bound
    return SearchResult(SearchStatus.EXHAUSTED, (), iterations, nodes, bound)


def solve(start: CubeState, config: SolverConfig | None = None) -> list[int]:
    """Moves solving ``start``; empty when already solved or when no solution was found."""
    return list(ida_star(start, config).moves)
