"""Cubie-level cube state and the move-application algebra."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .moves import (
    CORNER_GATHER,
    CORNER_NAMES,
    CORNER_TWIST,
    EDGE_FLIP,
    EDGE_GATHER,
    EDGE_NAMES,
    N_CORNERS,
    N_EDGES,
    TURN_TYPES,
    check_move,
)

_SLOT_MIN = int(np.iinfo(np.int8).min)
_SLOT_MAX = int(np.iinfo(np.int8).max)


class StateValidationError(ValueError):
    """Raised when an input state is invalid."""


def _as_slots(values: Iterable[int] | np.ndarray, size: int, name: str) -> np.ndarray:
    arr = np.asarray(values)
    if arr.ndim != 1 or arr.size != size:
        raise StateValidationError(f"{name} must have {size} entries, got shape {arr.shape}")
    if arr.size and not np.issubdtype(arr.dtype, np.integer):
        raise StateValidationError(f"{name} must contain integers")
    if arr.size and (arr.min() < _SLOT_MIN or arr.max() > _SLOT_MAX):
        raise StateValidationError(f"{name} values must lie in [{_SLOT_MIN}, {_SLOT_MAX}]")
    return arr.astype(np.int8, copy=True)


def _permutation_parity(perm: np.ndarray) -> int:
    seen = [False] * len(perm)
    parity = 0
    for start in range(len(perm)):
        if seen[start]:
            continue
        length = 0
        j = start
        while not seen[j]:
            seen[j] = True
            j = int(perm[j])
            length += 1
        parity ^= (length - 1) & 1
    return parity


class CubeState:
    """Corner/edge permutation and orientation of a 3x3 cube.

    ``cp[i]`` is the corner cubie sitting in corner slot ``i`` and ``co[i]`` its
    twist (0..2); ``ep``/``eo`` are the same for edges with flips (0..1).
    """

    __slots__ = ("cp", "co", "ep", "eo")

    def __init__(self, cp, co, ep, eo):
        self.cp = _as_slots(cp, N_CORNERS, "cp")
        self.co = _as_slots(co, N_CORNERS, "co")
        self.ep = _as_slots(ep, N_EDGES, "ep")
        self.eo = _as_slots(eo, N_EDGES, "eo")

    @classmethod
    def identity(cls) -> "CubeState":
        return cls(
            np.arange(N_CORNERS),
            np.zeros(N_CORNERS, dtype=np.int8),
            np.arange(N_EDGES),
            np.zeros(N_EDGES, dtype=np.int8),
        )

    @classmethod
    def _from_trusted(cls, cp: np.ndarray, co: np.ndarray, ep: np.ndarray, eo: np.ndarray) -> "CubeState":
        state = cls.__new__(cls)
        state.cp = cp
        state.co = co
        state.ep = ep
        state.eo = eo
        return state

    def copy(self) -> "CubeState":
        return CubeState._from_trusted(self.cp.copy(), self.co.copy(), self.ep.copy(), self.eo.copy())

    def key(self) -> bytes:
        """Hashable snapshot of the state, e.g. for breadth-first bookkeeping."""
        return self.cp.tobytes() + self.co.tobytes() + self.ep.tobytes() + self.eo.tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CubeState):
            return NotImplemented
        return (
            np.array_equal(self.cp, other.cp)
            and np.array_equal(self.co, other.co)
            and np.array_equal(self.ep, other.ep)
            and np.array_equal(self.eo, other.eo)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"CubeState(cp={self.cp.tolist()}, co={self.co.tolist()}, "
            f"ep={self.ep.tolist()}, eo={self.eo.tolist()})"
        )

    def __str__(self) -> str:
        lines = ["CORNERS:"]
        for pos in range(N_CORNERS):
            lines.append(f" pos {pos} ({CORNER_NAMES[pos]}): cubie={int(self.cp[pos])} ori={int(self.co[pos])}")
        lines.append("EDGES:")
        for pos in range(N_EDGES):
            lines.append(f" pos {pos} ({EDGE_NAMES[pos]}): cubie={int(self.ep[pos])} ori={int(self.eo[pos])}")
        return "\n".join(lines)

    def is_solved(self) -> bool:
        return (
            bool(np.all(self.cp == np.arange(N_CORNERS)))
            and not self.co.any()
            and bool(np.all(self.ep == np.arange(N_EDGES)))
            and not self.eo.any()
        )

    def orientation_invariant_holds(self) -> bool:
        """Twists in 0..2 summing to 0 mod 3 and flips in 0..1 summing to 0 mod 2."""
        co = self.co.astype(np.int64)
        eo = self.eo.astype(np.int64)
        if np.any((co < 0) | (co > 2)) or int(co.sum()) % 3 != 0:
            return False
        if np.any((eo < 0) | (eo > 1)) or int(eo.sum()) % 2 != 0:
            return False
        return True

    def permutation_is_valid(self) -> bool:
        return bool(
            np.array_equal(np.sort(self.cp), np.arange(N_CORNERS))
            and np.array_equal(np.sort(self.ep), np.arange(N_EDGES))
        )

    def permutation_parity_holds(self) -> bool:
        """Corner and edge permutations must share parity; only meaningful for valid permutations."""
        return _permutation_parity(self.cp) == _permutation_parity(self.ep)

    def is_solvable(self) -> bool:
        return (
            self.permutation_is_valid()
            and self.orientation_invariant_holds()
            and self.permutation_parity_holds()
        )

    def apply_move(self, move: int) -> "CubeState":
        """Return the state after ``move``; the receiver is left untouched."""
        face, kind = divmod(check_move(move), TURN_TYPES)
        c_gather = CORNER_GATHER[face]
        c_twist = CORNER_TWIST[face]
        e_gather = EDGE_GATHER[face]
        e_flip = EDGE_FLIP[face]

        cp, co, ep, eo = self.cp, self.co, self.ep, self.eo
        for _ in range(kind + 1):
            cp = cp[c_gather]
            co = (co[c_gather] + c_twist) % 3
            ep = ep[e_gather]
            eo = eo[e_gather] ^ e_flip
        return CubeState._from_trusted(cp, co.astype(np.int8, copy=False), ep, eo)

    def apply_moves(self, moves: Iterable[int]) -> "CubeState":
        state = self
        for move in moves:
            state = state.apply_move(move)
        return state


def apply_move(state: CubeState, move: int) -> CubeState:
    return state.apply_move(move)


def apply_moves(state: CubeState, moves: Iterable[int]) -> CubeState:
    return state.apply_moves(moves)
