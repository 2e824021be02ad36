"""Lower-bound estimates of the remaining move count.

Every estimate relies on one face turn touching at most 4 corner slots and 4
edge slots, so a per-slot quantity that a single move can lower by at most one
per touched slot, summed and divided by 4, never overstates the distance.

* ``mismatch_bound`` (H1): slots holding a foreign or twisted/flipped cubie.
* ``corner_distance_bound`` (H2): 3-D Manhattan distance of each corner from
  its home, in moves.
* ``edge_distance_bound`` (H3): the same for edges.

``estimate`` is the maximum of the three.
"""

from __future__ import annotations

import numpy as np

from .cubie import CubeState
from .moves import CORNER_COORDS, EDGE_COORDS, N_CORNERS, N_EDGES

SLOTS_PER_MOVE = 4

# Largest Manhattan shift of a single cubie caused by one face turn
# (half turns move a corner diagonally across the face).
CORNER_REACH = 4
EDGE_REACH = 2

_CORNER_SLOTS = np.arange(N_CORNERS)
_EDGE_SLOTS = np.arange(N_EDGES)


def _manhattan_table(coords: np.ndarray) -> np.ndarray:
    """``table[cubie, slot]``: Manhattan distance from the cubie's home to the slot."""
    diff = coords[:, None, :].astype(np.int16) - coords[None, :, :].astype(np.int16)
    return np.abs(diff).sum(axis=2)


def _moves_table(coords: np.ndarray, reach: int) -> np.ndarray:
    table = -(-_manhattan_table(coords) // reach)
    table = table.astype(np.int16)
    table.setflags(write=False)
    return table


CORNER_MANHATTAN = _manhattan_table(CORNER_COORDS)
EDGE_MANHATTAN = _manhattan_table(EDGE_COORDS)
CORNER_MANHATTAN.setflags(write=False)
EDGE_MANHATTAN.setflags(write=False)

CORNER_MOVES = _moves_table(CORNER_COORDS, CORNER_REACH)
EDGE_MOVES = _moves_table(EDGE_COORDS, EDGE_REACH)


def mismatch_bound(state: CubeState) -> int:
    bad_corners = int(np.count_nonzero((state.cp != _CORNER_SLOTS) | (state.co != 0)))
    bad_edges = int(np.count_nonzero((state.ep != _EDGE_SLOTS) | (state.eo != 0)))
    return max(bad_corners, bad_edges) // SLOTS_PER_MOVE


def corner_manhattan(state: CubeState) -> int:
    """Raw coordinate distance summed over corners."""
    return int(CORNER_MANHATTAN[state.cp, _CORNER_SLOTS].sum())


def edge_manhattan(state: CubeState) -> int:
    """Raw coordinate distance summed over edges."""
    return int(EDGE_MANHATTAN[state.ep, _EDGE_SLOTS].sum())


def corner_distance_bound(state: CubeState) -> int:
    return int(CORNER_MOVES[state.cp, _CORNER_SLOTS].sum()) // SLOTS_PER_MOVE


def edge_distance_bound(state: CubeState) -> int:
    return int(EDGE_MOVES[state.ep, _EDGE_SLOTS].sum()) // SLOTS_PER_MOVE


def estimate(state: CubeState) -> int:
    return max(mismatch_bound(state), corner_distance_bound(state), edge_distance_bound(state))
