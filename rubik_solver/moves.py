"""Move table and cubie geometry for the 3x3 cubie model."""

from __future__ import annotations

import numpy as np

FACE_ORDER = ("U", "R", "F", "D", "L", "B")
FACE_INDEX = {face: i for i, face in enumerate(FACE_ORDER)}
N_FACES = 6
N_CORNERS = 8
N_EDGES = 12
TURN_TYPES = 3
N_MOVES = N_FACES * TURN_TYPES

CORNER_NAMES = ("URF", "UFL", "ULB", "UBR", "DFR", "DLF", "DBL", "DRB")
EDGE_NAMES = ("UR", "UF", "UL", "UB", "DR", "DF", "DL", "DB", "FR", "FL", "BL", "BR")

# Move code -> notation suffix, indexed by turn type.
TURN_SUFFIXES = ("", "2", "'")

MOVE_NAMES = tuple(f"{face}{suffix}" for face in FACE_ORDER for suffix in TURN_SUFFIXES)
MOVE_INDEX = {name: i for i, name in enumerate(MOVE_NAMES)}

# Base clockwise quarter turn per face.
# Slots (a, b, c, d) are cycled a <- d <- c <- b <- a; the delta/flip listed for a
# slot is added (mod 3) or XOR-ed onto the cubie that lands there.
FACE_TURN_SPECS = {
    "U": {"corners": (0, 1, 2, 3), "twists": (0, 0, 0, 0), "edges": (0, 1, 2, 3), "flips": (0, 0, 0, 0)},
    "R": {"corners": (0, 3, 7, 4), "twists": (2, 1, 2, 1), "edges": (0, 11, 4, 8), "flips": (0, 0, 0, 0)},
    "F": {"corners": (0, 1, 5, 4), "twists": (1, 2, 1, 2), "edges": (1, 9, 5, 8), "flips": (1, 1, 1, 1)},
    "D": {"corners": (4, 7, 6, 5), "twists": (0, 0, 0, 0), "edges": (4, 7, 6, 5), "flips": (0, 0, 0, 0)},
    "L": {"corners": (1, 2, 6, 5), "twists": (2, 1, 2, 1), "edges": (2, 10, 6, 9), "flips": (0, 0, 0, 0)},
    "B": {"corners": (2, 3, 7, 6), "twists": (1, 2, 1, 2), "edges": (3, 11, 7, 10), "flips": (1, 1, 1, 1)},
}

# Home coordinates of each slot, x: L->R, y: D->U, z: B->F.
CORNER_COORDS = np.array(
    [
        (2, 2, 2),  # URF
        (0, 2, 2),  # UFL
        (0, 2, 0),  # ULB
        (2, 2, 0),  # UBR
        (2, 0, 2),  # DFR
        (0, 0, 2),  # DLF
        (0, 0, 0),  # DBL
        (2, 0, 0),  # DRB
    ],
    dtype=np.int8,
)

EDGE_COORDS = np.array(
    [
        (2, 2, 1),  # UR
        (1, 2, 2),  # UF
        (0, 2, 1),  # UL
        (1, 2, 0),  # UB
        (2, 0, 1),  # DR
        (1, 0, 2),  # DF
        (0, 0, 1),  # DL
        (1, 0, 0),  # DB
        (2, 1, 2),  # FR
        (0, 1, 2),  # FL
        (0, 1, 0),  # BL
        (2, 1, 0),  # BR
    ],
    dtype=np.int8,
)
CORNER_COORDS.setflags(write=False)
EDGE_COORDS.setflags(write=False)


class InvalidMoveError(ValueError):
    """Raised when a move code is outside 0..17."""


def check_move(move: int) -> int:
    if isinstance(move, bool) or not isinstance(move, (int, np.integer)):
        raise InvalidMoveError(f"Move must be an integer in range 0..{N_MOVES - 1}, got {move!r}")
    move = int(move)
    if move < 0 or move >= N_MOVES:
        raise InvalidMoveError(f"Bad move index {move}; expected 0..{N_MOVES - 1}")
    return move


def move_face(move: int) -> int:
    return check_move(move) // TURN_TYPES


def move_type(move: int) -> int:
    return check_move(move) % TURN_TYPES


def inverse_move(move: int) -> int:
    """Quarter and reverse-quarter swap; a half turn is its own inverse."""
    move = check_move(move)
    face, kind = divmod(move, TURN_TYPES)
    return face * TURN_TYPES + (TURN_TYPES - 1 - kind)


def move_name(move: int) -> str:
    return MOVE_NAMES[check_move(move)]


def parse_moves(text: str) -> list[int]:
    """Parse standard notation such as ``"R U2 F'"`` into move codes."""
    moves: list[int] = []
    for token in text.split():
        if token not in MOVE_INDEX:
            raise InvalidMoveError(f"Unknown move token: {token!r}")
        moves.append(MOVE_INDEX[token])
    return moves


def _cycle_gather(cycle: tuple[int, int, int, int], size: int) -> np.ndarray:
    """Gather index so that ``new = old[gather]`` performs a <- d <- c <- b <- a."""
    a, b, c, d = cycle
    gather = np.arange(size, dtype=np.intp)
    gather[a] = d
    gather[d] = c
    gather[c] = b
    gather[b] = a
    return gather


def _cycle_delta(cycle: tuple[int, int, int, int], deltas: tuple[int, int, int, int], size: int) -> np.ndarray:
    out = np.zeros(size, dtype=np.int8)
    for slot, delta in zip(cycle, deltas):
        out[slot] = delta
    return out


def _build_face_turns() -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    corner_gather = np.empty((N_FACES, N_CORNERS), dtype=np.intp)
    corner_twist = np.empty((N_FACES, N_CORNERS), dtype=np.int8)
    edge_gather = np.empty((N_FACES, N_EDGES), dtype=np.intp)
    edge_flip = np.empty((N_FACES, N_EDGES), dtype=np.int8)

    for face in FACE_ORDER:
        spec = FACE_TURN_SPECS[face]
        i = FACE_INDEX[face]
        if sum(spec["twists"]) % 3 != 0 or sum(spec["flips"]) % 2 != 0:
            raise RuntimeError(f"Face {face} does not preserve the orientation invariants")
        corner_gather[i] = _cycle_gather(spec["corners"], N_CORNERS)
        corner_twist[i] = _cycle_delta(spec["corners"], spec["twists"], N_CORNERS)
        edge_gather[i] = _cycle_gather(spec["edges"], N_EDGES)
        edge_flip[i] = _cycle_delta(spec["edges"], spec["flips"], N_EDGES)

    for arr in (corner_gather, corner_twist, edge_gather, edge_flip):
        arr.setflags(write=False)
    return corner_gather, corner_twist, edge_gather, edge_flip


CORNER_GATHER, CORNER_TWIST, EDGE_GATHER, EDGE_FLIP = _build_face_turns()
