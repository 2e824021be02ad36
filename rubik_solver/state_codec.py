"""Sticker-net codec and solution formatting.

Net layout (9 rows x 12 columns, blanks elsewhere)::

             U
          L  F  R  B
             D

U occupies rows 0-2 / cols 3-5, the middle band rows 3-5 holds L, F, R, B in
column blocks 0-2, 3-5, 6-8, 9-11, and D sits at rows 6-8 / cols 3-5. Faces
are flattened to 54 facelets in U, R, F, D, L, B order, 9 per face, row-major.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping

import numpy as np

from .cubie import CubeState, StateValidationError
from .moves import (
    CORNER_NAMES,
    EDGE_NAMES,
    FACE_INDEX,
    FACE_ORDER,
    N_CORNERS,
    N_EDGES,
    TURN_TYPES,
    check_move,
    move_name,
)

NET_ROWS = 9
NET_COLS = 12
FACELETS_PER_FACE = 9
N_FACELETS = FACELETS_PER_FACE * len(FACE_ORDER)

# Top-left (row, col) of each face inside the net.
NET_ORIGIN = {
    "U": (0, 3),
    "L": (3, 0),
    "F": (3, 3),
    "R": (3, 6),
    "B": (3, 9),
    "D": (6, 3),
}

DEFAULT_COLORS = {"U": "W", "R": "R", "F": "G", "D": "Y", "L": "O", "B": "B"}

# Facelets of each corner slot, listed in the face order of its name (U/D first).
CORNER_FACELETS = (
    (8, 9, 20),  # URF
    (6, 18, 38),  # UFL
    (0, 36, 47),  # ULB
    (2, 45, 11),  # UBR
    (29, 26, 15),  # DFR
    (27, 44, 24),  # DLF
    (33, 53, 42),  # DBL
    (35, 17, 51),  # DRB
)

EDGE_FACELETS = (
    (5, 10),  # UR
    (7, 19),  # UF
    (3, 37),  # UL
    (1, 46),  # UB
    (32, 16),  # DR
    (28, 25),  # DF
    (30, 43),  # DL
    (34, 52),  # DB
    (23, 12),  # FR
    (21, 41),  # FL
    (50, 39),  # BL
    (48, 14),  # BR
)

CORNER_FACES = tuple(tuple(name) for name in CORNER_NAMES)
EDGE_FACES = tuple(tuple(name) for name in EDGE_NAMES)


class NetFormatError(StateValidationError):
    """Raised when the net text does not have the expected shape."""


class InvalidInputEncodingError(StateValidationError):
    """Raised when stickers cannot be resolved to a consistent set of cubies."""


def _facelet_index(face: str, row: int, col: int) -> int:
    return FACE_INDEX[face] * FACELETS_PER_FACE + row * 3 + col


def net_to_facelets(text: str) -> list[str]:
    lines = text.splitlines()
    if len(lines) < NET_ROWS:
        raise NetFormatError(f"Net must have {NET_ROWS} lines, got {len(lines)}")
    grid = [line.ljust(NET_COLS)[:NET_COLS] for line in lines[:NET_ROWS]]

    facelets = [""] * N_FACELETS
    for face, (row0, col0) in NET_ORIGIN.items():
        for r in range(3):
            for c in range(3):
                facelets[_facelet_index(face, r, c)] = grid[row0 + r][col0 + c]
    return facelets


def facelets_to_net(facelets: list[str]) -> str:
    if len(facelets) != N_FACELETS:
        raise NetFormatError(f"Expected {N_FACELETS} facelets, got {len(facelets)}")
    grid = [[" "] * NET_COLS for _ in range(NET_ROWS)]
    for face, (row0, col0) in NET_ORIGIN.items():
        for r in range(3):
            for c in range(3):
                grid[row0 + r][col0 + c] = facelets[_facelet_index(face, r, c)]
    return "\n".join("".join(row).rstrip() for row in grid) + "\n"


def _center_colors(facelets: list[str]) -> dict[str, str]:
    centers = {face: facelets[_facelet_index(face, 1, 1)] for face in FACE_ORDER}
    colors = list(centers.values())
    if any(not c.strip() for c in colors):
        raise InvalidInputEncodingError("Face centers must not be blank")
    if len(set(colors)) != len(colors):
        raise InvalidInputEncodingError(f"Face centers must be six distinct colors, got {''.join(colors)}")
    return centers


def _corner_lookup(centers: Mapping[str, str]) -> dict[tuple[str, ...], tuple[int, int]]:
    """Map every twisted colour triple to (cubie, twist); twist = position of the U/D colour."""
    lookup: dict[tuple[str, ...], tuple[int, int]] = {}
    for cubie, faces in enumerate(CORNER_FACES):
        ref = [centers[f] for f in faces]
        for twist in range(3):
            seen = [""] * 3
            for k in range(3):
                seen[(twist + k) % 3] = ref[k]
            lookup[tuple(seen)] = (cubie, twist)
    return lookup


def _edge_lookup(centers: Mapping[str, str]) -> dict[tuple[str, ...], tuple[int, int]]:
    lookup: dict[tuple[str, ...], tuple[int, int]] = {}
    for cubie, (a, b) in enumerate(EDGE_FACES):
        lookup[(centers[a], centers[b])] = (cubie, 0)
        lookup[(centers[b], centers[a])] = (cubie, 1)
    return lookup


def facelets_to_state(facelets: list[str]) -> CubeState:
    centers = _center_colors(facelets)
    corners = _corner_lookup(centers)
    edges = _edge_lookup(centers)

    cp = np.zeros(N_CORNERS, dtype=np.int8)
    co = np.zeros(N_CORNERS, dtype=np.int8)
    for pos, slots in enumerate(CORNER_FACELETS):
        colors = tuple(facelets[i] for i in slots)
        if colors not in corners:
            raise InvalidInputEncodingError(
                f"Invalid corner colors at position {pos} ({CORNER_NAMES[pos]}): {''.join(colors)}"
            )
        cp[pos], co[pos] = corners[colors]

    ep = np.zeros(N_EDGES, dtype=np.int8)
    eo = np.zeros(N_EDGES, dtype=np.int8)
    for pos, slots in enumerate(EDGE_FACELETS):
        colors = tuple(facelets[i] for i in slots)
        if colors not in edges:
            raise InvalidInputEncodingError(
                f"Invalid edge colors at position {pos} ({EDGE_NAMES[pos]}): {''.join(colors)}"
            )
        ep[pos], eo[pos] = edges[colors]

    state = CubeState(cp, co, ep, eo)
    if not state.permutation_is_valid():
        raise InvalidInputEncodingError("Net shows the same cubie in more than one position")
    return state


def parse_net(text: str) -> CubeState:
    """Decode a 9x12 sticker net into a cubie state."""
    return facelets_to_state(net_to_facelets(text))


def load_net(path: str | Path) -> CubeState:
    return parse_net(Path(path).read_text(encoding="utf-8"))


def state_to_facelets(state: CubeState, colors: Mapping[str, str] | None = None) -> list[str]:
    colors = dict(DEFAULT_COLORS if colors is None else colors)
    if set(colors) != set(FACE_ORDER):
        raise StateValidationError(f"colors must map exactly the faces {''.join(FACE_ORDER)}")
    if not state.permutation_is_valid():
        raise StateValidationError("Cannot render a state whose permutations are not bijections")
    if np.any((state.co < 0) | (state.co > 2)) or np.any((state.eo < 0) | (state.eo > 1)):
        raise StateValidationError("Cannot render out-of-range orientations")

    facelets = [""] * N_FACELETS
    for face in FACE_ORDER:
        facelets[_facelet_index(face, 1, 1)] = colors[face]
    for pos, slots in enumerate(CORNER_FACELETS):
        cubie, twist = int(state.cp[pos]), int(state.co[pos])
        for k, face in enumerate(CORNER_FACES[cubie]):
            facelets[slots[(twist + k) % 3]] = colors[face]
    for pos, slots in enumerate(EDGE_FACELETS):
        cubie, flip = int(state.ep[pos]), int(state.eo[pos])
        for k, face in enumerate(EDGE_FACES[cubie]):
            facelets[slots[k ^ flip]] = colors[face]
    return facelets


def render_net(state: CubeState, colors: Mapping[str, str] | None = None) -> str:
    return facelets_to_net(state_to_facelets(state, colors))


def expand_moves(moves: Iterable[int]) -> str:
    """Plain face letters: quarter ``R``, half ``RR``, reverse quarter ``RRR``."""
    out: list[str] = []
    for move in moves:
        face, kind = divmod(check_move(move), TURN_TYPES)
        out.append(FACE_ORDER[face] * (kind + 1))
    return "".join(out)


def format_moves(moves: Iterable[int]) -> str:
    return " ".join(move_name(m) for m in moves)


def write_solution(path: str | Path, moves: Iterable[int]) -> Path:
    path = Path(path)
    path.write_text(expand_moves(moves), encoding="utf-8")
    return path
