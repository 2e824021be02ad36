"""Cubie-model IDA* solver for the 3x3 Rubik cube."""

from .cubie import CubeState, StateValidationError, apply_move, apply_moves
from .heuristic import estimate
from .ida_star import DEFAULT_MAX_DEPTH, SearchResult, SearchStatus, SolverConfig, ida_star, solve
from .moves import MOVE_NAMES, InvalidMoveError, inverse_move, move_name, parse_moves
from .state_codec import InvalidInputEncodingError, NetFormatError, expand_moves, parse_net, render_net

__all__ = [
    "CubeState",
    "StateValidationError",
    "apply_move",
    "apply_moves",
    "estimate",
    "DEFAULT_MAX_DEPTH",
    "SearchResult",
    "SearchStatus",
    "SolverConfig",
    "ida_star",
    "solve",
    "MOVE_NAMES",
    "InvalidMoveError",
    "inverse_move",
    "move_name",
    "parse_moves",
    "InvalidInputEncodingError",
    "NetFormatError",
    "expand_moves",
    "parse_net",
    "render_net",
]
