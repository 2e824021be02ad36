"""CLI entrypoint for the cubie IDA* solver."""

from __future__ import annotations

import argparse
import time
from datetime import datetime

from .cubie import CubeState, StateValidationError
from .ida_star import DEFAULT_MAX_DEPTH, SolverConfig, ida_star
from .moves import parse_moves
from .scramble import scramble
from .state_codec import format_moves, load_net, render_net, write_solution


def _log(message: str) -> None:
    ts = datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {message}", flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rubik 3x3 IDA* solver")
    sub = parser.add_subparsers(dest="mode", required=True)

    solve_p = sub.add_parser("solve", help="Solve a 9x12 sticker net and write the move string")
    solve_p.add_argument("input", nargs="?", default=None, help="Net file to read")
    solve_p.add_argument("output", nargs="?", default=None, help="File receiving the expanded moves")
    solve_p.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH)
    solve_p.add_argument(
        "--no-verify",
        dest="verify_solvable",
        action="store_false",
        help="Search even when the input violates the cube invariants",
    )

    scramble_p = sub.add_parser("scramble", help="Write the net of a scrambled cube")
    scramble_p.add_argument("--steps", type=int, default=6)
    scramble_p.add_argument("--seed", type=int, default=None)
    scramble_p.add_argument("--moves", type=str, default=None, help="Explicit scramble, e.g. \"R U R' U'\"")
    scramble_p.add_argument("--output", type=str, default=None)

    return parser


def run_solve(args: argparse.Namespace) -> int:
    if args.input is None or args.output is None:
        return 0
    if args.max_depth < 0:
        raise ValueError("--max-depth must be >= 0")

    try:
        state = load_net(args.input)
    except StateValidationError as exc:
        _log(f"solve_error input={args.input} error={exc}")
        return 1

    config = SolverConfig(max_depth=args.max_depth, verify_solvable=args.verify_solvable)
    t0 = time.perf_counter()
    result = ida_star(state, config)
    elapsed = time.perf_counter() - t0

    write_solution(args.output, result.moves)
    _log(
        f"solve_done status={result.status.value} length={len(result.moves)} "
        f"moves=\"{format_moves(result.moves)}\" iterations={result.iterations} "
        f"nodes={result.nodes} elapsed={elapsed:.3f}s output={args.output}"
    )
    return 0 if result.solved else 1


def run_scramble(args: argparse.Namespace) -> int:
    if args.moves is not None:
        moves = parse_moves(args.moves)
        state = CubeState.identity().apply_moves(moves)
    else:
        state, moves = scramble(args.steps, seed=args.seed)

    net = render_net(state)
    if args.output is None:
        print(net, end="", flush=True)
        return 0

    with open(args.output, "w", encoding="utf-8") as f:
        f.write(net)
    _log(f"scramble_done moves=\"{format_moves(moves)}\" output={args.output}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.mode == "solve":
        return run_solve(args)
    if args.mode == "scramble":
        return run_scramble(args)

    parser.error(f"Unsupported mode: {args.mode}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
