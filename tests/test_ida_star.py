import unittest

from rubik_solver.cubie import CubeState
from rubik_solver.ida_star import DEFAULT_MAX_DEPTH, SearchStatus, SolverConfig, ida_star, solve
from rubik_solver.moves import MOVE_INDEX, N_MOVES, inverse_move, parse_moves
from rubik_solver.scramble import scramble


def _flipped_edge_state() -> CubeState:
    state = CubeState.identity()
    state.eo[0] = 1
    return state


class TestIDAStar(unittest.TestCase):
    def test_solved_cube_needs_no_moves(self):
        result = ida_star(CubeState.identity())
        self.assertEqual(result.status, SearchStatus.FOUND)
        self.assertTrue(result.solved)
        self.assertEqual(result.moves, ())
        self.assertEqual(solve(CubeState.identity()), [])

    def test_single_move_is_undone_by_its_inverse(self):
        for move in range(N_MOVES):
            state = CubeState.identity().apply_move(move)
            result = ida_star(state)
            self.assertEqual(result.status, SearchStatus.FOUND)
            self.assertEqual(list(result.moves), [inverse_move(move)], msg=f"move={move}")

    def test_two_move_scramble_has_unique_answer(self):
        state = CubeState.identity().apply_moves(parse_moves("R U"))
        self.assertEqual(solve(state), parse_moves("U' R'"))

    def test_opposite_faces_may_follow_each_other(self):
        state = CubeState.identity().apply_moves(parse_moves("U D"))
        moves = solve(state)
        self.assertEqual(len(moves), 2)
        self.assertEqual({m // 3 for m in moves}, {MOVE_INDEX["U"] // 3, MOVE_INDEX["D"] // 3})
        self.assertTrue(state.apply_moves(moves).is_solved())

    def test_solution_lengths_match_breadth_first_distances(self):
        start = CubeState.identity()
        distances = {start.key(): (0, start)}
        frontier = [start]
        for depth in range(1, 4):
            nxt = []
            for state in frontier:
                for move in range(N_MOVES):
                    child = state.apply_move(move)
                    if child.key() not in distances:
                        distances[child.key()] = (depth, child)
                        nxt.append(child)
            frontier = nxt

        sample = [item for item in distances.values() if item[0] <= 2]
        sample += [item for item in distances.values() if item[0] == 3][::9]
        for depth, state in sample:
            result = ida_star(state)
            self.assertEqual(result.status, SearchStatus.FOUND)
            self.assertEqual(len(result.moves), depth, msg=str(state))
            self.assertTrue(state.apply_moves(result.moves).is_solved())

    def test_scrambles_are_solved_within_scramble_length(self):
        for seed in range(6):
            depth = 2 + seed % 3
            state, scramble_moves = scramble(depth, seed=seed)
            result = ida_star(state)
            self.assertEqual(result.status, SearchStatus.FOUND, msg=f"seed={seed}")
            self.assertLessEqual(len(result.moves), len(scramble_moves), msg=f"seed={seed}")
            self.assertTrue(state.apply_moves(result.moves).is_solved(), msg=f"seed={seed}")

    def test_solutions_never_turn_the_same_face_twice_in_a_row(self):
        for seed in range(4):
            state, _ = scramble(4, seed=100 + seed)
            moves = solve(state)
            for a, b in zip(moves[:-1], moves[1:]):
                self.assertNotEqual(a // 3, b // 3)

    def test_result_reports_search_effort(self):
        state = CubeState.identity().apply_moves(parse_moves("F R"))
        result = ida_star(state)
        self.assertGreaterEqual(result.iterations, 1)
        self.assertGreater(result.nodes, 1)
        self.assertEqual(result.final_bound, len(result.moves))

    def test_start_state_is_not_modified(self):
        state = CubeState.identity().apply_moves(parse_moves("L B'"))
        before = state.copy()
        ida_star(state)
        self.assertEqual(state, before)

    def test_unsolvable_state_is_rejected_without_search(self):
        result = ida_star(_flipped_edge_state())
        self.assertEqual(result.status, SearchStatus.EXHAUSTED)
        self.assertFalse(result.solved)
        self.assertEqual(result.moves, ())
        self.assertEqual(result.nodes, 0)
        self.assertEqual(solve(_flipped_edge_state()), [])

    def test_unsolvable_state_exhausts_the_depth_cap(self):
        config = SolverConfig(max_depth=3, verify_solvable=False)
        result = ida_star(_flipped_edge_state(), config)
        self.assertEqual(result.status, SearchStatus.EXHAUSTED)
        self.assertEqual(result.moves, ())
        self.assertGreater(result.nodes, 0)
        self.assertGreater(result.final_bound, 3)

    def test_depth_cap_limits_search(self):
        state = CubeState.identity().apply_moves(parse_moves("R U F"))
        result = ida_star(state, SolverConfig(max_depth=1))
        self.assertEqual(result.status, SearchStatus.EXHAUSTED)
        self.assertEqual(result.moves, ())

    def test_config_defaults_and_validation(self):
        self.assertEqual(SolverConfig().max_depth, DEFAULT_MAX_DEPTH)
        self.assertEqual(DEFAULT_MAX_DEPTH, 35)
        with self.assertRaises(ValueError):
            SolverConfig(max_depth=-1)


if __name__ == "__main__":
    unittest.main()
