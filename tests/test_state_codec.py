import tempfile
import unittest
from pathlib import Path

from rubik_solver.cubie import CubeState, StateValidationError
from rubik_solver.ida_star import SearchStatus, ida_star
from rubik_solver.moves import InvalidMoveError, parse_moves
from rubik_solver.scramble import scramble
from rubik_solver.state_codec import (
    CORNER_FACELETS,
    InvalidInputEncodingError,
    NetFormatError,
    expand_moves,
    facelets_to_net,
    format_moves,
    load_net,
    net_to_facelets,
    parse_net,
    render_net,
    write_solution,
)

SOLVED_NET = (
    "   WWW\n"
    "   WWW\n"
    "   WWW\n"
    "OOOGGGRRRBBB\n"
    "OOOGGGRRRBBB\n"
    "OOOGGGRRRBBB\n"
    "   YYY\n"
    "   YYY\n"
    "   YYY\n"
)


class TestStateCodec(unittest.TestCase):
    def test_solved_net_parses_to_identity(self):
        state = parse_net(SOLVED_NET)
        self.assertEqual(state, CubeState.identity())

    def test_render_solved_matches_reference_net(self):
        self.assertEqual(render_net(CubeState.identity()), SOLVED_NET)

    def test_any_center_colors_are_accepted(self):
        net = SOLVED_NET.translate(str.maketrans("WOGRBY", "abcdef"))
        self.assertTrue(parse_net(net).is_solved())

    def test_render_parse_roundtrip(self):
        for seed in range(5):
            state, _ = scramble(15, seed=seed)
            self.assertEqual(parse_net(render_net(state)), state, msg=f"seed={seed}")

    def test_r_turn_lifts_front_column_onto_up_face(self):
        net = render_net(CubeState.identity().apply_move(parse_moves("R")[0])).splitlines()
        self.assertEqual([row[5] for row in net[0:3]], ["G", "G", "G"])
        self.assertEqual([row[5] for row in net[3:6]], ["Y", "Y", "Y"])
        self.assertEqual(net[3][6:9], "RRR")

    def test_twisted_corner_breaks_orientation_invariant(self):
        facelets = net_to_facelets(SOLVED_NET)
        a, b, c = CORNER_FACELETS[0]
        facelets[a], facelets[b], facelets[c] = facelets[c], facelets[a], facelets[b]
        state = parse_net(facelets_to_net(facelets))

        self.assertEqual(state.cp.tolist(), list(range(8)))
        self.assertNotEqual(int(state.co[0]), 0)
        self.assertFalse(state.orientation_invariant_holds())
        result = ida_star(state)
        self.assertEqual(result.status, SearchStatus.EXHAUSTED)
        self.assertEqual(result.moves, ())

    def test_flipped_edge_is_decoded_as_flip(self):
        lines = SOLVED_NET.splitlines()
        # UF edge: U facelet at row 2 col 4, F facelet at row 3 col 4.
        lines[2] = lines[2][:4] + "G" + lines[2][5:]
        lines[3] = lines[3][:4] + "W" + lines[3][5:]
        state = parse_net("\n".join(lines) + "\n")
        self.assertEqual(state.eo.tolist(), [0, 1] + [0] * 10)
        self.assertFalse(state.orientation_invariant_holds())

    def test_short_net_raises(self):
        with self.assertRaises(NetFormatError):
            parse_net("\n".join(SOLVED_NET.splitlines()[:8]))

    def test_duplicate_centers_raise(self):
        lines = SOLVED_NET.splitlines()
        lines[4] = "OOOGWGRRRBBB"
        with self.assertRaises(InvalidInputEncodingError):
            parse_net("\n".join(lines))

    def test_impossible_corner_colors_raise(self):
        lines = SOLVED_NET.splitlines()
        lines[2] = "   WWY"
        with self.assertRaises(InvalidInputEncodingError):
            parse_net("\n".join(lines))

    def test_duplicate_cubie_raises(self):
        facelets = net_to_facelets(SOLVED_NET)
        colors = [facelets[i] for i in CORNER_FACELETS[0]]
        for slot, color in zip(CORNER_FACELETS[1], colors):
            facelets[slot] = color
        with self.assertRaises(InvalidInputEncodingError):
            parse_net(facelets_to_net(facelets))

    def test_codec_errors_are_state_validation_errors(self):
        self.assertTrue(issubclass(NetFormatError, StateValidationError))
        self.assertTrue(issubclass(InvalidInputEncodingError, StateValidationError))
        self.assertTrue(issubclass(StateValidationError, ValueError))

    def test_expand_moves(self):
        self.assertEqual(expand_moves([0, 4, 8]), "URRFFF")
        self.assertEqual(expand_moves([]), "")
        self.assertEqual(format_moves([0, 4, 8]), "U R2 F'")
        with self.assertRaises(InvalidMoveError):
            expand_moves([18])

    def test_file_helpers(self):
        with tempfile.TemporaryDirectory() as td:
            net_path = Path(td) / "cube.txt"
            net_path.write_text(SOLVED_NET, encoding="utf-8")
            self.assertTrue(load_net(net_path).is_solved())

            out = write_solution(Path(td) / "solution.txt", parse_moves("R2 U'"))
            self.assertEqual(out.read_text(encoding="utf-8"), "RRUUU")

    def test_missing_file_propagates_os_error(self):
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(FileNotFoundError):
                load_net(Path(td) / "missing.txt")


if __name__ == "__main__":
    unittest.main()
