import copy
import unittest

from bf2c import TokenInterpreter, optimize, parse
from bf2c.config import CELL_MIN, wrap_cell
from bf2c.tokens import ChangeMem, Loop, MovePointer, NoOp, Print, SetMemTo

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)

PROGRAMS = [
    "+++.",
    "+++[-]",
    "++>+.",
    "+-",
    "+[--+]",
    "++[>+++<-]>.",
    "+[>+[>+<-]<-]",
    "[-][+]+.",
    ">>+<<[>]+",
    "<>+.",
    "<<+>>>-<.",
    HELLO_WORLD,
]


class OptimizerRuleTests(unittest.TestCase):
    def test_run_length_fusion(self) -> None:
        self.assertEqual(optimize(parse("+++.")), [ChangeMem(3), Print()])
        self.assertEqual(optimize(parse(">>><.")), [MovePointer(2), Print()])

    def test_net_zero_run_is_kept(self) -> None:
        self.assertEqual(optimize(parse("+-")), [ChangeMem(0)])
        self.assertEqual(optimize(parse("><")), [MovePointer(0)])

    def test_leading_loop_elided(self) -> None:
        self.assertEqual(optimize(parse("[-]")), [])
        self.assertEqual(optimize(parse("[->+<]+")), [ChangeMem(1)])

    def test_whole_leading_run_of_loops_elided(self) -> None:
        self.assertEqual(optimize(parse("[-][+]+.")), [ChangeMem(1), Print()])

    def test_zero_idiom(self) -> None:
        self.assertEqual(optimize(parse("+++[-]")), [ChangeMem(3), SetMemTo(0)])

    def test_zero_idiom_after_body_fusion(self) -> None:
        self.assertEqual(optimize(parse("+[--+]")), [ChangeMem(1), SetMemTo(0)])

    def test_loop_bodies_are_optimized(self) -> None:
        tokens = optimize(parse("+[>++<-]"))
        self.assertEqual(
            tokens,
            [ChangeMem(1), Loop([MovePointer(1), ChangeMem(2), MovePointer(-1), ChangeMem(-1)])],
        )

    def test_nested_leading_loop_kept_by_default(self) -> None:
        self.assertEqual(optimize(parse("+[[-]]")), [ChangeMem(1), Loop([SetMemTo(0)])])

    def test_legacy_nested_leading_elision(self) -> None:
        tokens = optimize(parse("+[[-]]"), nested_leading_elision=True)
        self.assertEqual(tokens, [ChangeMem(1), Loop([])])

    def test_pass_through_tokens(self) -> None:
        tokens = [ChangeMem(1), SetMemTo(5), NoOp(), Print()]
        self.assertEqual(optimize(tokens), tokens)

    def test_fusion_wraps_to_cell_width(self) -> None:
        tokens = [ChangeMem(-(2 ** 31)), ChangeMem(-1)]
        self.assertEqual(optimize(tokens), [ChangeMem(2 ** 31 - 1)])
        self.assertEqual(wrap_cell(2 ** 31), CELL_MIN)

    def test_input_is_not_modified(self) -> None:
        tokens = parse("+++[>+<-]--")
        snapshot = copy.deepcopy(tokens)
        optimize(tokens)
        self.assertEqual(tokens, snapshot)


class OptimizerPropertyTests(unittest.TestCase):
    def test_single_pass_reaches_fixed_point(self) -> None:
        for program in PROGRAMS:
            for legacy in (False, True):
                with self.subTest(program=program, legacy=legacy):
                    once = optimize(parse(program), nested_leading_elision=legacy)
                    twice = optimize(once, nested_leading_elision=legacy)
                    self.assertEqual(once, twice)

    def test_output_never_longer(self) -> None:
        for program in PROGRAMS:
            with self.subTest(program=program):
                tokens = parse(program)
                self.assertLessEqual(len(optimize(tokens)), len(tokens))

    def test_optimized_tree_leaves_same_tape(self) -> None:
        for program in PROGRAMS:
            with self.subTest(program=program):
                tokens = parse(program)
                raw = TokenInterpreter(print_output=False)
                optimized = TokenInterpreter(print_output=False)
                raw.run(tokens, max_steps=100_000)
                optimized.run(optimize(tokens), max_steps=100_000)
                self.assertEqual(raw.tape, optimized.tape)
                self.assertEqual(raw.pointer, optimized.pointer)

    def test_hello_world_output_preserved(self) -> None:
        tokens = parse(HELLO_WORLD)
        self.assertEqual(TokenInterpreter().run(optimize(tokens)), "Hello World!\n")


if __name__ == "__main__":
    unittest.main()
