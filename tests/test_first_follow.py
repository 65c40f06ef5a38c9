from __future__ import annotations

import unittest

from lltable.grammar.errors import AnalysisDidNotConverge
from lltable.grammar.parser import parse_grammar
from lltable.grammar.symbols import END_OF_INPUT, EPSILON, nonterminal, terminal
from lltable.grammar.transform import left_factor, remove_left_recursion
from lltable.ll1.first_follow import (
    compute_first_follow,
    compute_first_sets,
    compute_follow_sets,
    first_of_sequence,
)

EXPR = "E -> E+T | T\nT -> T*F | F\nF -> (E) | id"


def t(*names):
    return {END_OF_INPUT if n == "$" else EPSILON if n == "ε" else terminal(n) for n in names}


def rewritten_expr():
    g = parse_grammar(EXPR)
    left_factor(g)
    remove_left_recursion(g)
    return g


class FirstSetTests(unittest.TestCase):
    def test_expression_grammar(self) -> None:
        first = compute_first_sets(rewritten_expr())
        self.assertEqual(first["F"], t("(", "id"))
        self.assertEqual(first["T"], t("(", "id"))
        self.assertEqual(first["E"], t("(", "id"))
        self.assertEqual(first["E'1"], t("+", "ε"))
        self.assertEqual(first["T'2"], t("*", "ε"))

    def test_nullable_chain(self) -> None:
        g = parse_grammar("S -> ABc\nA -> a | EPSILON\nB -> b | EPSILON")
        first = compute_first_sets(g)
        self.assertEqual(first["S"], t("a", "b", "c"))
        self.assertEqual(first["A"], t("a", "ε"))
        seq = (nonterminal("A"), nonterminal("B"))
        self.assertEqual(first_of_sequence(seq, first), t("a", "b", "ε"))
        self.assertEqual(first_of_sequence((), first), t("ε"))
        self.assertEqual(first_of_sequence((terminal("x"), nonterminal("A")), first), t("x"))

    def test_unreferenced_nonterminal_keeps_empty_first(self) -> None:
        g = parse_grammar("S -> a\nU -> U x")
        first = compute_first_sets(g)
        self.assertEqual(first["U"], set())
        self.assertEqual(first["S"], t("a"))

    def test_undefined_nonterminal_contributes_nothing(self) -> None:
        g = parse_grammar("S -> Ab | c")
        self.assertEqual(compute_first_sets(g)["S"], t("c"))

    def test_rerun_on_stable_sets_is_identical(self) -> None:
        g = rewritten_expr()
        first = compute_first_sets(g)
        again = compute_first_sets(g, initial=first)
        self.assertEqual(again, first)

    def test_sets_only_grow_between_rounds(self) -> None:
        history = []
        compute_first_sets(rewritten_expr(), history=history)
        self.assertGreater(len(history), 1)
        for before, after in zip(history, history[1:]):
            for name, s in before.items():
                self.assertTrue(s <= after[name])

    def test_round_cap(self) -> None:
        with self.assertRaises(AnalysisDidNotConverge) as ctx:
            compute_first_sets(rewritten_expr(), max_rounds=1)
        self.assertEqual(ctx.exception.stage, "FIRST")

    def test_follow_round_cap(self) -> None:
        g = rewritten_expr()
        first = compute_first_sets(g)
        with self.assertRaises(AnalysisDidNotConverge) as ctx:
            compute_follow_sets(g, first, max_rounds=1)
        self.assertEqual(ctx.exception.stage, "FOLLOW")
        self.assertEqual(ctx.exception.rounds, 1)


class FollowSetTests(unittest.TestCase):
    def test_expression_grammar(self) -> None:
        g = rewritten_expr()
        follow = compute_follow_sets(g, compute_first_sets(g))
        self.assertEqual(follow["E"], t("$", ")"))
        self.assertEqual(follow["E'1"], t("$", ")"))
        self.assertEqual(follow["T"], t("+", "$", ")"))
        self.assertEqual(follow["T'2"], t("+", "$", ")"))
        self.assertEqual(follow["F"], t("*", "+", "$", ")"))

    def test_follow_never_contains_epsilon(self) -> None:
        g = parse_grammar("S -> ABc | B\nA -> a | EPSILON\nB -> b | EPSILON")
        sets = compute_first_follow(g)
        for name, s in sets.follow.items():
            self.assertNotIn(EPSILON, s, name)
        self.assertEqual(sets.follow["S"], t("$"))
        self.assertEqual(sets.follow["A"], t("b", "c"))
        self.assertEqual(sets.follow["B"], t("c", "$"))

    def test_rerun_on_stable_sets_is_identical(self) -> None:
        g = rewritten_expr()
        sets = compute_first_follow(g)
        again = compute_follow_sets(g, sets.first, initial=sets.follow)
        self.assertEqual(again, sets.follow)

    def test_sets_only_grow_between_rounds(self) -> None:
        g = rewritten_expr()
        history = []
        compute_follow_sets(g, compute_first_sets(g), history=history)
        for before, after in zip(history, history[1:]):
            for name, s in before.items():
                self.assertTrue(s <= after[name])

    def test_first_of_helper_on_result(self) -> None:
        sets = compute_first_follow(rewritten_expr())
        self.assertEqual(sets.first_of((nonterminal("T'2"), nonterminal("E'1"))), t("*", "+", "ε"))


if __name__ == "__main__":
    unittest.main()
