from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lltable.grammar.errors import MalformedGrammarLine
from lltable.grammar.loader import load_grammar_text
from lltable.grammar.parser import build_grammar, parse_grammar, read_rules, tokenize_alternative
from lltable.grammar.symbols import EPSILON, nonterminal, terminal

EXPR = """
E -> E+T | T
T -> T*F | F
F -> (E) | id
"""


class TokenizeTests(unittest.TestCase):
    def test_compact_alternatives(self) -> None:
        self.assertEqual(tokenize_alternative("E+T"), ["E", "+", "T"])
        self.assertEqual(tokenize_alternative("(E)"), ["(", "E", ")"])
        self.assertEqual(tokenize_alternative("id"), ["id"])
        self.assertEqual(tokenize_alternative("aA"), ["a", "A"])
        self.assertEqual(tokenize_alternative("TE'"), ["T", "E'"])
        self.assertEqual(tokenize_alternative("E'1*F"), ["E'1", "*", "F"])
        self.assertEqual(tokenize_alternative(" EPSILON "), ["EPSILON"])

    def test_char_terminals(self) -> None:
        self.assertEqual(tokenize_alternative("abA", char_terminals=True), ["a", "b", "A"])

    def test_whitespace_alternatives(self) -> None:
        self.assertEqual(tokenize_alternative(" Expr + term "), ["Expr", "+", "term"])

    def test_empty_alternative(self) -> None:
        self.assertEqual(tokenize_alternative("   "), [])

    def test_known_heads_win_in_compact_mode(self) -> None:
        heads = {"Expr", "Term", "E", "E'1"}
        self.assertEqual(tokenize_alternative("Expr+Term", heads=heads), ["Expr", "+", "Term"])
        self.assertEqual(tokenize_alternative("E'1*E", heads=heads), ["E'1", "*", "E"])
        self.assertEqual(tokenize_alternative("Ex", heads=heads), ["E", "x"])
        self.assertEqual(tokenize_alternative("EPSILON", heads=heads), ["EPSILON"])

    def test_longest_lexeme_wins_over_shorter_head(self) -> None:
        self.assertEqual(tokenize_alternative("terms", heads={"term"}), ["terms"])
        self.assertEqual(
            tokenize_alternative("term+id", char_terminals=True, heads={"term"}),
            ["term", "+", "i", "d"],
        )


class ParseGrammarTests(unittest.TestCase):
    def test_expression_grammar(self) -> None:
        g = parse_grammar(EXPR)
        self.assertEqual(g.start, "E")
        self.assertEqual(g.nonterminals(), ["E", "T", "F"])
        self.assertEqual(
            g.as_dict(),
            {"E": ["E + T", "T"], "T": ["T * F", "F"], "F": ["( E )", "id"]},
        )
        self.assertEqual(g.productions_of("F")[1], (terminal("id"),))

    def test_epsilon_literals(self) -> None:
        g = parse_grammar("A -> x | EPSILON | ~")
        self.assertEqual(g.productions_of("A"), [(terminal("x"),), (EPSILON,), (EPSILON,)])

    def test_repeated_head_appends(self) -> None:
        g = parse_grammar("S -> a\nA -> c\nS -> b")
        self.assertEqual(g.as_dict(), {"S": ["a", "b"], "A": ["c"]})
        self.assertEqual(g.start, "S")

    def test_lowercase_heads_in_whitespace_mode(self) -> None:
        g = parse_grammar("expr -> term + expr | term\nterm -> id")
        self.assertEqual(
            g.productions_of("expr"),
            [(nonterminal("term"), terminal("+"), nonterminal("expr")), (nonterminal("term"),)],
        )
        self.assertEqual(g.productions_of("term"), [(terminal("id"),)])

    def test_alternate_separators(self) -> None:
        g = parse_grammar("S → a | b\nA ::= c")
        self.assertEqual(g.as_dict(), {"S": ["a", "b"], "A": ["c"]})

    def test_comments_and_blank_lines(self) -> None:
        g = parse_grammar("# comment\n\n// another\nS -> a\n")
        self.assertEqual(g.as_dict(), {"S": ["a"]})

    def test_malformed_lines_are_skipped(self) -> None:
        rules, skipped = read_rules("S -> a\nthis is junk\n -> b\nA -> b")
        self.assertEqual([r.head for r in rules], ["S", "A"])
        self.assertEqual([e.line_no for e in skipped], [2, 3])
        self.assertEqual(parse_grammar("S -> a\njunk").as_dict(), {"S": ["a"]})

    def test_strict_mode_raises(self) -> None:
        with self.assertRaises(MalformedGrammarLine) as ctx:
            read_rules("S -> a\njunk", strict=True)
        self.assertEqual(ctx.exception.line_no, 2)
        self.assertIsInstance(ctx.exception, SyntaxError)

    def test_reserved_head_is_malformed(self) -> None:
        _, skipped = read_rules("EPSILON -> a\n$ -> b")
        self.assertEqual(len(skipped), 2)

    def test_undefined_uppercase_stays_nonterminal(self) -> None:
        g = parse_grammar("S -> Ab")
        self.assertEqual(g.productions_of("S"), [(nonterminal("A"), terminal("b"))])
        self.assertEqual(g.undefined_references(), [("S", "A")])

    def test_multi_letter_heads_in_compact_alternatives(self) -> None:
        g = parse_grammar("Expr -> Expr+Term | Term\nTerm -> (Expr) | id")
        self.assertEqual(
            g.productions_of("Expr"),
            [(nonterminal("Expr"), terminal("+"), nonterminal("Term")), (nonterminal("Term"),)],
        )
        self.assertEqual(g.as_dict()["Term"], ["( Expr )", "id"])
        self.assertEqual(g.undefined_references(), [])

    def test_heads_defined_later_are_known(self) -> None:
        g = parse_grammar("S -> Listx\nList -> a")
        self.assertEqual(g.productions_of("S"), [(nonterminal("List"), terminal("x"))])

    def test_rules_keep_raw_alternatives(self) -> None:
        rules, _ = read_rules("S -> aB | | EPSILON")
        self.assertEqual(rules[0].alternatives, ["aB", "EPSILON"])
        g = build_grammar(rules, char_terminals=True)
        self.assertEqual(g.productions_of("S"), [(terminal("a"), nonterminal("B")), (EPSILON,)])


class LoaderTests(unittest.TestCase):
    def test_bom_and_crlf_are_normalized(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "g.txt"
            path.write_bytes("\ufeffS -> a\r\nA -> b\rB -> c\r\n".encode("utf-8"))
            text = load_grammar_text(path)
        self.assertEqual(text, "S -> a\nA -> b\nB -> c\n")
        self.assertEqual(parse_grammar(text).nonterminals(), ["S", "A", "B"])

    def test_dash_reads_stdin(self) -> None:
        with mock.patch("sys.stdin", io.StringIO("S -> a\r\n")):
            self.assertEqual(load_grammar_text("-"), "S -> a\n")


if __name__ == "__main__":
    unittest.main()
