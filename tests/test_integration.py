import io
import os
import random
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

import ahocorasick

from bitap import PatternSearchEngine
from bitap.cli import main


def run_cli(*args, argv0="bitap", prog=None, **env):
    stdout, stderr = io.StringIO(), io.StringIO()
    with mock.patch.dict(os.environ, env), redirect_stdout(stdout), redirect_stderr(stderr):
        code = main([argv0, *args], prog=prog)
    return code, stdout.getvalue(), stderr.getvalue()


def automaton_starts(text: str, pattern: str):
    automaton = ahocorasick.Automaton()
    automaton.add_word(pattern, pattern)
    automaton.make_automaton()
    return sorted(end - len(pattern) + 1 for end, _ in automaton.iter(text))


class TestCommandLine(unittest.TestCase):
    def test_reports_matches_in_order(self):
        code, out, err = run_cli("abcabcabc", "abc", BITAP_TRACE="0")
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), ["match at: 0", "match at: 3", "match at: 6"])
        self.assertEqual(err, "")

    def test_trace_lines_follow_each_character(self):
        code, out, _ = run_cli("aaa", "a")
        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(len(lines), 6)
        self.assertEqual(lines[0::2], ["match at: 0", "match at: 1", "match at: 2"])
        for line in lines[1::2]:
            self.assertTrue(line.startswith("a  | ."))

    def test_no_matches(self):
        code, out, _ = run_cli("abcdef", "xyz", BITAP_TRACE="0")
        self.assertEqual(code, 0)
        self.assertEqual(out, "")

    def test_wrong_arity(self):
        for args in [(), ("text",), ("text", "pattern", "extra")]:
            code, out, err = run_cli(*args)
            self.assertEqual(code, 1)
            self.assertEqual(out, "")
            self.assertIn("Usage: bitap string pattern", err)

    def test_word_variant_pattern_too_long(self):
        code, out, err = run_cli("a" * 100, "a" * 64, BITAP_VARIANT="word")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertEqual(err, "Pattern too long.\n")

    def test_long_pattern_with_auto_variant(self):
        code, out, _ = run_cli("a" * 65, "a" * 64, BITAP_TRACE="0", BITAP_VARIANT="auto")
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), ["match at: 0", "match at: 1"])

    def test_unknown_variant(self):
        code, out, err = run_cli("abc", "a", BITAP_VARIANT="simd")
        self.assertEqual(code, 1)
        self.assertEqual(err.count("Unknown variant"), 1)

    def test_module_invocation_uses_package_name(self):
        code, _, err = run_cli("x", argv0="/usr/lib/python3/bitap/__main__.py", prog="bitap")
        self.assertEqual(code, 1)
        self.assertEqual(err, "Usage: bitap string pattern\n")

    def test_default_variant_uses_bit_vector_state(self):
        with mock.patch("bitap.engine.WordShiftOrAlgorithm", side_effect=AssertionError("word state used")):
            code, out, _ = run_cli("abcabcabc", "abc", BITAP_TRACE="0")
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), ["match at: 0", "match at: 3", "match at: 6"])


class TestAgainstAutomaton(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        rng = random.Random(99)
        cls.text = "".join(rng.choice("abc") for _ in range(3000))
        cls.patterns = [cls.text[s:s + n] for s, n in [(10, 3), (500, 8), (1200, 40), (2000, 64), (100, 150)]]
        cls.patterns += ["cccccc", "abcabcab"]

    def test_vector_variant(self):
        for pattern in self.patterns:
            engine = PatternSearchEngine(pattern, {"variant": "vector"})
            starts = [match.start for match in engine.search(self.text)]
            self.assertEqual(starts, automaton_starts(self.text, pattern), pattern)

    def test_auto_variant(self):
        for pattern in self.patterns:
            engine = PatternSearchEngine(pattern, {"variant": "auto"})
            starts = [match.start for match in engine.search(self.text)]
            self.assertEqual(starts, automaton_starts(self.text, pattern), pattern)


if __name__ == "__main__":
    unittest.main()
