import io
import os
import tempfile
import unittest

from yalisp.core.values import IntValue, StringValue
from yalisp.lang.error import ErrorHandler, UnknownOperator, UnmatchedOpenParen
from yalisp.lang.session import Session


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.handler = ErrorHandler(color=False, diagnosis=False, stream=self.out)
        self.sess = Session(self.handler, stdout=self.out)

    def feed(self, *lines):
        for line_num, line in enumerate(lines):
            self.sess.add(line, line_num + 1)
        self.sess.run()
        return self.out.getvalue().splitlines()

    def test_cmd_line_is_not_fatal(self):
        self.assertFalse(self.handler.fatal)

    def test_values(self):
        lines = self.feed("(+ 1 2 3)", '(concat "a" "b" "c")', "(- 10 1 2)", "(- 1 5)", '"a(b)c"')
        self.assertEqual(["6", '"abc"', "7", "-4", '"a(b)c"'], lines)
        self.assertEqual(IntValue(7), self.sess.results[2])
        self.assertEqual(StringValue("a(b)c"), self.sess.pop())

    def test_errors_do_not_stop_session(self):
        lines = self.feed("(", "(+ 1 2)", "(foo 1)", "x", "()", "(1 2)", "(-)", '"open', "(+1 2)", "(concat)")
        self.assertEqual([
            "Error: Unmatched '(' in input",
            "3",
            "Error: Unknown operator",
            "Error: Cannot evaluate a standalone symbol",
            "Error: Cannot evaluate an empty list",
            "Error: First element of a list must be a symbol (operator)",
            "Error: Operator '-' expects at least one argument",
            "Error: Unterminated string literal in input",
            "Error: Unknown operator",
            '""',
        ], lines)
        self.assertEqual([IntValue(3), StringValue("")], self.sess.results)

    def test_blank_lines_skipped(self):
        self.assertEqual(["1"], self.feed("", "  \t", "1\n"))

    def test_only_first_expression(self):
        self.assertEqual(["1"], self.feed("1 2 3"))

    def test_queue_drained(self):
        self.feed("(+ 1 1)")
        self.assertEqual({}, self.sess.to_exec)

    def test_execute(self):
        self.assertEqual(IntValue(7), Session.execute("(+ (+ 1 2) (- 5 1))"))
        self.assertRaises(UnknownOperator, Session.execute, "(foo)")
        self.assertRaises(UnmatchedOpenParen, Session.execute, "(")

    def test_reserved_filename(self):
        self.assertRaises(Exception, Session, ErrorHandler(), Session.SH_FILE, cmd_line=False)


class FileSessionTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.handler = ErrorHandler(color=False, diagnosis=False, stream=self.out)
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, text):
        path = os.path.join(self.tmp.name, "prog.yl")
        with open(path, "w") as file:
            file.write(text)
        return path

    def test_runs_file(self):
        path = self.write('(+ 1 2)\n\n(concat "x" "y")\n')
        sess = Session(self.handler, path, cmd_line=False, stdout=self.out)
        self.assertEqual({1: "(+ 1 2)\n", 3: '(concat "x" "y")\n'}, sess.to_exec)

        sess.run()
        self.assertEqual('3\n"xy"\n', self.out.getvalue())

    def test_first_error_is_fatal(self):
        path = self.write("(+ 1 2)\n(foo)\n(+ 3 4)\n")
        sess = Session(self.handler, path, cmd_line=False, stdout=self.out)

        with self.assertRaises(SystemExit) as cm:
            sess.run()

        self.assertEqual(1, cm.exception.code)
        self.assertEqual(f"3\n  File '{path}', line 2:\n    (foo)\nError: Unknown operator\n", self.out.getvalue())
        self.assertEqual([IntValue(3)], sess.results)

    def test_missing_file(self):
        path = os.path.join(self.tmp.name, "missing.yl")
        with self.assertRaises(Exception) as cm:
            Session(self.handler, path, cmd_line=False)
        self.assertIn("could not be opened", str(cm.exception))


if __name__ == '__main__':
    unittest.main()
