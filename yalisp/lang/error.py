"""Error handling for yalisp. Only YalispErrors should be encountered while running lines: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every error carries a fixed, human-readable message and the span of source text that caused it. Errors propagate
unchanged from the point of detection up to the ErrorHandler, which prints them.
"""

import logging
import sys

from termcolor import colored


logger = logging.getLogger(__name__)


class YalispError(Exception):
    """Base class of every parse/evaluation error. Subclasses set `message`; TypeMismatch overrides it per operator."""
    message = "error"

    def __init__(self, msg=None, start=None, end=None):
        self.msg = msg if msg is not None else self.message
        super().__init__(self.msg)

        self.start = start  # offending span in the source line, if known
        self.end = end

    @classmethod
    def at(cls, node, msg=None):
        """Builds an error pointing at node's source span."""
        start, end = node.span
        return cls(msg, start, end)


class ParseError(YalispError):
    """Raised while turning text into an AST."""


class UnmatchedOpenParen(ParseError):
    message = "Unmatched '(' in input"


class UnterminatedString(ParseError):
    message = "Unterminated string literal in input"


class UnexpectedEndOfInput(ParseError):
    message = "Unexpected end of input"


class UnexpectedCloseParen(ParseError):
    message = "Unexpected ')' in input"


class EvalError(YalispError):
    """Raised while evaluating an AST."""


class BareSymbolNotEvaluable(EvalError):
    message = "Cannot evaluate a standalone symbol"


class EmptyListNotEvaluable(EvalError):
    message = "Cannot evaluate an empty list"


class OperatorMustBeSymbol(EvalError):
    message = "First element of a list must be a symbol (operator)"


class UnknownOperator(EvalError):
    message = "Unknown operator"


class TypeMismatch(EvalError):
    message = "Argument of the wrong type"


class ArityError(EvalError):
    message = "Operator expects more arguments"


class ErrorHandler:
    """Context manager that reports YalispErrors (and anything else that escapes) to the user.

    Non-fatal handlers suppress the error after printing it, so the caller carries on with the next line. Fatal
    handlers exit the process with status 1.
    """
    ERROR = "red"
    PREFIX = "Error: "

    def __init__(self, fatal=True, color=True, diagnosis=True, stream=None):
        self.fatal = fatal
        self.color = color
        self.diagnosis = diagnosis
        self.stream = stream
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called before a line is parsed."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a line ran successfully."""
        self.traceback[path] = (None, None)

    def _paint(self, text, color=None, attrs=None):
        return colored(text, color, attrs=attrs, no_color=None if self.color else True)

    def _print(self, text):
        print(text, file=self.stream if self.stream is not None else sys.stdout)

    def diagnose(self, error, line):
        """Returns line with the offending span of error highlighted and underlined."""
        line = line.rstrip("\n")
        start = min(error.start, len(line))
        end = min(max(error.end, start + 1), len(line) + 1)

        diagnosis = "  " + line[:start]
        diagnosis += self._paint(line[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += self._paint("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error, internal=False):
        """Prints error using self.traceback, which maps file: (line, line_num) for the line being run."""
        error_msg = ""
        current = None
        for file, (line, line_num) in self.traceback.items():
            if line is None:
                continue
            current = line
            if self.fatal:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line.rstrip()}\n"

        if internal:
            error_msg += self._paint("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += self._paint(ErrorHandler.PREFIX, ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        self._print(error_msg)

        if self.diagnosis and not internal and current is not None and error.start is not None:
            self._print(self.diagnose(error, current))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(YalispError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(YalispError("Expression nested too deeply"))
        elif exc_type is not None and issubclass(exc_type, YalispError):
            logger.debug("reporting %s: %s", exc_type.__name__, exc_val)
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(YalispError(f"unknown error: '{exc_type.__name__}: {exc_val}'"), internal=True)
            do_exit = True

        return not do_exit
