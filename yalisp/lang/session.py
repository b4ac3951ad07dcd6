"""Session control for yalisp. Runs lines of input through parse -> evaluate -> print, either in command-line mode or
file interpretation mode. Each line holds one expression; lines never share state.
"""

import logging
import sys

from yalisp.core.evaluator import evaluate
from yalisp.core.lexical import Parser, parse
from yalisp.core.values import render
from yalisp.lang.error import YalispError


logger = logging.getLogger(__name__)


class Session:
    """Governs a yalisp session: a queue of lines waiting to run and the values they produced."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, cmd_line=True, stdout=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.stdout = stdout

        self.to_exec = {}  # dict of line num: line waiting to be run
        self.results = []  # values produced so far, in order

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    for line_num, line in enumerate(file):
                        self.add(line, line_num + 1)
            except OSError:
                raise YalispError(f"'{path}' could not be opened")

        elif not cmd_line:
            raise YalispError(f"'{Session.SH_FILE}' is a reserved filename")

    @staticmethod
    def is_blank(line):
        """Whether line holds nothing but whitespace."""
        return Parser(line).at_end()

    @staticmethod
    def execute(line):
        """Parses the first expression on line and evaluates it. Raises a YalispError on failure."""
        return evaluate(parse(line))

    def add(self, line, line_num):
        """Queues line to be run. Blank lines are skipped. Evaluation is delayed until run is called."""
        if Session.is_blank(line):
            return
        self.to_exec[line_num] = line

    def run(self):
        """Runs queued lines in order, printing each value. Errors are reported through the error handler, which either
        suppresses them (command-line mode) or exits.
        """
        for line_num, line in list(self.to_exec.items()):
            del self.to_exec[line_num]
            self.error_handler.register_line(self.path, line, line_num)

            with self.error_handler:
                value = Session.execute(line)
                logger.debug("%s:%d: %s", self.path, line_num, value)

                self.results.append(value)
                print(render(value), file=self.stdout if self.stdout is not None else sys.stdout)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the most recent value."""
        return self.results.pop()
