"""Runs the yalisp interpreter on a file, or in command-line mode. Also uses the error handling context manager.
Called from the yalisp console script and from `python -m yalisp`.

Set LOGLEVEL (e.g. LOGLEVEL=debug) to see parsed trees and intermediate values on stderr.
"""

import argparse
import logging
import os
import sys

from yalisp.lang.error import ErrorHandler
from yalisp.lang.session import Session
from yalisp.lang.shell import Shell


def _get_log_level():
    """Determine log level from LOGLEVEL environment variable. Defaults to WARNING if not set."""
    loglevel_env = os.getenv("LOGLEVEL", "").upper()
    if loglevel_env:
        level = getattr(logging, loglevel_env, None)
        if isinstance(level, int):
            return level
    return logging.WARNING


def build_parser():
    parser = argparse.ArgumentParser(prog="yalisp", description="Yet Another Lisp interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--no-color", action="store_true", help="do not color error messages")
    parser.add_argument("--no-diagnosis", action="store_true", help="do not underline the offending part of errors")
    return parser


def main(argv=None):
    """Runs yalisp interpreter. Called from yalisp executable script."""
    logging.basicConfig(level=_get_log_level(), format="%(name)s: %(message)s", stream=sys.stderr)

    args = build_parser().parse_args(argv)

    with ErrorHandler(color=not args.no_color, diagnosis=not args.no_diagnosis) as error_handler:
        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            sess.run()
        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
