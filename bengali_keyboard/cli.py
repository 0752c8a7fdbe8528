"""Command-line interface for the Bengali phonetic keyboard.

WHY: Not every use of the transliterator involves a keyboard. Converting
a list of words, checking what a line of typing would produce, browsing
the pattern table, or starting the HTTP API should all be one command
away in a terminal.

HOW: argparse subcommands:
  convert WORD...   convert each word, one result per line
  convert --stdin   convert each input line as typed text
  type TEXT         replay TEXT as keystrokes into an enabled session
  patterns          list the pattern table
  serve             run the HTTP API with uvicorn
Results go to stdout, status messages to stderr.

RULES:
- Status output goes to stderr (not stdout) so results can be piped
- Errors print "Error: ..." to stderr and exit with status 1
- --verbose sets the log level to DEBUG for the run
- Python 3.9 compatible — no match/case, no X | Y unions at runtime
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from bengali_keyboard import __version__
from bengali_keyboard.config import API_HOST, API_PORT, configure_logging
from bengali_keyboard.core.table import default_table
from bengali_keyboard.core.transliterator import convert
from bengali_keyboard.host.document import transliterate_text, type_text

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed immediately."""
    print(msg, file=sys.stderr, flush=True)


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

def _cmd_convert(args: argparse.Namespace, stdin: TextIO) -> int:
    if args.stdin:
        if args.words:
            print("Error: Give words or --stdin, not both", file=sys.stderr)
            return 1
        for line in stdin:
            print(transliterate_text(line.rstrip("\r\n")))
        return 0

    if not args.words:
        print("Error: No words to convert (pass WORD... or --stdin)", file=sys.stderr)
        return 1

    for word in args.words:
        print(convert(word))
    return 0


def _cmd_type(args: argparse.Namespace, stdin: TextIO) -> int:
    print(type_text(args.text))
    return 0


def _cmd_patterns(args: argparse.Namespace, stdin: TextIO) -> int:
    table = default_table()
    count = 0
    for entry in table:
        if args.vowels and not entry.is_vowel:
            continue
        diacritic = table.diacritic_for(entry.pattern)
        print("\t".join([
            entry.pattern,
            entry.script,
            "vowel" if entry.is_vowel else "",
            diacritic or "",
        ]))
        count += 1
    _status("{} patterns".format(count))
    return 0


def _cmd_serve(args: argparse.Namespace, stdin: TextIO) -> int:
    # Imported here so the other subcommands do not need the server stack.
    from bengali_keyboard.server.app import run_api

    _status("Serving on http://{}:{}".format(args.host, args.port))
    run_api(host=args.host, port=args.port)
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI.

    RULES:
    - A subcommand is required
    - --verbose is accepted before the subcommand
    """
    parser = argparse.ArgumentParser(
        prog="bengali_keyboard",
        description="Phonetic Latin-to-Bengali transliteration: convert words, "
                    "simulate typing, browse the pattern table, or serve the HTTP API.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log at DEBUG level.",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    p_convert = sub.add_parser("convert", help="Convert phonetic words to Bengali.")
    p_convert.add_argument("words", nargs="*", metavar="WORD", help="Words to convert.")
    p_convert.add_argument(
        "--stdin",
        action="store_true",
        help="Read text from stdin and convert it line by line.",
    )
    p_convert.set_defaults(func=_cmd_convert)

    p_type = sub.add_parser(
        "type",
        help="Replay TEXT as keystrokes with the keyboard enabled and print the result.",
    )
    p_type.add_argument("text", metavar="TEXT", help="Text to type.")
    p_type.set_defaults(func=_cmd_type)

    p_patterns = sub.add_parser("patterns", help="List the phonetic pattern table.")
    p_patterns.add_argument(
        "--vowels",
        action="store_true",
        help="Only list vowel patterns.",
    )
    p_patterns.set_defaults(func=_cmd_patterns)

    p_serve = sub.add_parser("serve", help="Run the HTTP API.")
    p_serve.add_argument("--host", default=API_HOST, help="Bind address (default: %(default)s).")
    p_serve.add_argument(
        "--port",
        type=int,
        default=API_PORT,
        help="Port (default: %(default)s).",
    )
    p_serve.set_defaults(func=_cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - Exits with the subcommand's status when it is non-zero
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    try:
        code = args.func(args, sys.stdin)
    except KeyboardInterrupt:
        _status("Interrupted.")
        sys.exit(130)
    except (OSError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
