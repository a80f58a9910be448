"""Command line interface.

Usage:
    autotrans INPUT OUTPUT [--determinize] [--minimize] [--trim]
              [--complement | --union PATH | --intersection PATH | --difference PATH]
"""

import argparse
import logging
import sys
from typing import List, Optional

from autotrans import __version__
from autotrans.config import Config
from autotrans.exceptions import AutomatonError
from autotrans.io.parser import parse_file
from autotrans.io.serializer import write_file
from autotrans.pipeline import Operation, Options, Stage, run_pipeline, stage

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autotrans",
        description="Transform a finite automaton and write the result.",
    )
    parser.add_argument("input", help="Input automaton description")
    parser.add_argument("output", help="Where to write the transformed automaton")
    parser.add_argument(
        "-d", "--determinize", action="store_true",
        help="Convert to a DFA (default when nothing else is selected)",
    )
    parser.add_argument(
        "-m", "--minimize", action="store_true", help="Minimize (implies --determinize)"
    )
    parser.add_argument(
        "-t", "--trim", action="store_true",
        help="Drop unreachable and dead states from the input and the result",
    )

    ops = parser.add_mutually_exclusive_group()
    ops.add_argument("--complement", action="store_true", help="Complement the language")
    ops.add_argument("--union", metavar="PATH", help="Union with another automaton")
    ops.add_argument(
        "--intersection", metavar="PATH", help="Intersection with another automaton"
    )
    ops.add_argument(
        "--difference", metavar="PATH", help="Remove another automaton's language"
    )

    parser.add_argument(
        "--partial", action="store_true",
        help="Leave missing DFA transitions undefined instead of adding a sink",
    )
    parser.add_argument(
        "--max-states", type=int, default=Config.max_states,
        help="Abort constructions larger than this (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level", default=Config.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: %(default)s)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _options(args: argparse.Namespace) -> Options:
    operation = None
    if args.complement:
        operation = Operation.COMPLEMENT
    elif args.union:
        operation = Operation.UNION
    elif args.intersection:
        operation = Operation.INTERSECTION
    elif args.difference:
        operation = Operation.DIFFERENCE
    return Options(
        determinize=args.determinize,
        minimize=args.minimize,
        trim=args.trim,
        operation=operation,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    config = Config(
        complete=not args.partial,
        max_states=args.max_states,
        log_level=args.log_level,
    )

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = _options(args)
    operand_path = args.union or args.intersection or args.difference

    try:
        with stage(Stage.VALIDATE):
            logger.info("reading %s", args.input)
            automaton = parse_file(args.input, config)
            operand = None
            if operand_path:
                logger.info("reading %s", operand_path)
                operand = parse_file(operand_path, config)

        result = run_pipeline(automaton, options, operand, config)

        with stage(Stage.OUTPUT):
            write_file(result, args.output, config)
        logger.info("wrote %s", args.output)
    except AutomatonError as e:
        print(f"autotrans: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
