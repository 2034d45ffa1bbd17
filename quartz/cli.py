"""
CLI — Process entry point

Global options are parsed by argparse; everything after them is the
<verb> <object> [options] command line handed to the dispatcher.

    quartz [--project DIR] [--debug] <verb> <object> [options]
    quartz --complete create br       autocomplete candidates

Exit codes: 0 success, 1 command failure, 2 parse error, 130 interrupt.
"""

import argparse
import asyncio
import os
from pathlib import Path
from typing import List, Optional

from . import __version__
from .commands import build_registry
from .config import ConfigManager
from .core.dispatcher import Dispatcher
from .core.errors import ExecutionError, ParseError, QuartzError
from .core.models import ExecutionContext
from .i18n import Translator
from .presentation.logger import ConsoleLogger
from .presentation.symbols import get_symbols, safe_print


EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quartz",
        description="Quartz -- verb/object command line for git and AI workflows",
        epilog="Run 'quartz help' for the command catalog."
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("QUARTZ_PROJECT_PATH", "."),
        help='Project directory (default: QUARTZ_PROJECT_PATH or current)'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'quartz {__version__}'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Verbose output (middleware timings, token usage)'
    )

    parser.add_argument(
        '--complete',
        action='store_true',
        help='Print completion candidates for the partial command and exit'
    )

    parser.add_argument(
        'command',
        nargs=argparse.REMAINDER,
        help='<verb> <object> [options]'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for Quartz CLI.

    Builds the registry and default pipeline once, then dispatches the
    command line. Returns the process exit code.
    """
    args = build_parser().parse_args(argv)
    project = Path(args.project).resolve()

    dispatcher = Dispatcher(build_registry())

    if args.complete:
        for suggestion in dispatcher.get_suggestions(args.command):
            safe_print(suggestion)
        return EXIT_OK

    config = ConfigManager(project).load()
    logger = ConsoleLogger(get_symbols(config.display.symbols), verbose=args.debug)
    translator = Translator(config.display.language)

    dispatcher.setup_default_middleware()

    context = ExecutionContext(
        config=config,
        logger=logger,
        t=translator,
        cwd=project,
    )

    command = args.command or ["help"]

    try:
        asyncio.run(dispatcher.parse_and_dispatch(command, context))
    except ParseError as e:
        logger.error(str(e))
        return EXIT_USAGE
    except ExecutionError as e:
        # Stages ahead of error translation fail without being reported
        if getattr(e.__cause__, "reported", False):
            logger.debug(str(e))
        else:
            logger.error(str(e))
        return EXIT_FAILURE
    except QuartzError as e:
        logger.error(str(e))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.line()
        return EXIT_INTERRUPTED

    return EXIT_OK


if __name__ == '__main__':
    raise SystemExit(main())
