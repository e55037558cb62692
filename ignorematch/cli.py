#!/usr/bin/env python3
"""Command-line interface for ignorematch.

Compiles one ignore-file pattern and reports which of the given paths it
matches:
- Argument parsing
- Configuration file loading
- Logging setup
- One result line per path

Example:
    $ ignorematch '*.log' debug.log src/main.py
    match     debug.log
    no-match  src/main.py
"""

import argparse
import sys
from typing import List, Optional

from ignorematch.core.constants import IGNOREMATCH_VERSION, ConfigKey
from ignorematch.infrastructure.config_manager import ConfigError, ConfigManager, ConfigSource
from ignorematch.infrastructure.logger import Logger, get_logger
from ignorematch.rules.rule import Rule, RuleCompiler

DESCRIPTION = "ignorematch - test paths against a gitignore-style pattern"

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2
EXIT_INTERRUPTED = 130

LOG_LEVEL_KEY = f"{ConfigKey.ROOT}.{ConfigKey.LOGGING}.{ConfigKey.LOG_LEVEL}"
LOG_FILE_KEY = f"{ConfigKey.ROOT}.{ConfigKey.LOGGING}.{ConfigKey.LOG_FILE}"


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
    """
    parser = argparse.ArgumentParser(
        prog="ignorematch",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Which of these paths does the pattern exclude?
  ignorematch '*.log' debug.log src/main.py

  # Show the rule's directory and negation flags too
  ignorematch --flags 'build/' build build/out.o

Exit status is 0 when at least one path matched, 1 when none did
and 2 on error.
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {IGNOREMATCH_VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    parser.add_argument("pattern", help="Ignore-file pattern line")
    parser.add_argument("paths", metavar="PATH", nargs="+", help="Relative paths to test")

    output_group = parser.add_argument_group("output options")

    output_group.add_argument(
        "--flags",
        action="store_true",
        help="Print the rule's is_dir and is_negate flags",
    )

    output_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(args)


def load_configuration(args: argparse.Namespace) -> ConfigManager:
    """
    Build the configuration from the config file and CLI flags.

    Raises:
        CLIError: If the configuration file is missing or invalid
    """
    try:
        config = ConfigManager()
        if args.config:
            config.load_file(args.config, ConfigSource.USER_CONFIG)
    except ConfigError as e:
        raise CLIError(e.message) from e

    if args.debug:
        config.set(LOG_LEVEL_KEY, "DEBUG", ConfigSource.CLI_ARGS)

    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Apply the configured level (and log file) to the package loggers.

    A file handler left by an earlier call is closed and replaced.

    Returns:
        The CLI logger
    """
    level = config.get(LOG_LEVEL_KEY)
    log_file = config.get(LOG_FILE_KEY)

    logger = get_logger("ignorematch.cli")
    for configured in (logger, get_logger("ignorematch.rules")):
        configured.set_level(level)
        configured.clear_file_handlers()
        if log_file:
            configured.add_handler(configured.create_file_handler(log_file))

    return logger


def format_result(rule: Rule, path: str, matched: bool, show_flags: bool) -> str:
    """Render one result line."""
    line = f"{'match' if matched else 'no-match':<9} {path}"
    if show_flags:
        line += f"  is_dir={rule.is_dir} is_negate={rule.is_negate}"
    return line


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit status
    """
    try:
        args = parse_arguments(argv)
        config = load_configuration(args)
        logger = setup_logging(config)

        rule = RuleCompiler(config=config).compile(args.pattern)
        logger.info("Testing paths", pattern=rule.pattern, count=len(args.paths))

        any_matched = False
        for path in args.paths:
            matched = rule.matches(path)
            any_matched = any_matched or matched
            print(format_result(rule, path, matched, args.flags))

        return EXIT_MATCH if any_matched else EXIT_NO_MATCH

    except CLIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED

    except Exception as e:
        get_logger("ignorematch.cli").exception("Unexpected error", e)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
