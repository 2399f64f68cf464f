"""Command-line interface for tokentree.

This module provides the command-line interface for tokentree, which prints the
token-annotated tree of a directory either as a Unix ``tree``-style listing or as
the JSON document consumed by user interfaces.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error
    126: Filesystem error with --on-error fail
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE)

Example:
    # Print the tree of a project
    $ tokentree /path/to/project

    # Emit the JSON document
    $ tokentree -f json /path/to/project
"""

import argparse
import logging
import os
import sys
from typing import List, Optional, TextIO

from tokentree.cli.argparser import create_parser, validate_args
from tokentree.file_system_tree.error_action import ErrorAction
from tokentree.file_system_tree.file_system_tree import FileSystemTree
from tokentree.path_rules.base_rules import BasePathRules
from tokentree.path_rules.composite_rules import CompositePathRules
from tokentree.path_rules.git_rules import GitIgnorePathRules
from tokentree.path_rules.regex_rules import DEFAULT_PENDING_PATTERNS, RegexPathRules
from tokentree.serialization import tree_to_json


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Send log records to stderr at the level selected on the command line."""
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def build_pending_rules(args: argparse.Namespace) -> RegexPathRules:
    """Combine the default pending patterns with the ones given on the command line."""
    patterns = [] if args.no_default_pending else list(DEFAULT_PENDING_PATTERNS)
    return RegexPathRules(patterns + args.pending)


def format_counts(tree: FileSystemTree) -> str:
    """Format the summary counts of a scanned tree."""
    return "\n".join(
        [
            f"Directories: {tree.get_directory_count()}",
            f"Files: {tree.get_file_count()}",
            f"Pending: {tree.get_pending_count()}",
            f"Tokens: {tree.get_token_count()}",
        ]
    )


def write_output(tree: FileSystemTree, args: argparse.Namespace, stream: TextIO) -> None:
    if args.format == "json":
        stream.write(tree_to_json(tree.get_tree(), indent=args.indent) + "\n")
    else:
        for line in tree.stream_tree_representation():
            stream.write(line + "\n")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the tokentree command-line interface.

    Args:
        argv: Arguments to parse instead of sys.argv[1:]. Defaults to None.
    """
    git_rules = GitIgnorePathRules()
    regex_rules = RegexPathRules()
    parser = create_parser(git_rules, regex_rules)
    args = parser.parse_args(argv)

    try:
        validate_args(args)
        pending_rules = build_pending_rules(args)
    except ValueError as e:
        parser.error(str(e))

    configure_logging(args.verbose, args.quiet)

    # Anchored gitignore patterns are relative to the scanned directory
    git_rules.base_dir = args.directory.resolve().as_posix()
    exclusion_rules: Optional[BasePathRules] = None
    if git_rules.has_rules() or regex_rules.has_rules():
        exclusion_rules = CompositePathRules([git_rules, regex_rules])

    tree = FileSystemTree(
        args.directory.resolve(),
        exclusion_rules=exclusion_rules,
        pending_rules=pending_rules,
        error_action=ErrorAction.RAISE if args.on_error == "fail" else ErrorAction.WARN,
        follow_symlinks=args.follow_symlinks,
    )

    try:
        tree.get_tree()
    except OSError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126)
    except KeyboardInterrupt:
        sys.exit(130)

    try:
        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                write_output(tree, args, f)
        else:
            write_output(tree, args, sys.stdout)
            sys.stdout.flush()

        if args.summary:
            print(format_counts(tree), file=sys.stderr)

    except BrokenPipeError:
        # Python flushes stdout again at shutdown; point it at devnull so that fails quietly
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(141)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
