"""Command-line argument parsing for tokentree.

This module defines the command-line interface for tokentree,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from tokentree import __version__
from tokentree.exceptions import InvalidPatternError
from tokentree.path_rules.git_rules import GitIgnorePathRules
from tokentree.path_rules.regex_rules import RegexPathRules


def create_exclusion_action(
    git_rules: GitIgnorePathRules, regex_rules: RegexPathRules
) -> Type[argparse.Action]:
    """Create a custom action class for handling exclusion options.

    The action feeds each option into the matching rules object as soon as it is
    parsed, so gitignore patterns and files keep their command-line order (which
    matters for negations).

    Args:
        git_rules: The gitignore rules updated by -i/--ignore and -e/--exclude.
        regex_rules: The regular expression rules updated by -x/--exclude-regex.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        """Action to update exclusion rules as arguments are processed."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return
            if option_string in ("-e", "--exclude"):
                try:
                    git_rules.load_rules(Path(str(values)))
                except FileNotFoundError as e:
                    parser.error(str(e))
            elif option_string in ("-x", "--exclude-regex"):
                try:
                    regex_rules.add_rule(str(values))
                except InvalidPatternError as e:
                    parser.error(str(e))
            else:  # -i/--ignore
                git_rules.add_rule(str(values))

            if getattr(namespace, self.dest, None) is None:
                setattr(namespace, self.dest, [])
            getattr(namespace, self.dest).append(values)

    return ExclusionRulesAction


def create_parser(git_rules: GitIgnorePathRules, regex_rules: RegexPathRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        git_rules: The gitignore rules object to update during parsing.
        regex_rules: The regular expression rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with tokentree's options.
    """
    description = """
    tokentree: scan a directory into a tree annotated with approximate token counts.

    Every file counts one token per four bytes and every folder counts the sum of
    its contents, which gives a quick picture of how much of a project would fit in
    a language model's context window.

    Entries can be excluded (omitted from the tree) with regular expressions or
    gitignore-style patterns. Dependency, VCS and build directories (paths containing
    node_modules, .git or build) are shown as pending placeholders and not scanned.
    """

    epilog = """
    Examples:
      # Print the tree of a project
      tokentree /path/to/project

      # Exclude entries with gitignore patterns or files
      tokentree -i "*.lock" -i "dist/" /path/to/project
      tokentree -e /path/to/project/.gitignore /path/to/project

      # Exclude entries with regular expressions searched in the full path
      tokentree -x "\\.min\\.js$" /path/to/project

      # Also treat vendor directories as pending, or disable the defaults
      tokentree -p vendor /path/to/project
      tokentree --no-default-pending /path/to/project

      # Write the JSON document to a file
      tokentree -f json --indent 2 -o tree.json /path/to/project

      # Stop on the first unreadable entry
      tokentree --on-error fail /path/to/project
    """

    parser = argparse.ArgumentParser(
        prog="tokentree",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"tokentree {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(git_rules, regex_rules)

    parser.add_argument("directory", type=Path, help="The directory to scan.")
    parser.add_argument(
        "-e",
        "--exclude",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="Path to a gitignore-style file of patterns to exclude (can be specified multiple times).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Individual gitignore-style pattern to exclude. Patterns are processed in the order they "
            "appear, mixed with -e/--exclude options (can be specified multiple times)."
        ),
    )
    parser.add_argument(
        "-x",
        "--exclude-regex",
        type=str,
        metavar="REGEX",
        action=ExclusionAction,
        help="Regular expression searched in each full path to exclude (can be specified multiple times).",
    )
    parser.add_argument(
        "-p",
        "--pending",
        type=str,
        metavar="REGEX",
        action="append",
        default=[],
        help="Additional regular expression marking entries as pending (can be specified multiple times).",
    )
    parser.add_argument(
        "--no-default-pending",
        action="store_true",
        help="Do not mark node_modules, .git and build entries as pending.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["tree", "json"],
        default="tree",
        help="Output format (default: tree).",
    )
    parser.add_argument(
        "--indent",
        type=int,
        metavar="N",
        default=None,
        help="Indentation for JSON output (default: compact).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Walk symbolic links to directories. Symlink loops are detected and not followed.",
    )
    parser.add_argument(
        "--on-error",
        choices=["warn", "fail"],
        default="warn",
        help="How to handle unreadable files and directories (default: warn).",
    )
    parser.add_argument(
        "-s",
        "--summary",
        action="store_true",
        help="Print folder, file, pending and token counts to stderr.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log excluded and pending entries.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors.")

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.indent is not None and args.format != "json":
        raise ValueError("--indent requires -f/--format json")
    if args.indent is not None and args.indent < 0:
        raise ValueError("--indent must not be negative")
