"""Command-line interface for md-lint."""

import argparse
import json
import logging
import sys
from typing import Any, Optional

from .exceptions import LintConfigError
from .pipeline import Linter, LinterConfig
from .rules import get_rule, registered_rules
from .rules.docs import render_catalog_docs, render_rule_docs


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def parse_option_assignment(assignment: str) -> tuple[str, str, Any]:
    """Parse ``alias.key=value`` into its parts.

    The value is read as JSON (``true``, ``false``, numbers, strings); text
    that is not valid JSON is kept as a plain string.

    Raises:
        LintConfigError: If the assignment is malformed.
    """
    target, sep, raw_value = assignment.partition('=')
    rule, dot, key = target.rpartition('.')
    if not sep or not dot or not rule or not key:
        raise LintConfigError(f"Expected RULE.KEY=VALUE, got '{assignment}'")
    try:
        value = json.loads(raw_value)
    except json.JSONDecodeError:
        value = raw_value
    return rule, key, value


def build_config(args: argparse.Namespace) -> LinterConfig:
    """Build a LinterConfig from parsed ``apply`` arguments."""
    rule_options: dict[str, dict[str, Any]] = {}
    for assignment in args.set or []:
        rule, key, value = parse_option_assignment(assignment)
        rule_options.setdefault(rule, {})[key] = value
    return LinterConfig(
        enabled_rules=args.rule or None,
        rule_options=rule_options,
    )


def cmd_list(args: argparse.Namespace) -> int:
    """Handle the list command: show registered rules and their options."""
    for rule in registered_rules():
        logger.info(f"\n[RULE] {rule.alias} [{rule.rule_type.value}] - {rule.name}")
        logger.info(f"  {rule.description}")
        for option in rule.options():
            keys = ", ".join((option.key,) + option.aliases)
            logger.info(
                f"  {option.display_name} ({keys}, default: {json.dumps(option.default_value)})"
                f": {option.description}"
            )
    return 0


def cmd_examples(args: argparse.Namespace) -> int:
    """Handle the examples command: run every rule example."""
    failures = Linter().check_examples()
    total = sum(len(rule.examples()) for rule in registered_rules())

    for failure in failures:
        logger.error(f"{failure.rule} expected: {failure.example.after!r}")
        logger.error(f"{failure.rule} actual:   {failure.actual!r}")

    logger.info(f"{total - len(failures)}/{total} examples passed")
    return 0 if not failures else 1


def cmd_apply(args: argparse.Namespace) -> int:
    """Handle the apply command: lint stdin and write the result to stdout."""
    try:
        linter = Linter(build_config(args))
    except LintConfigError as e:
        logger.error(f"Error: {e}")
        return 1

    result = linter.lint(sys.stdin.read())
    sys.stdout.write(result.text)

    if result.changed:
        logger.info(f"Changed by: {', '.join(result.changed_rules)}")
    return 0


def cmd_docs(args: argparse.Namespace) -> int:
    """Handle the docs command."""
    if not args.rule:
        sys.stdout.write(render_catalog_docs())
        return 0

    try:
        rules = [get_rule(name) for name in args.rule]
    except LintConfigError as e:
        logger.error(f"Error: {e}")
        return 1

    sys.stdout.write("\n".join(render_rule_docs(rule) for rule in rules))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog='md-lint',
        description='Normalize Markdown text with configurable lint rules'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    list_parser = subparsers.add_parser(
        'list',
        help='List registered rules and their options'
    )
    list_parser.set_defaults(func=cmd_list)

    examples_parser = subparsers.add_parser(
        'examples',
        help='Run every rule example and report mismatches'
    )
    examples_parser.set_defaults(func=cmd_examples)

    apply_parser = subparsers.add_parser(
        'apply',
        help='Lint Markdown read from stdin and write it to stdout'
    )
    apply_parser.add_argument(
        '-r', '--rule',
        action='append',
        help='Rule alias to run (repeatable, default: all rules)'
    )
    apply_parser.add_argument(
        '-s', '--set',
        action='append',
        metavar='RULE.KEY=VALUE',
        help='Override a rule option, e.g. heading-blank-lines.bottom=false'
    )
    apply_parser.set_defaults(func=cmd_apply)

    docs_parser = subparsers.add_parser(
        'docs',
        help='Print Markdown documentation for every rule'
    )
    docs_parser.add_argument(
        '-r', '--rule',
        action='append',
        help='Only document this rule (repeatable, default: all rules)'
    )
    docs_parser.set_defaults(func=cmd_docs)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.verbose)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
