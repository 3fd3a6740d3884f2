"""Lint rules and the process-wide rule catalog."""

from .heading_blank_lines import HeadingBlankLines, HeadingBlankLinesOptions
from .rule_builder import (
    CATALOG,
    BooleanOptionBuilder,
    ExampleBuilder,
    OptionBuilderBase,
    OptionDescriptor,
    RuleBuilder,
    RuleCatalog,
    get_rule,
    register_rule,
    registered_rules,
)


# Built-in rules, in execution order. Runs once, at first import.
register_rule(HeadingBlankLines())

__all__ = [
    "CATALOG",
    "RuleCatalog",
    "RuleBuilder",
    "OptionBuilderBase",
    "BooleanOptionBuilder",
    "OptionDescriptor",
    "ExampleBuilder",
    "HeadingBlankLines",
    "HeadingBlankLinesOptions",
    "register_rule",
    "registered_rules",
    "get_rule",
]
