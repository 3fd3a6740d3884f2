"""md-lint: rule-based Markdown normalizer."""

from .exceptions import LintConfigError, RuleOptionError, UnknownRuleError
from .pipeline import ExampleFailure, Linter, LinterConfig, LintResult, lint_text
from .processing import (
    Example,
    MaskedText,
    ProtectedSpan,
    RegionType,
    RuleType,
    find_regions,
    mask,
    with_masked,
)
from .rules import (
    CATALOG,
    BooleanOptionBuilder,
    ExampleBuilder,
    HeadingBlankLines,
    HeadingBlankLinesOptions,
    OptionDescriptor,
    RuleBuilder,
    RuleCatalog,
    get_rule,
    register_rule,
    registered_rules,
)

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "Linter",
    "LinterConfig",
    "LintResult",
    "ExampleFailure",
    "lint_text",
    # Regions
    "RegionType",
    "ProtectedSpan",
    "MaskedText",
    "find_regions",
    "mask",
    "with_masked",
    # Rules
    "RuleType",
    "RuleBuilder",
    "RuleCatalog",
    "BooleanOptionBuilder",
    "OptionDescriptor",
    "ExampleBuilder",
    "Example",
    "HeadingBlankLines",
    "HeadingBlankLinesOptions",
    "CATALOG",
    "register_rule",
    "registered_rules",
    "get_rule",
    # Errors
    "LintConfigError",
    "RuleOptionError",
    "UnknownRuleError",
]
