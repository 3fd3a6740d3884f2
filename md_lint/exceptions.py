"""Errors raised while configuring rules."""


class LintConfigError(ValueError):
    """Base class for invalid linter configuration."""


class RuleOptionError(LintConfigError):
    """An option override names an unknown key or has the wrong type."""


class UnknownRuleError(LintConfigError):
    """No registered rule matches the requested name or alias."""
