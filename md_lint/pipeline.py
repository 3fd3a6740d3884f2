"""Lint pipeline running registered rules over a document."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .processing.models import Example
from .rules import CATALOG, RuleBuilder, RuleCatalog


logger = logging.getLogger(__name__)


@dataclass
class LinterConfig:
    """Configuration for a lint run."""
    # Rule aliases or names to run; None runs every registered rule
    enabled_rules: Optional[list[str]] = None
    # Option overrides keyed by rule alias
    rule_options: dict[str, dict[str, Any]] = field(default_factory=dict)


@dataclass
class LintResult:
    """Outcome of linting one document."""
    text: str
    # Aliases of the rules that changed the text, in execution order
    changed_rules: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.changed_rules)


@dataclass
class ExampleFailure:
    """A rule example whose output did not match."""
    rule: str
    example: Example
    actual: str


class Linter:
    """Applies the enabled rules of a catalog to documents.

    Rules run in catalog order. Configuration is validated up front, so a
    bad alias or option fails when the linter is built, not halfway
    through a batch.
    """

    def __init__(
        self,
        config: Optional[LinterConfig] = None,
        catalog: Optional[RuleCatalog] = None
    ):
        """Initialize the linter.

        Args:
            config: Which rules to run and their option overrides.
            catalog: Rule catalog to draw from. Defaults to the global one.

        Raises:
            UnknownRuleError: If the config names a rule that does not exist.
            RuleOptionError: If an option override is invalid.
        """
        self.config = config or LinterConfig()
        self.catalog = catalog if catalog is not None else CATALOG
        self._plan = self._build_plan()

    def _build_plan(self) -> list[tuple[RuleBuilder, Any]]:
        rules = self.catalog.rules()
        if self.config.enabled_rules is not None:
            wanted = {self.catalog.get(name).alias for name in self.config.enabled_rules}
            rules = tuple(rule for rule in rules if rule.alias in wanted)

        overrides = {}
        for name, options in self.config.rule_options.items():
            overrides[self.catalog.get(name).alias] = options

        # Validate overrides for every named rule, even disabled ones
        built = {
            alias: self.catalog.get(alias).build_options(options)
            for alias, options in overrides.items()
        }

        plan = []
        for rule in rules:
            options = built[rule.alias] if rule.alias in built else rule.default_options()
            plan.append((rule, options))
        return plan

    @property
    def rules(self) -> list[RuleBuilder]:
        return [rule for rule, _ in self._plan]

    def lint(self, text: str) -> LintResult:
        """Run every enabled rule over ``text``.

        Args:
            text: The document text.

        Returns:
            LintResult with the final text and the rules that changed it.
        """
        result = LintResult(text=text)
        logger.info(f"Linting document with {len(self._plan)} rules")

        for rule, options in self._plan:
            logger.debug(f"Running rule '{rule.alias}'")
            updated = rule.apply(result.text, options)
            if updated != result.text:
                logger.debug(f"Rule '{rule.alias}' changed the document")
                result.changed_rules.append(rule.alias)
                result.text = updated

        return result

    def check_examples(self) -> list[ExampleFailure]:
        """Run every example of every catalog rule as a regression check.

        Returns:
            The examples whose output differed from the expected text.
        """
        failures = []
        for rule in self.catalog.rules():
            for example in rule.examples():
                actual = rule.run_example(example)
                if actual != example.after:
                    logger.error(f"[FAIL] {rule.alias}: {example.description}")
                    failures.append(ExampleFailure(rule=rule.alias, example=example, actual=actual))
                else:
                    logger.debug(f"[OK] {rule.alias}: {example.description}")
        return failures


def lint_text(text: str, config: Optional[LinterConfig] = None) -> str:
    """Lint a string with the default catalog and return the new text."""
    return Linter(config).lint(text).text
