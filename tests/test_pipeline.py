import pytest
from md_lint.exceptions import RuleOptionError, UnknownRuleError
from md_lint.pipeline import Linter, LinterConfig, lint_text
from md_lint.rules import HeadingBlankLines
from md_lint.rules.rule_builder import ExampleBuilder, RuleCatalog

from .test_rule_builder import ShoutRule


class BrokenShoutRule(ShoutRule):
    """Same as ShoutRule but with an example that cannot pass."""

    @property
    def name(self) -> str:
        return "Broken shout"

    @property
    def example_builders(self):
        return [ExampleBuilder(description="Stays lower case", before="a", after="a")]


def test_default_linter():
    result = Linter().lint("# H1\n## H2\n")
    assert result.text == "# H1\n\n## H2"
    assert result.changed_rules == ["heading-blank-lines"]
    assert result.changed


def test_unchanged_document():
    result = Linter().lint("plain text\n")
    assert result.text == "plain text\n"
    assert not result.changed


def test_rule_options_applied():
    config = LinterConfig(rule_options={"heading-blank-lines": {"bottom": False}})
    assert Linter(config).lint("# A\n\n\nbody").text == "# A\nbody"


def test_no_rules_enabled():
    config = LinterConfig(enabled_rules=[])
    assert Linter(config).lint("# A\nbody").text == "# A\nbody"


def test_unknown_rule_fails_at_construction():
    with pytest.raises(UnknownRuleError):
        Linter(LinterConfig(enabled_rules=["no-such-rule"]))
    with pytest.raises(UnknownRuleError):
        Linter(LinterConfig(rule_options={"no-such-rule": {}}))


def test_bad_option_fails_at_construction():
    config = LinterConfig(rule_options={"heading-blank-lines": {"bottom": "no"}})
    with pytest.raises(RuleOptionError):
        Linter(config)


def test_rules_run_in_catalog_order():
    catalog = RuleCatalog()
    catalog.register(HeadingBlankLines())
    catalog.register(ShoutRule())

    # Enabled list order does not change execution order
    config = LinterConfig(enabled_rules=["shout", "heading-blank-lines"])
    linter = Linter(config, catalog=catalog)
    assert [rule.alias for rule in linter.rules] == ["heading-blank-lines", "shout"]

    result = linter.lint("# a\ntext")
    assert result.text == "# A\n\nTEXT"
    assert result.changed_rules == ["heading-blank-lines", "shout"]


def test_empty_catalog_is_respected():
    assert Linter(catalog=RuleCatalog()).lint("# a\ntext").text == "# a\ntext"


def test_builtin_examples_pass():
    assert Linter().check_examples() == []


def test_failing_example_reported():
    catalog = RuleCatalog()
    catalog.register(BrokenShoutRule())
    failures = Linter(catalog=catalog).check_examples()
    assert len(failures) == 1
    assert failures[0].rule == "broken-shout"
    assert failures[0].actual == "A"


def test_lint_text_shortcut():
    assert lint_text("# A\ntext") == "# A\n\ntext"
