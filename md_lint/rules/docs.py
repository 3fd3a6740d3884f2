"""Render rule descriptors as Markdown documentation."""

import re
from typing import Optional

from .rule_builder import CATALOG, RuleBuilder, RuleCatalog


def _fence_for(text: str) -> str:
    """Pick a backtick fence longer than any backtick run inside ``text``."""
    longest = max((len(run) for run in re.findall(r'`+', text)), default=0)
    return '`' * max(3, longest + 1)


def _fenced(text: str) -> str:
    fence = _fence_for(text)
    return f"{fence}markdown\n{text}\n{fence}"


def render_rule_docs(rule: RuleBuilder) -> str:
    """Generate the documentation section for one rule.

    Args:
        rule: The rule to document.

    Returns:
        Markdown with the rule's metadata, options table and examples.
    """
    output_parts = [
        f"## {rule.name}",
        f"Alias: `{rule.alias}`  \nCategory: {rule.rule_type.value}",
        rule.description,
    ]

    descriptors = rule.options()
    if descriptors:
        table = [
            "| Name | Key | Default | Description |",
            "| ---- | --- | ------- | ----------- |",
        ]
        for option in descriptors:
            default = str(option.default_value).lower() if option.kind == "boolean" else option.default_value
            table.append(
                f"| {option.display_name} | `{option.key}` | `{default}` | {option.description} |"
            )
        output_parts.append("### Options")
        output_parts.append("\n".join(table))

    examples = rule.examples()
    if examples:
        output_parts.append("### Examples")
        for example in examples:
            output_parts.append(f"#### {example.description}")
            output_parts.append(f"Before:\n\n{_fenced(example.before)}")
            output_parts.append(f"After:\n\n{_fenced(example.after)}")

    return "\n\n".join(output_parts) + "\n"


def render_catalog_docs(catalog: Optional[RuleCatalog] = None) -> str:
    """Generate documentation for every rule in a catalog."""
    catalog = catalog if catalog is not None else CATALOG
    sections = [render_rule_docs(rule) for rule in catalog.rules()]
    return "# Rules\n\n" + "\n".join(sections)
