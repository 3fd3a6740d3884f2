"""Heading blank lines: normalize the blank lines around Markdown headings."""

import logging
import re
from dataclasses import dataclass

from ..processing.masking import with_masked
from ..processing.models import REGION_PRIORITY, RuleType
from ..processing.regions import YAML_FRONTMATTER_PATTERN
from .rule_builder import BooleanOptionBuilder, ExampleBuilder, OptionBuilderBase, RuleBuilder


logger = logging.getLogger(__name__)


HEADING = r'#+[ \t].*'

# A line break followed by any number of empty or whitespace-only lines
LINE_BREAK_AND_BLANKS = r'\n(?:[ \t]*\n)*'

_HEADING_LINE = re.compile(rf'^({HEADING})', re.MULTILINE)
_AFTER_HEADING = re.compile(rf'^({HEADING}){LINE_BREAK_AND_BLANKS}', re.MULTILINE)
_BEFORE_HEADING = re.compile(rf'{LINE_BREAK_AND_BLANKS}({HEADING})')
_BLANK_SECTION = re.compile(rf'^({HEADING})\n(?:[ \t]*\n)+({HEADING})', re.MULTILINE)
_LEADING_BLANKS = re.compile(rf'\A(?:[ \t]*\n)+({HEADING})')
_TRAILING_BLANKS = re.compile(rf'^({HEADING})\n(?:[ \t]*\n)*[ \t]*\Z', re.MULTILINE)
_YAML_THEN_HEADING = re.compile(rf'({YAML_FRONTMATTER_PATTERN}){LINE_BREAK_AND_BLANKS}({HEADING})')


@dataclass(frozen=True)
class HeadingBlankLinesOptions:
    """Options for the heading blank lines rule."""
    # Insert a blank line after headings
    bottom: bool = True
    # Keep the blank line between the frontmatter and a heading right after it
    empty_line_after_yaml: bool = True
    # Keep blank lines between headings that have no body text between them
    empty_line_in_blank_sections: bool = True


class HeadingBlankLines(RuleBuilder[HeadingBlankLinesOptions]):
    """Surrounds headings with blank lines.

    Runs with code, frontmatter, links, wiki links and tags masked, so
    heading-like lines inside them are never touched.
    """

    @property
    def name(self) -> str:
        return "Heading blank lines"

    @property
    def description(self) -> str:
        return (
            "All headings have a blank line both before and after (except where "
            "the heading is at the beginning or end of the document)."
        )

    @property
    def rule_type(self) -> RuleType:
        return RuleType.SPACING

    @property
    def options_class(self) -> type:
        return HeadingBlankLinesOptions

    def apply(self, text: str, options: HeadingBlankLinesOptions) -> str:
        return with_masked(text, REGION_PRIORITY, lambda masked: self._normalize(masked, options))

    def _normalize(self, text: str, options: HeadingBlankLinesOptions) -> str:
        """Run the rewrite passes in order. Later passes rely on earlier ones."""
        if not options.bottom:
            text = _AFTER_HEADING.sub(r'\1\n', text)
            text = _BEFORE_HEADING.sub(r'\n\n\1', text)
        else:
            text = _HEADING_LINE.sub(r'\n\n\1\n\n', text)
            text = _BEFORE_HEADING.sub(r'\n\n\1', text)
            text = _AFTER_HEADING.sub(r'\1\n\n', text)

        if not options.empty_line_in_blank_sections:
            text = self._collapse_blank_sections(text)

        text = _LEADING_BLANKS.sub(r'\1', text, count=1)
        text = _TRAILING_BLANKS.sub(r'\1', text, count=1)

        if not options.empty_line_after_yaml:
            text = _YAML_THEN_HEADING.sub(r'\1\n\2', text, count=1)

        return text

    def _collapse_blank_sections(self, text: str) -> str:
        # One sub leaves every other gap in a chain of empty headings
        passes = 0
        while True:
            text, count = _BLANK_SECTION.subn(r'\1\n\2', text)
            if not count:
                break
            passes += 1
        if passes:
            logger.debug(f"Collapsed blank sections in {passes} passes")
        return text

    @property
    def example_builders(self) -> list[ExampleBuilder[HeadingBlankLinesOptions]]:
        return [
            ExampleBuilder(
                description="Headings should be surrounded by blank lines",
                before=(
                    "# H1\n"
                    "## H2\n"
                    "\n"
                    "\n"
                    "# H1\n"
                    "line\n"
                    "## H2\n"
                ),
                after=(
                    "# H1\n"
                    "\n"
                    "## H2\n"
                    "\n"
                    "# H1\n"
                    "\n"
                    "line\n"
                    "\n"
                    "## H2"
                ),
            ),
            ExampleBuilder(
                description="With `Bottom=false`",
                before=(
                    "# H1\n"
                    "line\n"
                    "## H2\n"
                    "# H1\n"
                    "line"
                ),
                after=(
                    "# H1\n"
                    "line\n"
                    "\n"
                    "## H2\n"
                    "\n"
                    "# H1\n"
                    "line"
                ),
                options={
                    "bottom": False,
                    "empty_line_after_yaml": True,
                    "empty_line_in_blank_sections": True,
                },
            ),
            ExampleBuilder(
                description="With `Bottom=true`, `Empty Line in Empty Sections=false`",
                before=(
                    "# H1\n"
                    "line\n"
                    "## H2\n"
                    "# H1\n"
                    "line"
                ),
                after=(
                    "# H1\n"
                    "\n"
                    "line\n"
                    "\n"
                    "## H2\n"
                    "# H1\n"
                    "\n"
                    "line"
                ),
                options={
                    "bottom": True,
                    "empty_line_after_yaml": True,
                    "empty_line_in_blank_sections": False,
                },
            ),
            ExampleBuilder(
                description="With `Bottom=false`, `Empty Line in Empty Sections=false`",
                before=(
                    "# H1\n"
                    "line\n"
                    "## H2\n"
                    "# H1\n"
                    "line"
                ),
                after=(
                    "# H1\n"
                    "line\n"
                    "\n"
                    "## H2\n"
                    "# H1\n"
                    "line"
                ),
                options={
                    "bottom": False,
                    "empty_line_after_yaml": True,
                    "empty_line_in_blank_sections": False,
                },
            ),
            ExampleBuilder(
                description=(
                    "With `Bottom=false`, `Empty Line in Empty Sections=false`, "
                    "multiple empty sections"
                ),
                before=(
                    "# H1\n"
                    "line\n"
                    "## H2\n"
                    "## H2\n"
                    "# H1\n"
                    "line"
                ),
                after=(
                    "# H1\n"
                    "line\n"
                    "\n"
                    "## H2\n"
                    "## H2\n"
                    "# H1\n"
                    "line"
                ),
                options={
                    "bottom": False,
                    "empty_line_after_yaml": True,
                    "empty_line_in_blank_sections": False,
                },
            ),
            ExampleBuilder(
                description=(
                    "Empty line before header and after Yaml is removed with "
                    "`Empty Line Between Yaml and Header=false`"
                ),
                before=(
                    "---\n"
                    "key: value\n"
                    "---\n"
                    "# Header\n"
                    "Paragraph here..."
                ),
                after=(
                    "---\n"
                    "key: value\n"
                    "---\n"
                    "# Header\n"
                    "\n"
                    "Paragraph here..."
                ),
                options={
                    "bottom": True,
                    "empty_line_after_yaml": False,
                    "empty_line_in_blank_sections": True,
                },
            ),
        ]

    @property
    def option_builders(self) -> list[OptionBuilderBase[HeadingBlankLinesOptions]]:
        return [
            BooleanOptionBuilder(
                options_class=HeadingBlankLinesOptions,
                name="Bottom",
                description="Insert a blank line after headings",
                options_key="bottom",
            ),
            BooleanOptionBuilder(
                options_class=HeadingBlankLinesOptions,
                name="Empty Line Between Yaml and Header",
                description="Keep the empty line between the Yaml frontmatter and header",
                options_key="empty_line_after_yaml",
            ),
            BooleanOptionBuilder(
                options_class=HeadingBlankLinesOptions,
                name="Empty Line in Empty Sections",
                description="Keep the empty line in empty sections",
                options_key="empty_line_in_blank_sections",
            ),
        ]
