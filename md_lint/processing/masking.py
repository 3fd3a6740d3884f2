"""Masking engine: hide protected regions behind placeholders while a rule runs."""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable

from .models import ProtectedSpan, RegionType
from .regions import find_regions


logger = logging.getLogger(__name__)


# Frontmatter keeps its delimiters so rules can still tell that the
# document starts with a metadata block.
YAML_PLACEHOLDER = "---\n---"

PLACEHOLDER_NAMES = {
    RegionType.CODE_BLOCK: "CODE_BLOCK",
    RegionType.MARKDOWN_LINK: "MARKDOWN_LINK",
    RegionType.WIKI_LINK: "WIKI_LINK",
    RegionType.TAG: "TAG",
}


def _pick_marker(text: str) -> str:
    """Return a placeholder marker that does not occur anywhere in ``text``."""
    marker = "PLACEHOLDER"
    while marker in text:
        marker = "_" + marker
    return marker


@dataclass
class MaskedText:
    """A document with its protected regions swapped out for placeholders.

    Placeholders look like ``{CODE_BLOCK_PLACEHOLDER_0}``: one line, no
    ``#``, brackets, parentheses or backticks, so no heading, link, code or
    blank-line pattern can match inside one or split it.
    """
    text: str
    marker: str
    replacements: list[tuple[str, ProtectedSpan]] = field(default_factory=list)

    @property
    def token_regex(self) -> re.Pattern:
        names = '|'.join(PLACEHOLDER_NAMES.values())
        return re.compile(r'\{(?:' + names + r')_' + re.escape(self.marker) + r'_\d+\}')

    def restore(self, transformed: str) -> str:
        """Put the original content back into a transformed copy of ``text``.

        Args:
            transformed: Output of a transformation over ``self.text``.

        Returns:
            The transformed text with every surviving placeholder replaced
            by the exact bytes it stood for.
        """
        result = transformed
        lookup = {}
        for placeholder, span in self.replacements:
            if span.region_type == RegionType.YAML_FRONTMATTER:
                if YAML_PLACEHOLDER in result:
                    result = result.replace(YAML_PLACEHOLDER, span.content, 1)
                else:
                    logger.warning("Frontmatter placeholder was removed by the transformation")
            else:
                lookup[placeholder] = span.content

        seen = set()

        def put_back(match: re.Match) -> str:
            token = match.group(0)
            if token not in lookup:
                return token
            seen.add(token)
            return lookup[token]

        result = self.token_regex.sub(put_back, result)

        for placeholder in lookup.keys() - seen:
            logger.warning(f"Placeholder {placeholder} was removed by the transformation")

        return result


def mask(text: str, types: Iterable[RegionType]) -> MaskedText:
    """Replace every protected region of ``text`` with a placeholder.

    Args:
        text: The document text.
        types: Region types to protect.

    Returns:
        MaskedText holding the masked copy and what each placeholder hides.
    """
    spans = sorted(find_regions(text, types), key=lambda span: span.start)
    marker = _pick_marker(text)

    parts = []
    replacements = []
    counters: dict[RegionType, int] = {}
    cursor = 0

    for span in spans:
        parts.append(text[cursor:span.start])
        if span.region_type == RegionType.YAML_FRONTMATTER:
            placeholder = YAML_PLACEHOLDER
        else:
            index = counters.get(span.region_type, 0)
            counters[span.region_type] = index + 1
            placeholder = f"{{{PLACEHOLDER_NAMES[span.region_type]}_{marker}_{index}}}"
        parts.append(placeholder)
        replacements.append((placeholder, span))
        cursor = span.end

    parts.append(text[cursor:])

    if replacements:
        logger.debug(f"Masked {len(replacements)} protected regions")

    return MaskedText(text=''.join(parts), marker=marker, replacements=replacements)


def with_masked(
    text: str,
    types: Iterable[RegionType],
    transform: Callable[[str], str]
) -> str:
    """Run ``transform`` on ``text`` without letting it see protected regions.

    Args:
        text: The document text.
        types: Region types to protect.
        transform: Function from masked text to transformed masked text.

    Returns:
        The transformed text with protected regions restored.
    """
    masked = mask(text, types)
    return masked.restore(transform(masked.text))
