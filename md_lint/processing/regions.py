"""Region classifier: find the parts of a document rules must not touch."""

import logging
import re
from bisect import bisect_left
from typing import Iterable, Optional

from .models import REGION_PRIORITY, ProtectedSpan, RegionType


logger = logging.getLogger(__name__)


# Frontmatter: a `---` line at the very start through the next bare `---` line.
# Body lines may not themselves be a bare `---`. No capturing groups, so
# rules can embed the source in larger patterns.
YAML_FRONTMATTER_PATTERN = r'\A---\n(?:(?!---(?:\n|\Z))[^\n]*\n)*---(?=\n|\Z)'

YAML_FRONTMATTER_REGEX = re.compile(YAML_FRONTMATTER_PATTERN)

# Fenced block: 3+ backticks or tildes, closed by the same fence or end of text
FENCED_CODE_REGEX = re.compile(
    r'^[ \t]{0,3}(?P<fence>`{3,}|~{3,})[^\n]*'
    r'(?:.*?\n[ \t]{0,3}(?P=fence)[`~]*[ \t]*(?=\n|\Z)|.*\Z)',
    re.MULTILINE | re.DOTALL
)

# Inline code: equal-length backtick runs on one line
INLINE_CODE_REGEX = re.compile(r'(?<!`)(?P<ticks>`+)(?!`)[^\n]+?(?<!`)(?P=ticks)(?!`)')

# [text](target) and ![alt](target); nested brackets are not supported
MARKDOWN_LINK_REGEX = re.compile(r'!?\[[^\[\]\n]*\]\([^()\n]*\)')

# [[target]] and ![[embed]]
WIKI_LINK_REGEX = re.compile(r'!?\[\[[^\[\]\n]+\]\]')

# #tag, #nested/tag-name; needs at least one non-digit and may not follow a
# non-space character, so `# Heading` and `C#` are never tags
TAG_REGEX = re.compile(r'(?<!\S)#[\w/-]*[^\W\d][\w/-]*')

REGION_PATTERNS: dict[RegionType, tuple[re.Pattern, ...]] = {
    RegionType.CODE_BLOCK: (FENCED_CODE_REGEX, INLINE_CODE_REGEX),
    RegionType.YAML_FRONTMATTER: (YAML_FRONTMATTER_REGEX,),
    RegionType.MARKDOWN_LINK: (MARKDOWN_LINK_REGEX,),
    RegionType.WIKI_LINK: (WIKI_LINK_REGEX,),
    RegionType.TAG: (TAG_REGEX,),
}


class _ClaimedRanges:
    """Sorted, non-overlapping spans claimed so far."""

    def __init__(self):
        self._starts: list[int] = []
        self._spans: list[ProtectedSpan] = []

    def claim(self, span: ProtectedSpan) -> bool:
        """Claim ``span`` unless it cuts into an already claimed span.

        A span that fully encloses earlier spans absorbs them, so the
        enclosed bytes stay protected as part of the larger region.
        """
        hi = bisect_left(self._starts, span.end)
        lo = hi
        while lo > 0 and self._spans[lo - 1].end > span.start:
            lo -= 1

        overlapping = self._spans[lo:hi]
        if any(not span.contains(other) for other in overlapping):
            return False

        del self._starts[lo:hi]
        del self._spans[lo:hi]
        self._starts.insert(lo, span.start)
        self._spans.insert(lo, span)
        return True

    @property
    def spans(self) -> list[ProtectedSpan]:
        return list(self._spans)


def find_regions(
    text: str,
    types: Optional[Iterable[RegionType]] = None
) -> list[ProtectedSpan]:
    """Classify the protected regions of a document.

    Types are always processed in ``REGION_PRIORITY`` order, whatever order
    the caller lists them in. A candidate that partially overlaps a region
    found earlier is dropped.

    Args:
        text: The document text.
        types: Region types to look for. Defaults to all of them.

    Returns:
        Spans grouped by type in priority order, left to right within a type.
    """
    wanted = set(REGION_PRIORITY if types is None else types)
    claimed = _ClaimedRanges()

    for region_type in REGION_PRIORITY:
        if region_type not in wanted:
            continue
        for pattern in REGION_PATTERNS[region_type]:
            for match in pattern.finditer(text):
                if match.start() == match.end():
                    continue
                span = ProtectedSpan(
                    start=match.start(),
                    end=match.end(),
                    region_type=region_type,
                    content=match.group(0)
                )
                if not claimed.claim(span):
                    logger.debug(
                        f"Skipping {region_type.value} at {span.start}: overlaps a protected region"
                    )

    order = {region_type: index for index, region_type in enumerate(REGION_PRIORITY)}
    return sorted(claimed.spans, key=lambda span: (order[span.region_type], span.start))
