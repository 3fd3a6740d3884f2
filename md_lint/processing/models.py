"""Data models for protected regions and rule metadata."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RegionType(Enum):
    """Class of content that rules must never rewrite."""
    CODE_BLOCK = "code_block"
    YAML_FRONTMATTER = "yaml_frontmatter"
    MARKDOWN_LINK = "markdown_link"
    WIKI_LINK = "wiki_link"
    TAG = "tag"


# Fixed classification order; earlier types claim a byte range first.
REGION_PRIORITY = (
    RegionType.CODE_BLOCK,
    RegionType.YAML_FRONTMATTER,
    RegionType.MARKDOWN_LINK,
    RegionType.WIKI_LINK,
    RegionType.TAG,
)


class RuleType(Enum):
    """Category a rule is listed under."""
    YAML = "YAML"
    HEADING = "Heading"
    FOOTNOTE = "Footnote"
    CONTENT = "Content"
    SPACING = "Spacing"
    PASTE = "Paste"


@dataclass(frozen=True)
class ProtectedSpan:
    """A range of the source text that belongs to a protected region."""
    start: int
    end: int
    region_type: RegionType
    content: str

    def contains(self, other: "ProtectedSpan") -> bool:
        return self.start <= other.start and other.end <= self.end


@dataclass(frozen=True)
class Example:
    """A before/after pair that documents a rule and doubles as a test oracle.

    ``options`` only holds the overrides; they are merged over the rule's
    defaults before the rule runs.
    """
    description: str
    before: str
    after: str
    options: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "before": self.before,
            "after": self.after,
            "options": dict(self.options)
        }
