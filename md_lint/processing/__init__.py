"""Region classification and masking for rule transformations."""

from .masking import MaskedText, mask, with_masked
from .models import (
    REGION_PRIORITY,
    Example,
    ProtectedSpan,
    RegionType,
    RuleType,
)
from .regions import YAML_FRONTMATTER_PATTERN, find_regions

__all__ = [
    "MaskedText",
    "mask",
    "with_masked",
    "find_regions",
    "YAML_FRONTMATTER_PATTERN",
    "REGION_PRIORITY",
    "Example",
    "ProtectedSpan",
    "RegionType",
    "RuleType",
]
