import pytest
from md_lint.processing.models import ProtectedSpan, RegionType
from md_lint.processing.regions import find_regions


def contents(spans):
    return [(span.region_type, span.content) for span in spans]


def test_fenced_code_block():
    text = "# A\n```python\n# not a heading\n```\ntext"
    assert contents(find_regions(text)) == [
        (RegionType.CODE_BLOCK, "```python\n# not a heading\n```"),
    ]


def test_unclosed_fence_runs_to_end_of_document():
    text = "intro\n~~~\n# x\n"
    assert contents(find_regions(text)) == [(RegionType.CODE_BLOCK, "~~~\n# x\n")]


def test_inline_code():
    assert contents(find_regions("use `# x` here")) == [(RegionType.CODE_BLOCK, "`# x`")]
    # Double backticks may wrap a single one
    assert contents(find_regions("a ``b ` c`` d")) == [(RegionType.CODE_BLOCK, "``b ` c``")]


def test_yaml_frontmatter_only_at_document_start():
    text = "---\ntitle: x\n---\nbody"
    assert contents(find_regions(text)) == [(RegionType.YAML_FRONTMATTER, "---\ntitle: x\n---")]

    assert find_regions("text\n---\na: 1\n---\n") == []


def test_unclosed_frontmatter_is_not_protected():
    assert find_regions("---\na: 1\nb: 2") == []


def test_links_and_wiki_links():
    text = "See [docs](http://x.io), ![img](a.png), [[Page]] and ![[embed.png]]"
    assert contents(find_regions(text)) == [
        (RegionType.MARKDOWN_LINK, "[docs](http://x.io)"),
        (RegionType.MARKDOWN_LINK, "![img](a.png)"),
        (RegionType.WIKI_LINK, "[[Page]]"),
        (RegionType.WIKI_LINK, "![[embed.png]]"),
    ]


def test_tags():
    text = "#tag and #nested/tag-x but not # heading, C#sharp or #123"
    assert contents(find_regions(text)) == [
        (RegionType.TAG, "#tag"),
        (RegionType.TAG, "#nested/tag-x"),
    ]


def test_heading_marker_is_not_a_tag():
    assert find_regions("# Heading\n## Sub") == []


def test_earlier_type_wins_overlaps():
    # Tag inside inline code
    assert contents(find_regions("`#tag`")) == [(RegionType.CODE_BLOCK, "`#tag`")]
    # Tag inside a link target
    assert contents(find_regions("[a b](x #frag)")) == [
        (RegionType.MARKDOWN_LINK, "[a b](x #frag)"),
    ]
    # Link inside a fenced block
    assert contents(find_regions("```\n[a](b)\n```")) == [
        (RegionType.CODE_BLOCK, "```\n[a](b)\n```"),
    ]


def test_enclosing_region_absorbs_earlier_spans():
    text = "---\nkey: `v`\n---\n"
    assert contents(find_regions(text)) == [
        (RegionType.YAML_FRONTMATTER, "---\nkey: `v`\n---"),
    ]


def test_requested_types_only():
    text = "```\n#tag\n```"
    assert contents(find_regions(text)) == [(RegionType.CODE_BLOCK, text)]
    assert contents(find_regions(text, [RegionType.TAG])) == [(RegionType.TAG, "#tag")]


def test_results_grouped_by_priority_then_position():
    text = "#t [a](b) `c` #u"
    assert contents(find_regions(text)) == [
        (RegionType.CODE_BLOCK, "`c`"),
        (RegionType.MARKDOWN_LINK, "[a](b)"),
        (RegionType.TAG, "#t"),
        (RegionType.TAG, "#u"),
    ]


def test_span_offsets_match_content():
    text = "intro [a](b) outro"
    span = find_regions(text)[0]
    assert span == ProtectedSpan(6, 12, RegionType.MARKDOWN_LINK, "[a](b)")
    assert text[span.start:span.end] == span.content


@pytest.mark.parametrize("text", ["", "plain text", "# Heading only"])
def test_no_regions(text):
    assert find_regions(text) == []
