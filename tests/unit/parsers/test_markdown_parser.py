import pytest

from chunk_kit.errors import MarkdownParseError
from chunk_kit.parsers.markdown_parser import RegexMarkdownParser
from chunk_kit.parsers.models import BlockKind, BlockNode


@pytest.fixture
def parser() -> RegexMarkdownParser:
    return RegexMarkdownParser()


def kinds(blocks: list[BlockNode]) -> list[BlockKind]:
    return [block.kind for block in blocks]


def walk(node: BlockNode):
    yield node
    for child in node.children:
        yield from walk(child)


class TestHeadingsAndParagraphs:
    def test_atx_heading_and_paragraph(self, parser: RegexMarkdownParser) -> None:
        blocks = parser.parse("# Title\n\nSome text here.")

        assert blocks == [
            BlockNode(BlockKind.HEADING, 0, 7, depth=1),
            BlockNode(BlockKind.PARAGRAPH, 9, 24),
        ]

    def test_heading_depth_follows_hash_count(self, parser: RegexMarkdownParser) -> None:
        blocks = parser.parse("### Deep\n###### Deepest")

        assert [b.depth for b in blocks] == [3, 6]

    def test_hash_without_space_is_paragraph(self, parser: RegexMarkdownParser) -> None:
        blocks = parser.parse("#hashtag")

        assert kinds(blocks) == [BlockKind.PARAGRAPH]

    def test_setext_headings(self, parser: RegexMarkdownParser) -> None:
        blocks = parser.parse("Title\n=====\n\nBody\n\nSub\n---")

        assert blocks[0] == BlockNode(BlockKind.HEADING, 0, 11, depth=1)
        assert blocks[1] == BlockNode(BlockKind.PARAGRAPH, 13, 17)
        assert blocks[2].kind is BlockKind.HEADING
        assert blocks[2].depth == 2

    def test_multiline_paragraph_is_one_block(self, parser: RegexMarkdownParser) -> None:
        text = "line one\nline two\nline three"
        blocks = parser.parse(text)

        assert blocks == [BlockNode(BlockKind.PARAGRAPH, 0, len(text))]

    def test_heading_interrupts_paragraph(self, parser: RegexMarkdownParser) -> None:
        blocks = parser.parse("text\n# Heading")

        assert kinds(blocks) == [BlockKind.PARAGRAPH, BlockKind.HEADING]


class TestThematicBreaks:
    def test_break_between_paragraphs(self, parser: RegexMarkdownParser) -> None:
        blocks = parser.parse("a\n\n---\n\nb")

        assert blocks[1] == BlockNode(BlockKind.THEMATIC_BREAK, 3, 6)
        assert kinds(blocks) == [
            BlockKind.PARAGRAPH,
            BlockKind.THEMATIC_BREAK,
            BlockKind.PARAGRAPH,
        ]

    @pytest.mark.parametrize("rule", ["***", "* * *", "___", "- - -"])
    def test_break_variants(self, parser: RegexMarkdownParser, rule: str) -> None:
        assert kinds(parser.parse(rule)) == [BlockKind.THEMATIC_BREAK]


class TestCodeBlocks:
    def test_fenced_code_keeps_headings_and_blank_lines(
        self, parser: RegexMarkdownParser
    ) -> None:
        blocks = parser.parse("```python\n# comment\n\nx = 1\n```\nAfter")

        assert blocks == [
            BlockNode(BlockKind.CODE, 0, 30),
            BlockNode(BlockKind.PARAGRAPH, 31, 36),
        ]

    def test_tilde_fence(self, parser: RegexMarkdownParser) -> None:
        blocks = parser.parse("~~~\n```\n~~~")

        assert blocks == [BlockNode(BlockKind.CODE, 0, 11)]

    def test_unclosed_fence_runs_to_end(self, parser: RegexMarkdownParser) -> None:
        blocks = parser.parse("```\ncode\n\n")

        assert blocks == [BlockNode(BlockKind.CODE, 0, 8)]

    def test_indented_code(self, parser: RegexMarkdownParser) -> None:
        blocks = parser.parse("para\n\n    code line\n    more")

        assert blocks[1] == BlockNode(BlockKind.CODE, 6, 28)


class TestLists:
    def test_items_separated_by_blank_lines_stay_in_one_list(
        self, parser: RegexMarkdownParser
    ) -> None:
        blocks = parser.parse("- one\n- two\n\n- three\n\nAfter")

        assert kinds(blocks) == [BlockKind.LIST, BlockKind.PARAGRAPH]
        listing = blocks[0]
        assert (listing.start, listing.end) == (0, 20)
        assert [(item.start, item.end) for item in listing.children] == [
            (0, 5),
            (6, 11),
            (13, 20),
        ]
        assert listing.children[0].children == (
            BlockNode(BlockKind.PARAGRAPH, 2, 5),
        )
        assert blocks[1] == BlockNode(BlockKind.PARAGRAPH, 22, 27)

    def test_nested_list(self, parser: RegexMarkdownParser) -> None:
        blocks = parser.parse("- a\n  - b\n- c")

        listing = blocks[0]
        assert len(listing.children) == 2
        first = listing.children[0]
        assert (first.start, first.end) == (0, 9)
        assert kinds(list(first.children)) == [BlockKind.PARAGRAPH, BlockKind.LIST]
        nested_item = first.children[1].children[0]
        assert (nested_item.start, nested_item.end) == (6, 9)

    def test_ordered_list(self, parser: RegexMarkdownParser) -> None:
        blocks = parser.parse("1. one\n2. two")

        assert kinds(blocks) == [BlockKind.LIST]
        assert len(blocks[0].children) == 2

    def test_changing_delimiter_starts_new_list(
        self, parser: RegexMarkdownParser
    ) -> None:
        blocks = parser.parse("1. one\n2) two")

        assert kinds(blocks) == [BlockKind.LIST, BlockKind.LIST]


class TestBlockquotes:
    def test_blockquote_children_point_past_markers(
        self, parser: RegexMarkdownParser
    ) -> None:
        blocks = parser.parse("> quote line\n> second\n\nafter")

        assert blocks[0] == BlockNode(
            BlockKind.BLOCKQUOTE,
            0,
            21,
            children=(BlockNode(BlockKind.PARAGRAPH, 2, 21),),
        )
        assert blocks[1].kind is BlockKind.PARAGRAPH

    def test_lazy_continuation(self, parser: RegexMarkdownParser) -> None:
        blocks = parser.parse("> a\nb")

        assert blocks == [
            BlockNode(
                BlockKind.BLOCKQUOTE,
                0,
                5,
                children=(BlockNode(BlockKind.PARAGRAPH, 2, 5),),
            )
        ]


class TestTables:
    def test_table_rows(self, parser: RegexMarkdownParser) -> None:
        text = "| a | b |\n|---|---|\n| 1 | 2 |\n| 3 | 4 |"
        blocks = parser.parse(text)

        assert len(blocks) == 1
        table = blocks[0]
        assert table.kind is BlockKind.TABLE
        assert (table.start, table.end) == (0, 39)
        # header row carries the delimiter row
        assert [(row.start, row.end) for row in table.children] == [
            (0, 19),
            (20, 29),
            (30, 39),
        ]

    def test_column_count_mismatch_is_not_a_table(
        self, parser: RegexMarkdownParser
    ) -> None:
        blocks = parser.parse("a | b\n---")

        assert kinds(blocks) == [BlockKind.HEADING]


class TestHtml:
    def test_html_block_runs_to_blank_line(self, parser: RegexMarkdownParser) -> None:
        blocks = parser.parse("<div>\nhello\n</div>\n\ntext")

        assert blocks == [
            BlockNode(BlockKind.HTML, 0, 18),
            BlockNode(BlockKind.PARAGRAPH, 20, 24),
        ]


class TestPositions:
    def test_empty_input(self, parser: RegexMarkdownParser) -> None:
        assert parser.parse("") == []
        assert parser.parse("\n\n  \n") == []

    def test_crlf_offsets_index_original_text(
        self, parser: RegexMarkdownParser
    ) -> None:
        text = "# A\r\n\r\ntext"
        blocks = parser.parse(text)

        assert blocks == [
            BlockNode(BlockKind.HEADING, 0, 3, depth=1),
            BlockNode(BlockKind.PARAGRAPH, 7, 11),
        ]
        assert text[7:11] == "text"

    def test_children_nested_within_parents(
        self, parser: RegexMarkdownParser
    ) -> None:
        text = (
            "# Doc\n\n"
            "- item\n  > quoted\n  > more\n- other\n\n"
            "| h |\n|---|\n| v |\n\n"
            "> outer\n> > inner\n"
        )
        blocks = parser.parse(text)

        previous_end = 0
        for block in blocks:
            assert block.start >= previous_end
            previous_end = block.end
            for node in walk(block):
                sibling_end = node.start
                for child in node.children:
                    assert node.start <= child.start <= child.end <= node.end
                    assert child.start >= sibling_end
                    sibling_end = child.end

    def test_deep_nesting_raises_parse_error(
        self, parser: RegexMarkdownParser
    ) -> None:
        with pytest.raises(MarkdownParseError, match="nesting exceeds"):
            parser.parse(">" * 150 + " x")


class TestBlockNode:
    def test_span_falls_back_to_children(self) -> None:
        node = BlockNode(
            BlockKind.LIST,
            None,
            None,
            children=(
                BlockNode(BlockKind.LIST_ITEM, 4, 9),
                BlockNode(BlockKind.LIST_ITEM, None, None),
                BlockNode(BlockKind.LIST_ITEM, 10, 20),
            ),
        )

        assert node.span == (4, 20)

    def test_span_is_none_without_positions(self) -> None:
        assert BlockNode(BlockKind.PARAGRAPH, None, None).span is None

    def test_node_is_frozen(self) -> None:
        node = BlockNode(BlockKind.PARAGRAPH, 0, 1)

        with pytest.raises(AttributeError):
            node.start = 5  # type: ignore
