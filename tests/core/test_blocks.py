"""Tests for line blocks: init sizing, bar filling and info fitting."""

import pytest

from termtable.core.blocks import (
    BlankBlock,
    InfoBlock,
    LineBlock,
    ProgressBarBlock,
    ProgressLine,
)
from termtable.exceptions import LayoutError


class TestBlockInit:
    """Tests for init() sizing across block kinds."""

    @pytest.mark.parametrize(
        "block",
        [ProgressBarBlock(40), BlankBlock(20), InfoBlock(40)],
        ids=["bar", "blank", "info"],
    )
    def test_content_length_equals_width(self, block: LineBlock) -> None:
        """Content is exactly as long as the width given to init()."""
        block.init(12)
        assert len(block.content()) == 12

    def test_blocks_satisfy_protocol(self) -> None:
        """Every block kind is a LineBlock."""
        for block in (ProgressBarBlock(1), BlankBlock(1), InfoBlock(1)):
            assert isinstance(block, LineBlock)

    def test_second_init_is_rejected(self) -> None:
        """A block can only be placed on one line."""
        block = InfoBlock(10)
        block.init(5)
        with pytest.raises(LayoutError):
            block.init(5)

    def test_negative_percentage_is_rejected(self) -> None:
        """Percentages below zero fail at construction."""
        with pytest.raises(ValueError, match=">= 0"):
            BlankBlock(-1)

    def test_blank_is_all_spaces(self) -> None:
        """A blank block holds nothing but spaces."""
        block = BlankBlock(20)
        block.init(4)
        assert block.content() == "    "


class TestProgressBarBlock:
    """Tests for ProgressBarBlock."""

    @pytest.fixture
    def bar(self) -> ProgressBarBlock:
        """Create a bar with 10 interior cells."""
        bar = ProgressBarBlock(40)
        bar.init(12)
        return bar

    def test_init_draws_brackets(self, bar: ProgressBarBlock) -> None:
        """Brackets sit at both ends with blanks between."""
        assert bar.content() == "[" + " " * 10 + "]"
        assert bar.completed == 0

    def test_progress_fills_truncated_ranges(
        self, bar: ProgressBarBlock
    ) -> None:
        """30% fills cells [1, 3); 70% more fills [3, 10)."""
        assert bar.progress(30) is False
        assert bar.content() == "[==" + " " * 8 + "]"

        assert bar.progress(70) is False
        assert bar.content() == "[" + "=" * 9 + " ]"
        assert bar.completed == 100
        assert bar.is_complete

    def test_progress_after_complete_is_noop(
        self, bar: ProgressBarBlock
    ) -> None:
        """Once complete, progress() reports True and changes nothing."""
        bar.progress(100)
        before = bar.content()

        assert bar.progress(5) is True
        assert bar.content() == before
        assert bar.completed == 100

    def test_completed_clamps_at_100(self, bar: ProgressBarBlock) -> None:
        """Overshooting deltas clamp the counter and the fill."""
        bar.progress(80)
        bar.progress(80)
        assert bar.completed == 100
        assert bar.content().startswith("[")
        assert bar.content().endswith("]")

    def test_fill_never_retracts(self, bar: ProgressBarBlock) -> None:
        """The filled prefix only ever grows."""
        filled = 0
        for _ in range(20):
            bar.progress(5)
            now = bar.content().count("=")
            assert now >= filled
            filled = now

    def test_zero_delta_changes_nothing(self, bar: ProgressBarBlock) -> None:
        """A zero delta leaves the bar untouched."""
        assert bar.progress(0) is False
        assert bar.content() == "[" + " " * 10 + "]"

    def test_negative_delta_is_rejected(self, bar: ProgressBarBlock) -> None:
        """Progress cannot move backwards."""
        with pytest.raises(ValueError, match=">= 0"):
            bar.progress(-1)

    def test_custom_fill_symbol(self) -> None:
        """The fill symbol is configurable."""
        bar = ProgressBarBlock(40, fill_symbol="#")
        bar.init(12)
        bar.progress(50)
        assert bar.content() == "[####      ]"

    def test_fill_symbol_must_be_one_character(self) -> None:
        """Multi-character fill symbols are rejected."""
        with pytest.raises(ValueError, match="one character"):
            ProgressBarBlock(40, fill_symbol="==")

    @pytest.mark.parametrize("width", [0, 1])
    def test_too_narrow_for_brackets(self, width: int) -> None:
        """A bar needs room for both brackets."""
        with pytest.raises(LayoutError):
            ProgressBarBlock(1).init(width)


class TestInfoBlock:
    """Tests for InfoBlock text fitting."""

    @pytest.fixture
    def info(self) -> InfoBlock:
        """Create an info block five columns wide."""
        info = InfoBlock(40)
        info.init(5)
        return info

    def test_short_text_is_padded(self, info: InfoBlock) -> None:
        """Short text is right-padded with blanks."""
        info.update("hi")
        assert info.content() == "hi   "

    def test_long_text_is_truncated(self, info: InfoBlock) -> None:
        """Long text is cut without an ellipsis."""
        info.update("toolong")
        assert info.content() == "toolo"

    def test_starts_blank(self, info: InfoBlock) -> None:
        """Before any update the block is blank."""
        assert info.content() == "     "


class TestProgressLine:
    """Tests for the ProgressLine composite."""

    def test_blocks_in_visual_order(self) -> None:
        """Info, blank, bar with 40/20/40 shares."""
        line = ProgressLine()
        blocks = line.blocks()
        assert blocks == (line.info, line.blank, line.bar)
        assert [b.percentage() for b in blocks] == [40.0, 20.0, 40.0]

    def test_delegates_to_blocks(self) -> None:
        """update_info and progress reach the underlying blocks."""
        line = ProgressLine(fill_symbol="#")
        line.info.init(6)
        line.bar.init(12)

        line.update_info("fetch")
        line.progress(50)

        assert line.info.content() == "fetch "
        assert line.bar.content() == "[####      ]"
