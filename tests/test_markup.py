"""Tests for resolving tag markup to legacy escapes."""

from rich.markup import render
from textual.color import Color

from mcansi.markup import (
    LegacyStyle,
    Rewritten,
    Unresolved,
    escape_unknown_tags,
    hex_escape,
    nearest_legacy_color,
    parse_tag,
    resolve_markup,
    serialize,
)


class TestResolveMarkup:
    def test_plain(self):
        resolution = resolve_markup("plain text")
        assert resolution == Rewritten("plain text")
        assert resolution.needs_retry is False

    def test_legacy_codes_untouched(self):
        assert resolve_markup("§6Gold §lBold") == Rewritten("§6Gold §lBold")

    def test_named_color(self):
        assert resolve_markup("[gold]Gold[/gold] text").text == "§6Gold§r text"

    def test_unclosed_tag(self):
        assert resolve_markup("[bold]Hi").text == "§lHi"

    def test_nested(self):
        assert resolve_markup("[gold]a[bold]b[/bold]c[/gold]").text == "§6a§lb§6c"

    def test_combined_tag(self):
        assert resolve_markup("[bold dark_aqua]x[/]").text == "§3§lx"

    def test_hex_color(self):
        assert resolve_markup("[#ff8800]x").text == "§x§f§f§8§8§0§0x"

    def test_hex_color_legacy(self):
        assert resolve_markup("[#ff8800]x", legacy=True).text == "§6x"

    def test_background_skipped(self):
        assert resolve_markup("[bold on blue]x").text == "§lx"

    def test_reset(self):
        assert resolve_markup("[bold]a[reset]b").text == "§la§rb"

    def test_unknown_tag_left_as_text(self):
        assert resolve_markup("[info] hi") == Rewritten("[info] hi")

    def test_escaped_tag(self):
        assert resolve_markup("\\[bold] hi") == Rewritten("[bold] hi")

    def test_backslash_before_unknown_tag(self):
        assert resolve_markup("\\[info] hi") == Rewritten("\\[info] hi")

    def test_rgb_with_spaces(self):
        assert resolve_markup("[rgb(1, 2, 3)]x").text == "§x§0§1§0§2§0§3x"

    def test_unmatched_closing_tag(self):
        resolution = resolve_markup("[/bold] §aok")
        assert isinstance(resolution, Unresolved)
        assert resolution.text == "[/bold] §aok"
        assert resolution.needs_retry is True
        assert resolution.error

    def test_nothing_to_close(self):
        assert isinstance(resolve_markup("oops [/]"), Unresolved)


class TestParseTag:
    def test_words(self):
        assert parse_tag("bold gold") == LegacyStyle("§6", frozenset({"l"}))

    def test_aliases(self):
        assert parse_tag("b i u s obf") == LegacyStyle(
            None, frozenset({"l", "o", "n", "m", "k"})
        )

    def test_rgb(self):
        assert parse_tag("rgb(255,0,0)") == LegacyStyle("§x§f§f§0§0§0§0")

    def test_rgb_arguments_spaced(self):
        assert parse_tag("bold rgb( 1 , 2, 3 ) italic") == LegacyStyle(
            "§x§0§1§0§2§0§3", frozenset({"l", "o"})
        )

    def test_unknown(self):
        assert parse_tag("info") is None
        assert parse_tag("bold nonsense") is None
        assert parse_tag("") is None


class TestLegacyStyle:
    def test_add(self):
        style = LegacyStyle("§6", frozenset({"l"})) + LegacyStyle("§c")
        assert style == LegacyStyle("§c", frozenset({"l"}))

    def test_add_reset(self):
        style = LegacyStyle("§6", frozenset({"l"})) + LegacyStyle(reset=True)
        assert style.is_null


class TestHelpers:
    def test_hex_escape(self):
        assert hex_escape(Color(255, 0, 0)) == "§x§f§f§0§0§0§0"

    def test_nearest_legacy_color(self):
        assert nearest_legacy_color(Color(0, 0, 0)) == "0"
        assert nearest_legacy_color(Color(255, 255, 255)) == "f"
        assert nearest_legacy_color(Color(255, 136, 0)) == "6"
        assert nearest_legacy_color(Color(254, 0, 0)) == "4"

    def test_escape_unknown_tags(self):
        assert escape_unknown_tags("[info][bold]x[/bold]") == "\\[info][bold]x[/bold]"
        assert escape_unknown_tags("\\[info]") == "\\\\\\[info]"
        assert escape_unknown_tags("\\[bold]") == "\\[bold]"

    def test_serialize_unstyled(self):
        assert serialize(render("no tags here")) == "no tags here"
