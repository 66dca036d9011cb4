"""Tests for escape matching."""

from mcansi.patterns import (
    EscapeMatch,
    contains_legacy_codes,
    find_escapes,
    strip_legacy_codes,
)


class TestFindEscapes:
    def test_legacy(self):
        assert list(find_escapes("§6Gold §lBold", "legacy")) == [
            EscapeMatch("§6", 0),
            EscapeMatch("§l", 7),
        ]

    def test_repeated_escapes_reported_separately(self):
        matches = list(find_escapes("§6a§6b", "legacy"))
        assert matches == [EscapeMatch("§6", 0), EscapeMatch("§6", 3)]

    def test_case_insensitive(self):
        matches = [match.text for match in find_escapes("§L§X§r", "legacy")]
        assert matches == ["§L", "§X", "§r"]

    def test_unrecognized_discriminator(self):
        assert list(find_escapes("§p§q§z", "legacy")) == []

    def test_hex(self):
        matches = list(find_escapes("a§x§f§f§0§0§0§0b", "hex"))
        assert matches == [EscapeMatch("§x§f§f§0§0§0§0", 1)]
        assert matches[0].end == 15

    def test_hex_without_interleaved_sections(self):
        matches = list(find_escapes("§xFF0000FF0000", "hex"))
        assert [match.text for match in matches] == ["§xFF0000FF0000"]

    def test_hex_too_short(self):
        assert list(find_escapes("§x§f§f§0", "hex")) == []

    def test_restartable(self):
        text = "§a1 §b2 §c3"
        assert list(find_escapes(text, "legacy")) == list(find_escapes(text, "legacy"))

    def test_lazy(self):
        matches = find_escapes("§a§b", "legacy")
        assert next(matches) == EscapeMatch("§a", 0)
        assert next(matches) == EscapeMatch("§b", 2)


class TestContainsLegacyCodes:
    def test_plain(self):
        assert contains_legacy_codes("plain text") is False

    def test_codes(self):
        assert contains_legacy_codes("§rreset") is True
        assert contains_legacy_codes("§Xhex") is True

    def test_section_alone(self):
        assert contains_legacy_codes("§ 10") is False


class TestStripLegacyCodes:
    def test_strip(self):
        assert strip_legacy_codes("§x§f§f§0§0§0§0red §lbold") == "red bold"

    def test_plain(self):
        assert strip_legacy_codes("plain") == "plain"
