import pytest

from termform.terminal.colors import DATA_COLOR, CellColor, ConsoleColor
from termform.terminal.keys import FUNCTION_KEYS, Key, KeyStroke, Modifier


class TestCellColor:
    def test_defaults(self):
        color = CellColor()
        assert color.fore is ConsoleColor.GRAY
        assert color.back is ConsoleColor.BLACK

    def test_inverse(self):
        assert DATA_COLOR.inverse == CellColor(
            ConsoleColor.DARK_BLUE, ConsoleColor.WHITE
        )

    def test_alt_replaces_one_side(self):
        color = DATA_COLOR.alt(back=ConsoleColor.DARK_RED)
        assert color.fore is ConsoleColor.WHITE
        assert color.back is ConsoleColor.DARK_RED

    def test_hex_codes(self):
        assert DATA_COLOR.to_hex() == "1F"
        assert CellColor.from_hex("1F") == DATA_COLOR
        assert CellColor.from_hex("07") == CellColor()

    @pytest.mark.parametrize("code", ["", "1", "1FF", "GZ"])
    def test_bad_hex_codes(self, code):
        with pytest.raises(ValueError):
            CellColor.from_hex(code)

    def test_is_bright(self):
        assert ConsoleColor.YELLOW.is_bright
        assert not ConsoleColor.DARK_YELLOW.is_bright


class TestKeys:
    def test_function_numbers(self):
        assert Key.F1.function_number == 1
        assert Key.F12.function_number == 12
        assert Key.ENTER.function_number is None
        assert len(FUNCTION_KEYS) == 12
        assert Key.function(7) is Key.F7

    def test_function_lookup_range(self):
        with pytest.raises(ValueError):
            Key.function(13)

    def test_modifiers(self):
        stroke = KeyStroke(Key.LEFT, modifiers=Modifier.CTRL | Modifier.SHIFT)
        assert stroke.ctrl and stroke.shift and not stroke.alt

    def test_printable(self):
        assert KeyStroke.of_char("a").is_printable
        assert KeyStroke.of_char("a", Modifier.SHIFT).is_printable
        assert not KeyStroke.of_char("n", Modifier.CTRL).is_printable
        assert not KeyStroke(Key.ENTER).is_printable
        assert not KeyStroke.of_char("\x07").is_printable

    def test_is_char_ignores_case(self):
        assert KeyStroke.of_char("y").is_char("YN")
        assert not KeyStroke.of_char("x").is_char("YN")
        assert not KeyStroke(Key.ENTER).is_char("YN")

    def test_str(self):
        assert str(KeyStroke(Key.F5, modifiers=Modifier.CTRL)) == "Ctrl+F5"
        assert str(KeyStroke.of_char("a")) == "'a'"
