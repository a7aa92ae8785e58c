import threading
from unittest.mock import MagicMock

import pytest

from termform.exceptions import ScreenIOError
from termform.terminal.colors import DATA_COLOR, DEFAULT_COLOR
from termform.terminal.driver import CursorShape, LockStates
from termform.terminal.geometry import FieldBounds, ScreenPoint
from termform.terminal.keys import Key, KeyStroke
from termform.terminal.screen_buffer import ScreenBuffer
from termform.terminal.screen_io import ScreenIO


class TestScreenBuffer:
    def test_rejects_bad_dimensions(self):
        with pytest.raises(ValueError):
            ScreenBuffer(0, 80)
        with pytest.raises(ValueError):
            ScreenBuffer(24, -1)

    def test_put_str_clips_at_right_edge(self, screen_buffer):
        screen_buffer.set_cursor(77, 0)
        assert screen_buffer.put_str("abcdef", DEFAULT_COLOR) == 80
        assert screen_buffer.row_text(0, 77) == "abc"

    def test_read_cell_outside_raises(self, screen_buffer):
        with pytest.raises(ScreenIOError):
            screen_buffer.read_cell(80, 0)

    def test_scripted_keys(self, screen_buffer):
        screen_buffer.feed_keys([KeyStroke.of_char("a"), KeyStroke(Key.ENTER)])
        assert screen_buffer.key_available()
        assert screen_buffer.read_key().char == "a"
        assert screen_buffer.read_key().key is Key.ENTER
        with pytest.raises(ScreenIOError):
            screen_buffer.read_key()

    def test_resize_keeps_content(self, screen_buffer):
        screen_buffer.set_cursor(0, 0)
        screen_buffer.put_str("hello", DEFAULT_COLOR)
        screen_buffer.resize(10, 3)
        assert screen_buffer.size() == (3, 10)
        assert screen_buffer.row_text(0) == "hel"


class TestScreenIO:
    def test_dimensions(self, screen):
        assert screen.width == 80
        assert screen.height == 24

    def test_set_cursor_clamps(self, screen):
        assert screen.set_cursor(ScreenPoint(200, -5)) == ScreenPoint(79, 0)
        assert screen.get_cursor() == ScreenPoint(79, 0)

    def test_write_and_read_back(self, screen):
        screen.write_at(ScreenPoint(5, 3), "Name:", DATA_COLOR)
        assert screen.read_char(ScreenPoint(5, 3)) == "N"
        assert screen.read_line(ScreenPoint(5, 3), 5) == "Name:"
        assert screen.driver.color_at(5, 3) == DATA_COLOR

    def test_read_line_stops_at_right_edge(self, screen):
        screen.write_at(ScreenPoint(76, 0), "WXYZ")
        assert screen.read_line(ScreenPoint(76, 0), 20) == "WXYZ"

    def test_read_block(self, screen):
        screen.write_at(ScreenPoint(0, 0), "ab")
        screen.write_at(ScreenPoint(0, 1), "cd")
        assert screen.read_block(FieldBounds.at(0, 0, 2, 2)) == ["ab", "cd"]

    def test_fill_rect_restores_cursor(self, screen):
        screen.set_cursor(ScreenPoint(1, 1))
        screen.fill_rect(FieldBounds.at(10, 10, 3, 2), "_", DATA_COLOR)
        assert screen.get_cursor() == ScreenPoint(1, 1)
        assert screen.read_block(FieldBounds.at(10, 10, 3, 2)) == ["___", "___"]

    def test_fill_rect_skips_off_screen_cells(self, screen):
        screen.fill_rect(FieldBounds.at(78, 23, 5, 3), "#")
        assert screen.read_line(ScreenPoint(78, 23), 2) == "##"

    def test_fill_rect_requires_single_char(self, screen):
        with pytest.raises(ValueError):
            screen.fill_rect(FieldBounds.at(0, 0, 1), "ab")

    def test_insert_mode_follows_cursor_shape(self, screen, screen_buffer):
        assert screen.insert_mode
        assert screen.toggle_insert_mode() is False
        assert screen_buffer.cursor_shape is CursorShape.BLOCK
        assert screen.toggle_insert_mode() is True
        assert screen_buffer.cursor_shape is CursorShape.UNDERLINE

    def test_lock_states_and_beep(self, screen, screen_buffer):
        screen_buffer.locks = LockStates(caps_lock=True)
        assert screen.lock_states().caps_lock
        screen.beep()
        assert screen_buffer.beeps == 1

    def test_custom_renderer(self, screen_buffer):
        calls = []

        def upper(text, color):
            calls.append(text)
            return screen_buffer.put_str(text.upper(), color)

        io = ScreenIO(screen_buffer, renderer=upper)
        io.write_at(ScreenPoint(0, 0), "abc")
        assert calls == ["abc"]
        assert screen_buffer.row_text(0, 0, 3) == "ABC"

    def test_driver_failures_become_screen_errors(self):
        driver = MagicMock()
        driver.size.return_value = (80, 24)
        driver.set_cursor.side_effect = OSError("terminal gone")
        io = ScreenIO(driver)
        with pytest.raises(ScreenIOError) as excinfo:
            io.set_cursor(ScreenPoint(1, 1))
        assert isinstance(excinfo.value.original_exception, OSError)
        assert excinfo.value.get_context("operation") == "set_cursor"

    def test_polled_read_for_non_concurrent_driver(self, screen_buffer):
        screen_buffer.concurrent_read = False
        io = ScreenIO(screen_buffer)
        result = []

        reader = threading.Thread(target=lambda: result.append(io.read_key()))
        reader.start()
        screen_buffer.feed_keys([KeyStroke.of_char("z")])
        reader.join(timeout=5)
        assert not reader.is_alive()
        assert result[0].char == "z"

    def test_exclusive_is_reentrant(self, screen):
        with screen.exclusive():
            with screen.exclusive():
                screen.write_at(ScreenPoint(0, 0), "x")
        assert screen.read_char(ScreenPoint(0, 0)) == "x"
