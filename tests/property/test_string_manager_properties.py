import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from termform.forms.string_manager import CRLF, StringManager

text = st.text(alphabet="ab \r\n\t", max_size=40)
sizes = st.tuples(st.integers(1, 8), st.integers(1, 5))


def offsets_outside_crlf(manager):
    content = manager.content
    return [
        i
        for i in range(len(content) + 1)
        if not (0 < i < len(content) and content[i - 1 : i + 1] == CRLF)
    ]


@pytest.mark.property
class TestStringManagerProperties:
    """Property-based tests for StringManager layout and editing invariants."""

    @given(text, sizes)
    @settings(max_examples=200, deadline=None)
    def test_offset_point_bijection(self, content, size):
        """Property: point_to_offset(offset_to_point(o)) == o off the CRLF pairs."""
        manager = StringManager(content, *size)
        for offset in offsets_outside_crlf(manager):
            point = manager.offset_to_point(offset)
            assert 0 <= point.x <= manager.width
            assert 0 <= point.y < manager.height
            assert manager.point_to_offset(point) == offset

    @given(text, sizes)
    @settings(max_examples=100, deadline=None)
    def test_content_always_fits(self, content, size):
        """Property: normalised content never needs more rows than the field has."""
        manager = StringManager(content, *size)
        assert len(manager.rows()) <= manager.height
        if not manager.multi_line:
            assert "\r" not in manager.content and "\n" not in manager.content
            assert len(manager.content) <= manager.width
        assert "\t" not in manager.content

    @given(text, sizes, st.text(alphabet="xy\n", max_size=6), st.booleans(), st.data())
    @settings(max_examples=200, deadline=None)
    def test_insert_keeps_invariants(self, content, size, typed, insert_mode, data):
        """Property: after typing, offset is in range and never inside a CRLF."""
        manager = StringManager(content, *size)
        manager.offset = data.draw(st.integers(0, len(manager.content)))
        manager.insert(typed, insert_mode)
        assert 0 <= manager.offset <= len(manager.content)
        assert manager.offset in offsets_outside_crlf(manager)
        assert len(manager.rows()) <= manager.height

    @given(st.text(alphabet="abc", min_size=1, max_size=20), st.data())
    @settings(max_examples=100, deadline=None)
    def test_insert_then_backspace_restores(self, content, data):
        """Property: inserting one character and deleting it leaves content intact."""
        manager = StringManager(content, width=40)
        offset = data.draw(st.integers(0, len(manager.content)))
        manager.offset = offset
        assume(manager.insert("z"))
        manager.delete_left()
        assert manager.content == content
        assert manager.offset == offset

    @given(text, sizes, st.integers(-5, 5))
    @settings(max_examples=100, deadline=None)
    def test_step_stays_in_range(self, content, size, delta):
        manager = StringManager(content, *size)
        manager.step(delta)
        assert manager.offset in offsets_outside_crlf(manager)
