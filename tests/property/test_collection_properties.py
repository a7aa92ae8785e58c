import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from termform.exceptions import BoundsError
from termform.forms.collection import FieldCollection
from termform.forms.fields import StringField
from termform.terminal.geometry import FieldBounds, ScreenPoint
from termform.terminal.screen_buffer import ScreenBuffer
from termform.terminal.screen_io import ScreenIO

placements = st.lists(
    st.tuples(
        st.integers(0, 30),
        st.integers(0, 23),
        st.integers(1, 12),
        st.integers(1, 3),
        st.integers(0, 60),
        st.integers(0, 23),
    ),
    min_size=1,
    max_size=12,
)


def build(screen, placements):
    fields = FieldCollection()
    for index, (x, y, width, height, title_x, title_y) in enumerate(placements):
        try:
            field = StringField(
                screen,
                f"F{index}",
                "",
                ScreenPoint(title_x, title_y),
                FieldBounds.at(x + 40, y, width, height),
            )
        except BoundsError:
            continue
        fields.add(field)
    return fields


@pytest.mark.property
class TestFieldCollectionProperties:
    """Property-based tests for FieldCollection layout and tab order."""

    def setup_method(self):
        self.screen = ScreenIO(ScreenBuffer(rows=24, cols=80))

    @given(placements)
    @settings(max_examples=100, deadline=None)
    def test_no_two_fields_overlap(self, placements):
        """Property: whatever is added, accepted fields never share a cell."""
        fields = build(self.screen, placements)
        accepted = list(fields)
        for i, first in enumerate(accepted):
            for second in accepted[i + 1 :]:
                assert not first.overlaps(second)

    @given(placements)
    @settings(max_examples=100, deadline=None)
    def test_next_and_prev_are_inverse(self, placements):
        """Property: from inside any field, prev(next(f)) is f and vice versa."""
        fields = build(self.screen, placements)
        for field in fields:
            following = fields.next_field(field.bounds.location)
            assert fields.prev_field(following.bounds.location) is field
            preceding = fields.prev_field(field.bounds.location)
            assert fields.next_field(preceding.bounds.location) is field

    @given(placements, st.integers(0, 79), st.integers(0, 23))
    @settings(max_examples=100, deadline=None)
    def test_tab_always_finds_a_field(self, placements, x, y):
        """Property: a non-empty collection always has a next and previous field."""
        fields = build(self.screen, placements)
        if not len(fields):
            return
        assert fields.next_field(ScreenPoint(x, y)) in fields
        assert fields.prev_field(ScreenPoint(x, y)) in fields

    @given(st.text(alphabet="abc xyz", max_size=30), st.text(alphabet="qr", max_size=9))
    @settings(max_examples=100, deadline=None)
    def test_revert_is_idempotent(self, initial, typed):
        """Property: revert restores the initial text, and again is a no-op."""
        field = StringField(
            self.screen, "Name", initial, ScreenPoint(0, 2), FieldBounds.at(8, 2, 10, 3)
        )
        start = field.text
        field.focus()
        field.manager.insert(typed)
        field.revert()
        assert field.text == start
        field.revert()
        assert field.text == start
