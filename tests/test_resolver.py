"""Unit tests for the set index and slot resolution"""

import pytest

from stationboard.engine import build_set_index, resolve_slot
from stationboard.engine.resolver import short_set_id
from stationboard.models import (
    EmptySlot,
    EntrantSlot,
    MatchSnapshot,
    MatchState,
    PrereqSlot,
    make_slot,
)


def make_set(
    id: str,
    slots=None,
    state: int = MatchState.COMPLETED,
    **kwargs,
) -> MatchSnapshot:
    """Helper to build a snapshot with sensible defaults"""
    if slots is None:
        slots = (EntrantSlot(name="Alice"), EntrantSlot(name="Bob"))
    return MatchSnapshot(id=id, slots=tuple(slots), state=state, **kwargs)


@pytest.mark.unit
class TestSetIndex:
    """Test building the per-cycle lookup table"""

    def test_empty_inputs_give_empty_index(self):
        assert len(build_set_index([], [])) == 0

    def test_contains_both_fetches(self):
        index = build_set_index([make_set("1")], [make_set("2", state=MatchState.OPEN)])

        assert set(index) == {"1", "2"}

    def test_active_snapshot_wins_on_duplicate_id(self):
        completed = make_set("7", state=MatchState.COMPLETED)
        active = make_set(
            "7",
            slots=(EntrantSlot(name="Zed"), EmptySlot()),
            state=MatchState.PLAYING,
        )

        index = build_set_index([completed], [active])

        assert index["7"] is active
        assert index["7"].state == MatchState.PLAYING

    def test_later_duplicate_in_same_fetch_wins(self):
        first = make_set("3", state=MatchState.OPEN)
        second = make_set("3", state=MatchState.CALLED)

        index = build_set_index([], [first, second])

        assert index["3"] is second

    def test_index_is_read_only(self):
        index = build_set_index([make_set("1")], [])

        with pytest.raises(TypeError):
            index["2"] = make_set("2")  # type: ignore[index]

    def test_rebuilt_index_does_not_remember_previous_cycle(self):
        first = build_set_index([make_set("1")], [])
        second = build_set_index([make_set("2")], [])

        assert "1" in first
        assert "1" not in second


@pytest.mark.unit
class TestMakeSlot:
    """Test mapping raw slot fields onto the slot variants"""

    def test_entrant_takes_priority(self):
        assert make_slot("Alice", "99", 1) == EntrantSlot(name="Alice")

    def test_prereq_ids_are_strings(self):
        assert make_slot(None, 4512, 2) == PrereqSlot(prereq_id="4512", placement=2)

    def test_nothing_is_empty(self):
        assert make_slot() == EmptySlot()
        assert make_slot("", "", None) == EmptySlot()


@pytest.mark.unit
class TestResolveSlot:
    """Test the one-hop slot resolver"""

    @pytest.mark.parametrize("name", ["Alice", "Team Liquid | Hungrybox", "[A] B"])
    def test_entrant_is_known_and_deep_known(self, name):
        info = resolve_slot(EntrantSlot(name=name), build_set_index([], []))

        assert info.text == name
        assert info.is_known is True
        assert info.is_deep_known is True

    @pytest.mark.parametrize(
        "placement, word, other",
        [(1, "Winner of", "Loser of"), (2, "Loser of", "Winner of")],
    )
    def test_named_prerequisite_gives_matchup_label(self, placement, word, other):
        index = build_set_index([make_set("10")], [])

        info = resolve_slot(PrereqSlot(prereq_id="10", placement=placement), index)

        assert info.text == f"{word} Alice vs Bob"
        assert other not in info.text
        assert info.is_known is False
        assert info.is_deep_known is True

    def test_missing_prerequisite_falls_back(self):
        info = resolve_slot(
            PrereqSlot(prereq_id="99", placement=1), build_set_index([], [])
        )

        assert info.text == "W. of Set 99"
        assert info.is_known is False
        assert info.is_deep_known is False

    def test_loser_fallback_uses_l_prefix(self):
        info = resolve_slot(
            PrereqSlot(prereq_id="99", placement=2), build_set_index([], [])
        )

        assert info.text == "L. of Set 99"

    def test_fallback_shortens_preview_ids(self):
        info = resolve_slot(
            PrereqSlot(prereq_id="preview_5512_3", placement=1),
            build_set_index([], []),
        )

        assert info.text == "W. of Set 3"
        assert info.is_deep_known is False

    def test_half_named_prerequisite_is_not_deep_known(self):
        prereq = make_set(
            "11",
            slots=(EntrantSlot(name="Alice"), PrereqSlot(prereq_id="5", placement=1)),
            state=MatchState.PENDING,
        )
        index = build_set_index([], [prereq])

        info = resolve_slot(PrereqSlot(prereq_id="11", placement=1), index)

        assert info.text == "W. of Set 11"
        assert info.is_deep_known is False

    def test_does_not_walk_past_one_hop(self):
        # 12 waits on 11, which waits on 10; 10 is fully named but two hops away
        grandparent = make_set("10")
        parent = make_set(
            "11",
            slots=(PrereqSlot(prereq_id="10", placement=1), EntrantSlot(name="Carol")),
            state=MatchState.PENDING,
        )
        index = build_set_index([grandparent], [parent])

        info = resolve_slot(PrereqSlot(prereq_id="11", placement=1), index)

        assert "Alice" not in info.text
        assert info.is_deep_known is False

    def test_empty_slot_is_tbd(self):
        info = resolve_slot(EmptySlot(), build_set_index([make_set("1")], []))

        assert info.text == "TBD"
        assert info.is_known is False
        assert info.is_deep_known is False

    def test_short_set_id(self):
        assert short_set_id("12345") == "12345"
        assert short_set_id("preview_1_2") == "2"
        assert short_set_id("trailing_") == "trailing_"
