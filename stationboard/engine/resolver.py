"""Turn a slot into display text, looking one set back through the bracket."""

from ..models.match import EntrantSlot, MatchSlot, PrereqSlot, ResolvedSlotInfo
from .set_index import SetIndex

PLACEHOLDER = "TBD"


def placement_word(placement: int | None) -> str:
    return "Winner" if placement == 1 else "Loser"


def short_set_id(prereq_id: str) -> str:
    """Last ``_`` segment of an id, so preview ids like ``preview_123_4`` stay short"""
    return prereq_id.split("_")[-1] or prereq_id


def resolve_slot(slot: MatchSlot, index: SetIndex) -> ResolvedSlotInfo:
    """Resolve one slot against the current cycle's set index.

    - entrant present: the entrant name, known
    - prerequisite in the index with both sides named: "Winner of A vs B",
      deep-known but not known
    - prerequisite we cannot name: a short "W. of Set N" label
    - nothing at all: TBD

    Only the prerequisite itself is inspected, never its own prerequisites.
    """
    if isinstance(slot, EntrantSlot):
        return ResolvedSlotInfo(text=slot.name, is_known=True, is_deep_known=True)

    if isinstance(slot, PrereqSlot):
        prereq = index.get(slot.prereq_id)
        if prereq is not None:
            name_a = prereq.slot_name(0)
            name_b = prereq.slot_name(1)
            if name_a and name_b:
                return ResolvedSlotInfo(
                    text=f"{placement_word(slot.placement)} of {name_a} vs {name_b}",
                    is_known=False,
                    is_deep_known=True,
                )

        initial = placement_word(slot.placement)[0]
        return ResolvedSlotInfo(
            text=f"{initial}. of Set {short_set_id(slot.prereq_id)}",
            is_known=False,
            is_deep_known=False,
        )

    return ResolvedSlotInfo(text=PLACEHOLDER, is_known=False, is_deep_known=False)
