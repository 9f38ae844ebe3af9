"""
Answer grading - pure business logic.
No hardware dependencies.
"""
from dataclasses import dataclass
from typing import Tuple

from .constants import Music
from .pitch_class import pc_to_canonical, pcs_to_notes


@dataclass(frozen=True)
class GradingVerdict:
    """Result of grading one answer."""

    is_correct: bool
    extra: Tuple[int, ...]
    missing: Tuple[int, ...]
    user_notes: Tuple[str, ...]

    @property
    def extra_notes(self):
        return [pc_to_canonical(pc) for pc in self.extra]

    @property
    def missing_notes(self):
        return [pc_to_canonical(pc) for pc in self.missing]


def grade(target, input_pcs, omitted_pcs, user_notes=None):
    """
    Grade a set of pitch classes against a target chord.

    Extra notes are never forgiven. A missing note is forgiven only when
    the chord declares it omittable or the user marked it as omitted.

    Args:
        target: ChordDef to grade against
        input_pcs: Pitch classes the user entered
        omitted_pcs: Pitch classes the user marked as omitted
        user_notes: Display strings for the input; derived from input_pcs if None

    Returns:
        GradingVerdict
    """
    user_set = {pc % Music.NOTES_PER_OCTAVE for pc in input_pcs}
    required = set(target.notes_neutral_pc)
    allowed_missing = set(target.omit_neutral_pc)
    allowed_missing.update(pc % Music.NOTES_PER_OCTAVE for pc in omitted_pcs)

    extra = sorted(user_set - required)
    missing = sorted(required - user_set)
    is_correct = not extra and set(missing) <= allowed_missing

    if user_notes is None:
        user_notes = pcs_to_notes(user_set)

    return GradingVerdict(
        is_correct=is_correct,
        extra=tuple(extra),
        missing=tuple(missing),
        user_notes=tuple(user_notes),
    )
