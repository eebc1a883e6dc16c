"""
Pronunciation scoring for kotoba-core.

Compares what the learner said (or typed) against a target sentence and
produces four 0-100 criteria, an overall score, qualitative feedback and
a per-character diff for display.

The diff is a positional walk: both strings are read in lockstep and every
mismatch is treated as a substitution. An inserted or dropped character
therefore shifts everything after it; this is an approximate heuristic,
not an aligner.
"""

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from kotoba_core.constants import (
    ACCURACY_SUCCESS_THRESHOLD, ACCURACY_WARNING_THRESHOLD,
    DURATION_WARNING_THRESHOLD, FLUENCY_SUCCESS_THRESHOLD,
    FLUENCY_WEIGHTS, OVERALL_WEIGHTS,
    RHYTHM_MIN, RHYTHM_SPAN, STRIPPED_PUNCTUATION,
)


# =============================================================================
# Result Types
# =============================================================================

class UnitStatus(Enum):
    CORRECT = 'correct'
    INCORRECT = 'incorrect'
    MISSING = 'missing'
    EXTRA = 'extra'


class FeedbackType(Enum):
    SUCCESS = 'success'
    WARNING = 'warning'
    ERROR = 'error'


class FeedbackCategory(Enum):
    ACCURACY = 'accuracy'
    DURATION = 'duration'
    RHYTHM = 'rhythm'
    FLUENCY = 'fluency'


@dataclass(frozen=True, slots=True)
class AlignmentUnit:
    """
    One position of the diff.

    Attributes:
        unit: Character shown (from the transcript, or from the target
            when it is missing)
        status: How this position compares
        expected: Target character for INCORRECT units
    """
    unit: str
    status: UnitStatus
    expected: Optional[str] = None


@dataclass(frozen=True, slots=True)
class FeedbackItem:
    type: FeedbackType
    category: FeedbackCategory
    message: str
    suggestion: Optional[str] = None


@dataclass(slots=True)
class PronunciationScore:
    """
    Result of one scoring call. All criteria are integers in 0-100.

    Attributes:
        accuracy: Share of matching positions
        duration: Length match between transcript and target
        rhythm: Placeholder criterion (random in 70-100 unless fixed)
        fluency: Blend of accuracy and duration
        overall: Weighted blend of the four criteria
        feedback: Qualitative messages, 1 to 3 items (the accuracy message
            is always present)
        highlighted: Per-character diff
    """
    accuracy: int
    duration: int
    rhythm: int
    fluency: int
    overall: int
    feedback: List[FeedbackItem] = field(default_factory=list)
    highlighted: List[AlignmentUnit] = field(default_factory=list)


# =============================================================================
# Normalization & Alignment
# =============================================================================

_STRIP_TABLE = str.maketrans('', '', STRIPPED_PUNCTUATION)


def normalize_text(text: str) -> str:
    """Trim, lowercase, drop whitespace and sentence punctuation."""
    text = ''.join(text.strip().lower().split())
    return text.translate(_STRIP_TABLE)


def align(target: str, transcript: str) -> List[AlignmentUnit]:
    """
    Walk target and transcript in lockstep.

    Both arguments are expected to be normalized already.

    Example:
        >>> [u.status.value for u in align("ab", "abcd")]
        ['correct', 'correct', 'extra', 'extra']
    """
    units = []
    i = j = 0

    while i < len(target) and j < len(transcript):
        if target[i] == transcript[j]:
            units.append(AlignmentUnit(transcript[j], UnitStatus.CORRECT))
        else:
            units.append(AlignmentUnit(transcript[j], UnitStatus.INCORRECT, expected=target[i]))
        i += 1
        j += 1

    for ch in transcript[j:]:
        units.append(AlignmentUnit(ch, UnitStatus.EXTRA))
    for ch in target[i:]:
        units.append(AlignmentUnit(ch, UnitStatus.MISSING))

    return units


# =============================================================================
# Scoring
# =============================================================================

def round_half_up(value: float) -> int:
    """Round .5 away from zero for the non-negative values used here."""
    return int(math.floor(value + 0.5))


def _build_feedback(accuracy: int, duration: int, fluency: int, length_ratio: float) -> List[FeedbackItem]:
    feedback = []

    if accuracy >= ACCURACY_SUCCESS_THRESHOLD:
        feedback.append(FeedbackItem(
            FeedbackType.SUCCESS, FeedbackCategory.ACCURACY,
            "Very accurate pronunciation!",
        ))
    elif accuracy >= ACCURACY_WARNING_THRESHOLD:
        feedback.append(FeedbackItem(
            FeedbackType.WARNING, FeedbackCategory.ACCURACY,
            "Some words were not quite right",
            suggestion="Listen to the model again and practice each word on its own",
        ))
    else:
        feedback.append(FeedbackItem(
            FeedbackType.ERROR, FeedbackCategory.ACCURACY,
            "Accuracy needs work",
            suggestion="Try speaking more slowly and say each word clearly",
        ))

    if duration < DURATION_WARNING_THRESHOLD:
        feedback.append(FeedbackItem(
            FeedbackType.WARNING, FeedbackCategory.DURATION,
            "Your answer was too short" if length_ratio < 1 else "Your answer was too long",
            suggestion="Pay attention to long sounds such as ー and っ",
        ))

    if fluency >= FLUENCY_SUCCESS_THRESHOLD:
        feedback.append(FeedbackItem(
            FeedbackType.SUCCESS, FeedbackCategory.FLUENCY,
            "Smooth and natural delivery!",
        ))

    return feedback


def score(
    target: str,
    transcript: str,
    *,
    rng: Optional[random.Random] = None,
    rhythm: Optional[int] = None,
) -> PronunciationScore:
    """
    Score a transcript against its target sentence.

    Args:
        target: Reference text
        transcript: What the learner said or typed
        rng: Random source for the rhythm placeholder. Uses the module-level
            generator if not specified.
        rhythm: Fixed rhythm value; takes precedence over rng

    Returns:
        PronunciationScore. If either normalized string is empty the
        accuracy is 0 and the diff is empty.

    Example:
        >>> result = score("abc", "abd", rhythm=80)
        >>> result.accuracy, result.duration
        (67, 100)
    """
    norm_target = normalize_text(target)
    norm_transcript = normalize_text(transcript)

    matches = sum(1 for a, b in zip(norm_target, norm_transcript) if a == b)
    max_len = max(len(norm_target), len(norm_transcript))
    accuracy = round_half_up(matches / max_len * 100) if max_len > 0 else 0

    length_ratio = len(norm_transcript) / (len(norm_target) or 1)
    duration = round_half_up(max(0.0, 100 - abs(1 - length_ratio) * 100))

    if rhythm is None:
        rhythm = round_half_up(RHYTHM_MIN + (rng or random).random() * RHYTHM_SPAN)

    acc_weight, dur_weight = FLUENCY_WEIGHTS
    fluency = round_half_up(accuracy * acc_weight + duration * dur_weight)

    w_acc, w_dur, w_rhy, w_flu = OVERALL_WEIGHTS
    overall = round_half_up(
        accuracy * w_acc + duration * w_dur + rhythm * w_rhy + fluency * w_flu
    )

    if norm_target and norm_transcript:
        highlighted = align(norm_target, norm_transcript)
    else:
        highlighted = []

    return PronunciationScore(
        accuracy=accuracy,
        duration=duration,
        rhythm=rhythm,
        fluency=fluency,
        overall=overall,
        feedback=_build_feedback(accuracy, duration, fluency, length_ratio),
        highlighted=highlighted,
    )
