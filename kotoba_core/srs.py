"""
Spaced repetition scheduling (SuperMemo SM-2) for kotoba-core.

Quality rating scale:
    0 - Complete blackout
    1 - Incorrect, but the answer felt familiar once shown
    2 - Incorrect, but the answer seemed easy once shown
    3 - Correct, recalled with serious difficulty
    4 - Correct, after some hesitation
    5 - Perfect, immediate recall

Ratings of 3 and above count as a successful review. The scheduler never
mutates its input: every call returns a new ReviewItem for the caller to
persist.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from kotoba_core.constants import (
    ACTION_QUALITIES, DEFAULT_EASE_FACTOR, EASE_PRECISION, FIRST_INTERVAL,
    MASTERY_REPETITIONS, MAX_QUALITY, MIN_EASE_FACTOR, MIN_QUALITY,
    PASSING_QUALITY, SECOND_INTERVAL,
)

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """Treat a naive datetime as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True, slots=True)
class ReviewItem:
    """
    Scheduling state of one learnable item.

    Attributes:
        ease_factor: Interval growth multiplier, never below 1.3
        interval_days: Days between the last review and the next one
        repetitions: Consecutive successful reviews
        next_review_date: When the item is due again
    """
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval_days: int = 0
    repetitions: int = 0
    next_review_date: datetime = field(default_factory=_utcnow)


def new_review_item(now: Optional[datetime] = None) -> ReviewItem:
    """Get the default state for a newly introduced item, due immediately."""
    return ReviewItem(next_review_date=_utcnow() if now is None else _as_utc(now))


def clamp_quality(quality: float) -> float:
    """Clamp a rating into the 0-5 scale."""
    clamped = min(MAX_QUALITY, max(MIN_QUALITY, quality))
    if clamped != quality:
        logger.debug("Quality %r out of range, clamped to %r", quality, clamped)
    return clamped


def compute_next_review(
    quality: float,
    ease_factor: float = DEFAULT_EASE_FACTOR,
    interval_days: int = 0,
    repetitions: int = 0,
    now: Optional[datetime] = None,
) -> ReviewItem:
    """
    Calculate the scheduling state after one review.

    Args:
        quality: Recall rating 0-5 (out-of-range values are clamped)
        ease_factor: Current ease factor
        interval_days: Current interval in days
        repetitions: Current count of consecutive successes
        now: Time of the review. Uses the current UTC time if not specified;
            a naive value is read as UTC.

    Returns:
        The updated ReviewItem

    Example:
        >>> item = compute_next_review(4, 2.5, 6, 1, now=datetime(2024, 1, 1))
        >>> item.interval_days, item.repetitions, item.ease_factor
        (15, 2, 2.5)
    """
    now = _utcnow() if now is None else _as_utc(now)

    quality = clamp_quality(quality)

    if quality >= PASSING_QUALITY:
        if repetitions == 0:
            new_interval = FIRST_INTERVAL
        elif repetitions == 1:
            # Never shorter than the standard second step
            new_interval = max(SECOND_INTERVAL, _round_half_up(interval_days * ease_factor))
        else:
            new_interval = _round_half_up(interval_days * ease_factor)

        new_repetitions = repetitions + 1

        lapse = MAX_QUALITY - quality
        new_ease = round(ease_factor + (0.1 - lapse * (0.08 + lapse * 0.02)), EASE_PRECISION)
    else:
        new_repetitions = 0
        new_interval = FIRST_INTERVAL
        new_ease = ease_factor

    new_ease = max(MIN_EASE_FACTOR, new_ease)
    new_interval = max(FIRST_INTERVAL, new_interval)

    return ReviewItem(
        ease_factor=new_ease,
        interval_days=new_interval,
        repetitions=new_repetitions,
        next_review_date=now + timedelta(days=new_interval),
    )


def review(item: ReviewItem, quality: float, now: Optional[datetime] = None) -> ReviewItem:
    """Apply one rating to an existing item."""
    return compute_next_review(
        quality,
        ease_factor=item.ease_factor,
        interval_days=item.interval_days,
        repetitions=item.repetitions,
        now=now,
    )


def is_due(next_review_date: datetime, now: Optional[datetime] = None) -> bool:
    """Check if an item is due for review. Due exactly at its review date.

    Naive datetimes are read as UTC.
    """
    now = _utcnow() if now is None else _as_utc(now)
    return _as_utc(next_review_date) <= now


def quality_from_action(action: str) -> int:
    """
    Map a review button to a quality rating.

    Raises:
        ValueError: If action is not one of again, hard, good, easy
    """
    try:
        return ACTION_QUALITIES[action]
    except KeyError:
        raise ValueError(f"unknown review action {action!r}; expected one of {', '.join(ACTION_QUALITIES)}") from None


def interval_text(interval_days: int) -> str:
    """Get a short human-readable interval."""
    if interval_days == 0:
        return 'New'
    if interval_days == 1:
        return '1 day'
    if interval_days < 30:
        return f'{interval_days} days'
    if interval_days < 365:
        return f'{round(interval_days / 30)} months'
    return f'{round(interval_days / 365)} years'


def mastery_percentage(repetitions: int) -> float:
    """Study progress, reaching 100 after ten consecutive successes."""
    return min(100.0, repetitions / MASTERY_REPETITIONS * 100)
