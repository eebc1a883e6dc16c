"""
CLI interface for kotoba-core.

Usage:
    kotoba-core kana "konnichiha"
    kotoba-core kana --katakana "ko-hi-"
    kotoba-core suggest "かみ"
    kotoba-core score "こんにちは" "こんにちわ" --rhythm 80
    kotoba-core review --quality 4 --ease 2.5 --interval 6 --repetitions 1
    kotoba-core dictation "わたしわ" "わたしは"
"""

import argparse
import json
import logging
import random
import sys
from dataclasses import asdict
from enum import Enum
from typing import List, Optional

from kotoba_core import __version__
from kotoba_core.dictation import DiffResult, calculate_score, compare_strings, is_similar
from kotoba_core.lexicon import LexiconEntry, load_lexicon
from kotoba_core.scoring import PronunciationScore, UnitStatus, score
from kotoba_core.srs import ReviewItem, compute_next_review, interval_text
from kotoba_core.suggest import suggest
from kotoba_core.transliteration import KanaMode, romaji_to_kana

logger = logging.getLogger(__name__)


# ============================================================================
# Display Marks
# ============================================================================

STATUS_MARKS = {
    UnitStatus.CORRECT: '✓',
    UnitStatus.INCORRECT: '✗',
    UnitStatus.MISSING: '?',
    UnitStatus.EXTRA: '+',
}


def _plain(value):
    """JSON-friendly copy of a result (enums by value, dates as ISO)."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if hasattr(value, 'isoformat'):
        return value.isoformat()
    return value


def _dump(data) -> str:
    return json.dumps(_plain(data), ensure_ascii=False, indent=2)


# ============================================================================
# Output Formatting
# ============================================================================

def format_suggestions(entries: List[LexiconEntry]) -> str:
    if not entries:
        return "(no suggestions)"
    return "\n".join(f"{e.surface}【{e.reading}】 {e.gloss}" for e in entries)


def format_score(result: PronunciationScore) -> str:
    """
    Score breakdown with the diff underneath.

    Compact vertical format: one line per criterion, then the diff, then
    feedback messages.
    """
    lines = [
        f"Overall   {result.overall:>3}/100",
        "─" * 40,
        f"Accuracy  {result.accuracy:>3}",
        f"Duration  {result.duration:>3}",
        f"Rhythm    {result.rhythm:>3}",
        f"Fluency   {result.fluency:>3}",
    ]

    if result.highlighted:
        lines.append("─" * 40)
        lines.append(" ".join(u.unit for u in result.highlighted))
        lines.append(" ".join(STATUS_MARKS[u.status] for u in result.highlighted))

    for item in result.feedback:
        lines.append(f"[{item.type.value}] {item.message}")
        if item.suggestion:
            lines.append(f"  └─ {item.suggestion}")

    return "\n".join(lines)


def format_review(item: ReviewItem) -> str:
    return "\n".join([
        f"Next review:  {item.next_review_date:%Y-%m-%d %H:%M} ({interval_text(item.interval_days)})",
        f"Ease factor:  {item.ease_factor:.2f}",
        f"Repetitions:  {item.repetitions}",
    ])


def format_dictation(diff: List[DiffResult], percent: int, similar: bool) -> str:
    marks = "".join('✓' if d.correct else '✗' for d in diff)
    return "\n".join([
        "".join(d.char for d in diff),
        marks,
        f"Score: {percent}%{' (close enough)' if similar else ''}",
    ])


# ============================================================================
# Commands
# ============================================================================

def _read_text(value: Optional[str]) -> str:
    if value is None:
        return sys.stdin.read().strip()
    return value


def cmd_kana(args) -> str:
    mode = KanaMode.KATAKANA if args.katakana else KanaMode.HIRAGANA
    text = _read_text(args.text)
    kana = romaji_to_kana(text, mode)
    if args.json:
        return _dump({"input": text, "mode": mode, "kana": kana})
    return kana


def cmd_suggest(args) -> str:
    load_lexicon()
    entries = suggest(_read_text(args.fragment))
    if args.json:
        return _dump([asdict(e) for e in entries])
    return format_suggestions(entries)


def cmd_score(args) -> str:
    rng = random.Random(args.seed) if args.seed is not None else None
    result = score(args.target, args.transcript, rng=rng, rhythm=args.rhythm)
    if args.json:
        return _dump(asdict(result))
    return format_score(result)


def cmd_review(args) -> str:
    item = compute_next_review(
        args.quality,
        ease_factor=args.ease,
        interval_days=args.interval,
        repetitions=args.repetitions,
    )
    if args.json:
        return _dump(asdict(item))
    return format_review(item)


def cmd_dictation(args) -> str:
    diff = compare_strings(args.user_input, args.answer)
    percent = calculate_score(args.user_input, args.answer)
    similar = is_similar(args.user_input, args.answer)
    if args.json:
        return _dump({
            "diff": [asdict(d) for d in diff],
            "score": percent,
            "similar": similar,
        })
    return format_dictation(diff, percent, similar)


# ============================================================================
# Main
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kotoba-core",
        description="Kana input, kanji suggestions, scoring and review scheduling",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"kotoba-core {__version__}",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    kana = sub.add_parser("kana", help="Convert romaji to kana")
    kana.add_argument("text", nargs="?", help="Romaji text (reads stdin if omitted)")
    kana.add_argument("--katakana", "-k", action="store_true", help="Convert to katakana")
    kana.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    kana.set_defaults(func=cmd_kana)

    sug = sub.add_parser("suggest", help="Suggest kanji for a kana fragment")
    sug.add_argument("fragment", nargs="?", help="Kana fragment (reads stdin if omitted)")
    sug.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    sug.set_defaults(func=cmd_suggest)

    sc = sub.add_parser("score", help="Score a transcript against a target sentence")
    sc.add_argument("target", help="Reference text")
    sc.add_argument("transcript", help="Learner's text")
    rhythm = sc.add_mutually_exclusive_group()
    rhythm.add_argument("--seed", type=int, help="Seed for the rhythm placeholder")
    rhythm.add_argument("--rhythm", type=int, help="Fixed rhythm value (0-100)")
    sc.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    sc.set_defaults(func=cmd_score)

    rv = sub.add_parser("review", help="Compute the next SM-2 review")
    rv.add_argument("--quality", "-q", type=float, required=True, help="Recall rating 0-5")
    rv.add_argument("--ease", "-e", type=float, default=2.5, help="Current ease factor (default: 2.5)")
    rv.add_argument("--interval", "-i", type=int, default=0, help="Current interval in days (default: 0)")
    rv.add_argument("--repetitions", "-r", type=int, default=0, help="Successful repetitions so far (default: 0)")
    rv.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    rv.set_defaults(func=cmd_review)

    dc = sub.add_parser("dictation", help="Check a dictation answer")
    dc.add_argument("user_input", help="What was typed")
    dc.add_argument("answer", help="Expected answer")
    dc.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    dc.set_defaults(func=cmd_dictation)

    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    try:
        print(args.func(args))
    except Exception as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
