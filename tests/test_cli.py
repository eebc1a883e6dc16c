""" Tests for the kotoba-core command line. """

import io
import json

import pytest

import kotoba_core
from kotoba_core import lexicon
from kotoba_core.cli import build_parser, main


def run(capsys, *argv):
    main(list(argv))
    return capsys.readouterr().out


def test_kana(capsys) -> None:
    assert run(capsys, "kana", "konnichiha").strip() == "こんにちは"
    assert run(capsys, "kana", "--katakana", "ko-hi-").strip() == "コーヒー"


def test_kana_json(capsys) -> None:
    data = json.loads(run(capsys, "kana", "gakkou", "--json"))
    assert data == {"input": "gakkou", "mode": "hiragana", "kana": "がっこう"}


def test_kana_reads_stdin(capsys, monkeypatch) -> None:
    monkeypatch.setattr('sys.stdin', io.StringIO("shinbun\n"))
    assert run(capsys, "kana").strip() == "しんぶん"


def test_suggest(capsys, fresh_lexicon) -> None:
    data = json.loads(run(capsys, "suggest", "かみ", "--json"))
    assert [d["surface"] for d in data] == ['紙', '髪', '神', '神様', '赤身']
    assert data[0] == {"surface": "紙", "reading": "かみ", "gloss": data[0]["gloss"]}
    assert "学校" in run(capsys, "suggest", "がっこう")
    assert run(capsys, "suggest", "ぬぬ").strip() == "(no suggestions)"


def test_score(capsys) -> None:
    data = json.loads(run(capsys, "score", "abc", "abd", "--rhythm", "80", "--json"))
    assert data["accuracy"] == 67
    assert data["overall"] == 79
    assert data["highlighted"][2] == {"unit": "d", "status": "incorrect", "expected": "c"}
    assert data["feedback"][0]["type"] == "error"

    text = run(capsys, "score", "abc", "abd", "--rhythm", "80")
    assert "Overall    79/100" in text
    assert "✓ ✓ ✗" in text


def test_score_seed_and_rhythm_conflict(capsys) -> None:
    with pytest.raises(SystemExit):
        main(["score", "a", "b", "--seed", "1", "--rhythm", "80"])


def test_review(capsys) -> None:
    data = json.loads(run(capsys, "review", "-q", "4", "-e", "2.5", "-i", "6", "-r", "1", "--json"))
    assert data["interval_days"] == 15
    assert data["repetitions"] == 2
    assert data["ease_factor"] == 2.5
    assert "+00:00" in data["next_review_date"]
    assert "15 days" in run(capsys, "review", "-q", "4", "-i", "6", "-r", "1")


def test_dictation(capsys) -> None:
    data = json.loads(run(capsys, "dictation", "こんにちわ", "こんにちは", "--json"))
    assert data["score"] == 80
    assert data["similar"] is True
    assert data["diff"][4] == {"char": "わ", "correct": False, "expected": "は"}
    assert "Score: 80% (close enough)" in run(capsys, "dictation", "こんにちわ", "こんにちは")


def test_missing_lexicon(capsys, monkeypatch, fresh_lexicon, tmp_path) -> None:
    monkeypatch.setattr(lexicon, 'get_lexicon_path', lambda: tmp_path / "missing.json")
    with pytest.raises(SystemExit) as exc:
        main(["suggest", "かみ"])
    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith("Error: Lexicon not found")


def test_version(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["--version"])
    assert exc.value.code == 0
    assert kotoba_core.__version__ in capsys.readouterr().out


def test_command_required() -> None:
    with pytest.raises(SystemExit):
        main([])
