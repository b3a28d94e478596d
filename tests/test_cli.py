import json

from typer.testing import CliRunner

from spellrank.cli.main import app


runner = CliRunner()


def test_levenshtein():
    result = runner.invoke(app, ["distance", "levenshtein", "kitten", "sitting"])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "3"


def test_osa_counts_swap_once():
    result = runner.invoke(app, ["distance", "osa", "ab", "ba"])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "1"


def test_trace():
    result = runner.invoke(app, ["distance", "levenshtein", "kitten", "sitting", "--trace"])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == [
        "3",
        "substitute 0 k -> s",
        "substitute 4 e -> i",
        "insert     6 g",
    ]


def test_trace_json():
    result = runner.invoke(app, ["distance", "osa", "ab", "ba", "--trace", "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["distance"] == 1
    assert payload["operations"] == [{"op": "transpose", "pos": 0}]


def test_weighted_costs_from_config(tmp_path):
    cfg = tmp_path / "engine.yaml"
    cfg.write_text("costs:\n  substitute: 3\n", encoding="utf-8")
    result = runner.invoke(app, ["distance", "levenshtein", "cat", "bat", "--config", str(cfg)])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "2"


def test_bad_config_exit_code(tmp_path):
    cfg = tmp_path / "engine.yaml"
    cfg.write_text("costs:\n  insert: -1\n", encoding="utf-8")
    result = runner.invoke(app, ["distance", "levenshtein", "a", "b", "--config", str(cfg)])
    assert result.exit_code == 2


def test_malformed_config_exit_code(tmp_path):
    cfg = tmp_path / "engine.yaml"
    cfg.write_text("costs: [insert: 1\n", encoding="utf-8")
    result = runner.invoke(app, ["distance", "levenshtein", "a", "b", "--config", str(cfg)])
    assert result.exit_code == 2
    assert "error:" in result.output


def _dictionary(tmp_path):
    p = tmp_path / "words.txt"
    p.write_text("recieve\nreceipt\nreceive\ndeceive\n", encoding="utf-8")
    return p


def test_suggest(tmp_path):
    result = runner.invoke(
        app, ["suggest", "word", "recieve", "--dictionary", str(_dictionary(tmp_path)), "--max-distance", "1"]
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == ["0\trecieve", "1\treceive"]


def test_suggest_json_parallel(tmp_path):
    result = runner.invoke(
        app,
        [
            "suggest",
            "word",
            "receive",
            "--dictionary",
            str(_dictionary(tmp_path)),
            "--classic",
            "--workers",
            "2",
            "--json",
        ],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["query"] == "receive"
    assert payload["suggestions"] == [
        {"word": "receive", "distance": 0},
        {"word": "deceive", "distance": 1},
        {"word": "receipt", "distance": 2},
        {"word": "recieve", "distance": 2},
    ]


def test_suggest_nothing_close(tmp_path):
    result = runner.invoke(
        app, ["suggest", "word", "zzzzzzzz", "--dictionary", str(_dictionary(tmp_path)), "--max-distance", "1"]
    )
    assert result.exit_code == 0
    assert "0\t" not in result.stdout
