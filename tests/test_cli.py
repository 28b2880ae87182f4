"""CLI-level smoke tests."""
import json
from pathlib import Path

from marias.cli import _cmd_match, _cmd_simulate, main


class _Args:
    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)


def test_cli_simulate_prints_tricks(capsys):
    _cmd_simulate(_Args(seed=3, forhont=0, rules=None))
    out = capsys.readouterr().out
    assert "[trick 10]" in out
    assert "Payoffs:" in out


def test_cli_match_with_rules_file(tmp_path: Path, capsys):
    rules = tmp_path / "rules.json"
    rules.write_text(json.dumps({"contract_multipliers": {"Hra": 3}}), encoding="utf-8")
    _cmd_match(_Args(seed=0, deals=2, rules=str(rules)))
    out = capsys.readouterr().out
    assert "[deal 2/2]" in out
    assert "Totals:" in out


def test_main_parses_arguments(capsys):
    main(["--log-level", "ERROR", "simulate", "--seed", "1", "--forhont", "2"])
    assert "seat 2 plays" in capsys.readouterr().out
