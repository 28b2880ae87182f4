"""
Scoring configuration.

The defaults follow the common Slovak/Czech rules; a JSON file can override any field,
e.g. {"sto_counts_single_meld": true, "contract_multipliers": {"Betl": 6}}.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

from .bidding import DEFAULT_MULTIPLIERS, Contract, contract_multiplier

# Flek ladder: level n doubles the wager n times. Odd levels belong to the defense.
FLEK_NAMES = ("Flek", "Re", "Tutti", "Boty", "Kalhoty")
MAX_FLEK_LEVEL = len(FLEK_NAMES)


@dataclass(frozen=True)
class Ruleset:
    card_points: int = 10
    ultimo_points: int = 10
    meld_points: int = 20
    trump_meld_points: int = 40
    sto_target: int = 100
    announced_multiplier: int = 2
    # Some tables only let one hláška count towards Sto.
    sto_counts_single_meld: bool = False
    contract_multipliers: Dict[Contract, int] = field(
        default_factory=lambda: dict(DEFAULT_MULTIPLIERS)
    )

    def multiplier(self, contract: Contract) -> int:
        return contract_multiplier(contract, self.contract_multipliers)


DEFAULT_RULESET = Ruleset()


def ruleset_to_dict(rules: Ruleset) -> Dict[str, Any]:
    d = asdict(rules)
    d["contract_multipliers"] = {c.value: m for c, m in rules.contract_multipliers.items()}
    return d


def ruleset_from_dict(d: Dict[str, Any]) -> Ruleset:
    """Build a Ruleset from a dict of overrides; unknown keys are rejected."""
    known = {f.name for f in fields(Ruleset)}
    unknown = set(d) - known
    if unknown:
        raise ValueError(f"Unknown ruleset keys: {sorted(unknown)}")
    kwargs = dict(d)
    if "contract_multipliers" in kwargs:
        table = dict(DEFAULT_MULTIPLIERS)
        for name, mult in kwargs["contract_multipliers"].items():
            table[Contract(name)] = int(mult)
        kwargs["contract_multipliers"] = table
    return Ruleset(**kwargs)


def load_ruleset(path: str | Path) -> Ruleset:
    """Read a JSON ruleset file."""
    with Path(path).open("r", encoding="utf-8") as f:
        return ruleset_from_dict(json.load(f))


__all__ = [
    "FLEK_NAMES",
    "MAX_FLEK_LEVEL",
    "Ruleset",
    "DEFAULT_RULESET",
    "ruleset_to_dict",
    "ruleset_from_dict",
    "load_ruleset",
]
