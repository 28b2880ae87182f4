"""
Run the marias-engine test suite from a fresh checkout.

    python tests.py

pytest is pulled in through the package's dev extra the first time, then the
suite under tests/ runs from the repository root.
"""
from __future__ import annotations

import importlib.util
import subprocess
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parent


def ensure_test_dependencies() -> None:
    if importlib.util.find_spec("pytest") is not None:
        return
    print("pytest not found; installing .[dev] ...")
    subprocess.check_call(
        [sys.executable, "-m", "pip", "install", "-e", ".[dev]"],
        cwd=str(ROOT),
    )


def main() -> None:
    ensure_test_dependencies()
    subprocess.check_call([sys.executable, "-m", "pytest"], cwd=str(ROOT))


if __name__ == "__main__":
    main()
