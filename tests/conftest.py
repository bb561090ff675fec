# tests/conftest.py
from __future__ import annotations

import os
import random
from pathlib import Path

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")


# -----------------------------
# Global, deterministic seeding
# -----------------------------
@pytest.fixture(autouse=True, scope="session")
def _seed_everything() -> None:
    """
    Synthetic rosters take explicit seeds; this pins anything that falls back
    to the global RNGs.
    """
    seed = int(os.environ.get("PYTEST_SEED", "1234"))
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    np.random.seed(seed)


@pytest.fixture(autouse=True)
def _isolated_outputs(monkeypatch, tmp_path: Path) -> None:
    """Plots are written to ./outputs; keep them out of the working tree."""
    monkeypatch.chdir(tmp_path)


# -----------------------------
# Path helpers
# -----------------------------
@pytest.fixture(scope="session")
def project_root() -> Path:
    """Repository root (where pyproject.toml lives)."""
    return Path(__file__).resolve().parents[1]
