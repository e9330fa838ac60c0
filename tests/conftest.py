import os
from pathlib import Path

import pytest

from argumenter.core.config import GeneratorConfig
from argumenter.core.observability.metrics import reset_metrics

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # Keep runs deterministic: no ambient config file, no env overrides
    for key in list(os.environ):
        if key.startswith("ARGUMENTER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_metrics()


@pytest.fixture()
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture()
def config() -> GeneratorConfig:
    # builtin formatter: output does not depend on a local Go toolchain
    return GeneratorConfig(formatter="builtin")
