from __future__ import annotations

import os
from pathlib import Path

import pytest

import goverter

_ENV_KEYS = ("GOVERTER_ENGINE", "GOVERTER_VERBOSE")


@pytest.fixture()
def test_env_file(tmp_path, monkeypatch) -> Path:
    """Provide an isolated .env file for each test that runs the entry point."""

    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)

    env_path = tmp_path / ".env"
    env_path.write_text(
        "\n".join(
            [
                "GOVERTER_ENGINE=fake",
                "GOVERTER_VERBOSE=no",
            ]
        )
    )
    monkeypatch.setattr(goverter, "_DOTENV_FILE", env_path)
    yield env_path
    # load_dotenv writes straight into os.environ
    for key in _ENV_KEYS:
        os.environ.pop(key, None)


class FakeEntryPoint:
    def __init__(self, name: str, target):
        self.name = name
        self._target = target

    def load(self):
        return self._target


@pytest.fixture()
def fake_engines(monkeypatch):
    """Replace entry-point discovery with an in-memory registry of engines."""

    import goverter.engine as engine_module

    registry: dict[str, object] = {}

    def fake_entry_points(*, group: str, name: str | None = None):
        assert group == engine_module.ENGINE_GROUP
        return [
            FakeEntryPoint(key, value)
            for key, value in registry.items()
            if name is None or key == name
        ]

    monkeypatch.setattr(engine_module, "entry_points", fake_entry_points)
    return registry
