import pytest

from vc_scout import config


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # Never pick up a developer's .env or real credential.
    monkeypatch.setattr(config, "_ENV_LOADED", True)
    for name in (
        "GEMINI_API_KEY",
        "VC_SCOUT_MODEL",
        "VC_SCOUT_FETCH_TIMEOUT",
        "VC_SCOUT_MODEL_TIMEOUT",
        "VC_SCOUT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("VC_SCOUT_FALLBACK_DELAY", "0")
    monkeypatch.setenv("VC_SCOUT_STORE", str(tmp_path / "store.sqlite"))
