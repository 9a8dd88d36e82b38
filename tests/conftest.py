import pytest

from sprachapp.application.study_service import apply_pack, new_app_data
from sprachapp.domain.models import Lang, PackContent

# 2025-10-16 12:00:00 UTC
T0 = 1_760_616_000_000
DAY = 86_400_000

EN_VOCAB = [{"de": "laufen", "x": "to run"}, {"de": "essen", "x": "to eat"}]
EN_SENTENCES = [{"de": "Ich habe Zeit.", "x": "I have time."}]


@pytest.fixture
def fresh_data():
    return new_app_data(T0)


@pytest.fixture
def en_pack():
    return PackContent(lang=Lang.EN, vocab=list(EN_VOCAB), sentences=list(EN_SENTENCES))


@pytest.fixture
def loaded_data(fresh_data, en_pack):
    return apply_pack(fresh_data, en_pack, T0)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config and state
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "SPRACHAPP_DATA_DIR",
        "SPRACHAPP_USERNAME",
        "SPRACHAPP_PACKS_FILE",
        "SPRACHAPP_VERBOSE",
    ):
        monkeypatch.delenv(var, raising=False)
    return home
