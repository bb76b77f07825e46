import pytest

from perfumesearch.config import DEFAULT_INDEX_NAME, load_settings
from perfumesearch.errors import ConfigError


def test_load_settings_from_mapping():
    settings = load_settings({"OPENAI_API_KEY": "sk-test", "PINECONE_API_KEY": "pc-test"})
    assert settings.openai_api_key == "sk-test"
    assert settings.pinecone_api_key == "pc-test"
    assert settings.index_name == DEFAULT_INDEX_NAME == "perfumes"


def test_index_name_override():
    settings = load_settings(
        {"OPENAI_API_KEY": "a", "PINECONE_API_KEY": "b", "PINECONE_INDEX_NAME": "perfumes-v2"}
    )
    assert settings.index_name == "perfumes-v2"


def test_missing_keys_are_fatal():
    with pytest.raises(ConfigError) as info:
        load_settings({"PINECONE_API_KEY": "b", "OPENAI_API_KEY": ""})
    assert "OPENAI_API_KEY" in str(info.value)
    assert "PINECONE_API_KEY" not in str(info.value)


def test_reads_process_environment(monkeypatch):
    monkeypatch.setattr("perfumesearch.config.load_dotenv", lambda *a, **k: False)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("PINECONE_API_KEY", "pc-env")
    monkeypatch.delenv("PINECONE_INDEX_NAME", raising=False)
    settings = load_settings()
    assert settings.openai_api_key == "sk-env"
    assert settings.index_name == "perfumes"


def test_repr_hides_keys():
    settings = load_settings({"OPENAI_API_KEY": "sk-secret", "PINECONE_API_KEY": "pc-secret"})
    assert "secret" not in repr(settings)
