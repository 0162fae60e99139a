# backend/tests/test_config.py
"""Configuration tests.

Tests verify behavior (types, ranges, loading) not specific values.
"""

from pathlib import Path

import pytest

from docchat.config import (
    CONFIG_SCHEMA,
    Config,
    ConfigError,
    _load_sections,
    load_settings,
)


def write_config(tmp_path: Path, content: str) -> Path:
    """Write a config.ini file and return the path."""
    config_path = tmp_path / "config.ini"
    config_path.write_text(content)
    return config_path


def test_all_settings_have_correct_types():
    """Every setting matches its declared type from schema."""
    chat, llm = _load_sections(None)

    for section_name, section in (("chat", chat), ("llm", llm)):
        for key, (expected_type, *_) in CONFIG_SCHEMA[section_name].items():
            value = getattr(section, key)
            assert isinstance(value, expected_type), (
                f"{section_name}.{key}: expected {expected_type.__name__}, "
                f"got {type(value).__name__}"
            )


def test_all_defaults_within_their_ranges():
    for section, keys in CONFIG_SCHEMA.items():
        for key, (_, default, min_val, max_val, _) in keys.items():
            if min_val is not None:
                assert default >= min_val, f"{section}.{key}"
            if max_val is not None:
                assert default <= max_val, f"{section}.{key}"


def test_invalid_type_raises_clear_error(tmp_path):
    """Non-numeric value for int setting gives helpful message."""
    config_path = write_config(tmp_path, "[chat]\nmax_docs_length = lots")

    with pytest.raises(ConfigError) as exc_info:
        _load_sections(config_path)

    assert "chat" in str(exc_info.value)
    assert "max_docs_length" in str(exc_info.value)
    assert "int" in str(exc_info.value)


def test_out_of_range_raises_clear_error(tmp_path):
    config_path = write_config(tmp_path, "[llm]\ntemperature = 5.0")

    with pytest.raises(ConfigError) as exc_info:
        _load_sections(config_path)

    assert "maximum" in str(exc_info.value)


def test_file_values_override_defaults(tmp_path):
    config_path = write_config(
        tmp_path, "[chat]\nmax_question_length = 200\n\n[llm]\nrequest_timeout = 10"
    )

    chat, llm = _load_sections(config_path)

    assert chat.max_question_length == 200
    assert llm.request_timeout == 10.0
    assert chat.max_docs_length == CONFIG_SCHEMA["chat"]["max_docs_length"][1]


def test_load_settings_reads_environment(configure, isolated_settings):
    configure(
        GROQ_API_KEY="gsk-test",
        API_KEY="secret",
        PRIMARY_MODEL="big",
        FALLBACK_MODEL="small",
        DOCCHAT_ENV="development",
    )

    settings = load_settings()

    assert settings.provider_api_key == "gsk-test"
    assert settings.api_key == "secret"
    assert settings.models == ["big", "small"]
    assert settings.is_production is False
    assert settings.data_dir == isolated_settings
    assert settings.db_path == isolated_settings / "docchat.db"


def test_load_settings_defaults():
    settings = load_settings()

    assert settings.provider_configured is False
    assert settings.api_key_required is False
    assert settings.is_production is True
    assert settings.provider == "groq"
    assert settings.chat.max_question_length == 500
    assert settings.chat.max_docs_length == 15000
    assert settings.llm.max_tokens == 4000
    assert settings.llm.temperature == 0.5
    assert settings.llm.request_timeout == 30.0


def test_load_settings_reads_config_file(configure, tmp_path):
    config_path = write_config(tmp_path, "[chat]\nmax_docs_length = 5000")
    configure(DOCCHAT_CONFIG=str(config_path))

    assert load_settings().chat.max_docs_length == 5000


def test_empty_env_key_counts_as_missing(configure):
    configure(GROQ_API_KEY="")

    assert load_settings().provider_configured is False


def test_same_primary_and_fallback_model_is_tried_once():
    config = Config(primary_model="m", fallback_model="m")

    assert config.models == ["m"]


def test_config_is_frozen():
    config = Config()

    with pytest.raises(AttributeError):
        config.api_key = "changed"  # type: ignore[misc]
