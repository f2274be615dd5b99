import pytest

from textbind.errors import InvalidArgumentError
from textbind.settings import TextBindSettings


def test_defaults():
    settings = TextBindSettings()
    assert settings.pair_separator == ","
    assert settings.key_value_separator == ":"
    assert settings.snake_case_fields is True


def test_separators_must_be_non_empty_and_distinct():
    with pytest.raises(InvalidArgumentError, match="must not be empty"):
        TextBindSettings(pair_separator="")
    with pytest.raises(InvalidArgumentError, match="must differ"):
        TextBindSettings(pair_separator=":", key_value_separator=":")


def test_from_env_reads_overrides():
    settings = TextBindSettings.from_env(
        {
            "TEXTBIND_PAIR_SEPARATOR": ";",
            "TEXTBIND_KEY_VALUE_SEPARATOR": "=",
            "TEXTBIND_SNAKE_CASE_FIELDS": "false",
        }
    )
    assert settings == TextBindSettings(";", "=", False)


def test_from_env_keeps_defaults_for_unset_variables():
    assert TextBindSettings.from_env({}) == TextBindSettings()
    assert TextBindSettings.from_env({"TEXTBIND_SNAKE_CASE_FIELDS": " Yes "}).snake_case_fields


def test_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("TEXTBIND_PAIR_SEPARATOR", "|")
    assert TextBindSettings.from_env().pair_separator == "|"


def test_from_env_validates():
    with pytest.raises(InvalidArgumentError):
        TextBindSettings.from_env({"TEXTBIND_KEY_VALUE_SEPARATOR": ","})
