"""Tests for startup: logging, config validation and the products file prompt."""

import json
import logging

import pytest

from shopify_checker import config, main


def answer(text):
    return lambda prompt: text


def test_existing_file_is_loaded(products_file):
    products_file.write_text(json.dumps({"a": {"loc": "shop1.com", "path": "/products.json", "products": []}}), encoding="utf-8")
    store = main.setup_store(str(products_file), read_line=answer("n"))
    assert store.ids() == ["a"]


def test_missing_file_created_on_yes(products_file):
    store = main.setup_store(str(products_file), read_line=answer("y"))
    assert len(store) == 0
    assert json.loads(products_file.read_text(encoding="utf-8")) == {}


def test_missing_file_declined(products_file):
    assert main.setup_store(str(products_file), read_line=answer("n")) is None
    assert not products_file.exists()


def test_corrupt_file_treated_as_missing(products_file):
    products_file.write_text("{corrupt", encoding="utf-8")
    assert main.setup_store(str(products_file), read_line=answer("no")) is None
    # declined, so the corrupt file is left alone
    assert products_file.read_text(encoding="utf-8") == "{corrupt"


def test_main_exits_quietly_when_declined(monkeypatch, products_file):
    monkeypatch.setattr(config, "PRODUCTS_FILE", str(products_file))
    monkeypatch.setattr("builtins.input", answer("n"))
    main.main()
    assert not products_file.exists()


def test_setup_logging_uses_level(monkeypatch):
    monkeypatch.setattr(config, "LOG_LEVEL", "debug")
    main.setup_logging()
    assert logging.getLogger().handlers


@pytest.mark.parametrize(
    "name,value",
    [("SLEEP_TIME_MS", -1), ("FETCH_ATTEMPTS", 0), ("REQUEST_TIMEOUT_SECONDS", 0.0), ("PRODUCTS_FILE", "")],
)
def test_validate_rejects_bad_values(monkeypatch, name, value):
    monkeypatch.setattr(config, name, value)
    with pytest.raises(RuntimeError):
        config.validate()


def test_validate_accepts_defaults():
    config.validate()


@pytest.mark.parametrize(
    "raw,default,expected",
    [(None, 5, 5), ("7", 5, 7), ("seven", 5, 5)],
)
def test_parse_int(raw, default, expected):
    assert config._parse_int(raw, default) == expected


@pytest.mark.parametrize("raw,expected", [(None, None), ("", None), ("2.5", 2.5), ("x", None)])
def test_parse_float(raw, expected):
    assert config._parse_float(raw, None) == expected


def test_ctrl_c_at_create_prompt_exits_quietly(monkeypatch, products_file):
    def interrupt(prompt):
        raise KeyboardInterrupt

    monkeypatch.setattr(config, "PRODUCTS_FILE", str(products_file))
    monkeypatch.setattr("builtins.input", interrupt)
    main.main()
    assert not products_file.exists()


def test_ctrl_c_at_command_prompt_exits_quietly(monkeypatch, products_file):
    products_file.write_text("{}", encoding="utf-8")
    answers = iter(["list"])

    def read(prompt):
        try:
            return next(answers)
        except StopIteration:
            raise KeyboardInterrupt

    monkeypatch.setattr(config, "PRODUCTS_FILE", str(products_file))
    monkeypatch.setattr("builtins.input", read)
    main.main()
    assert products_file.read_text(encoding="utf-8") == "{}"
