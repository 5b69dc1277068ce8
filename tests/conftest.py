"""Shared fixtures: locale dictionaries written to a temporary directory."""

import json
from pathlib import Path

import pytest

from i18n_light import I18n

EN = {
    "greetings": {
        "hello": "Hello",
        "hello_name": "Hello %s",
        "bye": "bye",
        "text": {"hello": "hello"},
    },
    "messages": {
        "zero": "No messages",
        "one": "1 message",
        "many": "%d messages",
    },
    "files": {
        "zero": "No files in %s",
        "one": "1 file in %s",
        "many": "%d files in %s",
    },
}

IT = {
    "greetings": {
        "hello": "Ciao",
        "hello_name": "Ciao %s",
        "text": {"hello": "ciao"},
    },
    "messages": {
        "zero": "Nessun messaggio",
        "one": "1 messaggio",
        "many": "%d messaggi",
    },
}

FR = {"greetings": {"hello": "Bonjour"}}


def write_locale(directory: Path, locale: str, tree: dict, extension: str = ".json") -> Path:
    path = directory / f"{locale}{extension}"
    path.write_text(json.dumps(tree), encoding="utf-8")
    return path


@pytest.fixture
def locale_dir(tmp_path):
    """Directory holding en/it/fr dictionaries as .json files."""
    for locale, tree in (("en", EN), ("it", IT), ("fr", FR)):
        write_locale(tmp_path, locale, tree)
    return tmp_path


@pytest.fixture
def make_i18n(locale_dir):
    """Factory for instances reading from locale_dir."""

    def factory(**options) -> I18n:
        options.setdefault("default_locale", "en")
        options.setdefault("directory", locale_dir)
        options.setdefault("extension", "json")
        return I18n().configure(**options)

    return factory


@pytest.fixture
def i18n(make_i18n):
    return make_i18n()
