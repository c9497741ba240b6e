"""Tests for localized folder names and user directory resolution."""

from pathlib import Path

import platformdirs
import pytest

from story_library.i18n.say import (
    LANGUAGE_ENV_VARS,
    current_language,
    normalize_language,
    say,
)
from story_library.paths import user_dirs


@pytest.fixture
def clean_locale(monkeypatch):
    for name in LANGUAGE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ---------------------------------------------------------------------------
# say
# ---------------------------------------------------------------------------

class TestNormalizeLanguage:
    @pytest.mark.parametrize("raw,expected", [
        ("fr_FR.UTF-8", "fr-fr"),
        ("de", "de"),
        ("pt_BR", "pt-br"),
        ("en_GB.UTF-8@euro", "en-gb"),
        ("es:en", "es"),
    ])
    def test_normalizes(self, raw, expected):
        assert normalize_language(raw) == expected


class TestCurrentLanguage:
    def test_defaults_to_english(self, clean_locale):
        assert current_language() == "en"

    def test_reads_lang(self, clean_locale):
        clean_locale.setenv("LANG", "fr_FR.UTF-8")
        assert current_language() == "fr-fr"

    def test_override_wins(self, clean_locale):
        clean_locale.setenv("LANG", "fr_FR.UTF-8")
        clean_locale.setenv("TWINE_LANGUAGE", "de")
        assert current_language() == "de"

    def test_language_beats_lang(self, clean_locale):
        clean_locale.setenv("LANG", "de_DE.UTF-8")
        clean_locale.setenv("LANGUAGE", "fr")
        assert current_language() == "fr"
        assert say("Stories") == "Histoires"

    def test_language_list_uses_first_entry(self, clean_locale):
        clean_locale.setenv("LANGUAGE", "es:en")
        assert current_language() == "es"

    def test_c_locale_ignored(self, clean_locale):
        clean_locale.setenv("LC_ALL", "C")
        clean_locale.setenv("LANG", "it_IT.UTF-8")
        assert current_language() == "it-it"


class TestSay:
    def test_english_is_identity(self, clean_locale):
        assert say("Stories") == "Stories"
        assert say("Backups") == "Backups"

    def test_region_falls_back_to_language(self, clean_locale):
        clean_locale.setenv("LANG", "fr_CA.UTF-8")
        assert say("Stories") == "Histoires"

    def test_region_specific_table(self):
        assert say("Backups", language="pt_BR") == "Backups"
        assert say("Backups", language="pt_PT") == "Cópias de segurança"

    def test_explicit_language(self, clean_locale):
        assert say("Stories", language="de") == "Geschichten"

    def test_unknown_key_returns_key(self):
        assert say("Library", language="fr") == "Library"

    def test_unknown_language_returns_key(self):
        assert say("Stories", language="xx") == "Stories"

    def test_reads_environment_every_call(self, clean_locale):
        clean_locale.setenv("TWINE_LANGUAGE", "es")
        assert say("Stories") == "Historias"
        clean_locale.setenv("TWINE_LANGUAGE", "nl")
        assert say("Stories") == "Verhalen"


# ---------------------------------------------------------------------------
# user directories
# ---------------------------------------------------------------------------

class TestUserDirs:
    def test_documents_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TWINE_DOCUMENTS_DIR", str(tmp_path))
        assert user_dirs.documents_dir() == tmp_path

    def test_app_data_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TWINE_APP_DATA_DIR", str(tmp_path))
        assert user_dirs.app_data_dir() == tmp_path

    def test_documents_falls_back_to_platformdirs(self, monkeypatch):
        monkeypatch.delenv("TWINE_DOCUMENTS_DIR", raising=False)
        assert user_dirs.documents_dir() == Path(platformdirs.user_documents_path())

    def test_app_data_falls_back_to_platformdirs(self, monkeypatch):
        monkeypatch.delenv("TWINE_APP_DATA_DIR", raising=False)
        expected = Path(platformdirs.user_data_path("Twine", appauthor=False))
        assert user_dirs.app_data_dir() == expected

    def test_reads_environment_every_call(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TWINE_DOCUMENTS_DIR", str(tmp_path / "a"))
        first = user_dirs.documents_dir()
        monkeypatch.setenv("TWINE_DOCUMENTS_DIR", str(tmp_path / "b"))
        assert user_dirs.documents_dir() != first
