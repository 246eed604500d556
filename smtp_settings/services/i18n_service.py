"""Internationalization service for translations."""

import json
from functools import lru_cache
from pathlib import Path

from smtp_settings.config import settings


class I18nService:
    """Message catalogs for the advisory checks and test-send results.

    `pl` holds the canonical wording. A missing key falls back to the
    catalog named by `settings.default_language`, then to the key itself.
    """

    def __init__(self):
        self.translations: dict[str, dict] = {}
        self._load_translations()

    def _load_translations(self) -> None:
        """Load all translation files from the translations directory."""
        translations_dir = Path(__file__).resolve().parent.parent / "translations"

        for lang in settings.supported_languages_list:
            lang_file = translations_dir / lang / "messages.json"
            if lang_file.exists():
                with open(lang_file, encoding="utf-8") as f:
                    self.translations[lang] = json.load(f)
            else:
                # Create empty translations for missing languages
                self.translations[lang] = {}

    def t(self, key: str, lang: str | None = None, **kwargs) -> str:
        """Translate a dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'issues.missing_host')
            lang: Language code (e.g., 'pl', 'en'); defaults to the configured language
            **kwargs: Variables to interpolate (e.g., recipient='a@b.com')

        Returns:
            Translated string, or the key if translation not found
        """
        lang = lang or settings.default_language
        # Try requested language first, fall back to the default language
        value = self._get_translation(key, lang)
        if value is None and lang != settings.default_language:
            value = self._get_translation(key, settings.default_language)
        if value is None:
            return key

        # Interpolate variables
        if kwargs:
            for param_key, param_value in kwargs.items():
                value = value.replace(f"{{{{{param_key}}}}}", str(param_value))

        return value

    def _get_translation(self, key: str, lang: str) -> str | None:
        """Get a translation value by dot-notation key."""
        keys = key.split(".")
        value = self.translations.get(lang, {})

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return None
            if value is None:
                return None

        return value if isinstance(value, str) else None


@lru_cache
def get_i18n_service() -> I18nService:
    """Get cached i18n service instance."""
    return I18nService()
