"""
I18n — Translator collaborator

    t = Translator("zh")
    t("branch.created", name="feature/x")

Lookup walks dotted keys. A key missing from the active language falls
back to English; missing there too, the key itself is returned.
Translation never raises.
"""

from typing import Any, List, Optional

from .locales import DEFAULT_LANGUAGE, LOCALES


class Translator:
    """Callable key -> display string lookup."""

    def __init__(self, language: Optional[str] = None):
        self.language = DEFAULT_LANGUAGE
        if language:
            self.set_language(language)

    def set_language(self, language: str) -> bool:
        """Switch language. Returns False (and keeps the current one) if unsupported."""
        if language not in LOCALES:
            return False
        self.language = language
        return True

    def t(self, key: str, /, **params: Any) -> str:
        value = _lookup(LOCALES[self.language], key)
        if value is None and self.language != DEFAULT_LANGUAGE:
            value = _lookup(LOCALES[DEFAULT_LANGUAGE], key)
        if not isinstance(value, str):
            return key

        for name, replacement in params.items():
            value = value.replace("{" + name + "}", str(replacement))
        return value

    __call__ = t


def available_languages() -> List[str]:
    return list(LOCALES)


def _lookup(table: Any, key: str) -> Any:
    value = table
    for part in key.split("."):
        if not isinstance(value, dict) or part not in value:
            return None
        value = value[part]
    return value


__all__ = ["Translator", "available_languages", "DEFAULT_LANGUAGE", "LOCALES"]
