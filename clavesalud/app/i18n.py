from __future__ import annotations

from typing import Callable

from clavesalud.app.i18n_agenda_catalog import TRANSLATIONS_AGENDA

_TRANSLATIONS: dict[str, dict[str, str]] = {}

for idioma, traducciones in TRANSLATIONS_AGENDA.items():
    _TRANSLATIONS.setdefault(idioma, {}).update(traducciones)


class I18nManager:
    def __init__(self, language: str = "es") -> None:
        self._language = language if language in _TRANSLATIONS else "es"
        self._listeners: list[Callable[[], None]] = []

    @property
    def language(self) -> str:
        return self._language

    def set_language(self, language: str) -> None:
        if language not in _TRANSLATIONS or language == self._language:
            return
        self._language = language
        for listener in list(self._listeners):
            listener()

    def t(self, key: str) -> str:
        return _TRANSLATIONS.get(self._language, {}).get(key, key)

    def subscribe(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)
