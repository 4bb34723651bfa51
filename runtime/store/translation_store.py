"""TranslationStore: read-only access to translations.json.

File format:

    {
      "en": {"yes": "Yes", "no": "No", "done_prompt": "...", "goodbye": "...", "thanks": "..."},
      "es": {...},
      ...
    }

Only "yes" and "no" are expected for every language; the other keys
are optional.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from exceptions.exceptions import TranslationsUnavailableError


logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"


class TranslationStore:
    """Lazily loads and caches translations.json."""

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self._raw: Optional[str] = None
        self._data: Optional[Dict[str, Dict[str, str]]] = None

    def get_raw(self) -> str:
        """Return the file contents exactly as stored on disk."""
        self._load()
        return self._raw

    def get_all(self) -> Dict[str, Dict[str, str]]:
        self._load()
        return self._data

    def has_language(self, language: Optional[str]) -> bool:
        return bool(language) and language in self.get_all()

    def get(self, language: Optional[str]) -> Dict[str, str]:
        """Return the entry for `language`, falling back to English."""
        data = self.get_all()
        if language and language in data:
            return data[language]
        return data.get(DEFAULT_LANGUAGE, {})

    def buttons(self, language: Optional[str]) -> List[str]:
        """Localized [yes, no] labels for `language`.

        Unlike get(), a language missing from the file falls straight
        back to the English defaults "Yes" / "No".
        """
        entry = self.get_all().get(language or DEFAULT_LANGUAGE) or {}
        return [entry.get("yes") or "Yes", entry.get("no") or "No"]

    def _load(self) -> None:
        if self._data is not None:
            return
        try:
            raw = self.path.read_text(encoding="utf-8")
            data = json.loads(raw)
        except (OSError, ValueError) as exc:
            logger.error("[TRANSLATIONS] failed to load %s: %s", self.path, exc)
            raise TranslationsUnavailableError(self.path, str(exc)) from exc
        if not isinstance(data, dict):
            raise TranslationsUnavailableError(self.path, "top-level value must be an object")
        self._raw = raw
        self._data = data
