"""
Text lookup by key.

Translations are JSON files named after their language code. Keys may
be dotted to reach into nested objects ("minesweeper.won").
"""
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

LOCALES_DIR = Path(__file__).parent / "locales"
DEFAULT_LANGUAGE = "es"


class Translator:
    """Loads locale files on demand and resolves keys against them."""

    def __init__(
        self,
        language: str = DEFAULT_LANGUAGE,
        locales_dir: Optional[Path] = None,
    ) -> None:
        self.locales_dir = Path(locales_dir) if locales_dir else LOCALES_DIR
        self._translations: Dict[str, Dict[str, Any]] = {}
        self._language = self._load(language)

    def _load(self, language: str) -> str:
        """
        Load a language, falling back to the default if it is missing.

        Returns:
            The language actually loaded.

        Raises:
            LookupError: If even the default language cannot be loaded.
        """
        if language in self._translations:
            return language
        path = self.locales_dir / f"{language}.json"
        try:
            with open(path, encoding="utf-8") as f:
                self._translations[language] = json.load(f)
            return language
        except (OSError, ValueError) as exc:
            if language == DEFAULT_LANGUAGE:
                raise LookupError(
                    f"Cannot load translations for {language}"
                ) from exc
            print(
                f"Warning: no translations for {language}, "
                f"using {DEFAULT_LANGUAGE}",
                file=sys.stderr,
            )
            return self._load(DEFAULT_LANGUAGE)

    @property
    def language(self) -> str:
        return self._language

    def set_language(self, language: str) -> None:
        self._language = self._load(language)

    def available_languages(self) -> List[str]:
        return sorted(path.stem for path in self.locales_dir.glob("*.json"))

    def t(self, key: str, **params: Any) -> str:
        """
        Translate key, filling any {placeholders} from params.

        Unknown keys come back unchanged so a gap shows up on screen
        instead of breaking it.
        """
        value: Any = self._translations[self._language]
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                print(
                    f"Warning: missing translation {key} in {self._language}",
                    file=sys.stderr,
                )
                return key
        if not isinstance(value, str):
            return key
        return value.format_map(_KeepMissing(params)) if params else value


class _KeepMissing(dict):
    """Format mapping that leaves unknown {placeholders} as written."""

    def __missing__(self, name: str) -> str:
        return "{" + name + "}"
