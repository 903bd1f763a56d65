"""
Key-value preferences and the tag catalog built on top of them.

Components that need settings receive a KeyValueStore at construction
instead of reaching for a shared global.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

KEY_CUSTOM_TAGS = "custom_tags"

DEFAULT_TAGS: List[str] = [
    "Work",
    "Family",
    "Friends",
    "Sleep",
    "Sport",
    "Food",
    "School",
    "Health",
    "Hobbies",
    "Social",
]


# ============================================================================
# EXCEPTIONS
# ============================================================================

class PreferencesLoadError(Exception):
    """Raised when the preferences file cannot be read or parsed."""
    pass


# ============================================================================
# STORES
# ============================================================================

class KeyValueStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class InMemoryStore:
    """Dict-backed store, mostly for tests."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonFileStore:
    """Store persisted to a single JSON file, rewritten on every set."""

    def __init__(self, path: str):
        self.path = path
        self._data: Optional[Dict[str, Any]] = None

    def _load(self) -> Dict[str, Any]:
        if self._data is None:
            if os.path.exists(self.path):
                try:
                    with open(self.path, "r", encoding="utf-8") as f:
                        self._data = json.load(f)
                except (OSError, ValueError) as e:
                    logger.error(f"Failed to read preferences {self.path}: {e}")
                    raise PreferencesLoadError(str(e)) from e
                if not isinstance(self._data, dict):
                    self._data = None
                    raise PreferencesLoadError(f"Preferences must be a JSON object: {self.path}")
            else:
                self._data = {}
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        directory = os.path.dirname(self.path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)


# ============================================================================
# TAG CATALOG
# ============================================================================

class TagCatalog:
    """Default context tags plus the user's custom ones."""

    def __init__(self, store: KeyValueStore, defaults: Optional[List[str]] = None):
        self.store = store
        self.defaults = list(defaults if defaults is not None else DEFAULT_TAGS)

    def custom_tags(self) -> List[str]:
        return list(self.store.get(KEY_CUSTOM_TAGS, []))

    def all_tags(self) -> List[str]:
        return self.defaults + self.custom_tags()

    def add_custom_tag(self, tag: str) -> bool:
        """
        Adds a trimmed custom tag.

        Returns:
            False if the tag is blank or already known.
        """
        tag = tag.strip()
        if not tag or tag in self.all_tags():
            return False

        self.store.set(KEY_CUSTOM_TAGS, self.custom_tags() + [tag])
        logger.info(f"Custom tag added: {tag}")
        return True

    def remove_custom_tag(self, tag: str) -> bool:
        custom = self.custom_tags()
        if tag not in custom:
            return False
        custom.remove(tag)
        self.store.set(KEY_CUSTOM_TAGS, custom)
        return True
