"""Dictionary sources: where phrase trees come from.

Each configured instance owns exactly one source, built from its origin
by build_source(). A source turns a locale identifier into a freshly
constructed phrase tree; the cache decides when to call it.
"""

from collections.abc import Mapping
import copy
from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any, Protocol

from i18n_light.config import (
    DirectoryOrigin,
    Origin,
    PhraseResolver,
    ResolverOrigin,
    StaticOrigin,
)
from i18n_light.core.exceptions import LoadError

PhraseTreeDict = dict[str, Any]


class PhraseSource(Protocol):
    # Pinned sources keep every locale resident; the cache never evicts them
    pinned: bool

    def load(self, locale: str) -> PhraseTreeDict: ...

    def seed(self) -> dict[str, PhraseTreeDict]: ...

    def available_locales(self) -> list[str] | None: ...


@dataclass(frozen=True)
class DirectorySource:
    """Reads {directory}/{locale}{extension} as a JSON object."""

    directory: Path
    extension: str
    pinned: bool = False

    def path_for(self, locale: str) -> Path:
        return self.directory / f"{locale}{self.extension}"

    def load(self, locale: str) -> PhraseTreeDict:
        path = self.path_for(locale)
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError as e:
            raise LoadError(locale, "file not found", str(path)) from e
        except OSError as e:
            raise LoadError(locale, e.strerror or str(e), str(path)) from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise LoadError(locale, f"invalid JSON: {e}", str(path)) from e

        if not isinstance(payload, dict):
            raise LoadError(
                locale,
                f"expected a JSON object, got {type(payload).__name__}",
                str(path),
            )
        return payload

    def seed(self) -> dict[str, PhraseTreeDict]:
        return {}

    def available_locales(self) -> list[str] | None:
        if not self.directory.is_dir():
            return []
        suffix_length = len(self.extension)
        return sorted(
            path.name[:-suffix_length]
            for path in self.directory.iterdir()
            if path.is_file()
            and path.name.endswith(self.extension)
            and len(path.name) > suffix_length
        )


@dataclass(frozen=True)
class StaticSource:
    """Serves phrase trees from a mapping supplied at configure time."""

    context: Mapping[str, Mapping[str, Any]]
    pinned: bool = True

    def load(self, locale: str) -> PhraseTreeDict:
        if locale not in self.context:
            raise LoadError(locale, "no static context for this locale")
        return copy.deepcopy(dict(self.context[locale]))

    def seed(self) -> dict[str, PhraseTreeDict]:
        return {locale: self.load(locale) for locale in self.context}

    def available_locales(self) -> list[str] | None:
        return sorted(self.context)


@dataclass(frozen=True)
class CallbackSource:
    """Asks a user callback for each locale's phrase tree."""

    resolver: PhraseResolver
    pinned: bool = False

    def load(self, locale: str) -> PhraseTreeDict:
        # Whatever the callback raises propagates unchanged
        tree = self.resolver(locale)
        if not isinstance(tree, Mapping):
            raise LoadError(
                locale, f"resolver returned {type(tree).__name__}, expected a mapping"
            )
        # Later mutation of the caller's object must not reach the cache
        return copy.deepcopy(dict(tree))

    def seed(self) -> dict[str, PhraseTreeDict]:
        return {}

    def available_locales(self) -> list[str] | None:
        return None


def build_source(origin: Origin) -> PhraseSource:
    """Build the source matching a configured origin."""
    if isinstance(origin, DirectoryOrigin):
        return DirectorySource(origin.directory, origin.extension)
    if isinstance(origin, StaticOrigin):
        return StaticSource(origin.context)
    if isinstance(origin, ResolverOrigin):
        return CallbackSource(origin.resolver)
    raise TypeError(f"Unknown origin: {origin!r}")
