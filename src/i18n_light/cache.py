"""Locale context cache.

Maps locale -> phrase tree and decides, on every locale switch, whether
the source is consulted again and whether other locales are dropped:

- retain (the `cache` option): keep previously loaded locales around.
  When False the cache only ever holds the locale being switched to.
- refresh: reload a locale that is already cached.

A locale present as a key always maps to a fully loaded tree; entries
are inserted only after a load succeeds.
"""

from collections.abc import Iterator
import threading

from i18n_light.core.logging import get_logger
from i18n_light.sources import PhraseSource, PhraseTreeDict

logger = get_logger(__name__)


class LocaleCache:
    """Thread-safe locale -> phrase tree store.

    The switch and clear sequences are multi-step, so they run under a
    reentrant lock shared with on-demand lookups.
    """

    def __init__(self) -> None:
        self._entries: dict[str, PhraseTreeDict] = {}
        self._lock = threading.RLock()

    def __contains__(self, locale: object) -> bool:
        with self._lock:
            return locale in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.locales())

    def get(self, locale: str) -> PhraseTreeDict | None:
        with self._lock:
            return self._entries.get(locale)

    def locales(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def snapshot(self) -> dict[str, PhraseTreeDict]:
        """Shallow copy of the current entries (trees are shared, not copied)."""
        with self._lock:
            return dict(self._entries)

    def reset(self, source: PhraseSource) -> None:
        """Drop every entry and start over from the source's seed data."""
        with self._lock:
            self._entries = source.seed()

    def _load(self, source: PhraseSource, locale: str) -> PhraseTreeDict:
        tree = source.load(locale)
        logger.info("locale_loaded", locale=locale)
        return tree

    def _retain_only(self, locale: str) -> None:
        kept = self._entries.get(locale)
        self._entries.clear()
        if kept is not None:
            self._entries[locale] = kept

    def switch(
        self,
        source: PhraseSource,
        locale: str,
        *,
        retain: bool,
        refresh: bool,
    ) -> None:
        """Bring the cache in line with a switch to `locale`.

        Miss: when not retaining, evict everything first; then load.
        Hit + refresh: when not retaining, evict the other locales; then reload.
        Hit, no refresh: when not retaining, keep only this locale's entry.

        Raises:
            LoadError: the source could not produce the tree. Nothing is
                inserted for `locale` in that case.
        """
        with self._lock:
            if source.pinned:
                if locale not in self._entries:
                    self._entries[locale] = self._load(source, locale)
                return

            if locale not in self._entries:
                logger.debug("locale_cache_miss", locale=locale, retain=retain)
                if not retain:
                    self._entries.clear()
                self._entries[locale] = self._load(source, locale)
                return

            if refresh:
                logger.debug("locale_cache_refresh", locale=locale, retain=retain)
                if not retain:
                    self._retain_only(locale)
                self._entries[locale] = self._load(source, locale)
            elif not retain:
                self._retain_only(locale)

    def lookup(
        self,
        source: PhraseSource,
        locale: str,
        *,
        insert: bool,
        retain: bool = True,
    ) -> PhraseTreeDict:
        """Return the tree for `locale`, loading it if absent.

        A freshly loaded tree is only stored when `insert` is True; when
        not retaining, every other entry is evicted first, as on a
        switch miss.
        """
        with self._lock:
            tree = self._entries.get(locale)
            if tree is not None:
                return tree
            tree = self._load(source, locale)
            if source.pinned:
                self._entries[locale] = tree
            elif insert:
                logger.debug("locale_cache_miss", locale=locale, retain=retain)
                if not retain:
                    self._entries.clear()
                self._entries[locale] = tree
            return tree

    def clear(
        self,
        source: PhraseSource,
        *,
        reload_locale: str | None = None,
    ) -> None:
        """Evict every entry, then optionally reload one locale."""
        with self._lock:
            evicted = len(self._entries)
            self._entries = source.seed()
            logger.info("locale_cache_cleared", evicted=evicted)
            if reload_locale is not None and reload_locale not in self._entries:
                self._entries[reload_locale] = self._load(source, reload_locale)
