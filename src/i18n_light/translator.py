"""The I18n instance: configuration, current locale and translation.

Usage:
    i18n = I18n().configure(default_locale="en", directory="locales", extension="json")
    i18n.set_locale("it")
    i18n.translate("greetings.hello_name", "Mario")
    i18n.translate_counted("messages", 3, 3)
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from i18n_light.cache import LocaleCache
from i18n_light.config import I18nOptions, build_options, options_from_settings
from i18n_light.context import LocaleContext
from i18n_light.core.config import Settings, get_settings
from i18n_light.core.exceptions import ConfigError
from i18n_light.core.logging import get_logger
from i18n_light.formatter import format_phrase, plural_suffix, split_counted_args
from i18n_light.middleware import request_hook
from i18n_light.resolver import PATH_SEPARATOR, resolve_path
from i18n_light.sources import PhraseSource, PhraseTreeDict, build_source

logger = get_logger(__name__)


class I18n:
    """A configured set of locale dictionaries with a current locale.

    The current locale is context-local (see LocaleContext); the cache of
    loaded dictionaries is shared by every context using this instance.
    """

    def __init__(self) -> None:
        self._options: I18nOptions | None = None
        self._source: PhraseSource | None = None
        self._cache = LocaleCache()
        self._locale = LocaleContext()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "I18n":
        """Create an instance configured from I18N_* settings."""
        return cls().configure(options_from_settings(settings or get_settings()))

    # Configuration

    def configure(self, options: I18nOptions | None = None, **kwargs: Any) -> "I18n":
        """Configure (or re-configure) the instance.

        Accepts either a prebuilt I18nOptions or the keyword arguments of
        build_options(). Re-configuring discards every cached dictionary.
        The default locale becomes current and is loaded immediately.

        Raises:
            ConfigError: invalid or incomplete configuration.
            LoadError: the default locale's dictionary cannot be loaded.
        """
        if options is not None and kwargs:
            raise ConfigError("Pass either an I18nOptions object or keyword options, not both")
        if options is None:
            options = build_options(**kwargs)

        self._options = options
        self._source = build_source(options.origin)
        self._cache.reset(self._source)

        logger.debug(
            "i18n_configured",
            default_locale=options.default_locale,
            origin=options.origin.kind,
            fallback=options.fallback,
            cache=options.cache,
            refresh=options.refresh_on_switch,
        )

        self._switch_locale(options.default_locale, None)
        return self

    @property
    def options(self) -> I18nOptions:
        if self._options is None:
            raise ConfigError("I18n instance is not configured; call configure() first")
        return self._options

    @property
    def source(self) -> PhraseSource:
        if self._source is None:
            raise ConfigError("I18n instance is not configured; call configure() first")
        return self._source

    @property
    def default_locale(self) -> str:
        return self.options.default_locale

    @property
    def cache(self) -> LocaleCache:
        return self._cache

    @property
    def locale_context(self) -> LocaleContext:
        return self._locale

    def available_locales(self) -> list[str] | None:
        """Locales the source can serve, or None when it cannot be enumerated."""
        return self.source.available_locales()

    # Locale selection

    def get_locale(self) -> str:
        """Get the current locale."""
        return self._locale.get() or self.default_locale

    def _switch_locale(self, locale: str, refresh: bool | None) -> None:
        options = self.options
        # The pointer moves first and is not rolled back if loading fails
        self._locale.set(locale)
        self._cache.switch(
            self.source,
            locale,
            retain=options.cache,
            refresh=options.refresh_on_switch if refresh is None else refresh,
        )
        logger.debug("locale_switched", locale=locale)

    def set_locale(self, locale: str, refresh: bool | None = None) -> "I18n":
        """Change the current locale.

        Args:
            locale: The new locale.
            refresh: Reload the locale even if cached. None uses the
                configured refresh option.
        """
        if not locale:
            raise ConfigError("locale must be a non-empty string", option="locale")
        self._switch_locale(locale, refresh)
        return self

    def set_default_locale(self, locale: str) -> "I18n":
        """Change the default locale (fallback target and reset target).

        The current locale is left untouched.
        """
        self._options = self.options.with_default_locale(locale)
        return self

    def reset_locale(self, refresh: bool | None = None) -> "I18n":
        """Switch back to the default locale."""
        self._switch_locale(self.default_locale, refresh)
        return self

    def clear_cache(self, refresh: bool = False) -> "I18n":
        """Evict every cached dictionary.

        Args:
            refresh: Reload the current locale right away.
        """
        self._cache.clear(
            self.source,
            reload_locale=self.get_locale() if refresh else None,
        )
        return self

    @contextmanager
    def request_locale(
        self, locale: str | None = None, refresh: bool | None = None
    ) -> Iterator["I18n"]:
        """Use `locale` (default locale if None) for the enclosed block.

        The previous context value is restored on exit, even if loading
        the locale fails.
        """
        token = self._locale.set(locale or self.default_locale)
        try:
            self._switch_locale(locale or self.default_locale, refresh)
            yield self
        finally:
            self._locale.reset(token)

    # Resolution

    def get_context(self, locale: str | None = None) -> PhraseTreeDict:
        """Get the phrase tree for a locale, loading it if needed.

        Trees for locales other than the current one are only kept when
        the cache option is on. Without it, reloading the current locale
        (evicted by another context) drops every other entry.
        """
        target = locale or self.get_locale()
        return self._cache.lookup(
            self.source,
            target,
            insert=self.options.cache or target == self.get_locale(),
            retain=self.options.cache,
        )

    def resolve(self, path: str, locale: str | None = None) -> str:
        """Resolve a dotted path to a phrase.

        Falls back to the default locale when the path is invalid in
        `locale` and fallback is enabled. Returns `path` itself when
        nothing matches.
        """
        options = self.options
        target = locale or self.get_locale()

        phrase = resolve_path(self.get_context(target), path)
        if phrase is not None:
            return phrase

        if target != options.default_locale and options.fallback:
            logger.debug("phrase_fallback", path=path, locale=target)
            return self.resolve(path, options.default_locale)

        logger.debug("phrase_missing", path=path, locale=target)
        return path

    # Translation

    def translate(self, path: str, *args: Any) -> str:
        """Translate `path` in the current locale and fill in placeholders.

        Example:
            i18n.translate("greetings.hello_name", "Mario")
            # Returns: "Ciao Mario"
        """
        return format_phrase(self.resolve(path), args)

    def translate_counted(self, path: str, *args: Any) -> str:
        """Translate a counted phrase.

        The last argument is the count and picks the `zero`, `one` or
        `many` variant under `path`. The arguments before it fill the
        placeholders; the count itself does not.

        Example:
            i18n.translate_counted("messages", 2, 2)
            # Returns: "2 messages"
        """
        values, count = split_counted_args(args)
        counted_path = f"{path}{PATH_SEPARATOR}{plural_suffix(count)}"
        return format_phrase(self.resolve(counted_path), values)

    # Request integration

    def init(self) -> Callable[[Any, Any, Callable[[], Any]], Any]:
        """Build the per-request hook for a (request, response, next) pipeline."""
        return request_hook(self)


def configure(options: I18nOptions | None = None, **kwargs: Any) -> I18n:
    """Create and configure a new I18n instance."""
    return I18n().configure(options, **kwargs)
