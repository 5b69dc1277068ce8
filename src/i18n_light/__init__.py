"""i18n-light: dotted-path locale strings with default-locale fallback.

Phrase dictionaries are nested JSON objects whose leaves are
printf-style format strings. They come from a directory of files, a
static mapping or a resolver callback. Loaded dictionaries are cached
per locale under the `cache` / `refresh` policies.
"""

from i18n_light.cache import LocaleCache
from i18n_light.config import (
    DirectoryOrigin,
    I18nOptions,
    ResolverOrigin,
    StaticOrigin,
    build_options,
)
from i18n_light.core.exceptions import ConfigError, I18nError, LoadError
from i18n_light.middleware import LocaleMiddleware, parse_accept_language, request_hook
from i18n_light.resolver import resolve_path
from i18n_light.translator import I18n, configure

__all__ = [
    "ConfigError",
    "DirectoryOrigin",
    "I18n",
    "I18nError",
    "I18nOptions",
    "LoadError",
    "LocaleCache",
    "LocaleMiddleware",
    "ResolverOrigin",
    "StaticOrigin",
    "build_options",
    "configure",
    "parse_accept_language",
    "request_hook",
    "resolve_path",
]
