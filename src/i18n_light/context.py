"""Request-scoped current locale using contextvars.

Every I18n instance keeps its current locale under its own key in one
module-level ContextVar, so concurrently served requests (asyncio tasks,
or threads running in a copied context) never observe each other's
locale. Plain threads that do not copy the context start from the
instance's default locale.

Note: We use both contextvars (for async code) and a request-scoped
state dict (for sync handlers that run in threadpools). While a request
state is published, set() mirrors the locale into it and get() reads it
from there first.
"""

from contextvars import ContextVar, Token
import itertools
from typing import Any

# Instance key -> locale. Values are replaced, never mutated in place,
# so copied contexts do not share updates.
_locales: ContextVar[dict[int, str]] = ContextVar("i18n_locales", default={})

# Points at request.scope["state"] while LocaleMiddleware serves a request
_request_state: ContextVar[dict[str, Any] | None] = ContextVar(
    "i18n_request_state", default=None
)

# Key used in request state for the instance key -> locale mapping
LOCALE_STATE_KEY = "_i18n_locale"

_instance_keys = itertools.count()


def set_request_state(state: dict[str, Any] | None) -> Token[dict[str, Any] | None]:
    """Publish the request.scope["state"] dict for cross-thread locale sharing.

    Returns:
        Token for reset_request_state().
    """
    return _request_state.set(state)


def reset_request_state(token: Token[dict[str, Any] | None]) -> None:
    _request_state.reset(token)


class LocaleContext:
    """Holder for one instance's current locale."""

    def __init__(self) -> None:
        self.key = next(_instance_keys)

    def from_state(self, state: dict[str, Any] | None) -> str | None:
        """Get the locale mirrored into a request state dict, if any."""
        if state is None:
            return None
        locale_value = state.get(LOCALE_STATE_KEY, {}).get(self.key)
        return locale_value if isinstance(locale_value, str) else None

    def get(self, default: str | None = None) -> str | None:
        """Get the locale for the current context, or default if none is set.

        Request state (updated by sync handlers) wins over the contextvar.
        """
        value = self.from_state(_request_state.get())
        if value is None:
            value = _locales.get().get(self.key)
        return value if value is not None else default

    def _mirror(self, locale: str | None) -> None:
        state = _request_state.get()
        if state is None:
            return
        mirrored = state.setdefault(LOCALE_STATE_KEY, {})
        if locale is None:
            mirrored.pop(self.key, None)
        else:
            mirrored[self.key] = locale

    def set(self, locale: str) -> Token[dict[int, str]]:
        """Set the locale for the current context.

        Updates both the contextvar and the request state, if one is
        published.

        Returns:
            Token that can be passed to reset() to restore the previous value.
        """
        self._mirror(locale)
        return _locales.set({**_locales.get(), self.key: locale})

    def reset(self, token: Token[dict[int, str]]) -> None:
        """Restore the value that was current before the matching set()."""
        _locales.reset(token)
        self._mirror(_locales.get().get(self.key))
