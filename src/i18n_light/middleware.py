"""Request integration: the per-request hook and an ASGI middleware.

Both attach the I18n instance to the outgoing side of the request under
two conventional slots, `i18n` and `locals["i18n"]` (the latter is what
template renderers usually receive as their context).

LocaleMiddleware uses pure ASGI to avoid BaseHTTPMiddleware's contextvars issues.
See: https://github.com/encode/starlette/discussions/1729
"""

from collections.abc import Callable, Collection
from typing import TYPE_CHECKING, Any, TypeVar

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from i18n_light.context import reset_request_state, set_request_state
from i18n_light.core.logging import get_logger

if TYPE_CHECKING:
    from i18n_light.translator import I18n

logger = get_logger(__name__)

T = TypeVar("T")

I18N_SLOT = "i18n"
LOCALS_SLOT = "locals"


def request_hook(i18n: "I18n") -> Callable[[Any, Any, Callable[[], T]], T]:
    """Build a hook for (request, response, call_next) style pipelines.

    On every call it resets the instance to its default locale, attaches
    the instance to `response.i18n` and `response.locals["i18n"]`, then
    hands over to `call_next`.
    """

    def hook(request: Any, response: Any, call_next: Callable[[], T]) -> T:
        i18n.reset_locale()
        setattr(response, I18N_SLOT, i18n)
        locals_ = getattr(response, LOCALS_SLOT, None)
        if locals_ is None:
            locals_ = {}
            setattr(response, LOCALS_SLOT, locals_)
        locals_[I18N_SLOT] = i18n
        return call_next()

    return hook


def _base_language(tag: str) -> str:
    return tag.replace("_", "-").split("-")[0].lower()


def parse_accept_language(
    header: str | None, available: Collection[str] | None
) -> str | None:
    """Parse Accept-Language header and return the best matching locale.

    Handles formats like:
    - "en-US,en;q=0.9,es;q=0.8"
    - "fr"
    - "zh-CN"

    Each tag, by descending quality, is matched exactly (case-insensitive)
    against `available`, then by base language ("pt-BR" -> "pt").

    Args:
        header: The Accept-Language header value
        available: Locales that can be served; None disables matching.

    Returns:
        The best matching available locale, or None if no match.
    """
    if not header or not available:
        return None

    by_lower = {loc.lower(): loc for loc in available}
    by_base: dict[str, str] = {}
    for loc in available:
        by_base.setdefault(_base_language(loc), loc)

    # Parse language tags with quality values
    languages: list[tuple[str, float]] = []

    for raw_part in header.split(","):
        part = raw_part.strip()
        if not part:
            continue

        # Split by semicolon for quality value
        if ";" in part:
            lang, quality_part = part.split(";", 1)
            lang = lang.strip()
            # Parse q=0.9 format
            try:
                q_value = float(quality_part.strip().split("=")[1])
            except (IndexError, ValueError):
                q_value = 1.0
        else:
            lang = part
            q_value = 1.0

        if lang and lang != "*" and q_value > 0:
            languages.append((lang, q_value))

    # Sort by quality value (highest first); sort is stable for ties
    languages.sort(key=lambda x: x[1], reverse=True)

    for lang, _ in languages:
        exact = by_lower.get(lang.lower()) or by_lower.get(
            lang.lower().replace("-", "_")
        )
        if exact:
            return exact
        base = by_base.get(_base_language(lang))
        if base:
            return base

    return None


class LocaleMiddleware:
    """Pure ASGI middleware giving each request its own current locale.

    Every request starts from the default locale, or from the best
    Accept-Language match when `negotiate` is enabled. The instance is
    stored in scope["state"], so routes read it as `request.state.i18n`
    and `request.state.locals["i18n"]`. A Content-Language header with
    the locale active when the response starts is added.

    The locale lives in a contextvar scoped to the request, so handlers
    calling i18n.set_locale() never leak into concurrent requests. It is
    also mirrored into scope["state"], so switches made by sync handlers
    running in a threadpool reach the Content-Language header.
    """

    def __init__(
        self,
        app: ASGIApp,
        i18n: "I18n",
        *,
        negotiate: bool = False,
    ) -> None:
        self.app = app
        self.i18n = i18n
        self.negotiate = negotiate

    def _initial_locale(self, scope: Scope) -> str:
        if not self.negotiate:
            return self.i18n.default_locale
        accept_language = Headers(scope=scope).get("accept-language")
        negotiated = parse_accept_language(
            accept_language, self.i18n.available_locales()
        )
        return negotiated or self.i18n.default_locale

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI interface."""
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        locale = self._initial_locale(scope)

        # Ensure scope has a state dict for cross-thread communication
        if "state" not in scope:
            scope["state"] = {}
        scope["state"][I18N_SLOT] = self.i18n
        scope["state"].setdefault(LOCALS_SLOT, {})[I18N_SLOT] = self.i18n

        async def send_with_locale(message: Message) -> None:
            """Wrapper to add Content-Language header to response."""
            if message["type"] == "http.response.start":
                # Read locale from scope state (may have been updated by sync handlers)
                current_locale = (
                    self.i18n.locale_context.from_state(scope["state"]) or locale
                )
                response_headers = MutableHeaders(raw=list(message.get("headers", [])))
                response_headers["Content-Language"] = current_locale
                message["headers"] = response_headers.raw

            await send(message)

        state_token = set_request_state(scope["state"])
        try:
            with self.i18n.request_locale(locale):
                logger.debug("request_locale_set", locale=locale, path=scope.get("path"))
                await self.app(scope, receive, send_with_locale)
        finally:
            reset_request_state(state_token)
