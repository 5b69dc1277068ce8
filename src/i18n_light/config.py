"""Instance configuration and origin selection.

An instance reads its phrase trees from exactly one origin, chosen once
at configure time:
- directory: one file per locale at {directory}/{locale}{extension}
- static: an in-memory mapping of locale -> phrase tree
- resolver: a callback returning the phrase tree for a locale
"""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from i18n_light.core.config import DEFAULT_EXTENSION, Settings, normalize_extension
from i18n_light.core.exceptions import ConfigError

PhraseTree = Mapping[str, Any]
PhraseResolver = Callable[[str], PhraseTree]

# Origin keyword options, in the order they are reported
ORIGIN_OPTIONS: tuple[str, ...] = ("directory", "static_context", "resolver")


class DirectoryOrigin(BaseModel):
    """Phrase trees stored as JSON files, one per locale."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["directory"] = "directory"
    directory: Path
    extension: str = DEFAULT_EXTENSION

    @field_validator("extension", mode="before")
    @classmethod
    def validate_extension(cls, v: str | None) -> str:
        return normalize_extension(v)


class StaticOrigin(BaseModel):
    """Phrase trees supplied up front for every locale."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["static"] = "static"
    context: dict[str, dict[str, Any]]


class ResolverOrigin(BaseModel):
    """Phrase trees produced on demand by a user callback."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["resolver"] = "resolver"
    resolver: PhraseResolver


Origin = Annotated[
    DirectoryOrigin | StaticOrigin | ResolverOrigin,
    Field(discriminator="kind"),
]


class I18nOptions(BaseModel):
    """Validated, immutable configuration of an I18n instance."""

    model_config = ConfigDict(frozen=True)

    default_locale: str
    origin: Origin
    fallback: bool = True
    cache: bool = True
    refresh_on_switch: bool = False

    @field_validator("default_locale", mode="before")
    @classmethod
    def validate_default_locale(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError("default_locale must be a non-empty string")
        return v

    def with_default_locale(self, locale: str) -> "I18nOptions":
        """Return a copy with a different default locale."""
        data = self.model_dump(exclude={"origin"})
        data["default_locale"] = locale
        return _validate(origin=self.origin, **data)


def _validate(**data: Any) -> I18nOptions:
    try:
        return I18nOptions(**data)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        option = ".".join(str(part) for part in errors[0]["loc"]) if errors else None
        if option == "default_locale":
            raise ConfigError(
                "Please provide a default_locale for your application.",
                option="default_locale",
            ) from e
        raise ConfigError(
            f"Invalid i18n configuration: {errors[0]['msg'] if errors else e}",
            option=option,
            details={"errors": errors},
        ) from e


def build_options(
    default_locale: str | None = None,
    *,
    directory: str | Path | None = None,
    extension: str | None = None,
    static_context: Mapping[str, PhraseTree] | None = None,
    resolver: PhraseResolver | None = None,
    fallback: bool = True,
    cache: bool = True,
    refresh: bool = False,
) -> I18nOptions:
    """Build I18nOptions from keyword arguments.

    Exactly one of directory, static_context or resolver must be supplied.

    Raises:
        ConfigError: default_locale is missing/empty, or zero or several
            origins were supplied.
    """
    supplied = {
        "directory": directory,
        "static_context": static_context,
        "resolver": resolver,
    }
    present = [name for name in ORIGIN_OPTIONS if supplied[name] is not None]

    if not default_locale:
        raise ConfigError(
            "Please provide a default_locale for your application.",
            option="default_locale",
        )
    if not present:
        raise ConfigError(
            "Please provide a directory, static_context or resolver for your application.",
            option="origin",
        )
    if len(present) > 1:
        raise ConfigError(
            f"Only one origin may be configured, got: {', '.join(present)}",
            option="origin",
            details={"origins": present},
        )

    origin: dict[str, Any]
    if directory is not None:
        if not str(directory):
            raise ConfigError(
                "Please provide a directory for your application.", option="directory"
            )
        origin = {"kind": "directory", "directory": directory, "extension": extension}
    elif static_context is not None:
        if not static_context:
            raise ConfigError(
                "static_context must contain at least one locale",
                option="static_context",
            )
        origin = {"kind": "static", "context": dict(static_context)}
    else:
        if not callable(resolver):
            raise ConfigError("resolver must be callable", option="resolver")
        origin = {"kind": "resolver", "resolver": resolver}

    return _validate(
        default_locale=default_locale,
        origin=origin,
        fallback=fallback,
        cache=cache,
        refresh_on_switch=refresh,
    )


def options_from_settings(settings: Settings) -> I18nOptions:
    """Build I18nOptions from process settings (I18N_* environment variables)."""
    return build_options(
        settings.DEFAULT_LOCALE,
        directory=settings.DIRECTORY,
        extension=settings.EXTENSION,
        fallback=settings.FALLBACK,
        cache=settings.CACHE,
        refresh=settings.REFRESH,
    )
