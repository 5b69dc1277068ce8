"""Example FastAPI application using i18n-light.

Run with:
    uvicorn example.server:app --reload
"""

from pathlib import Path

from fastapi import FastAPI, Request

from i18n_light import I18n, LocaleMiddleware
from i18n_light.core.logging import get_logger, setup_logging

DICT_DIR = Path(__file__).parent / "dict"

setup_logging()
logger = get_logger(__name__)


def create_app(i18n: I18n | None = None) -> FastAPI:
    """Create the example application."""
    i18n = i18n or I18n().configure(
        default_locale="en",
        directory=DICT_DIR,
        extension="json",
        fallback=True,
        cache=True,
        refresh=False,
    )

    app = FastAPI(title="i18n-light example")
    app.add_middleware(LocaleMiddleware, i18n=i18n, negotiate=True)

    def render(request: Request) -> dict[str, str]:
        i18n: I18n = request.state.i18n
        return {
            "locale": i18n.get_locale(),
            "hello": i18n.translate("greetings.hello"),
            "bye": i18n.translate("greetings.bye"),
        }

    @app.get("/")
    async def index(request: Request) -> dict[str, str]:
        request.state.i18n.set_locale("en")
        return render(request)

    @app.get("/it")
    async def index_it(request: Request) -> dict[str, str]:
        request.state.i18n.set_locale("it")
        return render(request)

    @app.get("/hello/{name}")
    async def hello(request: Request, name: str) -> dict[str, str]:
        return {"message": request.state.i18n.translate("greetings.hello_name", name)}

    @app.get("/messages/{count}")
    async def messages(request: Request, count: int) -> dict[str, str]:
        i18n: I18n = request.state.i18n
        return {"message": i18n.translate_counted("messages", count, count)}

    logger.info("example_app_created", locales=i18n.available_locales())
    return app


app = create_app()
