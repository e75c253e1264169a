import logging
import threading
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from jinja2 import TemplateError

from redirector.config import settings
from redirector.filesystem import resource_dir
from redirector.redirects import load_redirects_file
from redirector.runner import verify_targets
from redirector.rendering import build_templates

logger = logging.getLogger(__name__)

router = APIRouter()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Target checks are advisory: they only log, and never hold up startup.
    if app.state.development:
        t = threading.Thread(
            target=verify_targets,
            args=(
                list(app.state.redirects.values()),
                app.state.check_workers,
                app.state.check_timeout_s,
            ),
            name="startup-url-check",
            daemon=True,
        )
        t.start()
    yield


def create_app(
    development: bool = settings.DEVELOPMENT,
    check_timeout_s: float = settings.CHECK_TIMEOUT_S,
    check_workers: int = settings.CHECK_WORKERS,
    data_file: str = settings.DATA_FILE,
) -> FastAPI:
    """
    Build the redirect server.

    Templates, static files and the short url csv come from the package
    itself, or from the working directory when ``development`` is set.
    """
    templates_dir = resource_dir(development, "templates")
    static_dir = resource_dir(development, "static")
    data_dir = resource_dir(development, "data")

    app = FastAPI(
        title="URL Redirector",
        version="1.0.0",
        description="Redirects short urls listed in a csv file to their targets.",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.development = development
    app.state.check_timeout_s = check_timeout_s
    app.state.check_workers = check_workers
    app.state.templates = build_templates(templates_dir, development)
    app.state.redirects = load_redirects_file(data_dir / data_file)
    logger.info(
        "Loaded %d redirects (development=%s)", len(app.state.redirects), development
    )

    # Mounted ahead of the router so the catch-all routes never see /static/.
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
    app.include_router(router)
    return app


def render(request: Request, source: str, name: str, context: dict, status_code: int = 200) -> Response:
    try:
        return request.app.state.templates.TemplateResponse(
            request, name, context, status_code=status_code
        )
    except TemplateError as exc:
        return error_output(source, exc)


def error_output(source: str, err: Exception) -> PlainTextResponse:
    logger.error("%s template error %s", source, err)
    return PlainTextResponse(
        f"template writing problem at {source}: {err}", status_code=500
    )


@router.get("/")
def home(request: Request):
    return render(request, "home", "home.html", {"title": "Home"})


@router.get("/{short_code}")
def redirect(request: Request, short_code: str):
    target = request.app.state.redirects.get(short_code)
    if target is not None:
        return RedirectResponse(target, status_code=301)
    return render(
        request,
        "redirection not found",
        "404.html",
        {"title": "Redirection not found", "url": short_code, "invalid_path": False},
        status_code=404,
    )


@router.get("/{any_path:path}")
def invalid(request: Request, any_path: str):
    return render(
        request,
        "not found",
        "404.html",
        {"title": "Invalid Path", "url": any_path, "invalid_path": True},
        status_code=404,
    )
