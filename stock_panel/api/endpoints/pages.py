"""
Stock Panel - Page Routes
HTML pages and static assets of the web client.
Pages are not access-controlled; the client checks its token via /auth/verify.
"""
from pathlib import Path

from fastapi import APIRouter, FastAPI
from fastapi.responses import FileResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from stock_panel.config import settings
from stock_panel.utils.exceptions import NotFoundError

router = APIRouter()

# URL path -> file under <WEB_DIR>/pages
PAGES = {
    "/login": "login.html",
    "/register": "register.html",
    "/forgot-password": "forgot-password.html",
    "/reset-password": "reset-password.html",
    "/web/": "index.html",
    "/web/list/": "list.html",
    "/web/dashboard/": "dashboard.html",
    "/web/alerts/": "alerts.html",
}


def web_root() -> Path:
    return Path(settings.WEB_DIR)


def serve_page(filename: str) -> FileResponse:
    path = web_root() / "pages" / filename
    if not path.is_file():
        raise NotFoundError("Page not found")
    return FileResponse(path, media_type="text/html")


def _page_endpoint(filename: str):
    async def endpoint() -> FileResponse:
        return serve_page(filename)
    return endpoint


def _redirect_endpoint(target: str):
    async def endpoint() -> RedirectResponse:
        return RedirectResponse(url=target, status_code=302)
    return endpoint


@router.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    return RedirectResponse(url="/login", status_code=302)


for _path, _filename in PAGES.items():
    router.add_api_route(_path, _page_endpoint(_filename), methods=["GET"], include_in_schema=False)
    if _path.startswith("/web") and _path != "/web/":
        # /web/list -> /web/list/
        router.add_api_route(
            _path.rstrip("/"), _redirect_endpoint(_path), methods=["GET"], include_in_schema=False
        )


@router.get("/web", include_in_schema=False)
async def web_index_redirect() -> RedirectResponse:
    return RedirectResponse(url="/web/", status_code=302)


def mount_static(app: FastAPI) -> None:
    """Serve <WEB_DIR>/js and <WEB_DIR>/css under /web. Absent folders are skipped."""
    for folder in ("js", "css"):
        directory = web_root() / folder
        if not directory.is_dir():
            continue
        app.mount(f"/web/{folder}", StaticFiles(directory=str(directory)), name=f"web-{folder}")
