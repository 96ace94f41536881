from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse

from readme_render.models import RenderRequest, RenderResponse
from readme_render.services.input_limits import RenderInputTooLarge, check_input_size
from readme_render.services.markdown_render import render_markdown_safe
from readme_render.services.policy import build_policy
from readme_render.settings import Settings, configure_logging, load_settings


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_dotenv()
    settings = load_settings()
    configure_logging(settings)
    app.state.settings = settings
    logger.info("readme-render started (env=%s, max_input_bytes=%d)", settings.app_env, settings.max_input_bytes)
    yield


app = FastAPI(title="readme-render", lifespan=lifespan)


def _settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = load_settings()
        request.app.state.settings = settings
    return settings


@app.exception_handler(RenderInputTooLarge)
async def input_too_large(request: Request, exc: RenderInputTooLarge):
    logger.warning("Rejected %s: %s", request.url.path, exc)
    return JSONResponse({"detail": str(exc)}, status_code=413)


@app.get("/health")
async def health(request: Request):
    settings = _settings(request)
    return JSONResponse(
        {
            "ok": True,
            "app_env": settings.app_env,
            "max_input_bytes": settings.max_input_bytes,
        }
    )


@app.post("/api/render", response_model=RenderResponse)
async def render_api(request: Request, body: RenderRequest) -> RenderResponse:
    check_input_size(body.text, _settings(request).max_input_bytes)
    html = render_markdown_safe(body.text, body.base_url)
    return RenderResponse(html=html, relative_links=build_policy(body.base_url).url_policy.name)


@app.post("/render", response_class=HTMLResponse)
async def render_fragment(
    request: Request,
    text: str = Form(""),
    base_url: str | None = Form(None),
):
    check_input_size(text, _settings(request).max_input_bytes)
    return HTMLResponse(render_markdown_safe(text, base_url or None))
