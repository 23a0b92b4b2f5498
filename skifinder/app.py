from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .catalog.config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .catalog.errors import TIMEOUT, CatalogError
from .recommendations.config import WIZARD_STEPS
from .recommendations.models import (
    CatalogResponse,
    ErrorResponse,
    PreferenceSet,
    RecommendationResponse,
)
from .recommendations.retrieval import get_recommendations, list_catalog

logger = logging.getLogger(__name__)

app = FastAPI(title="Ski Finder API", version="1.0.0")

# The wizard is hosted on another origin and calls the API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


CATALOG_ERROR_RESPONSES: dict = {
    status: {"model": ErrorResponse} for status in (500, 502, 504)
}


def get_catalog_config() -> CatalogConfig:
    return DEFAULT_CATALOG_CONFIG


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.kind == TIMEOUT:
        error = f"The request timed out. Try again with a better network connection. ({exc.message})"
    else:
        error = f"The request failed while fetching the ski catalog: {exc.message}"
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=error, kind=exc.kind).model_dump(),
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {"steps": WIZARD_STEPS}


@app.get("/skis", response_model=CatalogResponse, responses=CATALOG_ERROR_RESPONSES)
def skis(
    gender: str | None = None,
    ability: str | None = None,
    piste: str | None = None,
    config: CatalogConfig = Depends(get_catalog_config),
) -> CatalogResponse:
    return list_catalog({"gender": gender, "ability": ability, "piste": piste}, config=config)


@app.post(
    "/recommendations",
    response_model=RecommendationResponse,
    responses=CATALOG_ERROR_RESPONSES,
)
def recommendations(
    body: PreferenceSet,
    config: CatalogConfig = Depends(get_catalog_config),
) -> RecommendationResponse:
    return get_recommendations(body, config=config)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run("skifinder.app:app", host="0.0.0.0", port=8000)
