from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from commonsattributor.application.services.attribution_service import (
    AttributionService,
    AttributionSession,
    MetadataFetcher,
)
from commonsattributor.core.config import VERSION, AppConfig
from commonsattributor.core.errors import NoResultError
from commonsattributor.domain.models.attribution import CreditFormat
from commonsattributor.infrastructure.commons.fetcher import CommonsMetadataFetcher

_ERROR_STATUS = {
    "validation": 422,
    "not_found": 404,
    "transport": 404,
    "unexpected": 500,
}


class AttributionRequest(BaseModel):
    url: str
    with_icons: bool = False


def create_app(config: AppConfig, fetcher: MetadataFetcher | None = None) -> FastAPI:
    app = FastAPI(title="Commons Attributor", version=VERSION)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    metadata_fetcher = fetcher or CommonsMetadataFetcher(config)
    session = AttributionSession()
    app.state.session = session

    @app.get("/api/health")
    def api_health() -> dict[str, Any]:
        return {"ok": True, "version": VERSION}

    @app.post("/api/attribution")
    async def api_attribution(req: AttributionRequest) -> Any:
        service = AttributionService(metadata_fetcher, session, with_icons=req.with_icons)
        outcome = await service.run_attribution(req.url)
        if not outcome.ok:
            return JSONResponse(
                status_code=_ERROR_STATUS.get(outcome.error_kind or "", 500),
                content={"ok": False, "error": outcome.error},
            )
        return {
            "ok": True,
            "display_name": outcome.display_name,
            "record": asdict(outcome.record),
            "credits": asdict(outcome.credits),
        }

    @app.get("/api/credit")
    def api_credit(fmt: CreditFormat = Query(CreditFormat.FORMATTED, alias="format")) -> dict[str, Any]:
        try:
            credit = session.current_credit(fmt)
        except NoResultError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"ok": True, "format": fmt.value, "credit": credit}

    @app.get("/api/record")
    def api_record() -> dict[str, Any]:
        current = session.current
        if current is None:
            raise HTTPException(status_code=404, detail="No attribution result is available yet.")
        return {"ok": True, "record": asdict(current.record)}

    return app
