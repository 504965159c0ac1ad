"""
Jump Scare Markers: Admin & Segment API
=======================================

HTTP surface over JumpScareBackend.

Endpoints:
- POST   /JumpScareMarkers/Import              -> ImportResult (multipart CSV)
- GET    /JumpScareMarkers/Item/{item_id}      -> records for one item
- GET    /JumpScareMarkers/All                 -> all records
- GET    /JumpScareMarkers/Statistics          -> aggregate counts
- DELETE /JumpScareMarkers/All                 -> clear everything
- POST   /JumpScareMarkers/RefreshSegments     -> acknowledge refresh
- GET    /JumpScareMarkers/Segments/{item_id}  -> display intervals
- GET    /JumpScareMarkers/Configuration       -> current offsets
- POST   /JumpScareMarkers/Configuration       -> update offsets

Usage:
    uvicorn jumpscare.api.server:app --reload
"""
from contextlib import asynccontextmanager
from typing import List, Optional
import logging

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..engine import JumpScareBackend, ServiceConfig
from ..contracts.records import ImportResult

logger = logging.getLogger(__name__)

ROUTE_PREFIX = "/JumpScareMarkers"


# =============================================================================
# DTOs
# =============================================================================

class OffsetsDTO(BaseModel):
    start_delta_seconds: int
    end_delta_seconds: int


class SegmentDTO(BaseModel):
    id: str
    item_id: str
    start_ticks: int
    end_ticks: int


class RecordDTO(BaseModel):
    id: str
    item_id: str
    timestamp_ticks: int
    description: Optional[str] = None
    type: Optional[str] = None
    intensity: Optional[str] = None
    item_name: Optional[str] = None
    source: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


def _failed_import(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ImportResult(success=False, message=message).to_dict()
    )


# =============================================================================
# APP FACTORY
# =============================================================================

def create_app(backend: Optional[JumpScareBackend] = None) -> FastAPI:
    """
    Build the API app.

    With no backend given, one is built from the environment on startup
    (JUMPSCARE_STORAGE_DIR, JUMPSCARE_CATALOG_PATH).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "backend", None) is None:
            config = ServiceConfig.from_env()
            logger.info("Initializing backend (storage=%s, dir=%s, catalog=%s)",
                        config.storage_type, config.storage_dir, config.catalog_path)
            app.state.backend = JumpScareBackend(config)
        yield
        logger.info("Shutting down backend")

    app = FastAPI(
        title="Jump Scare Markers API",
        version="0.1.0",
        description="Import and serve jump scare timeline segments",
        lifespan=lifespan
    )
    app.state.backend = backend

    def get_backend(request: Request) -> JumpScareBackend:
        instance = request.app.state.backend
        if instance is None:
            raise HTTPException(status_code=503, detail="Backend not initialized")
        return instance

    # =========================================================================
    # ENDPOINTS
    # =========================================================================

    @app.get("/health")
    async def health_check(request: Request):
        get_backend(request)
        return {"status": "online"}

    @app.post(f"{ROUTE_PREFIX}/Import")
    def import_csv(request: Request, file: Optional[UploadFile] = File(None)):
        backend_ = get_backend(request)
        if file is None:
            return _failed_import(400, "No file uploaded")

        filename = file.filename or ""
        if not filename.lower().endswith(".csv"):
            return _failed_import(400, "File must be a CSV file")

        raw = file.file.read()
        if not raw:
            return _failed_import(400, "No file uploaded")

        try:
            csv_content = raw.decode("utf-8-sig")
        except UnicodeDecodeError:
            return _failed_import(400, "File must be UTF-8 encoded text")

        logger.info("Importing CSV file: %s (%d bytes)", filename, len(raw))
        result = backend_.import_csv(csv_content)
        return result.to_dict()

    @app.get(f"{ROUTE_PREFIX}/Item/{{item_id}}", response_model=List[RecordDTO])
    async def get_item_records(item_id: str, request: Request):
        records = get_backend(request).get_records_for_item(item_id)
        return [r.to_dict() for r in records]

    @app.get(f"{ROUTE_PREFIX}/All", response_model=List[RecordDTO])
    async def get_all_records(request: Request):
        return [r.to_dict() for r in get_backend(request).get_all_records()]

    @app.get(f"{ROUTE_PREFIX}/Statistics")
    async def get_statistics(request: Request):
        return get_backend(request).get_statistics().to_dict()

    @app.delete(f"{ROUTE_PREFIX}/All")
    def clear_all(request: Request):
        logger.warning("Clearing all jump scare data")
        if get_backend(request).clear_all():
            return {"success": True, "message": "All jump scares cleared"}
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Failed to clear data"}
        )

    @app.post(f"{ROUTE_PREFIX}/RefreshSegments")
    async def refresh_segments(request: Request):
        get_backend(request)
        logger.info("Segment refresh requested")
        return {
            "success": True,
            "message": "Segments are derived on every query; clients may need to reload the player."
        }

    @app.get(f"{ROUTE_PREFIX}/Segments/{{item_id}}", response_model=List[SegmentDTO])
    async def get_segments(item_id: str, request: Request):
        return [s.to_dict() for s in get_backend(request).get_segments(item_id)]

    @app.get(f"{ROUTE_PREFIX}/Configuration", response_model=OffsetsDTO)
    async def get_configuration(request: Request):
        start, end = get_backend(request).get_offsets()
        return OffsetsDTO(start_delta_seconds=start, end_delta_seconds=end)

    @app.post(f"{ROUTE_PREFIX}/Configuration", response_model=OffsetsDTO)
    def update_configuration(offsets: OffsetsDTO, request: Request):
        backend_ = get_backend(request)
        if not backend_.update_offsets(offsets.start_delta_seconds, offsets.end_delta_seconds):
            raise HTTPException(status_code=500, detail="Failed to save configuration")
        return offsets

    return app


app = create_app()
