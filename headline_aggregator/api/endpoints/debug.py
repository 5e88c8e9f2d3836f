
import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from ..dependencies import get_diagnostics
from ...services.diagnostics import DiagnosticsService


logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/debug")
async def debug_primary_page(diagnostics: DiagnosticsService = Depends(get_diagnostics)):
    """Raw fetch and selector counts for the front page, bypassing the cache"""
    report = await run_in_threadpool(diagnostics.inspect_primary)
    if not report["success"]:
        logger.warning("debug_fetch_failed", error=report["error"])
        return JSONResponse(status_code=500, content={"error": report["error"], "status": report["status"]})
    return report
