import os
import logging
from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from fastapi.concurrency import run_in_threadpool
from app.helpers import report_storage
from app.models.report import ReportFetchRequest
from app.exceptions import RemoteFetchError

# Set up a module-level logger
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])

# HTTP status returned for each fetch failure reason
FAILURE_STATUS = {
    "location_missing": 400,
    "malformed_location": 400,
    "object_not_found": 404,
    "bucket_not_found": 404,
    "parse_error": 502,
    "invalid_document": 502,
    "remote_error": 502,
}


@router.post("/storage")
async def fetch_report(data: dict = Body(...)):
    """Fetch a report document from storage and return it normalized."""
    request = ReportFetchRequest.model_validate(data)

    try:
        report = await run_in_threadpool(report_storage.fetch_report, request.storage_location)
    except RemoteFetchError as e:
        logger.error(f"❌ Report fetch failed ({e.reason}): {e.message}")
        return JSONResponse(
            status_code=FAILURE_STATUS.get(e.reason, 502),
            content={"success": False, "reason": e.reason, "error": e.message}
        )

    return {"success": True, "data": report.model_dump()}


@router.get("/storage")
async def storage_status():
    """Report storage configuration probe."""
    return {
        "success": True,
        "message": "Report storage endpoint is working",
        "config": {
            "bucket": report_storage.REPORT_BUCKET,
            "timeout_seconds": report_storage.REPORT_FETCH_TIMEOUT,
            "hasCredentials": bool(os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")),
        }
    }
