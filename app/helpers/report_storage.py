"""Fetch generated financial reports from object storage, falling back to a fixture."""

import os
import json
import logging
from typing import Optional, Tuple
from urllib.parse import urlparse
from pydantic import TypeAdapter, ValidationError as SchemaValidationError
from google.cloud import storage
from google.api_core import exceptions as gcloud_exceptions
from google.auth.exceptions import GoogleAuthError
from app.models.report import ReportDocument, NormalizedReport
from app.exceptions import RemoteFetchError

# Set up a module-level logger
logger = logging.getLogger(__name__)

REPORT_BUCKET = os.environ.get("REPORT_BUCKET", "client-data-hfh")
REPORT_FETCH_TIMEOUT = float(os.environ.get("REPORT_FETCH_TIMEOUT", "5"))
STORAGE_SCHEMES = ("gs", "s3")

FALLBACK_REPORT = NormalizedReport(
    status="Success",
    current_payment=1000,
    current_frequency="monthly",
    new_frequency="quarterly",
    remaining_years=5,
    original_present_value=12100,
    new_equivalent_payment=11900,
    inflation_rate=0.032,
    risk_free_rate=0.035,
    storage_location=None,
    is_fallback=True,
)

_document_adapter = TypeAdapter(ReportDocument)
_storage_client = None


def get_storage_client() -> storage.Client:
    """Create the Cloud Storage client on first use."""
    global _storage_client
    if _storage_client is None:
        _storage_client = storage.Client()
    return _storage_client


def parse_storage_location(location: Optional[str]) -> Tuple[str, str]:
    """
    Split a storage location into (bucket, key).

    Accepts ``gs://bucket/key``, ``s3://bucket/key`` or the ``bucket/key`` shorthand.
    Every form names a Cloud Storage bucket: ``s3://`` locations written by the report
    pipeline are read from the GCS bucket of the same name. Other schemes are rejected.
    """
    if location is None or not location.strip():
        raise RemoteFetchError("location_missing", "Storage location is required")

    location = location.strip()
    if "://" in location:
        parsed = urlparse(location)
        if parsed.scheme not in STORAGE_SCHEMES:
            raise RemoteFetchError("malformed_location", f"Unsupported storage scheme: {parsed.scheme}")
        bucket, key = parsed.netloc, parsed.path.lstrip("/")
    else:
        bucket, _, key = location.partition("/")

    if not bucket or not key:
        raise RemoteFetchError("malformed_location", f"Invalid storage location format: {location}")
    return bucket, key


def normalize_report(document: dict, storage_location: Optional[str] = None) -> NormalizedReport:
    """Normalize a flat or a report_data-wrapped document into one shape."""
    if not isinstance(document, dict):
        raise RemoteFetchError("invalid_document", "Report document must be a JSON object")
    try:
        parsed = _document_adapter.validate_python(document)
    except SchemaValidationError as e:
        raise RemoteFetchError("invalid_document", f"Report document has unexpected shape: {e}")
    return NormalizedReport.from_document(parsed, storage_location=storage_location)


def _download_text(bucket_name: str, key: str) -> str:
    client = get_storage_client()
    blob = client.bucket(bucket_name).blob(key)
    return blob.download_as_text(timeout=REPORT_FETCH_TIMEOUT)


def fetch_report(location: Optional[str]) -> NormalizedReport:
    """Download and normalize a report. Raises RemoteFetchError with a reason on failure."""
    bucket_name, key = parse_storage_location(location)
    logger.info(f"🔍 Fetching report from bucket {bucket_name}, key {key}")

    try:
        body = _download_text(bucket_name, key)
    except gcloud_exceptions.NotFound as e:
        if "bucket" in str(e).lower():
            raise RemoteFetchError("bucket_not_found", f"Storage bucket not found: {bucket_name}")
        raise RemoteFetchError("object_not_found", f"Report file not found: {key}")
    except (gcloud_exceptions.GoogleAPIError, GoogleAuthError) as e:
        raise RemoteFetchError("remote_error", f"Storage error: {e}")
    except Exception as e:
        # timeouts and connection errors surface from the transport library
        raise RemoteFetchError("remote_error", f"Storage request failed: {e}")

    try:
        document = json.loads(body)
    except json.JSONDecodeError as e:
        raise RemoteFetchError("parse_error", f"Report is not valid JSON: {e}")

    report = normalize_report(document, storage_location=location)
    logger.info(f"✅ Report loaded from {location}")
    return report


def resolve_report(location: Optional[str]) -> NormalizedReport:
    """Report to display for a request. Never raises; uses the fixture when fetching fails."""
    try:
        return fetch_report(location)
    except RemoteFetchError as e:
        logger.warning(f"⚠️ Using fallback report ({e.reason}): {e.message}")
        return FALLBACK_REPORT.model_copy(update={"storage_location": location or None})
