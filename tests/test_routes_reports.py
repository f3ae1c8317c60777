import json
import time
import asyncio
import httpx
import pytest
from unittest.mock import patch
from google.api_core import exceptions as gcloud_exceptions
from app.helpers import report_storage
from app.main import app

DOCUMENT = {
    "status": "Success",
    "report_data": {
        "inputs": {
            "current_payment_MYR": 1200,
            "current_frequency": "monthly",
            "new_frequency": "quarterly",
            "remaining_years": 4,
        },
        "calculation_results": {
            "original_present_value_MYR": 52000,
            "new_equivalent_payment_MYR": 3550,
        },
    },
}


def test_fetch_report(client):
    with patch.object(report_storage, "_download_text", return_value=json.dumps(DOCUMENT)):
        response = client.post("/api/reports/storage", json={"s3Location": "s3://client-data/r.json"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["current_payment"] == 1200
    assert data["new_equivalent_payment"] == 3550
    assert data["inflation_rate"] is None
    assert data["storage_location"] == "s3://client-data/r.json"


def test_fetch_without_location(client):
    response = client.post("/api/reports/storage", json={})

    assert response.status_code == 400
    assert response.json() == {
        "success": False, "reason": "location_missing", "error": "Storage location is required"
    }


def test_fetch_missing_object(client):
    with patch.object(report_storage, "_download_text",
                      side_effect=gcloud_exceptions.NotFound("No such object: client-data/r.json")):
        response = client.post("/api/reports/storage", json={"storageLocation": "client-data/r.json"})

    assert response.status_code == 404
    assert response.json()["reason"] == "object_not_found"


def test_fetch_unparseable_report(client):
    with patch.object(report_storage, "_download_text", return_value="not json"):
        response = client.post("/api/reports/storage", json={"storageLocation": "client-data/r.json"})

    assert response.status_code == 502
    assert response.json()["reason"] == "parse_error"


def test_storage_probe(client):
    body = client.get("/api/reports/storage").json()
    assert body["success"] is True
    assert body["config"]["bucket"] == report_storage.REPORT_BUCKET


@pytest.mark.asyncio
async def test_slow_download_does_not_block_event_loop():
    def slow_download(bucket_name, key):
        time.sleep(0.5)
        return json.dumps(DOCUMENT)

    async def tick(started):
        await asyncio.sleep(0.01)
        return time.perf_counter() - started

    transport = httpx.ASGITransport(app=app)
    with patch.object(report_storage, "_download_text", side_effect=slow_download):
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            started = time.perf_counter()
            response, elapsed = await asyncio.gather(
                client.post("/api/reports/storage", json={"storageLocation": "client-data/r.json"}),
                tick(started),
            )

    assert response.status_code == 200
    assert elapsed < 0.3
