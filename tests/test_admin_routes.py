"""
Tests for the admin dashboard, report review and company settings pages.
"""
from io import BytesIO
from openpyxl import load_workbook


def _submit(client, data):
    return client.post("/api/requests/client", json=data).json()["requestId"]


class TestDashboard:

    def test_lists_requests(self, client, valid_request_data):
        request_id = _submit(client, valid_request_data)

        response = client.get("/admin/dashboard")
        assert response.status_code == 200
        assert request_id in response.text
        assert f"/admin/report?requestId={request_id}" in response.text

    def test_status_filter(self, client, valid_request_data):
        pending_id = _submit(client, valid_request_data)
        rejected_id = _submit(client, valid_request_data)
        client.patch("/api/requests/client", json={"requestId": rejected_id, "status": "rejected"})

        response = client.get("/admin/dashboard", params={"status": "rejected"})
        assert rejected_id in response.text
        assert pending_id not in response.text

    def test_export_to_excel(self, client, valid_request_data):
        request_id = _submit(client, valid_request_data)

        response = client.get("/admin/export/requests")

        assert response.status_code == 200
        assert response.headers["content-disposition"] == "attachment; filename=client_requests.xlsx"
        sheet = load_workbook(BytesIO(response.content)).active
        rows = list(sheet.values)
        assert rows[0][0] == "Request ID"
        assert rows[1][0] == request_id
        assert rows[1][8] == "pending"


class TestReportReview:

    def test_pending_request_shows_review_controls(self, client, valid_request_data):
        request_id = _submit(client, valid_request_data)

        response = client.get("/admin/report", params={"requestId": request_id})

        assert response.status_code == 200
        assert 'value="accepted"' in response.text
        assert 'value="rejected"' in response.text
        assert "already been reviewed" not in response.text

    def test_reviewed_request_hides_controls(self, client, valid_request_data):
        request_id = _submit(client, valid_request_data)
        client.patch("/api/requests/client", json={"requestId": request_id, "status": "rejected"})

        response = client.get("/admin/report", params={"requestId": request_id})

        assert "Request REJECTED" in response.text
        assert 'value="accepted"' not in response.text

    def test_accept_from_report_page(self, client, valid_request_data):
        request_id = _submit(client, valid_request_data)

        response = client.post(f"/admin/report/{request_id}/status",
                               data={"status": "accepted", "report_location": "s3://client-data/r.json"},
                               follow_redirects=False)

        assert response.status_code == 303
        stored = client.get("/api/requests/client", params={"requestId": request_id}).json()["data"][0]
        assert stored["status"] == "accepted"
        assert stored["report_location"] == "s3://client-data/r.json"

    def test_start_implementation_after_client_approval(self, client, valid_request_data):
        request_id = _submit(client, valid_request_data)
        for status in ("accepted", "client approved"):
            client.patch("/api/requests/client", json={"requestId": request_id, "status": status})

        page = client.get("/admin/report", params={"requestId": request_id})
        assert "Start Implementation" in page.text

        response = client.post(f"/admin/report/{request_id}/status", data={"status": "implementation"},
                               follow_redirects=False)
        assert response.status_code == 303

    def test_invalid_transition_is_refused(self, client, valid_request_data):
        request_id = _submit(client, valid_request_data)

        response = client.post(f"/admin/report/{request_id}/status", data={"status": "implementation"},
                               follow_redirects=False)
        assert response.status_code == 400

    def test_unknown_request(self, client):
        response = client.get("/admin/report", params={"requestId": "REQ-0-NOPE"})
        assert response.status_code == 404


class TestSettings:

    def test_settings_page_shows_defaults(self, client):
        response = client.get("/admin/settings")
        assert response.status_code == 200
        assert 'value="Saas E"' in response.text
        assert 'value="2, 3, 6, 12"' in response.text

    def test_save_company_info(self, client):
        response = client.post("/admin/settings/company-info",
                               data={"company_name": "Acme", "base_currency": "usd", "tax_rate": "8"},
                               follow_redirects=False)
        assert response.status_code == 303
        assert 'value="Acme"' in client.get("/admin/settings").text

    def test_invalid_tax_rate_is_rejected(self, client):
        response = client.post("/admin/settings/company-info",
                               data={"company_name": "Acme", "tax_rate": "150"})
        assert response.status_code == 400
        assert "tax_rate" in response.text

    def test_save_payment_terms(self, client):
        response = client.post("/admin/settings/payment-terms",
                               data={"default_payment_days": "14", "installment_options": "12, 3, x, 6"},
                               follow_redirects=False)
        assert response.status_code == 303
        assert 'value="3, 6, 12"' in client.get("/admin/settings").text

    def test_save_feature_pricing(self, client):
        response = client.post("/admin/settings/feature-pricing",
                               data={"base_price": "8000", "development_hourly_rate": "200",
                                     "multiplier_high": "3"},
                               follow_redirects=False)
        assert response.status_code == 303
        assert 'value="8000.0"' in client.get("/admin/settings").text
