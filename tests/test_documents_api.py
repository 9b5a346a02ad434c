def _upload(client, headers, employee_id, document_type="payslip", month="2024-04", url="https://files/doc.pdf"):
    payload = {"employee_id": employee_id, "document_type": document_type, "document_url": url}
    if month is not None:
        payload["month"] = month
    return client.post("/api/employee-documents", json=payload, headers=headers)


def test_admin_uploads_and_employee_reads_payslip(client, team, auth_headers):
    bde = team["bde"]
    r = _upload(client, auth_headers(team["admin"]), bde.id)
    assert r.status_code == 201
    assert r.json()["uploaded_by"] == team["admin"].id

    r = client.get(f"/api/employee-documents/{bde.id}/payslips/2024-04", headers=auth_headers(bde))
    assert r.status_code == 200
    assert r.json()["month"] == "2024-04"

    assert client.get(
        f"/api/employee-documents/{bde.id}/payslips/2024-05", headers=auth_headers(bde)
    ).status_code == 404
    assert client.get(
        f"/api/employee-documents/{bde.id}/payslips/April", headers=auth_headers(bde)
    ).status_code == 400


def test_payslip_requires_valid_month(client, team, auth_headers):
    headers = auth_headers(team["admin"])
    assert _upload(client, headers, team["bde"].id, month=None).status_code == 422
    assert _upload(client, headers, team["bde"].id, month="2024-13").status_code == 422


def test_offer_letter_ignores_month(client, team, auth_headers):
    bde = team["bde"]
    r = _upload(client, auth_headers(team["admin"]), bde.id, document_type="offer_letter", month="2024-04")
    assert r.status_code == 201
    assert r.json()["month"] is None

    r = client.get(f"/api/employee-documents/{bde.id}/offer-letter", headers=auth_headers(bde))
    assert r.status_code == 200
    assert r.json()["document_type"] == "offer_letter"


def test_document_listing_and_access(client, team, auth_headers):
    bde = team["bde"]
    admin_headers = auth_headers(team["admin"])
    _upload(client, admin_headers, bde.id)
    _upload(client, admin_headers, bde.id, document_type="offer_letter", month=None)

    assert len(client.get(f"/api/employee-documents/{bde.id}", headers=auth_headers(bde)).json()) == 2
    r = client.get(f"/api/employee-documents/{bde.id}", params={"document_type": "payslip"}, headers=auth_headers(bde))
    assert [d["document_type"] for d in r.json()] == ["payslip"]

    assert client.get(f"/api/employee-documents/{bde.id}", headers=auth_headers(team["bde2"])).status_code == 403
    assert _upload(client, auth_headers(bde), bde.id).status_code == 403
    assert _upload(client, admin_headers, 999).status_code == 404


def test_delete_document(client, team, auth_headers):
    admin_headers = auth_headers(team["admin"])
    document = _upload(client, admin_headers, team["bde"].id).json()

    assert client.delete(f"/api/employee-documents/{document['id']}", headers=auth_headers(team["bde"])).status_code == 403
    assert client.delete(f"/api/employee-documents/{document['id']}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/employee-documents/{document['id']}", headers=admin_headers).status_code == 404
