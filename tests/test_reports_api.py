import pytest

from emphub.models.product import Product


VISIT = {
    "store_name": "Shree Stores",
    "owner_name": "Ramesh",
    "location": "Kothrud, Pune",
    "phone_number": "9822000000",
    "photo_url": "https://example.com/photo.jpg",
    "products_interested": ["POS", "QR"],
}

VERIFICATION = {
    "merchant_name": "Ramesh",
    "mobile_number": "9822000000",
    "business_name": "Shree Stores",
    "full_address": "12 MG Road, Pune",
    "verification_video": "video-url",
    "shop_photo": "shop-url",
    "shop_owner_photo": "owner-url",
    "aadhaar_card_photo": "aadhaar-url",
    "pan_card_photo": "pan-url",
    "store_outside_photo": "outside-url",
}


@pytest.fixture
def product(db):
    item = Product(name="POS Machine", points=25)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def _sale(product_id, **overrides):
    payload = {
        "merchant_name": "Shree Stores",
        "merchant_mobile": "9822000000",
        "location": "Pune",
        "amount": 1500,
        "transaction_id": "TXN1",
        "payment_mode": "upi",
        "product_id": product_id,
    }
    payload.update(overrides)
    return payload


# Visit reports

def test_bde_files_visit_report_for_self(client, team, auth_headers):
    r = client.post("/api/visit-reports", json=VISIT, headers=auth_headers(team["bde"]))
    assert r.status_code == 201
    assert r.json()["bde_id"] == team["bde"].id
    assert r.json()["products_interested"] == ["POS", "QR"]


def test_bde_cannot_file_for_someone_else(client, team, auth_headers):
    r = client.post(
        "/api/visit-reports", json=dict(VISIT, bde_id=team["bde2"].id), headers=auth_headers(team["bde"])
    )
    assert r.status_code == 403


def test_admin_files_on_behalf_of_bde(client, team, auth_headers):
    headers = auth_headers(team["admin"])

    assert client.post("/api/visit-reports", json=VISIT, headers=headers).status_code == 400
    assert client.post(
        "/api/visit-reports", json=dict(VISIT, bde_id=team["bdm"].id), headers=headers
    ).status_code == 404

    r = client.post("/api/visit-reports", json=dict(VISIT, bde_id=team["bde2"].id), headers=headers)
    assert r.status_code == 201
    assert r.json()["bde_id"] == team["bde2"].id


def test_manager_cannot_file_reports(client, team, auth_headers):
    assert client.post("/api/visit-reports", json=VISIT, headers=auth_headers(team["manager"])).status_code == 403


def test_visit_report_validation(client, team, auth_headers):
    r = client.post(
        "/api/visit-reports", json=dict(VISIT, products_interested=[]), headers=auth_headers(team["bde"])
    )
    assert r.status_code == 422


def test_visit_reports_are_scoped(client, team, auth_headers):
    client.post("/api/visit-reports", json=VISIT, headers=auth_headers(team["bde"]))
    client.post("/api/visit-reports", json=dict(VISIT, location="Nagpur"), headers=auth_headers(team["other_bde"]))

    assert len(client.get("/api/visit-reports", headers=auth_headers(team["admin"])).json()) == 2
    assert len(client.get("/api/visit-reports", headers=auth_headers(team["manager"])).json()) == 1
    assert len(client.get("/api/visit-reports", headers=auth_headers(team["bdm"])).json()) == 1
    assert len(client.get("/api/visit-reports", headers=auth_headers(team["bde2"])).json()) == 0

    r = client.get("/api/visit-reports", params={"location": "nagpur"}, headers=auth_headers(team["admin"]))
    assert [v["location"] for v in r.json()] == ["Nagpur"]

    assert client.get(
        f"/api/visit-reports/bde/{team['other_bde'].id}", headers=auth_headers(team["manager"])
    ).status_code == 403
    assert client.get("/api/visit-reports/count/today", headers=auth_headers(team["manager"])).json() == {"count": 1}


# Sales reports

def test_sales_report_copies_points_and_waits_for_approval(client, team, product, auth_headers):
    r = client.post("/api/sales-reports", json=_sale(product.id), headers=auth_headers(team["bde"]))
    assert r.status_code == 201
    assert r.json()["points"] == 25
    assert r.json()["status"] == "pending"

    stats = client.get("/api/sales-reports/stats/today", headers=auth_headers(team["bde"])).json()
    assert stats["points"] == 0


def test_sales_report_unknown_product(client, team, auth_headers):
    r = client.post("/api/sales-reports", json=_sale(999), headers=auth_headers(team["bde"]))
    assert r.status_code == 404


def test_sales_report_invalid_payment_mode(client, team, product, auth_headers):
    r = client.post(
        "/api/sales-reports", json=_sale(product.id, payment_mode="cash"), headers=auth_headers(team["bde"])
    )
    assert r.status_code == 422


def test_approve_sales_report_counts_points(client, team, product, auth_headers):
    report = client.post("/api/sales-reports", json=_sale(product.id), headers=auth_headers(team["bde"])).json()
    admin_headers = auth_headers(team["admin"])

    pending = client.get("/api/sales-reports/pending", headers=admin_headers).json()
    assert [p["id"] for p in pending] == [report["id"]]

    assert client.post(f"/api/sales-reports/{report['id']}/approve", headers=auth_headers(team["manager"])).status_code == 403

    r = client.post(f"/api/sales-reports/{report['id']}/approve", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "approved"
    assert r.json()["approved_by"] == team["admin"].id

    assert client.post(f"/api/sales-reports/{report['id']}/approve", headers=admin_headers).status_code == 400

    assert client.get("/api/sales-reports/stats/today", headers=auth_headers(team["bde"])).json()["points"] == 25
    assert client.get("/api/sales-reports/stats/month", headers=auth_headers(team["bde"])).json()["points"] == 25
    assert client.get(
        "/api/sales-reports/stats/today", params={"bde_id": team["bde"].id}, headers=auth_headers(team["manager"])
    ).json()["points"] == 25
    assert client.get("/api/sales-reports/stats/today", headers=auth_headers(team["other_manager"])).json()["points"] == 0
    assert client.get(
        "/api/sales-reports/stats/today", params={"bde_id": team["bde"].id}, headers=auth_headers(team["other_manager"])
    ).status_code == 403


def test_sales_reports_listing(client, team, product, auth_headers):
    client.post("/api/sales-reports", json=_sale(product.id), headers=auth_headers(team["bde"]))
    client.post("/api/sales-reports", json=_sale(product.id, transaction_id="TXN2"), headers=auth_headers(team["other_bde"]))

    assert len(client.get("/api/sales-reports", headers=auth_headers(team["admin"])).json()) == 2
    assert len(client.get("/api/sales-reports", headers=auth_headers(team["bdm"])).json()) == 1
    assert len(client.get(
        f"/api/sales-reports/bde/{team['bde'].id}", headers=auth_headers(team["bde"])
    ).json()) == 1
    assert client.get("/api/sales-reports/month/2020/13", headers=auth_headers(team["admin"])).status_code == 400
    assert client.get("/api/sales-reports/month/2020/1", headers=auth_headers(team["admin"])).json() == []


# Verification reports

def test_verification_report_workflow(client, team, auth_headers):
    created = client.post("/api/verification-reports", json=VERIFICATION, headers=auth_headers(team["bde"]))
    assert created.status_code == 201
    report_id = created.json()["id"]
    admin_headers = auth_headers(team["admin"])

    assert len(client.get("/api/verification-reports/pending", headers=admin_headers).json()) == 1

    missing_reason = client.post(f"/api/verification-reports/{report_id}/reject", json={}, headers=admin_headers)
    assert missing_reason.status_code == 422

    rejected = client.post(
        f"/api/verification-reports/{report_id}/reject", json={"reason": "Blurry PAN photo"}, headers=admin_headers
    )
    assert rejected.status_code == 200
    assert rejected.json()["status"] == "rejected"
    assert rejected.json()["rejection_reason"] == "Blurry PAN photo"

    assert client.post(f"/api/verification-reports/{report_id}/approve", headers=admin_headers).status_code == 400


def test_verification_reports_search_and_status(client, team, auth_headers):
    client.post("/api/verification-reports", json=VERIFICATION, headers=auth_headers(team["bde"]))
    client.post(
        "/api/verification-reports",
        json=dict(VERIFICATION, business_name="Ganesh Traders"),
        headers=auth_headers(team["bde2"]),
    )
    headers = auth_headers(team["manager"])

    r = client.get("/api/verification-reports", params={"q": "ganesh"}, headers=headers)
    assert [v["business_name"] for v in r.json()] == ["Ganesh Traders"]

    r = client.get("/api/verification-reports", params={"status": "approved"}, headers=headers)
    assert r.json() == []

    assert client.get("/api/verification-reports", headers=auth_headers(team["other_manager"])).json() == []
    assert client.get(
        f"/api/verification-reports/bde/{team['bde'].id}", headers=auth_headers(team["bde2"])
    ).status_code == 403
