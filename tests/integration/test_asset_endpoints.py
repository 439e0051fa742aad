from grampredict.core.policy import AppRole

POND = {
    "asset_name": "Kothapalli farm pond",
    "asset_type": "pond",
    "block_name": "Kadiri",
    "village_name": "Kothapalli",
    "latitude": 14.11,
    "longitude": 78.16,
}

def test_officer_creates_and_updates_asset(client, login_as, district):
    officer = login_as(AppRole.PANCHAYAT_OFFICER, district_id=district.id)

    res = client.post("/assets/", json={**POND, "district_id": district.id})
    assert res.status_code == 201
    asset = res.json()
    assert asset["status"] == "good"
    assert asset["created_by"] == officer.id

    listed = client.get("/assets/", params={"district_id": district.id, "status": "good"})
    assert [a["id"] for a in listed.json()] == [asset["id"]]

    upd = client.patch(f"/assets/{asset['id']}", json={"status": "needs_repair"})
    assert upd.status_code == 200
    assert upd.json()["status"] == "needs_repair"

    assert client.get("/assets/", params={"status": "good"}).json() == []

def test_public_user_cannot_create_asset(client, login_as, district):
    login_as(AppRole.PUBLIC)
    res = client.post("/assets/", json={**POND, "district_id": district.id})
    assert res.status_code == 403

def test_officer_limited_to_own_district(client, login_as, district):
    login_as(AppRole.PANCHAYAT_OFFICER, district_id="another-district")
    res = client.post("/assets/", json={**POND, "district_id": district.id})
    assert res.status_code == 403

def test_asset_validation(client, login_as, district):
    login_as(AppRole.ADMIN)
    assert client.post("/assets/", json={**POND, "district_id": district.id, "latitude": 120}).status_code == 422
    assert client.post("/assets/", json={**POND, "district_id": district.id, "asset_type": "bridge"}).status_code == 422
    assert client.post("/assets/", json={**POND, "district_id": district.id, "block_name": "Atlantis"}).status_code == 400
    assert client.post("/assets/", json={**POND, "district_id": "missing"}).status_code == 404

def test_missing_asset_is_404(client, login_as):
    login_as(AppRole.ADMIN)
    assert client.get("/assets/does-not-exist").status_code == 404
    assert client.patch("/assets/does-not-exist", json={"status": "damaged"}).status_code == 404
