from grampredict.core.policy import AppRole

def test_magic_link_login_flow(client):
    resp1 = client.post("/auth/request-token", json={"email": "asha@example.com"})
    assert resp1.status_code == 200
    magic = resp1.json()["token"]

    resp2 = client.get(f"/auth/verify-token?token={magic}")
    assert resp2.status_code == 200
    access = resp2.json()["access_token"]

    me = client.get("/users/me", headers={"Authorization": f"Bearer {access}"})
    assert me.status_code == 200
    assert me.json()["username"] == "asha"
    assert me.json()["role"] == "public"

def test_magic_token_is_not_an_access_token(client):
    magic = client.post("/auth/request-token", json={"email": "ravi@example.com"}).json()["token"]
    client.get(f"/auth/verify-token?token={magic}")
    res = client.get("/users/me", headers={"Authorization": f"Bearer {magic}"})
    assert res.status_code == 401

def test_invalid_tokens(client):
    assert client.get("/auth/verify-token?token=garbage").status_code == 401
    assert client.get("/users/me", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get("/users/me").status_code == 401

def test_admin_assigns_officer_role(client, db, login_as, district):
    from grampredict.crud import user as crud_user
    from grampredict.schemas.user import UserCreate

    target = crud_user.create_user(db, UserCreate(username="meena", email="meena@example.com"))

    login_as(AppRole.PUBLIC)
    assert client.put(f"/users/{target.id}/role", json={"role": "admin"}).status_code == 403

    login_as(AppRole.ADMIN)
    assert client.put(f"/users/{target.id}/role", json={"role": "panchayat_officer"}).status_code == 400
    res = client.put(f"/users/{target.id}/role", json={"role": "panchayat_officer", "district_id": district.id})
    assert res.status_code == 200
    assert res.json()["role"] == "panchayat_officer"
    assert res.json()["district_id"] == district.id
    assert client.put("/users/9999/role", json={"role": "public"}).status_code == 404
