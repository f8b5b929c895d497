from models import Admin


def test_admin_routes_need_login(client):
    resp = client.get("/admin/dashboard")
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Authentication required"}


def test_login_rejects_bad_password(client, admin_client):
    resp = client.post("/auth/login", json={"username": "curator", "password": "wrong"})
    assert resp.status_code == 401


def test_login_requires_both_fields(client):
    resp = client.post("/auth/login", data={"username": "curator"})
    assert resp.status_code == 400


def test_login_me_logout(admin_client):
    me = admin_client.get("/auth/me").get_json()
    assert me["username"] == "curator"
    assert me["last_login"] is not None
    assert Admin.query.one().last_login is not None

    assert admin_client.get("/admin/dashboard").status_code == 200
    assert admin_client.post("/auth/logout").status_code == 200
    assert admin_client.get("/admin/dashboard").status_code == 401


def test_me_without_login_is_401(client):
    assert client.get("/auth/me").status_code == 401


def test_upload_too_large(app, client):
    app.config["MAX_CONTENT_LENGTH"] = 1024
    resp = client.post("/apply", data={"full_name": "x" * 4096})
    assert resp.status_code == 413
