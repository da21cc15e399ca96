"""End-to-end HTTP tests: register/login, catalog, checkout, verification, protected content."""


def _register(client, email="a@x.com", password="pw", name="A"):
    resp = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _login_token(client, email="a@x.com", password="pw") -> str:
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


class TestAuth:
    def test_register_returns_token_and_public_user(self, client):
        body = _register(client)
        assert body["token"]
        assert body["user"]["email"] == "a@x.com"
        assert body["user"]["name"] == "A"
        assert "passwordHash" not in body["user"]

    def test_duplicate_email_rejected(self, client):
        _register(client)
        resp = client.post("/api/auth/register", json={"name": "B", "email": "A@x.com", "password": "pw2"})
        assert resp.status_code == 400

    def test_login_wrong_password(self, client):
        _register(client)
        resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": "nope"})
        assert resp.status_code == 400

    def test_login_unknown_email(self, client):
        resp = client.post("/api/auth/login", json={"email": "ghost@x.com", "password": "pw"})
        assert resp.status_code == 400

    def test_malformed_register_body(self, client):
        resp = client.post("/api/auth/register", json={"email": "a@x.com"})
        assert resp.status_code == 422

    def test_me_lists_purchases(self, client, proof):
        token = _register(client)["token"]
        order = client.post("/api/payment/create-order", json={"courseIds": [3]}, headers=_auth(token)).json()
        client.post("/api/payment/verify", json={**proof(order["order"]["id"]), "courseIds": [3]}, headers=_auth(token))

        resp = client.get("/api/auth/me", headers=_auth(token))
        assert resp.status_code == 200
        purchases = resp.json()["purchasedCourses"]
        assert [p["courseId"] for p in purchases] == [3]
        assert purchases[0]["orderId"] == order["order"]["id"]

    def test_login_rate_limited(self, client, monkeypatch):
        from app.api.routes import auth as auth_routes

        monkeypatch.setattr(auth_routes, "check_login_rate_limit", lambda ip, email=None: False)
        resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": "pw"})
        assert resp.status_code == 429


class TestCatalog:
    def test_list_courses_hides_video_urls(self, client):
        resp = client.get("/api/courses")
        assert resp.status_code == 200
        courses = resp.json()
        assert [c["id"] for c in courses] == [1, 2, 3, 4, 5]
        assert courses[0]["originalPrice"] == 2999
        assert courses[0]["modules"][0]["lessons"][0]["title"] == "Introduction to Python"
        assert "videoUrl" not in resp.text

    def test_get_course(self, client):
        resp = client.get("/api/courses/3")
        assert resp.status_code == 200
        assert resp.json()["price"] == 999
        assert "videoUrl" not in resp.text

    def test_get_missing_course(self, client):
        assert client.get("/api/courses/999").status_code == 404

    def test_non_numeric_course_id_is_404(self, client):
        for raw in ("abc", "1.5", "0", "-1", "99999999999999999999"):
            resp = client.get(f"/api/courses/{raw}")
            assert resp.status_code == 404, raw
            assert resp.json() == {"detail": "Course not found"}


class TestContentAccess:
    def test_scenario_a_registered_user_without_purchase_gets_403(self, client):
        _register(client, "a@x.com", "pw")
        token = _login_token(client, "a@x.com", "pw")
        resp = client.get("/api/courses/1/content", headers=_auth(token))
        assert resp.status_code == 403

    def test_content_requires_token(self, client):
        assert client.get("/api/courses/1/content").status_code == 401

    def test_content_rejects_invalid_token(self, client):
        resp = client.get("/api/courses/1/content", headers=_auth("not-a-jwt"))
        assert resp.status_code == 401

    def test_missing_course_is_404_not_403(self, client):
        token = _register(client)["token"]
        assert client.get("/api/courses/999/content", headers=_auth(token)).status_code == 404

    def test_non_numeric_content_id_is_404(self, client):
        token = _register(client)["token"]
        assert client.get("/api/courses/abc/content", headers=_auth(token)).status_code == 404
        assert client.get("/api/courses/abc/content").status_code == 401


class TestCheckout:
    def test_scenario_b_amount_and_provider_units(self, client, provider):
        token = _register(client)["token"]
        resp = client.post("/api/payment/create-order", json={"courseIds": [1, 3]}, headers=_auth(token))
        assert resp.status_code == 200
        body = resp.json()
        assert body["amount"] == 2998
        assert body["order"]["amount"] == 299800
        assert [c["id"] for c in body["courses"]] == [1, 3]
        assert provider.calls[-1]["amount"] == 299800

    def test_create_order_requires_token(self, client):
        resp = client.post("/api/payment/create-order", json={"courseIds": [1]})
        assert resp.status_code == 401

    def test_create_order_empty_selection(self, client):
        token = _register(client)["token"]
        resp = client.post("/api/payment/create-order", json={"courseIds": [77]}, headers=_auth(token))
        assert resp.status_code == 400

    def test_create_order_provider_failure_is_generic_500(self, client, provider):
        provider.fail = True
        token = _register(client)["token"]
        resp = client.post("/api/payment/create-order", json={"courseIds": [1]}, headers=_auth(token))
        assert resp.status_code == 500
        assert resp.json() == {"detail": "Could not create order"}

    def test_scenario_c_forged_signature(self, client, proof):
        token = _register(client)["token"]
        order_id = client.post(
            "/api/payment/create-order", json={"courseIds": [1]}, headers=_auth(token),
        ).json()["order"]["id"]
        body = {**proof(order_id), "courseIds": [1]}
        body["razorpay_signature"] = "f" * 64

        resp = client.post("/api/payment/verify", json=body, headers=_auth(token))
        assert resp.status_code == 400
        assert client.get("/api/courses/1/content", headers=_auth(token)).status_code == 403
        assert client.get("/api/auth/me", headers=_auth(token)).json()["purchasedCourses"] == []

    def test_scenario_d_verified_purchase_unlocks_content(self, client, proof):
        token = _register(client)["token"]
        order_id = client.post(
            "/api/payment/create-order", json={"courseIds": [1]}, headers=_auth(token),
        ).json()["order"]["id"]

        resp = client.post("/api/payment/verify", json={**proof(order_id), "courseIds": [1]}, headers=_auth(token))
        assert resp.status_code == 200
        assert resp.json() == {"success": True}

        content = client.get("/api/courses/1/content", headers=_auth(token))
        assert content.status_code == 200
        modules = content.json()["modules"]
        assert modules[0]["lessons"][0]["videoUrl"].endswith("/videos/python/m1-l1-20s.mp4")

    def test_verify_twice_keeps_single_record(self, client, proof):
        token = _register(client)["token"]
        order_id = client.post(
            "/api/payment/create-order", json={"courseIds": [1, 3]}, headers=_auth(token),
        ).json()["order"]["id"]
        body = {**proof(order_id), "courseIds": [1, 3]}

        assert client.post("/api/payment/verify", json=body, headers=_auth(token)).status_code == 200
        assert client.post("/api/payment/verify", json=body, headers=_auth(token)).status_code == 200

        purchases = client.get("/api/auth/me", headers=_auth(token)).json()["purchasedCourses"]
        assert sorted(p["courseId"] for p in purchases) == [1, 3]

    def test_verify_cannot_claim_courses_outside_order(self, client, proof):
        token = _register(client)["token"]
        order_id = client.post(
            "/api/payment/create-order", json={"courseIds": [3]}, headers=_auth(token),
        ).json()["order"]["id"]
        body = {**proof(order_id), "courseIds": [1, 2, 3]}

        assert client.post("/api/payment/verify", json=body, headers=_auth(token)).status_code == 200
        assert client.get("/api/courses/3/content", headers=_auth(token)).status_code == 200
        assert client.get("/api/courses/1/content", headers=_auth(token)).status_code == 403

    def test_verify_order_of_another_user(self, client, proof):
        owner = _register(client, "owner@x.com")["token"]
        other = _register(client, "other@x.com")["token"]
        order_id = client.post(
            "/api/payment/create-order", json={"courseIds": [1]}, headers=_auth(owner),
        ).json()["order"]["id"]

        resp = client.post("/api/payment/verify", json={**proof(order_id), "courseIds": [1]}, headers=_auth(other))
        assert resp.status_code == 400
        assert client.get("/api/courses/1/content", headers=_auth(other)).status_code == 403


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_metrics_exposed(client):
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "payment_verifications_total" in resp.text
