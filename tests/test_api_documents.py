from doc_registry.services.validators import MAX_ACCESS_DURATION, MAX_LOGICAL_TIME

DIGEST = "a" * 64


def _register_body(**overrides):
    body = {
        "name": "Invoice A",
        "digest": DIGEST,
        "descriptor": "Q1 invoice",
        "classification": "finance",
        "tags": ["tax", "2024"],
    }
    body.update(overrides)
    return body


def _modify_body(**overrides):
    body = {
        "name": "Invoice A",
        "digest": "b" * 64,
        "descriptor": "Q1 invoice v2",
        "tags": ["tax"],
    }
    body.update(overrides)
    return body


def _headers(identity, now):
    return {"X-Caller-Identity": identity, "X-Logical-Time": str(now)}


class TestDocumentEndpoints:
    def test_register_and_get_document(self, client, auth_headers, creator):
        resp = client.post("/documents", json=_register_body(), headers=auth_headers)
        assert resp.status_code == 201
        assert resp.json() == {"id": 1}

        resp = client.get("/documents/1")
        assert resp.status_code == 200
        data = resp.json()
        assert data["creator"] == creator
        assert data["created_at"] == data["updated_at"] == 100
        assert data["tags"] == ["tax", "2024"]

    def test_versioned_prefix(self, client, auth_headers):
        resp = client.post(
            "/api/v1/documents", json=_register_body(), headers=auth_headers
        )
        assert resp.status_code == 201
        assert client.get("/api/v1/documents/1").status_code == 200

    def test_get_document_not_found(self, client):
        resp = client.get("/documents/77")
        assert resp.status_code == 404
        assert resp.json()["code"] == "document_not_found"

    def test_register_requires_identity_header(self, client):
        resp = client.post("/documents", json=_register_body())
        assert resp.status_code == 422
        assert resp.json()["code"] == "validation_error"

    def test_register_invalid_descriptor(self, client, auth_headers):
        resp = client.post(
            "/documents", json=_register_body(descriptor=""), headers=auth_headers
        )
        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == "invalid_descriptor"
        assert client.get("/registry/counter").json() == {"last_id": 0}

    def test_register_invalid_classification(self, client, auth_headers):
        resp = client.post(
            "/documents",
            json=_register_body(classification="c" * 21),
            headers=auth_headers,
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "invalid_classification"

    def test_modify_document(self, client, auth_headers, creator):
        client.post("/documents", json=_register_body(), headers=auth_headers)
        resp = client.put(
            "/documents/1", json=_modify_body(), headers=_headers(creator, 150)
        )
        assert resp.status_code == 200
        assert resp.json() == {"ok": True}
        data = client.get("/documents/1").json()
        assert data["descriptor"] == "Q1 invoice v2"
        assert data["updated_at"] == 150
        assert data["created_at"] == 100
        assert data["classification"] == "finance"

    def test_modify_document_not_creator(self, client, auth_headers, other_identity):
        client.post("/documents", json=_register_body(), headers=auth_headers)
        before = client.get("/documents/1").json()
        resp = client.put(
            "/documents/1", json=_modify_body(), headers=_headers(other_identity, 150)
        )
        assert resp.status_code == 403
        assert resp.json()["code"] == "not_authorized"
        assert client.get("/documents/1").json() == before

    def test_modify_document_bad_digest(self, client, auth_headers, creator):
        client.post("/documents", json=_register_body(), headers=auth_headers)
        before = client.get("/documents/1").json()
        resp = client.put(
            "/documents/1",
            json=_modify_body(digest="abc"),
            headers=_headers(creator, 150),
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "invalid_document_data"
        assert client.get("/documents/1").json() == before

    def test_modify_document_not_found(self, client, auth_headers):
        resp = client.put("/documents/5", json=_modify_body(), headers=auth_headers)
        assert resp.status_code == 404

    def test_known_inconsistency_between_update_entrypoints(
        self, client, auth_headers, creator
    ):
        client.post("/documents", json=_register_body(), headers=auth_headers)
        body = _modify_body(descriptor="d" * 201)

        enhanced = client.put(
            "/documents/1/enhanced", json=body, headers=_headers(creator, 110)
        )
        secure = client.put(
            "/documents/1/secure", json=body, headers=_headers(creator, 120)
        )

        assert enhanced.status_code == 200
        assert secure.status_code == 400
        assert secure.json()["code"] == "invalid_descriptor"
        data = client.get("/documents/1").json()
        assert data["descriptor"] == "d" * 201
        assert data["updated_at"] == 110

    def test_secure_update_succeeds_with_valid_fields(
        self, client, auth_headers, creator
    ):
        client.post("/documents", json=_register_body(), headers=auth_headers)
        resp = client.put(
            "/documents/1/secure", json=_modify_body(), headers=_headers(creator, 130)
        )
        assert resp.status_code == 200
        assert client.get("/documents/1").json()["updated_at"] == 130

    def test_enhanced_update_not_creator(self, client, auth_headers, other_identity):
        client.post("/documents", json=_register_body(), headers=auth_headers)
        resp = client.put(
            "/documents/1/enhanced",
            json=_modify_body(),
            headers=_headers(other_identity, 130),
        )
        assert resp.status_code == 403


class TestCallContext:
    def test_update_with_earlier_logical_time_rejected(
        self, client, creator
    ):
        client.post("/documents", json=_register_body(), headers=_headers(creator, 500))
        before = client.get("/documents/1").json()
        resp = client.put(
            "/documents/1", json=_modify_body(), headers=_headers(creator, 10)
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "invalid_timestamp"
        after = client.get("/documents/1").json()
        assert after == before
        assert after["updated_at"] >= after["created_at"]

    def test_logical_time_above_bound_rejected(self, client, creator, other_identity):
        client.post("/documents", json=_register_body(), headers=_headers(creator, 1))
        resp = client.post(
            "/documents/1/access",
            json={"grantee": other_identity, "permission_type": "view", "duration": 10},
            headers=_headers(creator, 2**63 - 1),
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == "validation_error"

    def test_logical_time_at_bound_accepted(self, client, creator, other_identity):
        client.post("/documents", json=_register_body(), headers=_headers(creator, 1))
        resp = client.post(
            "/documents/1/access",
            json={
                "grantee": other_identity,
                "permission_type": "view",
                "duration": MAX_ACCESS_DURATION,
            },
            headers=_headers(creator, MAX_LOGICAL_TIME),
        )
        assert resp.status_code == 200

    def test_identity_longer_than_column_rejected(self, client):
        resp = client.post(
            "/documents", json=_register_body(), headers=_headers("u" * 256, 1)
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == "validation_error"

    def test_grantee_longer_than_column_rejected(self, client, auth_headers):
        client.post("/documents", json=_register_body(), headers=auth_headers)
        resp = client.post(
            "/documents/1/access",
            json={"grantee": "g" * 256, "permission_type": "view", "duration": 10},
            headers=auth_headers,
        )
        assert resp.status_code == 422

    def test_validation_errors_omit_urls(self, client):
        resp = client.post("/documents", json=_register_body())
        assert resp.status_code == 422
        details = resp.json()["details"]
        assert details
        assert all("url" not in err for err in details)


class TestAccessEndpoints:
    def test_authorize_access(self, client, auth_headers, other_identity):
        client.post("/documents", json=_register_body(), headers=auth_headers)
        resp = client.post(
            "/documents/1/access",
            json={
                "grantee": other_identity,
                "permission_type": "edit",
                "duration": 1000,
                "modification_allowed": True,
            },
            headers=auth_headers,
        )
        assert resp.status_code == 200
        assert resp.json() == {"ok": True}

    def test_authorize_access_invalid_duration(
        self, client, auth_headers, other_identity
    ):
        client.post("/documents", json=_register_body(), headers=auth_headers)
        for duration in (0, 52561):
            resp = client.post(
                "/documents/1/access",
                json={
                    "grantee": other_identity,
                    "permission_type": "view",
                    "duration": duration,
                },
                headers=auth_headers,
            )
            assert resp.status_code == 400
            assert resp.json()["code"] == "invalid_timestamp"

    def test_authorize_access_self(self, client, auth_headers, creator):
        client.post("/documents", json=_register_body(), headers=auth_headers)
        resp = client.post(
            "/documents/1/access",
            json={"grantee": creator, "permission_type": "view", "duration": 10},
            headers=auth_headers,
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "invalid_document_data"

    def test_authorize_access_invalid_type(self, client, auth_headers, other_identity):
        client.post("/documents", json=_register_body(), headers=auth_headers)
        resp = client.post(
            "/documents/1/access",
            json={"grantee": other_identity, "permission_type": "own", "duration": 10},
            headers=auth_headers,
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "invalid_access_type"

    def test_authorize_access_document_not_found(
        self, client, auth_headers, other_identity
    ):
        resp = client.post(
            "/documents/4/access",
            json={"grantee": other_identity, "permission_type": "view", "duration": 10},
            headers=auth_headers,
        )
        assert resp.status_code == 404
