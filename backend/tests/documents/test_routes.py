from conftest import create_user_and_get_headers


async def _master_id(client, headers) -> int:
    resp = await client.get("/api/documents/", headers=headers)
    return next(d["id"] for d in resp.json() if d["is_master"])


async def test_create_document(client, auth_headers):
    resp = await client.post(
        "/api/documents/",
        json={"name": "Backend roles"},
        headers=auth_headers,
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["name"] == "Backend roles"
    assert data["owner"] == "testuser"
    assert data["is_master"] is False


async def test_create_document_duplicate_name(client, auth_headers):
    await client.post("/api/documents/", json={"name": "Doc"}, headers=auth_headers)
    resp = await client.post("/api/documents/", json={"name": "Doc"}, headers=auth_headers)
    assert resp.status_code == 409


async def test_list_documents(client, auth_headers):
    await client.post("/api/documents/", json={"name": "Doc 1"}, headers=auth_headers)
    await client.post("/api/documents/", json={"name": "Doc 2"}, headers=auth_headers)
    resp = await client.get("/api/documents/", headers=auth_headers)
    assert resp.status_code == 200
    assert [d["name"] for d in resp.json()] == ["Master", "Doc 1", "Doc 2"]


async def test_get_document(client, auth_headers):
    master_id = await _master_id(client, auth_headers)
    resp = await client.get(f"/api/documents/{master_id}", headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Master"
    assert data["contact_info"] is None
    assert data["sections"] == []
    assert data["educations"] == []
    assert data["experiences"] == []


async def test_get_document_not_found(client, auth_headers):
    resp = await client.get("/api/documents/999", headers=auth_headers)
    assert resp.status_code == 404


async def test_get_document_wrong_owner(client, auth_headers):
    master_id = await _master_id(client, auth_headers)
    other_headers = await create_user_and_get_headers(client, username="intruder")
    resp = await client.get(f"/api/documents/{master_id}", headers=other_headers)
    assert resp.status_code == 403


async def test_update_document(client, auth_headers):
    create_resp = await client.post(
        "/api/documents/", json={"name": "Old"}, headers=auth_headers
    )
    doc_id = create_resp.json()["id"]
    resp = await client.patch(
        f"/api/documents/{doc_id}",
        json={"name": "New", "is_locked": True},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "New"
    assert resp.json()["is_locked"] is True
    assert resp.json()["last_updated"] is not None


async def test_update_master_template_flag(client, auth_headers):
    master_id = await _master_id(client, auth_headers)
    resp = await client.patch(
        f"/api/documents/{master_id}",
        json={"is_template": True},
        headers=auth_headers,
    )
    assert resp.status_code == 400


async def test_delete_document(client, auth_headers):
    create_resp = await client.post(
        "/api/documents/", json={"name": "To Delete"}, headers=auth_headers
    )
    doc_id = create_resp.json()["id"]
    resp = await client.delete(f"/api/documents/{doc_id}", headers=auth_headers)
    assert resp.status_code == 204

    resp = await client.get(f"/api/documents/{doc_id}", headers=auth_headers)
    assert resp.status_code == 404


async def test_delete_missing_document(client, auth_headers):
    resp = await client.delete("/api/documents/999", headers=auth_headers)
    assert resp.status_code == 204


async def test_delete_master_document(client, auth_headers):
    master_id = await _master_id(client, auth_headers)
    resp = await client.delete(f"/api/documents/{master_id}", headers=auth_headers)
    assert resp.status_code == 403


async def test_delete_document_wrong_owner(client, auth_headers):
    create_resp = await client.post(
        "/api/documents/", json={"name": "My Doc"}, headers=auth_headers
    )
    doc_id = create_resp.json()["id"]

    other_headers = await create_user_and_get_headers(client, username="intruder")
    resp = await client.delete(f"/api/documents/{doc_id}", headers=other_headers)
    assert resp.status_code == 403


async def test_documents_require_auth(client):
    resp = await client.get("/api/documents/")
    assert resp.status_code in (401, 403)


async def test_update_document_rejects_null(client, auth_headers):
    resp = await client.post("/api/documents/", json={"name": "Doc"}, headers=auth_headers)
    doc_id = resp.json()["id"]

    for body in ({"name": None}, {"is_locked": None}):
        resp = await client.patch(f"/api/documents/{doc_id}", json=body, headers=auth_headers)
        assert resp.status_code == 422

    resp = await client.get(f"/api/documents/{doc_id}", headers=auth_headers)
    assert resp.json()["name"] == "Doc"
