from __future__ import annotations

from tests.conftest import SCHMELZPUNKT_NODE_ID, sample_pos, schmelzpunkt_node


def _payloads() -> list[dict]:
    return [dto.model_dump(mode="json", by_alias=True, exclude_none=True) for dto in sample_pos()]


def _create_all(client) -> list[dict]:
    created = []
    for payload in _payloads():
        resp = client.post("/api/pos", json=payload)
        assert resp.status_code == 201, resp.text
        created.append(resp.json())
    return created


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_empty_list(client):
    resp = client.get("/api/pos")
    assert resp.status_code == 200
    assert resp.json() == []


def test_insert_three_and_list(client):
    created = _create_all(client)

    for body in created:
        assert body["id"] is not None
        assert body["createdAt"] is not None
        assert body["updatedAt"] is not None

    resp = client.get("/api/pos")
    assert resp.status_code == 200
    listed = resp.json()
    assert len(listed) == 3

    strip = lambda p: {k: v for k, v in p.items() if k not in ("id", "createdAt", "updatedAt")}
    assert sorted(map(strip, listed), key=lambda p: p["name"]) == sorted(
        map(strip, _payloads()), key=lambda p: p["name"]
    )


def test_create_sets_location_header(client):
    resp = client.post("/api/pos", json=_payloads()[0])

    assert resp.status_code == 201
    assert resp.headers["location"].endswith(f"/api/pos/{resp.json()['id']}")
    assert client.get(resp.headers["location"]).json()["name"] == "Schmelzpunkt"


def test_create_uses_camel_case_fields(client):
    body = client.post("/api/pos", json=_payloads()[0]).json()

    assert body["houseNumber"] == "90"
    assert body["postalCode"] == 69117
    assert body["type"] == "CAFE"
    assert body["campus"] == "ALTSTADT"


def test_create_with_id_is_rejected(client):
    payload = {**_payloads()[0], "id": 5}
    resp = client.post("/api/pos", json=payload)

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "BAD_REQUEST"
    assert client.get("/api/pos").json() == []


def test_create_missing_field_is_rejected(client):
    payload = _payloads()[0]
    del payload["street"]

    resp = client.post("/api/pos", json=payload)

    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "BAD_REQUEST"
    assert "street" in error["message"]


def test_create_non_numeric_postal_code_is_rejected(client):
    payload = {**_payloads()[0], "postalCode": "abc"}
    resp = client.post("/api/pos", json=payload)

    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "BAD_REQUEST"
    assert "postalCode" in error["message"]
    assert client.get("/api/pos").json() == []


def test_create_out_of_range_postal_code_is_rejected(client):
    payload = {**_payloads()[0], "postalCode": 2**70}
    resp = client.post("/api/pos", json=payload)

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "BAD_REQUEST"
    assert client.get("/api/pos").json() == []


def test_get_by_non_numeric_id_is_bad_request(client):
    resp = client.get("/api/pos/abc")

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "BAD_REQUEST"


def test_create_duplicate_name_conflict(client):
    client.post("/api/pos", json=_payloads()[0])
    resp = client.post("/api/pos", json=_payloads()[0])

    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "DUPLICATE_POS_NAME"
    assert len(client.get("/api/pos").json()) == 1


def test_get_by_id(client):
    created = _create_all(client)
    resp = client.get(f"/api/pos/{created[1]['id']}")

    assert resp.status_code == 200
    assert resp.json()["name"] == "Bäcker Görtz"


def test_get_by_id_not_found(client):
    resp = client.get("/api/pos/999")

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "POS_NOT_FOUND"


def test_filter_by_name(client):
    _create_all(client)

    resp = client.get("/api/pos/filter", params={"name": "New Vending Machine"})
    assert resp.status_code == 200
    assert resp.json()["type"] == "VENDING_MACHINE"

    resp = client.get("/api/pos/filter", params={"name": "Mensa"})
    assert resp.status_code == 404


def test_update_description(client):
    created = _create_all(client)
    schmelzpunkt = next(p for p in created if p["name"] == "Schmelzpunkt")

    request = {**schmelzpunkt, "description": "Waffles all day"}
    resp = client.put(f"/api/pos/{schmelzpunkt['id']}", json=request)
    assert resp.status_code == 200
    assert resp.json()["description"] == "Waffles all day"

    fetched = client.get("/api/pos/filter", params={"name": "Schmelzpunkt"}).json()
    assert fetched["description"] == "Waffles all day"
    for field in ("id", "name", "type", "campus", "street", "houseNumber", "postalCode", "city", "createdAt"):
        assert fetched[field] == schmelzpunkt[field]
    assert len(client.get("/api/pos").json()) == 3


def test_update_id_mismatch(client):
    created = _create_all(client)
    request = {**created[0], "description": "changed"}

    resp = client.put(f"/api/pos/{created[1]['id']}", json=request)

    assert resp.status_code == 400
    assert client.get(f"/api/pos/{created[0]['id']}").json()["description"] == created[0]["description"]


def test_update_without_body_id(client):
    created = _create_all(client)
    request = {k: v for k, v in created[0].items() if k != "id"}

    resp = client.put(f"/api/pos/{created[0]['id']}", json=request)

    assert resp.status_code == 400


def test_update_unknown_id(client):
    payload = {**_payloads()[0], "id": 999}
    resp = client.put("/api/pos/999", json=payload)

    assert resp.status_code == 404
    assert client.get("/api/pos").json() == []


def test_update_to_existing_name(client):
    created = _create_all(client)
    request = {**created[1], "name": "Schmelzpunkt"}

    resp = client.put(f"/api/pos/{created[1]['id']}", json=request)

    assert resp.status_code == 409


# ---------------------------------------------------------------------------
# OSM import
# ---------------------------------------------------------------------------

def test_import_from_osm(client, fake_osm):
    fake_osm.add(schmelzpunkt_node())

    resp = client.post(f"/api/pos/import/osm/{SCHMELZPUNKT_NODE_ID}", json="ALTSTADT")

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["name"] == "Rada Coffee & Rösterei"
    assert body["type"] == "CAFE"
    assert body["campus"] == "ALTSTADT"
    assert body["postalCode"] == 69117
    assert resp.headers["location"].endswith(f"/api/pos/{body['id']}")


def test_import_twice_keeps_single_record(client, fake_osm):
    fake_osm.add(schmelzpunkt_node())
    first = client.post(f"/api/pos/import/osm/{SCHMELZPUNKT_NODE_ID}", json="ALTSTADT").json()
    second = client.post(f"/api/pos/import/osm/{SCHMELZPUNKT_NODE_ID}", json="INF").json()

    assert second["id"] == first["id"]
    assert second["campus"] == "INF"
    assert len(client.get("/api/pos").json()) == 1


def test_import_unknown_node(client):
    resp = client.post("/api/pos/import/osm/1", json="ALTSTADT")

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "OSM_NODE_NOT_FOUND"


def test_import_bad_postcode(client, fake_osm):
    fake_osm.add(schmelzpunkt_node(postcode="69117 Heidelberg"))

    resp = client.post(f"/api/pos/import/osm/{SCHMELZPUNKT_NODE_ID}", json="ALTSTADT")

    assert resp.status_code == 422
    error = resp.json()["error"]
    assert error["code"] == "OSM_NODE_MISSING_FIELDS"
    assert "postcode" in error["message"]
    assert client.get("/api/pos").json() == []


def test_import_long_house_number_list(client, fake_osm):
    fake_osm.add(schmelzpunkt_node(house_number="1-3, 5, 7-9, 11, 13-15"))

    resp = client.post(f"/api/pos/import/osm/{SCHMELZPUNKT_NODE_ID}", json="ALTSTADT")

    assert resp.status_code == 201, resp.text
    assert resp.json()["houseNumber"] == "1-3, 5, 7-9, 11, 13-15"


def test_import_too_long_house_number(client, fake_osm):
    fake_osm.add(schmelzpunkt_node(house_number=", ".join(str(n) for n in range(1, 40))))

    resp = client.post(f"/api/pos/import/osm/{SCHMELZPUNKT_NODE_ID}", json="ALTSTADT")

    assert resp.status_code == 422
    error = resp.json()["error"]
    assert error["code"] == "OSM_NODE_MISSING_FIELDS"
    assert "addr:housenumber" in error["message"]
    assert client.get("/api/pos").json() == []


def test_import_out_of_range_postcode(client, fake_osm):
    fake_osm.add(schmelzpunkt_node(postcode="99999999999999999999"))

    resp = client.post(f"/api/pos/import/osm/{SCHMELZPUNKT_NODE_ID}", json="ALTSTADT")

    assert resp.status_code == 422
    assert "postcode" in resp.json()["error"]["message"]
    assert client.get("/api/pos").json() == []


def test_import_invalid_campus(client, fake_osm):
    fake_osm.add(schmelzpunkt_node())

    resp = client.post(f"/api/pos/import/osm/{SCHMELZPUNKT_NODE_ID}", json="MARS")

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "BAD_REQUEST"
    assert fake_osm.calls == []


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------

def test_admin_clear(client):
    _create_all(client)

    assert client.delete("/api/admin/pos").status_code == 204
    assert client.get("/api/pos").json() == []
    assert client.delete("/api/admin/pos").status_code == 204


def test_admin_routes_disabled_by_default():
    from fastapi.testclient import TestClient

    from campus_coffee.main import create_app

    app = create_app()
    paths = {route.path for route in app.routes}

    assert "/api/admin/pos" not in paths
    assert TestClient(app).delete("/api/admin/pos").status_code == 404
