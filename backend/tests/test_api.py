from intake.config import Settings
from intake.main import create_app


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_login_rejects_bad_password(client, settings):
    response = client.post("/api/auth/login", json={"name": settings.SEED_ADMIN_NAME, "password": "nope"})
    assert response.status_code == 401


def test_me_and_admin_guard(client, admin_headers, agent_headers):
    assert client.get("/api/auth/me", headers=admin_headers).json()["role"] == "admin"
    assert client.get("/api/admin/staff").status_code in (401, 403)
    assert client.get("/api/admin/staff", headers=agent_headers).status_code == 403


def test_refresh_token(client, settings):
    login = client.post(
        "/api/auth/login",
        json={"name": settings.SEED_ADMIN_NAME, "password": settings.SEED_ADMIN_PASSWORD},
    ).json()
    response = client.post("/api/auth/refresh", json={"refresh_token": login["refresh_token"]})
    assert response.status_code == 200
    bad = client.post("/api/auth/refresh", json={"refresh_token": login["access_token"]})
    assert bad.status_code == 401


def test_staff_crud(client, admin_headers):
    created = client.post(
        "/api/admin/staff",
        json={"name": "담당자2", "password": "pw", "role": "staff"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    body = created.json()
    assert body["role"] == "agent"
    assert "password_hash" not in body

    dup = client.post("/api/admin/staff", json={"name": "담당자2", "password": "pw"}, headers=admin_headers)
    assert dup.status_code == 409

    patched = client.patch(
        f"/api/admin/staff/{body['id']}",
        json={"regions": [{"unit": "district", "name": "마포구"}]},
        headers=admin_headers,
    )
    assert patched.json()["regions"] == [{"unit": "district", "name": "마포구"}]

    assert client.delete(f"/api/admin/staff/{body['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/admin/staff/{body['id']}", headers=admin_headers).status_code == 404


def test_last_admin_cannot_be_deleted(client, store, admin_headers):
    admin = next(u for u in store.staff if u.role == "admin")
    response = client.delete(f"/api/admin/staff/{admin.id}", headers=admin_headers)
    assert response.status_code == 400


def test_property_dedup_by_normalized_address(client, admin_headers):
    first = client.post(
        "/api/admin/properties",
        json={"address": "서울특별시 마포구 합정동 12 - 3", "source": "auction", "price": 100},
        headers=admin_headers,
    )
    assert first.status_code == 201
    assert first.json()["district"] == "마포구"
    assert first.json()["subdistrict"] == "합정동"

    dup = client.post(
        "/api/admin/properties",
        json={"address": "서울시 마포구 합정동 12-3.", "source": "public"},
        headers=admin_headers,
    )
    assert dup.status_code == 409


def test_property_update_reextracts_region(client, admin_headers, store):
    prop = store.properties[0]
    response = client.patch(
        f"/api/admin/properties/{prop.id}",
        json={"address": "서울특별시 서초구 반포동 1-1", "status": "보류"},
        headers=admin_headers,
    )
    body = response.json()
    assert body["district"] == "서초구"
    assert body["subdistrict"] == "반포동"
    assert body["status"] == "hold"


def test_public_listing_registration(client):
    assert client.post("/api/public-listings", json={"address": "서울 강서구 화곡동 9"}).status_code == 400

    payload = {
        "address": "서울 강서구 화곡동 9",
        "price": 300000000,
        "registrant_name": "홍길동",
        "phone": "010-0000-0000",
    }
    created = client.post("/api/public-listings", json=payload)
    assert created.status_code == 201
    assert created.json()["status"] == "review"

    assert client.post("/api/public-listings", json=payload).status_code == 409


def test_csv_import_skips_duplicates(client, admin_headers, store):
    csv_text = (
        "address,price,status,assigneeName\n"
        "서울특별시 강남구 역삼동 123-45,1,active,\n"
        "서울특별시 강동구 천호동 12-3,850000000,active,담당자1\n"
        "서울시 강동구 천호동 12 - 3,1,active,\n"
    )
    response = client.post(
        "/api/admin/import/properties-csv",
        json={"csv_text": csv_text, "source": "auction"},
        headers=admin_headers,
    )
    body = response.json()
    assert body["inserted"] == 1
    assert body["duplicates"] == 2
    assert body["total_properties"] == 3

    imported = store.properties[0]
    assert imported.created_by_type == "admin_csv"
    assert imported.assignee_id == store.get_staff_by_name("담당자1").id


def test_property_view_depends_on_role(client, store, admin_headers, agent_headers):
    store.properties[0].status = "hold"

    public = client.get("/api/properties").json()
    assert public["role_view"] == "public"
    assert public["counts"]["all"] == 1

    agent = client.get("/api/properties", headers=agent_headers).json()
    agent_id = store.get_staff_by_name("담당자1").id
    assert all(p["assignee_id"] == agent_id for p in agent["items"])

    admin = client.get("/api/properties", headers=admin_headers).json()
    assert admin["counts"]["all"] == len(store.properties)


def test_region_overview(client, admin_headers):
    body = client.get("/api/admin/region-assignments", headers=admin_headers).json()
    assert body["agent_count"] == 1
    assert [b["key"] for b in body["districts"]] == ["강남구", "송파구"]
    assert [b["key"] for b in body["subdistricts"]] == ["강남구 역삼동", "송파구 문정동"]


def test_auto_groups_by_district(client, admin_headers, store):
    response = client.post(
        "/api/admin/region-assignments/auto-groups",
        json={"staff_count": 1, "granularity": "district"},
        headers=admin_headers,
    )
    body = response.json()
    assert body["escalated"] is False
    assert body["dropped_regions"] == []
    assert body["groups"][0]["regions"] == ["강남구", "송파구"]
    assert body["groups"][0]["staff_id"] == store.get_staff_by_name("담당자1").id


def test_auto_groups_escalates_and_leaves_extra_groups_unassigned(client, admin_headers):
    response = client.post(
        "/api/admin/region-assignments/auto-groups",
        json={"staff_count": 3, "granularity": "district"},
        headers=admin_headers,
    )
    body = response.json()
    assert body["escalated"] is True
    assert body["granularity"] == "subdistrict"
    assert [g["regions"] for g in body["groups"]] == [["강남구 역삼동"], ["송파구 문정동"]]
    assert body["groups"][1]["staff_id"] is None
    assert body["groups"][1]["staff_name"] == "(unassigned)"


def test_auto_groups_pads_remaining_agents(client, admin_headers):
    for name in ("담당자2", "담당자3"):
        client.post("/api/admin/staff", json={"name": name, "password": "pw"}, headers=admin_headers)

    body = client.post(
        "/api/admin/region-assignments/auto-groups",
        json={"staff_count": 1, "granularity": "district", "regions": ["강남구"]},
        headers=admin_headers,
    ).json()
    assert [g["staff_name"] for g in body["groups"]] == ["담당자1", "담당자2", "담당자3"]
    assert [g["regions"] for g in body["groups"]] == [["강남구"], [], []]


def test_auto_groups_errors(client, admin_headers):
    client.post(
        "/api/admin/properties",
        json={"address": "서울특별시 마포구 123", "source": "auction"},
        headers=admin_headers,
    )
    no_data = client.post(
        "/api/admin/region-assignments/auto-groups",
        json={"staff_count": 2, "granularity": "district", "regions": ["마포구"]},
        headers=admin_headers,
    )
    assert no_data.status_code == 422

    empty = client.post(
        "/api/admin/region-assignments/auto-groups",
        json={"staff_count": 1, "granularity": "district", "regions": []},
        headers=admin_headers,
    )
    assert empty.status_code == 400

    zero = client.post(
        "/api/admin/region-assignments/auto-groups",
        json={"staff_count": 0, "granularity": "district"},
        headers=admin_headers,
    )
    assert zero.status_code == 400


def test_apply_assignments_overwrites_agent_regions(client, admin_headers, store):
    agent = store.get_staff_by_name("담당자1")
    admin = next(u for u in store.staff if u.role == "admin")
    response = client.post(
        "/api/admin/region-assignments",
        json={
            "assignments": [
                {"staff_id": agent.id, "regions": [{"unit": "subdistrict", "name": "송파구 문정동"}]},
                {"staff_id": admin.id, "regions": [{"unit": "district", "name": "강남구"}]},
                {"staff_id": "user_missing", "regions": []},
            ]
        },
        headers=admin_headers,
    )
    body = response.json()
    assert body["updated"] == [agent.id]
    assert body["skipped"] == [admin.id, "user_missing"]
    assert [(r.unit, r.name) for r in agent.regions] == [("subdistrict", "송파구 문정동")]
    assert admin.regions == []


def test_realtor_office_registry(client, admin_headers):
    payload = {"office_name": "역삼공인중개사", "address": "서울특별시 강남구 역삼동 1-2", "office_phone": "02-555-0000"}
    created = client.post("/api/admin/realtor-offices", json=payload, headers=admin_headers)
    assert created.status_code == 201
    office = created.json()
    assert office["office_phone"] == "025550000"

    same = dict(payload, address="서울시 강남구 역삼동 1 - 2")
    assert client.post("/api/admin/realtor-offices", json=same, headers=admin_headers).status_code == 409

    other = client.post(
        "/api/admin/realtor-offices",
        json={"office_name": "삼성공인중개사", "address": "서울특별시 강남구 삼성동 3"},
        headers=admin_headers,
    ).json()
    clash = client.patch(
        f"/api/admin/realtor-offices/{other['id']}",
        json={"office_name": "역삼공인중개사", "address": "서울특별시 강남구 역삼동 1-2"},
        headers=admin_headers,
    )
    assert clash.status_code == 409

    phone = client.patch(
        f"/api/admin/realtor-offices/{office['id']}/phone",
        json={"mobile_phone": "010 1234 5678"},
        headers=admin_headers,
    )
    assert phone.json()["mobile_phone"] == "01012345678"

    listed = client.get("/api/admin/realtor-offices", headers=admin_headers).json()
    assert listed["total"] == 2
    names = [o["office_name"] for o in listed["items"]]
    assert names == ["삼성공인중개사", "역삼공인중개사"]


def test_auto_groups_lists_districts_dropped_by_escalation(client, admin_headers):
    client.post(
        "/api/admin/properties",
        json={"address": "서울특별시 서초구 123", "source": "auction"},
        headers=admin_headers,
    )
    body = client.post(
        "/api/admin/region-assignments/auto-groups",
        json={"staff_count": 4, "granularity": "district"},
        headers=admin_headers,
    ).json()
    assert body["escalated"] is True
    assert body["dropped_regions"] == ["서초구"]
    assert [g["regions"] for g in body["groups"]] == [["강남구 역삼동"], ["송파구 문정동"]]


def test_office_csv_import_skips_known_offices(client, admin_headers, store):
    csv_text = (
        "법정동명,등록번호,사업자상호,중개업자명,직위구분명,핸드폰번호\n"
        "서울특별시 강서구 화곡동,11500-2026-00001,좋은공인중개사사무소,홍길동,대표,010-1111-2222\n"
        "서울특별시 강서구 화곡동,11500-2026-00001,좋은공인중개사사무소,이소속,소속공인중개사,\n"
        "서울특별시 마포구 합정동,11440-2026-00007,합정부동산,박대표,대표,\n"
    )
    client.post(
        "/api/admin/realtor-offices",
        json={"office_name": "합정부동산", "address": "서울시 마포구 합정동"},
        headers=admin_headers,
    )

    first = client.post(
        "/api/admin/import/realtor-offices-csv", json={"csv_text": csv_text}, headers=admin_headers
    ).json()
    assert first["grouped_offices"] == 2
    assert first["inserted"] == 1
    assert first["duplicates"] == 1
    assert first["total_offices"] == 2

    office = store.realtor_offices[0]
    assert office.office_reg_no == "11500-2026-00001"
    assert office.manager_name == "홍길동"

    renamed = csv_text.replace("좋은공인중개사사무소", "새이름공인중개사")
    again = client.post(
        "/api/admin/import/realtor-offices-csv", json={"csv_text": renamed}, headers=admin_headers
    ).json()
    assert again["inserted"] == 0
    assert again["duplicates"] == 2


def test_office_csv_schema(client, admin_headers):
    body = client.get("/api/admin/import/realtor-offices-csv", headers=admin_headers).json()
    assert body["example_csv"].startswith("법정동명,등록번호")
    assert body["note"]


def test_debug_setting_reaches_app(store):
    assert create_app(Settings(DEBUG=True), store).debug is True
