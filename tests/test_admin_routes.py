from models.site_content import PrivacyPolicy


def test_admin_lists_users_by_role(client, admin, make_user, auth_headers):
    make_user("teacher")
    make_user("student")
    make_user("student")
    headers = auth_headers(admin)

    teachers = client.get("/api/admin/teachers", headers=headers).get_json()["data"]
    students = client.get("/api/admin/students", headers=headers).get_json()["data"]

    assert len(teachers) == 1
    assert len(students) == 2


def test_non_admin_is_forbidden(client, teacher, auth_headers):
    resp = client.get("/api/admin/students", headers=auth_headers(teacher))
    assert resp.status_code == 403
    assert resp.get_json()["success"] is False


def test_teacher_details_counts(client, admin, teacher, build_exam, auth_headers):
    build_exam([("A", 1), ("B", 1)])

    data = client.get(f"/api/admin/teachers/{teacher.id}", headers=auth_headers(admin)).get_json()["data"]

    assert data["exam_count"] == 1
    assert data["question_count"] == 2
    assert len(data["courses"]) == 1


def test_get_student_checks_role(client, admin, student, teacher, auth_headers):
    headers = auth_headers(admin)
    assert client.get(f"/api/admin/students/{student.id}", headers=headers).status_code == 200
    assert client.get(f"/api/admin/students/{teacher.id}", headers=headers).status_code == 404


def test_toggle_status_blocks_login(client, admin, make_user, auth_headers):
    user = make_user("student")

    resp = client.put(f"/api/admin/users/{user.id}/toggle-status", headers=auth_headers(admin))
    assert resp.get_json()["data"]["status"] == "inactive"
    assert client.post("/api/users/login", json={"email": user.email, "password": "password123"}).status_code == 403

    resp = client.put(f"/api/admin/users/{user.id}/toggle-status", headers=auth_headers(admin))
    assert resp.get_json()["data"]["status"] == "active"


def test_privacy_policy_replaced(client, session, admin, auth_headers):
    assert client.get("/api/admin/privacy-policy").get_json()["data"] is None

    client.post("/api/admin/privacy-policy", headers=auth_headers(admin), json={"content": "<p>v1</p>"})
    client.post("/api/admin/privacy-policy", headers=auth_headers(admin), json={"content": "<p>v2</p>"})

    assert session.query(PrivacyPolicy).count() == 1
    assert client.get("/api/admin/privacy-policy").get_json()["data"]["content"] == "<p>v2</p>"


def test_terms_require_content(client, admin, auth_headers):
    assert client.post("/api/admin/terms", headers=auth_headers(admin), json={}).status_code == 400
    assert client.post("/api/admin/terms", headers=auth_headers(admin), json={"content": "Be nice"}).status_code == 201
    assert client.get("/api/admin/terms").get_json()["data"]["content"] == "Be nice"


def test_promo_crud(client, admin, student, auth_headers):
    headers = auth_headers(admin)

    created = client.post("/api/admin/promos", headers=headers, json={"title": "Sale", "link": "https://x.test"})
    promo_id = created.get_json()["data"]["id"]
    assert created.status_code == 201

    assert client.post("/api/admin/promos", headers=auth_headers(student), json={"title": "x"}).status_code == 403

    updated = client.put(f"/api/admin/promos/{promo_id}", headers=headers, json={"is_active": False})
    assert updated.get_json()["data"]["is_active"] is False

    active = client.get("/api/admin/promos?active=true", headers=auth_headers(student)).get_json()["data"]
    assert active == []

    assert client.delete(f"/api/admin/promos/{promo_id}", headers=headers).status_code == 200
    assert client.get(f"/api/admin/promos/{promo_id}", headers=headers).status_code == 404
