from models.blogs import Blog
from models.courses import Course


def blog_body(**overrides):
    body = {"title": "Week one", "content": ["<p>Read chapter 1</p><script>alert(1)</script>"], "status": "published"}
    body.update(overrides)
    return body


def test_create_blog_sanitises_content(client, course, teacher, auth_headers):
    resp = client.post(f"/api/blogs/courses/{course.id}", headers=auth_headers(teacher), json=blog_body())

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["content"][0].startswith("<p>Read chapter 1</p>")
    assert "<script>" not in data["content"][0]
    assert data["user_id"] == teacher.id


def test_create_blog_validation(client, course, teacher, auth_headers):
    headers = auth_headers(teacher)
    url = f"/api/blogs/courses/{course.id}"

    assert client.post(url, headers=headers, json=blog_body(content=[])).status_code == 400
    assert client.post(url, headers=headers, json=blog_body(content="<p>text</p>")).status_code == 400
    assert client.post(url, headers=headers, json=blog_body(status="hidden")).status_code == 400
    assert client.post("/api/blogs/courses/999", headers=headers, json=blog_body()).status_code == 404


def test_blog_defaults_to_draft(client, course, teacher, auth_headers):
    resp = client.post(f"/api/blogs/courses/{course.id}", headers=auth_headers(teacher),
                       json={"content": ["<p>Notes</p>"]})

    assert resp.status_code == 201
    assert resp.get_json()["data"]["status"] == "draft"


def test_only_course_owner_writes_blogs(client, session, course, make_user, auth_headers):
    outsider = make_user("teacher")
    blog = Blog(course_id=course.id, user_id=course.teacher_id, title="Mine", content=["x"], status="draft")
    session.add(blog)
    session.commit()
    headers = auth_headers(outsider)

    assert client.post(f"/api/blogs/courses/{course.id}", headers=headers, json=blog_body()).status_code == 403
    assert client.put(f"/api/blogs/{blog.id}", headers=headers, json={"title": "Theirs"}).status_code == 403
    assert client.delete(f"/api/blogs/{blog.id}", headers=headers).status_code == 403


def test_student_cannot_create_blog(client, course, student, auth_headers):
    resp = client.post(f"/api/blogs/courses/{course.id}", headers=auth_headers(student), json=blog_body())

    assert resp.status_code == 403


def test_students_only_see_published_blogs(client, session, course, student, teacher, auth_headers):
    session.add_all([
        Blog(course_id=course.id, user_id=teacher.id, title="Open", content=["a"], status="published"),
        Blog(course_id=course.id, user_id=teacher.id, title="Hidden", content=["b"], status="draft"),
    ])
    session.commit()
    hidden = session.query(Blog).filter_by(title="Hidden").one()

    student_titles = [b["title"] for b in client.get(f"/api/blogs/course/{course.id}",
                                                     headers=auth_headers(student)).get_json()["data"]]
    teacher_titles = [b["title"] for b in client.get(f"/api/blogs/course/{course.id}",
                                                     headers=auth_headers(teacher)).get_json()["data"]]

    assert student_titles == ["Open"]
    assert sorted(teacher_titles) == ["Hidden", "Open"]
    assert client.get(f"/api/blogs/{hidden.id}", headers=auth_headers(student)).status_code == 404
    assert client.get(f"/api/blogs/{hidden.id}", headers=auth_headers(teacher)).status_code == 200


def test_teacher_blog_list_spans_courses_newest_first(client, session, course, teacher, auth_headers):
    second = Course(title="Geometry", teacher_id=teacher.id)
    session.add(second)
    session.commit()
    client.post(f"/api/blogs/courses/{course.id}", headers=auth_headers(teacher), json=blog_body(title="First"))
    client.post(f"/api/blogs/courses/{second.id}", headers=auth_headers(teacher), json=blog_body(title="Second"))

    mine = client.get("/api/blogs", headers=auth_headers(teacher)).get_json()["data"]
    public = client.get(f"/api/blogs/teacher/{teacher.id}", headers=auth_headers(teacher)).get_json()["data"]

    assert [b["title"] for b in mine] == ["Second", "First"]
    assert [b["course_name"] for b in mine] == ["Geometry", "Algebra"]
    assert len(public) == 2


def test_update_and_delete_blog(client, session, course, teacher, auth_headers):
    headers = auth_headers(teacher)
    blog_id = client.post(f"/api/blogs/courses/{course.id}", headers=headers,
                          json=blog_body()).get_json()["data"]["id"]

    bad = client.put(f"/api/blogs/{blog_id}", headers=headers, json={"content": []})
    updated = client.put(f"/api/blogs/{blog_id}", headers=headers,
                         json={"content": ["<h2>Revised</h2>"], "status": "draft"})

    assert bad.status_code == 400
    assert updated.status_code == 200
    assert updated.get_json()["data"]["content"] == ["<h2>Revised</h2>"]
    assert updated.get_json()["data"]["status"] == "draft"

    assert client.delete(f"/api/blogs/{blog_id}", headers=headers).status_code == 200
    assert session.query(Blog).count() == 0
    assert client.get(f"/api/blogs/{blog_id}", headers=headers).status_code == 404


def test_deleting_course_removes_its_blogs(client, session, course, teacher, auth_headers):
    client.post(f"/api/blogs/courses/{course.id}", headers=auth_headers(teacher), json=blog_body())

    resp = client.delete(f"/api/courses/{course.id}", headers=auth_headers(teacher))

    assert resp.status_code == 200
    assert session.query(Blog).count() == 0
