from models.exam_questions import ExamQuestion
from models.questions import Question


def question_body(**overrides):
    body = {"category": "algebra", "question": "2 + 2?", "options": ["3", "4"], "correct": "4"}
    body.update(overrides)
    return body


def test_create_question(client, course, teacher, auth_headers):
    resp = client.post(f"/api/questions/course/{course.id}", headers=auth_headers(teacher), json=question_body())

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["correct"] == "4"
    assert data["weight"] == 1.0
    assert data["course_name"] == course.title


def test_create_question_validation(client, course, teacher, auth_headers):
    headers = auth_headers(teacher)
    url = f"/api/questions/course/{course.id}"

    assert client.post(url, headers=headers, json=question_body(correct="5")).status_code == 400
    assert client.post(url, headers=headers, json=question_body(options=["4"])).status_code == 400
    assert client.post(url, headers=headers, json=question_body(weight=0)).status_code == 400
    assert client.post(url, headers=headers, json=question_body(category=None)).status_code == 400


def test_boolean_correct_must_match_a_boolean_option(client, session, course, teacher, auth_headers):
    url = f"/api/questions/course/{course.id}"

    resp = client.post(url, headers=auth_headers(teacher), json=question_body(options=[1, 0], correct=True))

    assert resp.status_code == 400
    assert session.query(Question).count() == 0
    ok = client.post(url, headers=auth_headers(teacher), json=question_body(options=[True, False], correct=True))
    assert ok.status_code == 201


def test_bulk_create_is_all_or_nothing(client, session, course, teacher, auth_headers):
    resp = client.post(f"/api/questions/course/{course.id}/bulk", headers=auth_headers(teacher), json={
        "category": "algebra",
        "questions": [
            {"text": "1 + 1?", "options": ["1", "2"], "correct": "2", "weight": 2},
            {"text": "broken", "options": ["1", "2"], "correct": "3"},
        ],
    })

    assert resp.status_code == 400
    assert session.query(Question).count() == 0


def test_bulk_create(client, course, teacher, auth_headers):
    resp = client.post(f"/api/questions/course/{course.id}/bulk", headers=auth_headers(teacher), json={
        "category": "algebra",
        "questions": [
            {"text": "1 + 1?", "options": ["1", "2"], "correct": "2", "weight": 2},
            {"text": "2 + 1?", "options": ["3", "2"], "correct": "3"},
        ],
    })

    assert resp.status_code == 201
    assert [q["weight"] for q in resp.get_json()["data"]] == [2.0, 1.0]


def test_list_filters_and_counts(client, course, teacher, make_question, auth_headers):
    make_question(category="algebra")
    make_question(category="algebra")
    make_question(category="geometry")
    headers = auth_headers(teacher)

    by_course = client.get(f"/api/questions/course/{course.id}?category=algebra", headers=headers)
    by_category = client.get("/api/questions/category/geometry", headers=headers)
    count = client.get("/api/questions/teacher/count", headers=headers)
    mine = client.get("/api/questions/teacher", headers=headers)

    assert len(by_course.get_json()["data"]) == 2
    assert len(by_category.get_json()["data"]) == 1
    assert count.get_json()["data"]["count"] == 3
    assert len(mine.get_json()["data"]) == 3


def test_student_question_view_hides_correct(client, make_question, student, auth_headers):
    question = make_question()

    data = client.get(f"/api/questions/{question.id}", headers=auth_headers(student)).get_json()["data"]

    assert "correct" not in data


def test_student_cannot_list_course_questions(client, course, student, auth_headers):
    assert client.get(f"/api/questions/course/{course.id}", headers=auth_headers(student)).status_code == 403


def test_update_question_keeps_correct_among_options(client, make_question, teacher, auth_headers):
    question = make_question(correct="A")
    url = f"/api/questions/{question.id}"

    bad = client.put(url, headers=auth_headers(teacher), json={"options": ["X", "Y"]})
    good = client.put(url, headers=auth_headers(teacher), json={"options": ["X", "Y"], "correct": "Y", "weight": 3})

    assert bad.status_code == 400
    assert good.status_code == 200
    assert good.get_json()["data"]["correct"] == "Y"
    assert good.get_json()["data"]["weight"] == 3.0


def test_delete_question_unbinds_from_exams(client, session, build_exam, teacher, auth_headers):
    exam = build_exam([("A", 1), ("B", 1)])
    question_id = exam.exam_questions[0].question_id

    resp = client.delete(f"/api/questions/{question_id}", headers=auth_headers(teacher))

    assert resp.status_code == 200
    assert session.query(ExamQuestion).filter_by(question_id=question_id).count() == 0
    assert session.query(ExamQuestion).filter_by(exam_id=exam.id).count() == 1


def test_delete_by_category(client, session, course, teacher, make_question, auth_headers):
    make_question(category="old")
    make_question(category="old")
    make_question(category="keep")

    resp = client.delete(f"/api/questions/course/{course.id}/category/old", headers=auth_headers(teacher))

    assert resp.get_json()["data"]["deleted"] == 2
    assert session.query(Question).count() == 1


def test_rate_question(client, make_question, student, auth_headers):
    question = make_question()
    url = f"/api/questions/{question.id}/rate"

    assert client.post(url, headers=auth_headers(student), json={"rating": 0}).status_code == 400
    assert client.post(url, headers=auth_headers(student), json={"rating": 5}).get_json()["data"]["rating"] == 5.0
