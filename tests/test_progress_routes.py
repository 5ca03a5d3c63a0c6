from datetime import datetime

import pytest

from classes.progress_manager import ProgressManager
from models.blogs import Blog
from models.course_lessons import Lesson
from models.lesson_progress import LessonProgress
from utils.errors import NotFoundError, ValidationError


@pytest.fixture
def lesson(session, course):
    lesson = Lesson(course_id=course.id, title="Fractions", status="published", position=1)
    session.add(lesson)
    session.commit()
    return lesson


@pytest.fixture
def blog(session, course, teacher):
    blog = Blog(course_id=course.id, user_id=teacher.id, title="Reading list", content=["<p>a</p>"],
                status="published")
    session.add(blog)
    session.commit()
    return blog


def test_record_progress_for_lesson(client, lesson, student, auth_headers):
    resp = client.post("/api/progress", headers=auth_headers(student),
                       json={"progress_name": "Opened lesson", "lessonId": lesson.id})

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["lesson_id"] == lesson.id
    assert data["lesson"] == {"id": lesson.id, "title": "Fractions"}
    assert data["exam"] is None


def test_record_progress_refreshes_same_target(client, session, lesson, student, auth_headers):
    headers = auth_headers(student)
    client.post("/api/progress", headers=headers, json={"progress_name": "Started", "lessonId": lesson.id})
    client.post("/api/progress", headers=headers, json={"progress_name": "Finished", "lessonId": lesson.id})

    rows = session.query(LessonProgress).filter_by(user_id=student.id).all()
    assert len(rows) == 1
    assert rows[0].progress_name == "Finished"


def test_lesson_takes_priority_over_other_targets(client, build_exam, lesson, student, auth_headers):
    exam = build_exam([("A", 1)])

    resp = client.post("/api/progress", headers=auth_headers(student),
                       json={"progress_name": "Both", "lessonId": lesson.id, "examId": exam.id})

    data = resp.get_json()["data"]
    assert data["lesson_id"] == lesson.id
    assert data["exam_id"] is None


def test_record_progress_validation(client, student, auth_headers):
    headers = auth_headers(student)

    assert client.post("/api/progress", headers=headers, json={"lessonId": 1}).status_code == 400
    assert client.post("/api/progress", headers=headers,
                       json={"progress_name": "x", "examId": "3"}).status_code == 400
    assert client.post("/api/progress", headers=headers,
                       json={"progress_name": "x", "blogId": 999}).status_code == 404
    assert client.post("/api/progress", json={"progress_name": "x"}).status_code == 401


def test_progress_summary_route(client, lesson, blog, student, auth_headers):
    headers = auth_headers(student)
    client.post("/api/progress", headers=headers, json={"progress_name": "Lesson", "lessonId": lesson.id})
    client.post("/api/progress", headers=headers, json={"progress_name": "Blog", "blogId": blog.id})
    client.post("/api/progress", headers=headers, json={"progress_name": "Logged in"})

    resp = client.get("/api/progress?timeFrame=month", headers=headers)

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["timeFrame"] == "month"
    assert data["totalCounts"] == {"lessons": 1, "exams": 0, "blogs": 1, "others": 1}
    assert len(data["progressByDate"]) == 1
    assert data["progressByDate"][0]["count"] == 3
    assert data["progressByDate"][0]["blogs"][0]["blog"] == {"id": blog.id, "title": "Reading list"}


def test_progress_summary_rejects_unknown_time_frame(client, student, auth_headers):
    resp = client.get("/api/progress?timeFrame=year", headers=auth_headers(student))

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_progress_list_is_per_user(client, lesson, make_user, auth_headers):
    alice, bob = make_user("student"), make_user("student")
    client.post("/api/progress", headers=auth_headers(alice), json={"progress_name": "A", "lessonId": lesson.id})

    mine = client.get("/api/progress/all", headers=auth_headers(alice)).get_json()["data"]
    theirs = client.get("/api/progress/all", headers=auth_headers(bob)).get_json()["data"]

    assert [p["progress_name"] for p in mine] == ["A"]
    assert theirs == []


def test_delete_progress_is_scoped_to_owner(client, session, lesson, make_user, auth_headers):
    alice, bob = make_user("student"), make_user("student")
    progress_id = client.post("/api/progress", headers=auth_headers(alice),
                              json={"progress_name": "A", "lessonId": lesson.id}).get_json()["data"]["id"]

    assert client.delete(f"/api/progress/{progress_id}", headers=auth_headers(bob)).status_code == 404
    assert client.delete(f"/api/progress/{progress_id}", headers=auth_headers(alice)).status_code == 200
    assert session.query(LessonProgress).count() == 0

#__________________________________________________________________________________________ * Summary windows *__________________________________________________


def test_week_window_groups_by_date_and_weekday(session, lesson, blog, student):
    ticks = iter([
        datetime(2024, 3, 1, 9),    # Friday, outside the week
        datetime(2024, 3, 5, 10),   # Tuesday
        datetime(2024, 3, 5, 11),
        datetime(2024, 3, 7, 8),    # Thursday
        datetime(2024, 3, 8, 12),   # summary time
    ])
    manager = ProgressManager(session, clock=lambda: next(ticks))
    manager.record_progress(student.id, {"progress_name": "Old"})
    manager.record_progress(student.id, {"progress_name": "Lesson", "lessonId": lesson.id})
    manager.record_progress(student.id, {"progress_name": "Blog", "blogId": blog.id})
    manager.record_progress(student.id, {"progress_name": "Other"})

    summary = manager.detailed_progress(student.id, "week")

    assert summary["startDate"] == "2024-03-01T12:00:00"
    assert summary["endDate"] == "2024-03-08T12:00:00"
    assert summary["totalCounts"] == {"lessons": 1, "exams": 0, "blogs": 1, "others": 1}
    assert [bucket["date"] for bucket in summary["progressByDate"]] == ["2024-03-07", "2024-03-05"]
    assert summary["activityCounts"]["byDate"]["2024-03-05"] == {
        "lessons": 1, "exams": 0, "blogs": 1, "others": 0, "total": 2,
    }
    assert summary["activityCounts"]["byDay"]["Thursday"]["others"] == 1


def test_month_window_clamps_to_shorter_month(session, student):
    ticks = iter([datetime(2024, 2, 29, 10), datetime(2024, 3, 31, 10)])
    manager = ProgressManager(session, clock=lambda: next(ticks))
    manager.record_progress(student.id, {"progress_name": "Leap day"})

    summary = manager.detailed_progress(student.id, "month")

    assert summary["startDate"] == "2024-02-29T10:00:00"
    assert summary["totalCounts"]["others"] == 1


def test_summary_errors(session, student):
    manager = ProgressManager(session)

    with pytest.raises(ValidationError):
        manager.detailed_progress(student.id, "day")
    with pytest.raises(NotFoundError):
        manager.delete_progress(999, student.id)
