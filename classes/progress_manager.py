import calendar
import logging
from datetime import datetime, timedelta, timezone

from models import db
from models.blogs import Blog
from models.course_lessons import Lesson
from models.exams import Exam
from models.lesson_progress import LessonProgress
from utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

TIME_FRAMES = ("week", "month")
ACTIVITIES = ("lessons", "exams", "blogs", "others")

# lesson wins over exam, exam over blog
TARGETS = (
    ("lessonId", "lesson_id", Lesson, "Lesson not found"),
    ("examId", "exam_id", Exam, "Exam not found"),
    ("blogId", "blog_id", Blog, "Blog not found"),
)


def _utc_now():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _month_before(moment):
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _empty_counts():
    return dict.fromkeys(ACTIVITIES + ("total",), 0)


class ProgressManager:
    """Learning activity log of each user and its per-day summary."""

    def __init__(self, session=None, clock=None):
        self.session = session if session is not None else db.session
        self.clock = clock or _utc_now

    def record_progress(self, user_id, data):
        """Insert an activity, or refresh the one already tied to the same target."""
        name = data.get("progress_name")
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("progress_name is required")

        target = None
        for key, column, model, missing in TARGETS:
            value = data.get(key)
            if value is None:
                continue
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValidationError(f"{key} must be an integer id")
            if self.session.get(model, value) is None:
                raise NotFoundError(missing)
            target = (column, value)
            break

        now = self.clock()
        progress = None
        if target is not None:
            progress = (self.session.query(LessonProgress)
                        .filter_by(user_id=user_id, **{target[0]: target[1]})
                        .first())

        if progress is not None:
            progress.progress_name = name
            progress.updated_at = now
        else:
            progress = LessonProgress(user_id=user_id, progress_name=name, created_at=now, updated_at=now)
            if target is not None:
                setattr(progress, target[0], target[1])
            self.session.add(progress)

        self.session.commit()
        return progress

    def progress_for_user(self, user_id):
        return (self.session.query(LessonProgress)
                .filter(LessonProgress.user_id == user_id)
                .order_by(LessonProgress.created_at.desc(), LessonProgress.id.desc())
                .all())

    def detailed_progress(self, user_id, time_frame):
        """Activity of the last week or month, grouped by date, weekday and kind."""
        if time_frame not in TIME_FRAMES:
            raise ValidationError("Invalid timeFrame. Use 'week' or 'month'")

        end = self.clock()
        start = end - timedelta(days=7) if time_frame == "week" else _month_before(end)
        entries = (self.session.query(LessonProgress)
                   .filter(LessonProgress.user_id == user_id,
                           LessonProgress.created_at >= start,
                           LessonProgress.created_at <= end)
                   .order_by(LessonProgress.created_at.asc(), LessonProgress.id.asc())
                   .all())

        by_date, by_day = {}, {}
        by_activity = dict.fromkeys(ACTIVITIES, 0)
        grouped = {}
        for entry in entries:
            date = entry.created_at.date().isoformat()
            day = entry.created_at.strftime("%A")
            kind = entry.activity

            for counts in (by_date.setdefault(date, _empty_counts()), by_day.setdefault(day, _empty_counts())):
                counts[kind] += 1
                counts["total"] += 1
            by_activity[kind] += 1

            bucket = grouped.setdefault(date, {"date": date, "count": 0, **{a: [] for a in ACTIVITIES}})
            bucket["count"] += 1
            item = {"id": entry.id, "progress_name": entry.progress_name,
                    "created_at": entry.created_at.isoformat()}
            if kind != "others":
                target = getattr(entry, kind[:-1])
                item[kind[:-1]] = {"id": target.id, "title": target.title}
            bucket[kind].append(item)

        return {
            "timeFrame": time_frame,
            "startDate": start.isoformat(),
            "endDate": end.isoformat(),
            "totalCounts": dict(by_activity),
            "activityCounts": {"byDate": by_date, "byDay": by_day, "byActivity": by_activity},
            "progressByDate": sorted(grouped.values(), key=lambda bucket: bucket["date"], reverse=True),
        }

    def delete_progress(self, progress_id, user_id):
        progress = (self.session.query(LessonProgress)
                    .filter_by(id=progress_id, user_id=user_id)
                    .first())
        if progress is None:
            raise NotFoundError("Progress not found")
        self.session.delete(progress)
        self.session.commit()
        logger.info("Progress %s of user %s deleted", progress_id, user_id)
