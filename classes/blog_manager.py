import logging

from models import db
from models.blogs import Blog
from models.courses import Course
from utils.errors import NotFoundError, ValidationError
from utils.helpers import CONTENT_STATUSES, sanitize_html, validate_choice

logger = logging.getLogger(__name__)


def _clean_content(content):
    """Blog bodies are a non-empty list of rich-text blocks."""
    if not isinstance(content, list) or not content:
        raise ValidationError("Content must be a non-empty array")
    if not all(isinstance(block, str) for block in content):
        raise ValidationError("Content blocks must be strings")
    return [sanitize_html(block) for block in content]


class BlogManager:
    """Course blogs written by the course's teacher."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def get_blog(self, blog_id):
        blog = self.session.get(Blog, blog_id)
        if blog is None:
            raise NotFoundError("Blog not found")
        return blog

    def create_blog(self, course_id, user_id, data):
        content = _clean_content(data.get("content"))
        validate_choice(data.get("status"), CONTENT_STATUSES, "Status")
        if self.session.get(Course, course_id) is None:
            raise NotFoundError("Course not found")

        blog = Blog(
            course_id=course_id,
            user_id=user_id,
            title=data.get("title"),
            content=content,
            status=data.get("status") or "draft",
        )
        self.session.add(blog)
        self.session.commit()
        logger.info("Blog %s created in course %s by user %s", blog.id, course_id, user_id)
        return blog

    def blogs_for_course(self, course_id, published_only=False):
        query = self.session.query(Blog).filter(Blog.course_id == course_id)
        if published_only:
            query = query.filter(Blog.status == "published")
        return query.order_by(Blog.created_at.desc(), Blog.id.desc()).all()

    def blogs_for_teacher(self, teacher_id):
        """Blogs across every course the teacher owns, newest first, with the course name."""
        blogs = (self.session.query(Blog)
                 .join(Course, Blog.course_id == Course.id)
                 .filter(Course.teacher_id == teacher_id)
                 .order_by(Blog.created_at.desc(), Blog.id.desc())
                 .all())
        return [
            {**blog.to_dict(), "course_name": blog.course.title if blog.course else "Unknown Course"}
            for blog in blogs
        ]

    def update_blog(self, blog_id, data):
        blog = self.get_blog(blog_id)
        validate_choice(data.get("status"), CONTENT_STATUSES, "Status")
        if "content" in data:
            blog.content = _clean_content(data["content"])
        if data.get("title") is not None:
            blog.title = data["title"]
        if data.get("status") is not None:
            blog.status = data["status"]
        self.session.commit()
        return blog

    def delete_blog(self, blog_id):
        blog = self.get_blog(blog_id)
        self.session.delete(blog)
        self.session.commit()
        logger.info("Blog %s deleted", blog_id)
