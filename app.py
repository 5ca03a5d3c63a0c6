import logging
import os

from dotenv import load_dotenv
load_dotenv()
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate

from config import config_dict
from models import db
from routes.authentication import auth_bp
from routes.blogs import blog_bp
from routes.courses import course_bp
from routes.exams import exam_bp
from routes.progress import progress_bp
from routes.questions import question_bp
from routes.students import student_bp
from routes.super_admin import admin_bp
from utils.errors import register_error_handlers
from utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

migrate = Migrate()

POOL_OPTIONS = ("poolclass", "pool_size", "max_overflow", "pool_timeout", "pool_pre_ping")


def create_app(config_name=None, overrides=None):
    """Build the Flask app for ``config_name`` (default: FLASK_ENV, then production)."""
    app = Flask(__name__)

    env = (config_name or os.environ.get("FLASK_ENV", "production")).lower()
    app.config.from_object(config_dict.get(env, config_dict["production"]))
    if overrides:
        app.config.update(overrides)

    # SQLite manages its own pool
    if app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite"):
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
            key: value for key, value in app.config["SQLALCHEMY_ENGINE_OPTIONS"].items()
            if key not in POOL_OPTIONS
        }

    configure_logging(app)

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}}, supports_credentials=True)

    db.init_app(app)
    migrate.init_app(app, db)

    app.register_blueprint(auth_bp, url_prefix='/api/users')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(course_bp, url_prefix='/api/courses')
    app.register_blueprint(question_bp, url_prefix='/api/questions')
    app.register_blueprint(exam_bp, url_prefix='/api/exams')
    app.register_blueprint(student_bp, url_prefix='/api/students')
    app.register_blueprint(blog_bp, url_prefix='/api/blogs')
    app.register_blueprint(progress_bp, url_prefix='/api/progress')

    register_error_handlers(app, db)

    @app.route('/')
    def home():
        return jsonify({"success": True, "message": "Welcome to the LMS API!"})

    logger.info("App created with %s config", env)
    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config.get('DEBUG', False))
