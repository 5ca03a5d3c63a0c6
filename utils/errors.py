from flask import jsonify


class LMSError(Exception):
    """Base error for everything the services raise on purpose.

    Carries the HTTP status the API answers with, so routes can let these
    propagate to the registered error handler.
    """
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"success": False, "message": self.message, "error": self.__class__.__name__}


class ValidationError(LMSError):
    status_code = 400


class NoQuestionsError(ValidationError):
    def __init__(self, exam_id):
        super().__init__(f"No questions found for exam {exam_id}")
        self.exam_id = exam_id


class TooManyAnswersError(ValidationError):
    def __init__(self, submitted, available):
        super().__init__(
            f"Submitted answers ({submitted}) exceed the number of questions in the exam ({available})"
        )
        self.submitted = submitted
        self.available = available


class AuthError(LMSError):
    status_code = 401


class ForbiddenError(LMSError):
    status_code = 403


class NotFoundError(LMSError):
    status_code = 404


class ConflictError(LMSError):
    status_code = 409


class StoreError(LMSError):
    status_code = 500


def register_error_handlers(app, db):
    from sqlalchemy.exc import SQLAlchemyError

    @app.errorhandler(LMSError)
    def handle_lms_error(error):
        if isinstance(error, StoreError):
            app.logger.error("Store failure: %s", error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(error):
        db.session.rollback()
        app.logger.exception("Unhandled database error")
        return jsonify(StoreError(str(error)).to_dict()), 500

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({"success": False, "message": "Resource not found"}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return jsonify({"success": False, "message": "Method not allowed"}), 405
