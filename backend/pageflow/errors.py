from flask import jsonify
from pageflow.domain.exceptions import InvariantViolation, PageflowError

def register_error_handlers(app):
    @app.errorhandler(PageflowError)
    def handle_pageflow_error(error):
        if isinstance(error, InvariantViolation):
            app.logger.error("Invariant violation, operation aborted: %s", error)

        response = jsonify({
            "error": type(error).__name__,
            "message": error.message
        })
        response.status_code = error.status_code
        return response
