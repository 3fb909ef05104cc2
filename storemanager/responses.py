from flask import jsonify
from werkzeug.exceptions import HTTPException

from storemanager.errors import ApiError


def handle_response(result, status_code=200):
    """Wrap a helper's payload in the success envelope."""
    return jsonify({"status": True, "message": result}), status_code


def handle_api_error(error: ApiError):
    return jsonify(error.to_dict()), error.status_code


def handle_http_exception(error: HTTPException):
    return jsonify({"status": False, "message": error.description}), error.code


def register_error_handlers(app):
    app.register_error_handler(ApiError, handle_api_error)
    app.register_error_handler(HTTPException, handle_http_exception)
