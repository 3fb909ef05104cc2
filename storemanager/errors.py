class ApiError(Exception):
    """An error that carries the HTTP status it should be answered with."""

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"status": False, "message": self.message}


class BadRequest(ApiError):
    status_code = 400


class Unauthorized(ApiError):
    status_code = 401


class Forbidden(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class ValidationError(BadRequest):
    """Rejected request body; every problem found is reported at once."""

    def __init__(self, errors):
        super().__init__(errors[0] if errors else "Invalid request")
        self.errors = list(errors)

    def to_dict(self):
        return {"status": False, "error": self.errors}
