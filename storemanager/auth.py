import logging
from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt
from flask import current_app, g, request

from storemanager.errors import Forbidden, Unauthorized

logger = logging.getLogger(__name__)


def issue_token(user, secret, expires_hours=24):
    now = datetime.now(timezone.utc)
    payload = {
        "id": user["id"],
        "name": user["name"],
        "email": user["email"],
        "role": user["role"],
        "iat": now,
        "exp": now + timedelta(hours=expires_hours),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def decode_token(header, secret):
    """Return the claims of a ``Bearer <token>`` header or raise Unauthorized."""
    if not header:
        raise Unauthorized("Unauthorised - Header Not Set")
    scheme, _, token = header.partition(" ")
    token = token.strip()
    if scheme != "Bearer" or not token:
        raise Unauthorized("Unauthorised - Bearer Token Required")
    try:
        return jwt.decode(token, secret, algorithms=["HS256"])
    except jwt.InvalidTokenError as error:
        logger.warning("Rejected token on %s %s: %s", request.method, request.path, error)
        raise Unauthorized(str(error)) from error


def check_admin(claims):
    if claims.get("role") == "Attendant":
        raise Forbidden("You cant perform this action. Admins Only")


def check_owner(claims):
    if claims.get("role") != "Owner":
        raise Forbidden("You cant perform this action. Owner account Only")


# ---------------- ROUTE GUARDS ----------------
def verify_token(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        g.user = decode_token(request.headers.get("Authorization"), current_app.config["JWT_KEY"])
        return fn(*args, **kwargs)
    return wrapper


def admin_only(fn):
    """Stack under ``verify_token``; Attendants are turned away."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        check_admin(g.user)
        return fn(*args, **kwargs)
    return wrapper


def owner_only(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        check_owner(g.user)
        return fn(*args, **kwargs)
    return wrapper
