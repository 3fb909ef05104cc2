import logging

from werkzeug.security import check_password_hash, generate_password_hash

from storemanager import queries
from storemanager.db import fits_integer
from storemanager.errors import BadRequest, Forbidden, NotFound, Unauthorized
from storemanager.helpers.base import BaseHelper
from storemanager.pagination import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "The provided email already exists."


class UserHelper(BaseHelper):
    """Staff accounts: listing, CRUD and credential checks.

    Passwords are stored as werkzeug hashes and never leave this helper.
    """

    def all_users(self, request):
        return self.page(
            queries.all_users_count(),
            lambda size, offset: queries.all_users(offset, size),
            DEFAULT_PAGE_SIZE, request.get("page"), "There are no staff accounts yet.",
        )

    def get_user_by_id(self, user_id):
        if not fits_integer(user_id):
            raise NotFound("User not found")
        found = self.run(queries.user_by_id(user_id))
        if found.row_count < 1:
            raise NotFound("User not found")
        return found.rows[0]

    def _email_taken(self, email):
        return self.run(queries.user_by_email(email)).row_count > 0

    def create_user(self, body, creator_role="Owner"):
        role = body.get("role", "Attendant")
        if role == "Owner":
            raise BadRequest("An Owner account cannot be created.")
        if role == "Admin" and creator_role != "Owner":
            raise Forbidden("You cant perform this action. Owner account Only")
        if self._email_taken(body["email"]):
            raise BadRequest(DUPLICATE_EMAIL)

        user = dict(body, role=role, password=generate_password_hash(body["password"]))
        created = self.run(queries.create_user(user), duplicate_message=DUPLICATE_EMAIL)
        user_id = created.rows[0]["id"]
        logger.info("Created %s account %s (%s)", role, user_id, user["email"])
        return self.get_user_by_id(user_id)

    def create_owner(self, name, email, password):
        """Seed the single Owner account; does nothing if one exists."""
        if self.count(queries.owner_count()):
            return None
        owner = {"name": name, "email": email.lower(), "role": "Owner",
                 "password": generate_password_hash(password)}
        created = self.run(queries.create_user(owner), duplicate_message=DUPLICATE_EMAIL)
        logger.info("Seeded Owner account %s", owner["email"])
        return self.get_user_by_id(created.rows[0]["id"])

    def update_user(self, user_info):
        user_id, body = user_info["id"], user_info["body"]
        existing = self.get_user_by_id(user_id)

        role = body.get("role", existing["role"])
        if existing["role"] == "Owner" and role != "Owner":
            raise BadRequest("The Owner's role cannot be changed.")
        if existing["role"] != "Owner" and role == "Owner":
            raise BadRequest("An Owner account cannot be created.")

        email = body.get("email", existing["email"])
        if email != existing["email"] and self._email_taken(email):
            raise BadRequest(DUPLICATE_EMAIL)

        updated = {"name": body.get("name", existing["name"]), "email": email, "role": role}
        if body.get("password"):
            updated["password"] = generate_password_hash(body["password"])

        self.run(queries.update_user(user_id, updated), duplicate_message=DUPLICATE_EMAIL)
        logger.info("Updated account %s", user_id)
        return self.get_user_by_id(user_id)

    def delete_user(self, user_id):
        existing = self.get_user_by_id(user_id)
        if existing["role"] == "Owner":
            raise Forbidden("The Owner account cannot be deleted.")
        self.run(queries.delete_user(user_id))
        logger.info("Deleted account %s", user_id)
        return []

    def authenticate(self, email, password):
        found = self.run(queries.user_by_email(email))
        if not found.row_count or not check_password_hash(found.rows[0]["password"], password):
            logger.warning("Failed login for %s", email)
            raise Unauthorized("Invalid email or password.")
        user = dict(found.rows[0])
        user.pop("password")
        return user
