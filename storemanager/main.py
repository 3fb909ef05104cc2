from flask import Blueprint, abort, current_app, g, render_template, request

from storemanager.auth import admin_only, issue_token, owner_only, verify_token
from storemanager.db import MAX_INTEGER, fits_integer
from storemanager.errors import ValidationError
from storemanager.helpers import CategoryHelper, ProductHelper, UserHelper
from storemanager.responses import handle_response
from storemanager.validators import (
    validate_category, validate_login, validate_product, validate_user
)

api = Blueprint("api", __name__, url_prefix="/api/v1")
pages = Blueprint("pages", __name__)

PAGES = {"admin", "category-settings", "staff-accounts", "product-settings"}


def _store():
    return current_app.extensions["store"]


def _body():
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError(["Request body must be a JSON object."])
    return body


def _args(*int_fields):
    """Query string as a dict, with ``int_fields`` checked to be integers."""
    args = request.args.to_dict()
    errors = []
    for field in int_fields:
        if args.get(field):
            try:
                args[field] = int(args[field])
            except ValueError:
                errors.append(f"{field} must be an integer.")
                continue
            if not fits_integer(args[field]):
                errors.append(f"{field} is too large.")
    try:
        limit = int(args.get("limit") or 0)
    except ValueError:
        # page_size() falls back to the default for junk
        limit = 0
    if limit > MAX_INTEGER:
        errors.append("limit is too large.")
    if errors:
        raise ValidationError(errors)
    return args


# ---------------- UI PAGES ----------------
@pages.route("/")
def home_page():
    return render_template("index.html")


@pages.route("/<page>.html")
def ui_page(page):
    if page not in PAGES:
        abort(404)
    return render_template(f"{page}.html")


@pages.route("/health")
def health():
    return handle_response("ok")


# ---------------- LOGIN / SIGNUP ----------------
@api.route("/auth/login", methods=["POST"])
def login():
    email, password = validate_login(_body())
    user = UserHelper(_store()).authenticate(email, password)
    token = issue_token(user, current_app.config["JWT_KEY"], current_app.config["JWT_EXPIRES_HOURS"])
    current_app.logger.info("%s logged in as %s", user["email"], user["role"])
    return handle_response({"token": token, "role": user["role"], "name": user["name"]})


@api.route("/auth/signup", methods=["POST"])
@verify_token
@admin_only
def signup():
    new_user = validate_user(_body())
    result = UserHelper(_store()).create_user(new_user, creator_role=g.user["role"])
    return handle_response(result, 201)


# ---------------- STAFF ACCOUNTS ----------------
@api.route("/users", methods=["GET"], strict_slashes=False)
@verify_token
@admin_only
def get_users():
    helper = UserHelper(_store())
    args = _args("userid")
    if args.get("userid"):
        return handle_response(helper.get_user_by_id(args["userid"]))
    return handle_response(helper.all_users(args))


@api.route("/users/<int:user_id>", methods=["PUT"])
@verify_token
@owner_only
def update_user(user_id):
    body = validate_user(_body(), partial=True)
    return handle_response(UserHelper(_store()).update_user({"id": user_id, "body": body}))


@api.route("/users/<int:user_id>", methods=["DELETE"])
@verify_token
@owner_only
def delete_user(user_id):
    return handle_response(UserHelper(_store()).delete_user(user_id))


# ---------------- CATEGORIES ----------------
@api.route("/category", methods=["GET"], strict_slashes=False)
@verify_token
def get_categories():
    return handle_response(CategoryHelper(_store()).all_categories(_args()))


@api.route("/category/<int:category_id>", methods=["GET"])
@verify_token
def get_category(category_id):
    return handle_response(CategoryHelper(_store()).get_category_by_id(category_id))


@api.route("/category", methods=["POST"])
@verify_token
@admin_only
def create_category():
    body = validate_category(_body())
    return handle_response(CategoryHelper(_store()).create_category(body), 201)


@api.route("/category/<int:category_id>", methods=["PUT"])
@verify_token
@admin_only
def update_category(category_id):
    body = validate_category(_body())
    return handle_response(CategoryHelper(_store()).update_category({"id": category_id, "body": body}))


@api.route("/category/<int:category_id>", methods=["DELETE"])
@verify_token
@admin_only
def delete_category(category_id):
    return handle_response(CategoryHelper(_store()).delete_category(category_id))


# ---------------- PRODUCTS ----------------
@api.route("/products", methods=["GET"], strict_slashes=False)
@verify_token
def get_products():
    helper = ProductHelper(_store())
    args = _args("catid")
    if args.get("catid"):
        result = helper.all_products_by_category(args)
    elif args.get("stock"):
        result = helper.all_products_by_stock(args)
    elif args.get("search"):
        result = helper.all_products_by_name(args)
    else:
        result = helper.all_products(args)
    return handle_response(result)


@api.route("/products/<int:product_id>", methods=["GET"])
@verify_token
def get_product(product_id):
    return handle_response(ProductHelper(_store()).get_product_by_id(product_id))


@api.route("/products", methods=["POST"])
@verify_token
@admin_only
def create_product():
    new_product = validate_product(_body())
    return handle_response(ProductHelper(_store()).create_product(new_product), 201)


@api.route("/products/<int:product_id>", methods=["PUT"])
@verify_token
@admin_only
def update_product(product_id):
    body = validate_product(_body(), partial=True)
    return handle_response(ProductHelper(_store()).update_product({"id": product_id, "body": body}))


@api.route("/products/<int:product_id>", methods=["DELETE"])
@verify_token
@admin_only
def delete_product(product_id):
    return handle_response(ProductHelper(_store()).delete_product(product_id))
