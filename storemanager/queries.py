"""Parameterized SQL for every store call the helpers make.

Each function returns a ``(sql, params)`` pair for ``Store.execute``. Name
searches are case-insensitive substring matches.
"""

LOW_STOCK_THRESHOLD = 10

PRODUCT_COLUMNS = """
    p.product_id, p.product_name, p.category_id, c.category_name,
    p.price, p.quantity, p.description
"""

PRODUCT_FROM = """
    FROM products p
    LEFT JOIN categories c ON c.category_id = p.category_id
"""

USER_COLUMNS = "id, name, email, role"


def _like(search):
    return f"%{(search or '').lower()}%"


# ---------------- PRODUCTS ----------------
def all_products_count():
    return "SELECT COUNT(*) AS count FROM products", {}


def all_products(limit, offset):
    sql = f"""
        SELECT {PRODUCT_COLUMNS} {PRODUCT_FROM}
        ORDER BY p.product_id
        LIMIT :limit OFFSET :offset
    """
    return sql, {"limit": limit, "offset": offset}


def products_by_category_count(category_id, search):
    sql = """
        SELECT COUNT(*) AS count FROM products
        WHERE category_id = :category_id AND LOWER(product_name) LIKE :pattern
    """
    return sql, {"category_id": category_id, "pattern": _like(search)}


def products_by_category(category_id, search, offset, limit=10):
    sql = f"""
        SELECT {PRODUCT_COLUMNS} {PRODUCT_FROM}
        WHERE p.category_id = :category_id AND LOWER(p.product_name) LIKE :pattern
        ORDER BY p.product_id
        LIMIT :limit OFFSET :offset
    """
    return sql, {"category_id": category_id, "pattern": _like(search),
                 "limit": limit, "offset": offset}


def products_by_name_count(search):
    sql = "SELECT COUNT(*) AS count FROM products WHERE LOWER(product_name) LIKE :pattern"
    return sql, {"pattern": _like(search)}


def products_by_name(search, offset, limit=10):
    sql = f"""
        SELECT {PRODUCT_COLUMNS} {PRODUCT_FROM}
        WHERE LOWER(p.product_name) LIKE :pattern
        ORDER BY p.product_id
        LIMIT :limit OFFSET :offset
    """
    return sql, {"pattern": _like(search), "limit": limit, "offset": offset}


def _stock_predicate(stock):
    """Translate a stock filter into a WHERE clause and its parameters.

    ``out`` (or ``0``) means sold out, ``low`` means at or below the low-stock
    threshold, a positive number ``n`` means ``quantity <= n``.
    """
    value = str(stock).strip().lower()
    if value in ("out", "0"):
        return "quantity = 0", {}
    if value == "low":
        return "quantity <= :stock", {"stock": LOW_STOCK_THRESHOLD}
    if value.isdigit():
        return "quantity <= :stock", {"stock": int(value)}
    raise ValueError(f"unsupported stock filter: {stock!r}")


def products_by_stock_count(stock):
    predicate, params = _stock_predicate(stock)
    return f"SELECT COUNT(*) AS count FROM products WHERE {predicate}", params


def products_by_stock(stock, offset, limit=10):
    predicate, params = _stock_predicate(stock)
    sql = f"""
        SELECT {PRODUCT_COLUMNS} {PRODUCT_FROM}
        WHERE p.{predicate}
        ORDER BY p.quantity, p.product_id
        LIMIT :limit OFFSET :offset
    """
    return sql, dict(params, limit=limit, offset=offset)


def product_by_id(product_id):
    sql = f"SELECT {PRODUCT_COLUMNS} {PRODUCT_FROM} WHERE p.product_id = :product_id"
    return sql, {"product_id": product_id}


def product_by_name(name):
    sql = "SELECT product_id, product_name FROM products WHERE product_name = :name"
    return sql, {"name": name}


def create_product(product):
    sql = """
        INSERT INTO products (product_name, category_id, price, quantity, description)
        VALUES (:name, :category_id, :price, :quantity, :description)
        RETURNING product_id
    """
    return sql, {
        "name": product["name"],
        "category_id": product["categoryid"],
        "price": product["price"],
        "quantity": product["quantity"],
        "description": product.get("description"),
    }


def update_product(product_id, product):
    sql = """
        UPDATE products
        SET product_name = :name, category_id = :category_id, price = :price,
            quantity = :quantity, description = :description
        WHERE product_id = :product_id
    """
    return sql, {
        "product_id": product_id,
        "name": product["name"],
        "category_id": product["categoryid"],
        "price": product["price"],
        "quantity": product["quantity"],
        "description": product.get("description"),
    }


def delete_product(product_id):
    return "DELETE FROM products WHERE product_id = :product_id", {"product_id": product_id}


# ---------------- CATEGORIES ----------------
def all_categories_count():
    return "SELECT COUNT(*) AS count FROM categories", {}


def all_categories(offset, limit=10):
    sql = """
        SELECT category_id, category_name FROM categories
        ORDER BY category_id
        LIMIT :limit OFFSET :offset
    """
    return sql, {"limit": limit, "offset": offset}


def find_category_by_id(category_id):
    sql = "SELECT category_id, category_name FROM categories WHERE category_id = :category_id"
    return sql, {"category_id": category_id}


def category_by_name(name):
    sql = "SELECT category_id, category_name FROM categories WHERE category_name = :name"
    return sql, {"name": name}


def category_product_count(category_id):
    sql = "SELECT COUNT(*) AS count FROM products WHERE category_id = :category_id"
    return sql, {"category_id": category_id}


def create_category(name):
    sql = "INSERT INTO categories (category_name) VALUES (:name) RETURNING category_id"
    return sql, {"name": name}


def update_category(category_id, name):
    sql = "UPDATE categories SET category_name = :name WHERE category_id = :category_id"
    return sql, {"category_id": category_id, "name": name}


def delete_category(category_id):
    sql = "DELETE FROM categories WHERE category_id = :category_id"
    return sql, {"category_id": category_id}


# ---------------- USERS ----------------
def all_users_count():
    return "SELECT COUNT(*) AS count FROM users", {}


def all_users(offset, limit=10):
    sql = f"SELECT {USER_COLUMNS} FROM users ORDER BY id LIMIT :limit OFFSET :offset"
    return sql, {"limit": limit, "offset": offset}


def user_by_id(user_id):
    return f"SELECT {USER_COLUMNS} FROM users WHERE id = :id", {"id": user_id}


def user_by_email(email):
    sql = f"SELECT {USER_COLUMNS}, password FROM users WHERE LOWER(email) = :email"
    return sql, {"email": (email or "").lower()}


def owner_count():
    return "SELECT COUNT(*) AS count FROM users WHERE role = 'Owner'", {}


def create_user(user):
    sql = """
        INSERT INTO users (name, email, password, role)
        VALUES (:name, :email, :password, :role)
        RETURNING id
    """
    return sql, {
        "name": user["name"],
        "email": user["email"],
        "password": user["password"],
        "role": user["role"],
    }


def update_user(user_id, user):
    params = {"id": user_id, "name": user["name"], "email": user["email"], "role": user["role"]}
    assignments = "name = :name, email = :email, role = :role"
    if user.get("password"):
        assignments += ", password = :password"
        params["password"] = user["password"]
    return f"UPDATE users SET {assignments} WHERE id = :id", params


def delete_user(user_id):
    return "DELETE FROM users WHERE id = :id", {"id": user_id}
