import logging

from storemanager import queries
from storemanager.db import fits_integer
from storemanager.errors import BadRequest, NotFound
from storemanager.helpers.base import BaseHelper
from storemanager.pagination import DEFAULT_PAGE_SIZE, page_size

logger = logging.getLogger(__name__)

NO_PRODUCTS = "You have not created products yet."
NO_MATCH = "No product matches your search."
DUPLICATE_NAME = "The provided product name already exists."


class ProductHelper(BaseHelper):
    """Handles product requests against the data store."""

    def all_products(self, request):
        limit = page_size(request.get("limit"))
        return self.page(
            queries.all_products_count(),
            lambda size, offset: queries.all_products(size, offset),
            limit, request.get("page"), NO_PRODUCTS,
        )

    def all_products_by_category(self, request):
        catid, search = request.get("catid"), request.get("search")
        return self.page(
            queries.products_by_category_count(catid, search),
            lambda size, offset: queries.products_by_category(catid, search, offset, size),
            DEFAULT_PAGE_SIZE, request.get("page"), NO_MATCH,
        )

    def all_products_by_name(self, request):
        search = request.get("search")
        return self.page(
            queries.products_by_name_count(search),
            lambda size, offset: queries.products_by_name(search, offset, size),
            DEFAULT_PAGE_SIZE, request.get("page"), NO_MATCH,
        )

    def all_products_by_stock(self, request):
        stock = request.get("stock")
        try:
            count_query = queries.products_by_stock_count(stock)
        except ValueError:
            raise BadRequest("Stock filter must be 'out', 'low' or a number.")
        return self.page(
            count_query,
            lambda size, offset: queries.products_by_stock(stock, offset, size),
            DEFAULT_PAGE_SIZE, request.get("page"), NO_MATCH,
        )

    def get_product_by_id(self, product_id):
        if not fits_integer(product_id):
            raise NotFound("Product not found")
        found = self.run(queries.product_by_id(product_id))
        if found.row_count < 1:
            raise NotFound("Product not found")
        return found.rows[0]

    def _name_taken(self, name):
        return self.run(queries.product_by_name(name)).row_count > 0

    def _category_exists(self, category_id):
        if not fits_integer(category_id):
            return False
        return self.run(queries.find_category_by_id(category_id)).row_count > 0

    def create_product(self, new_product):
        if not self._category_exists(new_product["categoryid"]):
            raise BadRequest("The category does not exit")
        if self._name_taken(new_product["name"]):
            raise BadRequest(DUPLICATE_NAME)

        created = self.run(queries.create_product(new_product), duplicate_message=DUPLICATE_NAME)
        product_id = created.rows[0]["product_id"]
        logger.info("Created product %s (%s)", product_id, new_product["name"])
        return self.get_product_by_id(product_id)

    def update_product(self, product_info):
        product_id, body = product_info["id"], product_info["body"]
        existing = self.get_product_by_id(product_id)

        updated = {
            "name": body.get("name", existing["product_name"]),
            "categoryid": body.get("categoryid", existing["category_id"]),
            "price": body.get("price", existing["price"]),
            "quantity": body.get("quantity", existing["quantity"]),
            "description": body.get("description", existing["description"]),
        }

        if updated["name"] != existing["product_name"] and self._name_taken(updated["name"]):
            raise BadRequest(DUPLICATE_NAME)
        if not self._category_exists(updated["categoryid"]):
            raise BadRequest("The category does not exist.")

        self.run(queries.update_product(product_id, updated), duplicate_message=DUPLICATE_NAME)
        logger.info("Updated product %s", product_id)
        return self.get_product_by_id(product_id)

    def delete_product(self, product_id):
        self.get_product_by_id(product_id)
        self.run(queries.delete_product(product_id))
        logger.info("Deleted product %s", product_id)
        return []
