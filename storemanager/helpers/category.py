import logging

from storemanager import queries
from storemanager.db import fits_integer
from storemanager.errors import BadRequest, NotFound
from storemanager.helpers.base import BaseHelper
from storemanager.pagination import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "The provided category name already exists."


class CategoryHelper(BaseHelper):

    def all_categories(self, request):
        return self.page(
            queries.all_categories_count(),
            lambda size, offset: queries.all_categories(offset, size),
            DEFAULT_PAGE_SIZE, request.get("page"), "You have not created a category yet.",
        )

    def get_category_by_id(self, category_id):
        if not fits_integer(category_id):
            raise NotFound("Category not found")
        found = self.run(queries.find_category_by_id(category_id))
        if found.row_count < 1:
            raise NotFound("Category not found")
        return found.rows[0]

    def create_category(self, body):
        if self.run(queries.category_by_name(body["name"])).row_count:
            raise BadRequest(DUPLICATE_NAME)
        created = self.run(queries.create_category(body["name"]), duplicate_message=DUPLICATE_NAME)
        category_id = created.rows[0]["category_id"]
        logger.info("Created category %s (%s)", category_id, body["name"])
        return self.get_category_by_id(category_id)

    def update_category(self, category_info):
        category_id, body = category_info["id"], category_info["body"]
        existing = self.get_category_by_id(category_id)
        if body["name"] != existing["category_name"] and self.run(queries.category_by_name(body["name"])).row_count:
            raise BadRequest(DUPLICATE_NAME)
        self.run(queries.update_category(category_id, body["name"]), duplicate_message=DUPLICATE_NAME)
        return self.get_category_by_id(category_id)

    def delete_category(self, category_id):
        self.get_category_by_id(category_id)
        if self.count(queries.category_product_count(category_id)):
            raise BadRequest("The category has products attached.")
        self.run(queries.delete_category(category_id))
        logger.info("Deleted category %s", category_id)
        return []
