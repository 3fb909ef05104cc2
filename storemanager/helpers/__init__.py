from storemanager.helpers.category import CategoryHelper
from storemanager.helpers.product import ProductHelper
from storemanager.helpers.user import UserHelper

__all__ = ["CategoryHelper", "ProductHelper", "UserHelper"]
