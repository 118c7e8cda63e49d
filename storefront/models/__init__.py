from storefront.models.user import Role, User
from storefront.models.category import Category
from storefront.models.product import Product
from storefront.models.order import Order, OrderItem, OrderStatus

__all__ = ["Role", "User", "Category", "Product", "Order", "OrderItem", "OrderStatus"]
