"""Product lookups and the listing query builder.

``ProductQuery`` shapes a product listing from raw request parameters:

    ?keyword=phone&category=Electronics&price[gte]=100&price[lt]=500&page=2

``keyword`` is a case-insensitive match on the product name, ``field[op]``
becomes a range lookup, and ``page`` selects a fixed-size page.
"""

import os
import re

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from catalogue.product.product import Product

PRODUCTS_PER_PAGE = int(os.getenv("PRODUCTS_PER_PAGE", "5"))

RESERVED_PARAMS = frozenset({"keyword", "page", "limit"})
RANGE_OPERATORS = frozenset({"gt", "gte", "lt", "lte"})
FILTERABLE_FIELDS = frozenset({"name", "category", "price", "ratings", "stock", "num_of_reviews", "created_by"})
NUMERIC_FIELDS = frozenset({"price", "ratings", "stock", "num_of_reviews"})

_PARAM_PATTERN = re.compile(r"^(?P<field>\w+)(?:\[(?P<op>\w+)\])?$")


def find_product(product_id) -> Product | None:
    """Return the product, or ``None`` when no product has this identifier."""
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return None


def load_product(product_id) -> Product:
    """Return the product or raise ``ObjectNotFoundError``."""
    product = find_product(product_id)
    if product is None:
        raise ObjectNotFoundError({"product": ["Product not found"]})
    return product


def count_products() -> int:
    """Number of stored products. Fetches at most one row; ``total`` counts them all."""
    return current_domain.repository_for(Product)._dao.query.limit(1).all().total


def _to_number(field, value):
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError({field: [f"'{value}' is not a number"]}) from None


def _page_number(value) -> int:
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        return 1


class ProductQuery:
    """Chainable search/filter/paginate builder over the Product query set."""

    def __init__(self, params, queryset=None):
        self.params = dict(params)
        self.queryset = queryset if queryset is not None else current_domain.repository_for(Product)._dao.query

    def search(self) -> "ProductQuery":
        keyword = self.params.get("keyword")
        if keyword:
            self.queryset = self.queryset.filter(name__icontains=keyword)
        return self

    def filter(self) -> "ProductQuery":
        criteria = {}
        for key, value in self.params.items():
            match = _PARAM_PATTERN.match(key)
            if match is None:
                continue

            field, operator = match["field"], match["op"]
            if field in RESERVED_PARAMS or field not in FILTERABLE_FIELDS:
                continue
            if operator is not None and operator not in RANGE_OPERATORS:
                continue

            if field in NUMERIC_FIELDS:
                value = _to_number(field, value)
            criteria[f"{field}__{operator}" if operator else field] = value

        if criteria:
            self.queryset = self.queryset.filter(**criteria)
        return self

    def paginate(self, per_page: int = PRODUCTS_PER_PAGE) -> "ProductQuery":
        page = _page_number(self.params.get("page"))
        self.queryset = self.queryset.offset(per_page * (page - 1)).limit(per_page)
        return self

    def results(self):
        return self.queryset.all()
