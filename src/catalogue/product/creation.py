"""Product creation: command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)


@catalogue.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=100)
    description: Text(required=True)
    price: Float(required=True)
    category: String(required=True, max_length=100)
    stock: Integer()
    images: Text()  # JSON array of {public_id, url}
    created_by: Identifier()


@catalogue.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            stock=command.stock,
            images=json.loads(command.images) if command.images else None,
            created_by=command.created_by,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("Product created", product_id=str(product.id), created_by=command.created_by)
        return str(product.id)
