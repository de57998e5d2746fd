"""Product details management: command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.listing import load_product
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()
    price: Float()
    category: String(max_length=100)
    stock: Integer()
    images: Text()  # JSON array of {public_id, url}; replaces existing images


@catalogue.command_handler(part_of=Product)
class ManageProductDetailsHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        product = load_product(command.product_id)

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            stock=command.stock,
            images=json.loads(command.images) if command.images is not None else None,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
