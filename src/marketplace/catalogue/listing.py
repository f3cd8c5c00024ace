"""Listing management by vendors — add, update and delete products."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.catalogue.queries import load_owned_product
from marketplace.domain import logger, marketplace
from marketplace.shared.access import require_role


def _image_urls(raw):
    """Decode the JSON array of image URLs a command carries."""
    try:
        urls = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError({"images": ["Images must be a JSON array of URLs."]}) from None
    if not isinstance(urls, list):
        raise ValidationError({"images": ["Images must be a JSON array of URLs."]})
    return urls


@marketplace.command(part_of="Product")
class AddProduct:
    vendor_id = Identifier(required=True)
    campus_id = Identifier()  # Defaults to the vendor's campus
    name = String(required=True, max_length=200)
    price = Integer(required=True, min_value=1)
    description = Text()
    category = String(max_length=100)
    images = Text()  # JSON array of image URLs


@marketplace.command(part_of="Product")
class UpdateProduct:
    """Merge a vendor's edits into a listing. Status is not editable here."""

    vendor_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(max_length=200)
    price = Integer(min_value=1)
    description = Text()
    category = String(max_length=100)
    images = Text()


@marketplace.command(part_of="Product")
class DeleteProduct:
    vendor_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command_handler(part_of=Product)
class ManageListingHandler:
    @handle(AddProduct)
    def add_product(self, command):
        vendor = require_role(command.vendor_id, "vendor")

        product = Product.create(
            vendor_id=command.vendor_id,
            campus_id=command.campus_id or vendor.campus_id,
            name=command.name,
            price=command.price,
            description=command.description,
            category=command.category,
            images=_image_urls(command.images) if command.images else [],
        )
        current_domain.repository_for(Product).add(product)

        logger.info("Product listed", product_id=str(product.id), vendor_id=str(command.vendor_id))
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        product = load_owned_product(command.vendor_id, command.product_id)

        product.update_details(
            name=command.name,
            description=command.description,
            category=command.category,
            images=_image_urls(command.images) if command.images else None,
        )
        if command.price is not None:
            product.change_price(command.price)

        current_domain.repository_for(Product).add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        product = load_owned_product(command.vendor_id, command.product_id)
        current_domain.repository_for(Product)._dao.delete(product)

        logger.info("Product deleted", product_id=str(command.product_id), vendor_id=str(command.vendor_id))
