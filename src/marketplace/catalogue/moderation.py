"""Listing moderation by admins — approve and suspend."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.catalogue.queries import load_product
from marketplace.domain import logger, marketplace
from marketplace.shared.access import require_role


@marketplace.command(part_of="Product")
class ApproveListing:
    admin_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command(part_of="Product")
class SuspendListing:
    admin_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command_handler(part_of=Product)
class ModerateListingHandler:
    @handle(ApproveListing)
    def approve_listing(self, command):
        require_role(command.admin_id, "admin")
        product = load_product(command.product_id)
        product.approve()
        current_domain.repository_for(Product).add(product)

        logger.info("Listing approved", product_id=str(product.id), admin_id=str(command.admin_id))

    @handle(SuspendListing)
    def suspend_listing(self, command):
        require_role(command.admin_id, "admin")
        product = load_product(command.product_id)
        product.suspend()
        current_domain.repository_for(Product).add(product)

        logger.info("Listing suspended", product_id=str(product.id), admin_id=str(command.admin_id))
