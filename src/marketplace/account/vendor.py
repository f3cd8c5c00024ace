"""Vendor administration — approval and plan changes by an admin."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.account.account import Account, VendorPlan
from marketplace.domain import marketplace
from marketplace.shared.access import load_account, require_role


@marketplace.command(part_of="Account")
class ApproveVendor:
    admin_id = Identifier(required=True)
    vendor_id = Identifier(required=True)


@marketplace.command(part_of="Account")
class ChangeVendorPlan:
    admin_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    plan = String(choices=VendorPlan, required=True)


@marketplace.command_handler(part_of=Account)
class ManageVendorHandler:
    @handle(ApproveVendor)
    def approve_vendor(self, command):
        require_role(command.admin_id, "admin")
        vendor = load_account(command.vendor_id)
        vendor.approve_vendor()
        current_domain.repository_for(Account).add(vendor)

    @handle(ChangeVendorPlan)
    def change_vendor_plan(self, command):
        require_role(command.admin_id, "admin")
        vendor = load_account(command.vendor_id)
        vendor.change_plan(command.plan)
        current_domain.repository_for(Account).add(vendor)
