"""Domain events for the Account aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Account")
class AccountRegistered:
    """A customer, vendor or admin signed up."""

    __version__ = 1

    account_id = Identifier(required=True)
    role = String(required=True)
    campus_id = Identifier()
    name = String(required=True)
    registered_at = DateTime(required=True)


@marketplace.event(part_of="Account")
class WalletDebited:
    """Money left an account's wallet."""

    __version__ = 1

    account_id = Identifier(required=True)
    amount = Integer(required=True)
    balance = Integer(required=True)
    memo = String()


@marketplace.event(part_of="Account")
class WalletCredited:
    """Money arrived in an account's wallet."""

    __version__ = 1

    account_id = Identifier(required=True)
    amount = Integer(required=True)
    balance = Integer(required=True)
    memo = String()


@marketplace.event(part_of="Account")
class VendorApproved:
    __version__ = 1

    account_id = Identifier(required=True)
    approved_at = DateTime(required=True)


@marketplace.event(part_of="Account")
class VendorPlanChanged:
    __version__ = 1

    account_id = Identifier(required=True)
    previous_plan = String(required=True)
    new_plan = String(required=True)


@marketplace.event(part_of="Account")
class VendorRated:
    """A review moved the vendor's running average."""

    __version__ = 1

    account_id = Identifier(required=True)
    rating = Integer(required=True)
    average_rating = Float(required=True)
    ratings_count = Integer(required=True)
