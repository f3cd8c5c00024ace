"""Account aggregate — identity, campus affiliation and wallet.

The wallet is a non-negative integer balance in kobo. ``debit`` and
``credit`` are its only mutators; the Order Ledger and boosts call them,
nothing assigns ``wallet`` directly after registration.

Vendors carry a small storefront profile on the same aggregate: shop name,
plan, approval status and the running average of their review ratings.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.account.events import (
    AccountRegistered,
    VendorApproved,
    VendorPlanChanged,
    VendorRated,
    WalletCredited,
    WalletDebited,
)
from marketplace.domain import marketplace
from marketplace.shared.errors import InsufficientFunds, InvalidRating, InvalidTransition


class Role(Enum):
    CUSTOMER = "customer"
    VENDOR = "vendor"
    ADMIN = "admin"


class VendorPlan(Enum):
    FREE = "free"
    PREMIUM = "premium"


class VendorStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"


@marketplace.aggregate
class Account:
    """A person on the platform: customer, vendor or admin."""

    name: String(required=True, max_length=100)
    email: String(max_length=254)
    role: String(choices=Role, required=True)
    campus_id: Identifier()
    wallet: Integer(default=0)
    referral_code: String(max_length=20)
    referred_by: String(max_length=20)

    # Vendor storefront
    shop_name: String(max_length=150)
    bio: Text()
    plan: String(choices=VendorPlan)
    vendor_status: String(choices=VendorStatus)
    rating: Float(default=0.0)
    ratings_count: Integer(default=0)

    registered_at: DateTime()

    @invariant.post
    def wallet_cannot_be_negative(self):
        if self.wallet is not None and self.wallet < 0:
            raise ValidationError({"wallet": ["Wallet balance cannot be negative"]})

    @invariant.post
    def vendors_must_have_a_shop_name(self):
        if self.role == Role.VENDOR.value and not self.shop_name:
            raise ValidationError({"shop_name": ["Vendors must provide a shop name"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(
        cls,
        name,
        role,
        campus_id=None,
        email=None,
        shop_name=None,
        bio=None,
        referral_code=None,
        referred_by=None,
        opening_balance=0,
        account_id=None,
    ):
        now = datetime.now(UTC)
        is_vendor = role == Role.VENDOR.value

        fields = dict(
            name=name,
            email=email,
            role=role,
            campus_id=campus_id,
            wallet=opening_balance,
            referral_code=referral_code,
            referred_by=referred_by,
            shop_name=shop_name if is_vendor else None,
            bio=bio if is_vendor else None,
            plan=VendorPlan.FREE.value if is_vendor else None,
            vendor_status=VendorStatus.PENDING.value if is_vendor else None,
            rating=0.0,
            ratings_count=0,
            registered_at=now,
        )
        if account_id:
            fields["id"] = account_id

        account = cls(**fields)
        account.raise_(
            AccountRegistered(
                account_id=str(account.id),
                role=role,
                campus_id=str(campus_id) if campus_id else None,
                name=name,
                registered_at=now,
            )
        )
        return account

    @property
    def is_vendor(self):
        return self.role == Role.VENDOR.value

    # -------------------------------------------------------------------
    # Wallet
    # -------------------------------------------------------------------
    def can_afford(self, amount):
        return self.wallet >= amount

    def debit(self, amount, memo=None):
        """Take ``amount`` kobo out of the wallet. Nothing changes on failure."""
        if amount < 0:
            raise ValidationError({"amount": ["Amount must not be negative"]})
        if not self.can_afford(amount):
            raise InsufficientFunds()

        self.wallet = self.wallet - amount
        self.raise_(
            WalletDebited(
                account_id=str(self.id),
                amount=amount,
                balance=self.wallet,
                memo=memo,
            )
        )

    def credit(self, amount, memo=None):
        if amount < 0:
            raise ValidationError({"amount": ["Amount must not be negative"]})

        self.wallet = self.wallet + amount
        self.raise_(
            WalletCredited(
                account_id=str(self.id),
                amount=amount,
                balance=self.wallet,
                memo=memo,
            )
        )

    # -------------------------------------------------------------------
    # Vendor storefront
    # -------------------------------------------------------------------
    def _assert_vendor(self):
        if not self.is_vendor:
            raise ValidationError({"role": ["Account is not a vendor"]})

    def approve_vendor(self):
        self._assert_vendor()
        if self.vendor_status == VendorStatus.APPROVED.value:
            raise InvalidTransition("Vendor is already approved.")

        self.vendor_status = VendorStatus.APPROVED.value
        self.plan = VendorPlan.FREE.value
        self.raise_(VendorApproved(account_id=str(self.id), approved_at=datetime.now(UTC)))

    def change_plan(self, plan):
        self._assert_vendor()
        previous_plan = self.plan
        self.plan = plan
        self.raise_(
            VendorPlanChanged(
                account_id=str(self.id),
                previous_plan=previous_plan or VendorPlan.FREE.value,
                new_plan=plan,
            )
        )

    def record_rating(self, rating):
        """Fold one more rating into the running average."""
        self._assert_vendor()
        if rating is None or not 1 <= rating <= 5:
            raise InvalidRating()

        count = self.ratings_count or 0
        average = self.rating or 0.0
        new_count = count + 1

        self.rating = (average * count + rating) / new_count
        self.ratings_count = new_count
        self.raise_(
            VendorRated(
                account_id=str(self.id),
                rating=rating,
                average_rating=self.rating,
                ratings_count=new_count,
            )
        )
