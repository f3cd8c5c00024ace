"""Account sign-up — command and handler."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.account.account import Account, Role
from marketplace.domain import marketplace, logger


@marketplace.command(part_of="Account")
class RegisterAccount:
    """Sign up a customer, vendor or admin."""

    account_id = Identifier()  # Optional: the id issued by the auth provider
    name = String(required=True, max_length=100)
    role = String(choices=Role, required=True)
    campus_id = Identifier()
    email = String(max_length=254)
    shop_name = String(max_length=150)
    bio = Text()
    referral_code = String(max_length=20)
    referred_by = String(max_length=20)


@marketplace.command_handler(part_of=Account)
class RegisterAccountHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        account = Account.register(
            account_id=command.account_id,
            name=command.name,
            role=command.role,
            campus_id=command.campus_id,
            email=command.email,
            shop_name=command.shop_name,
            bio=command.bio,
            referral_code=command.referral_code,
            referred_by=command.referred_by,
        )
        current_domain.repository_for(Account).add(account)

        logger.info("Account registered", account_id=str(account.id), role=account.role)
        return str(account.id)
