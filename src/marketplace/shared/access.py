"""Role checks shared by command handlers.

Commands carry the id of the acting account (the id an auth session would
issue). Handlers resolve it here before touching anything else.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.shared.errors import NotFound, PermissionDenied


def load_account(account_id):
    from marketplace.account.account import Account

    try:
        return current_domain.repository_for(Account).get(account_id)
    except ObjectNotFoundError:
        raise NotFound(f"Account {account_id} not found.") from None


def require_role(account_id, *roles):
    """Return the acting account, or raise ``PermissionDenied``.

    An id that resolves to no account is treated like a signed-out caller.
    """
    required = f"{' or '.join(role.capitalize() for role in roles)} login required."
    try:
        account = load_account(account_id)
    except NotFound:
        raise PermissionDenied(required) from None
    if account.role not in roles:
        raise PermissionDenied(required)
    return account
