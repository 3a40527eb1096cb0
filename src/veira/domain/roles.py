"""Per-role capabilities."""

from veira.domain.entities import UserRole
from veira.domain.errors import AccessDeniedError, access_denied

MONEY_ROLES = frozenset(
    {UserRole.OWNER, UserRole.ACCOUNTANT, UserRole.FINANCE_MANAGER, UserRole.AUDITOR}
)
STOCK_EDITOR_ROLES = frozenset(
    {UserRole.OWNER, UserRole.STORE_MANAGER, UserRole.STOCK_MANAGER}
)


def can_see_cost(role: UserRole) -> bool:
    """Whether unit costs may be shown to this role."""
    return role in MONEY_ROLES


def can_see_all_money(role: UserRole) -> bool:
    """Whether ledger-wide figures and exports are available to this role."""
    return role in MONEY_ROLES


def can_edit_stock(role: UserRole) -> bool:
    """Whether this role may add, edit or delete catalog products."""
    return role in STOCK_EDITOR_ROLES


def require_money_access(role: UserRole, action: str) -> None:
    """Raise AccessDeniedError unless the role can see all money figures."""
    if not can_see_all_money(role):
        raise AccessDeniedError(access_denied(role.value, action))


def require_stock_editor(role: UserRole, action: str) -> None:
    """Raise AccessDeniedError unless the role can edit the catalog."""
    if not can_edit_stock(role):
        raise AccessDeniedError(access_denied(role.value, action))
