"""
Domain service: role to page and action permissions.

All navigation and every mutating action consult this one table. An action
is allowed only when the role can open the page that hosts it and, for
actions with an extra restriction, the role is explicitly listed.
"""
from enum import Enum

from poultry_dashboard.domain.exceptions import PermissionDeniedError
from poultry_dashboard.domain.models import Page, Role, User

USER_EMAIL_DOMAIN = "aafarm.com"

ROLE_PAGES: dict[Role, tuple[Page, ...]] = {
    Role.ADMIN: (
        Page.DASHBOARD,
        Page.DAILY_ENTRY_FORM,
        Page.FLOCK_MANAGEMENT,
        Page.DAILY_FEED_AND_WATER,
        Page.MORTALITY_AND_HEALTH,
        Page.EGG_PRODUCTION,
        Page.FINANCE_LEDGER,
        Page.INVENTORY,
        Page.SECURITY_GATE_LOG,
        Page.REPORTS,
    ),
    Role.MANAGER: (
        Page.DASHBOARD,
        Page.DAILY_ENTRY_FORM,
        Page.FLOCK_MANAGEMENT,
        Page.DAILY_FEED_AND_WATER,
        Page.MORTALITY_AND_HEALTH,
        Page.EGG_PRODUCTION,
        Page.REPORTS,
    ),
    Role.WORKER: (
        Page.DAILY_FEED_AND_WATER,
        Page.MORTALITY_AND_HEALTH,
        Page.EGG_PRODUCTION,
    ),
    Role.ACCOUNTANT: (
        Page.DASHBOARD,
        Page.DAILY_ENTRY_FORM,
        Page.FINANCE_LEDGER,
        Page.INVENTORY,
        Page.REPORTS,
    ),
    Role.SECURITY_GUARD: (
        Page.SECURITY_GATE_LOG,
    ),
}


class Action(str, Enum):
    """Mutating actions exposed to the UI."""
    REGISTER_FLOCK = "register_flock"
    ADD_INVENTORY_ITEM = "add_inventory_item"
    RECORD_FEED_REPORT = "record_feed_report"
    RECORD_MORTALITY_REPORT = "record_mortality_report"
    RECORD_MEDICINE_REPORT = "record_medicine_report"
    RECORD_EGG_PRODUCTION_REPORT = "record_egg_production_report"
    RECORD_DAILY_ENTRY = "record_daily_entry"
    ADD_FINANCE_TRANSACTION = "add_finance_transaction"
    RECORD_SECURITY_LOG = "record_security_log"


ACTION_PAGES: dict[Action, Page] = {
    Action.REGISTER_FLOCK: Page.FLOCK_MANAGEMENT,
    Action.ADD_INVENTORY_ITEM: Page.INVENTORY,
    Action.RECORD_FEED_REPORT: Page.DAILY_FEED_AND_WATER,
    Action.RECORD_MORTALITY_REPORT: Page.MORTALITY_AND_HEALTH,
    Action.RECORD_MEDICINE_REPORT: Page.MORTALITY_AND_HEALTH,
    Action.RECORD_EGG_PRODUCTION_REPORT: Page.EGG_PRODUCTION,
    Action.RECORD_DAILY_ENTRY: Page.DAILY_ENTRY_FORM,
    Action.ADD_FINANCE_TRANSACTION: Page.FINANCE_LEDGER,
    Action.RECORD_SECURITY_LOG: Page.SECURITY_GATE_LOG,
}

# Narrower than page access
ACTION_ROLES: dict[Action, frozenset[Role]] = {
    Action.REGISTER_FLOCK: frozenset({Role.ADMIN, Role.MANAGER}),
    Action.ADD_FINANCE_TRANSACTION: frozenset({Role.ADMIN, Role.ACCOUNTANT}),
}


def allowed_pages(role: Role) -> list[Page]:
    """Pages the role may open, in sidebar order."""
    return list(ROLE_PAGES[role])


def landing_page(role: Role) -> Page:
    """First page shown after sign-in."""
    return ROLE_PAGES[role][0]


def can_view(role: Role, page: Page) -> bool:
    return page in ROLE_PAGES[role]


def can_perform(role: Role, action: Action) -> bool:
    if not can_view(role, ACTION_PAGES[action]):
        return False
    restricted_to = ACTION_ROLES.get(action)
    return restricted_to is None or role in restricted_to


def ensure_allowed(role: Role, action: Action) -> None:
    """
    Raise if the role may not perform the action.

    Raises:
        PermissionDeniedError: If the action is not permitted for the role
    """
    if not can_perform(role, action):
        raise PermissionDeniedError(f"Role '{role.value}' may not {action.value.replace('_', ' ')}")


def login(role: Role) -> User:
    """Simulated sign-in: any role is accepted and mapped to a farm address."""
    username = role.value.replace(" ", "").lower()
    return User(username=f"{username}@{USER_EMAIL_DOMAIN}", role=role)
