"""Role capabilities: which surfaces and operations each role may use.

Routes declare the capability they need instead of comparing role strings.
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from taskdesk.domain.enums import UserRole, _ValuesMixin


class Capability(_ValuesMixin, str, Enum):
    """Operation a principal may perform."""

    MANAGE_MANAGERS = "manage_managers"
    CREATE_TASKS = "create_tasks"
    VIEW_ALL_TASKS = "view_all_tasks"
    VIEW_ANALYTICS = "view_analytics"
    MANAGE_OWN_CLIENT_ACCOUNTS = "manage_own_client_accounts"
    VIEW_OWN_TASKS = "view_own_tasks"
    UPDATE_OWN_TASK_STATUS = "update_own_task_status"


ROLE_CAPABILITIES: Mapping[UserRole, frozenset[Capability]] = MappingProxyType(
    {
        UserRole.ADMIN: frozenset(
            {
                Capability.MANAGE_MANAGERS,
                Capability.CREATE_TASKS,
                Capability.VIEW_ALL_TASKS,
                Capability.VIEW_ANALYTICS,
            }
        ),
        UserRole.MANAGER: frozenset(
            {
                Capability.MANAGE_OWN_CLIENT_ACCOUNTS,
                Capability.VIEW_OWN_TASKS,
                Capability.UPDATE_OWN_TASK_STATUS,
            }
        ),
    }
)


def capabilities_for(role: UserRole | str) -> frozenset[Capability]:
    """Return the capability set of role (empty for unknown roles)."""
    try:
        return ROLE_CAPABILITIES.get(UserRole(role), frozenset())
    except ValueError:
        return frozenset()


def has_capability(role: UserRole | str, capability: Capability) -> bool:
    """Return whether role grants capability."""
    return capability in capabilities_for(role)


def dashboard_for(role: UserRole | str) -> str:
    """Return the dashboard surface to render for role ('admin' or 'manager')."""
    if has_capability(role, Capability.VIEW_ALL_TASKS):
        return UserRole.ADMIN.value
    return UserRole.MANAGER.value
