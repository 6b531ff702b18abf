from typing import List, Dict, Optional
from .models import UserRole, User

# Define all available permissions here for reference
class Permissions:
    # Tasks
    TASKS_VIEW_ANY = "tasks.view_any"

    # Identity
    USERS_VIEW = "users.view"
    USERS_DELETE = "users.delete"


# Static Role -> Permission Mapping
ROLE_PERMISSIONS: Dict[str, List[str]] = {
    UserRole.ADMIN: [
        # Admin override for reading other users' tasks
        Permissions.TASKS_VIEW_ANY,
        # User management
        Permissions.USERS_VIEW,
        Permissions.USERS_DELETE,
    ],
    UserRole.USER: [
        # Own tasks only; ownership is enforced at the service level
    ],
}


def get_user_permissions(user: Optional[User]) -> List[str]:
    """
    Returns a list of permission strings for the given user based on their role.
    """
    if not user or not user.is_active:
        return []

    return ROLE_PERMISSIONS.get(user.role, [])


def user_has_permission(user: Optional[User], permission: str) -> bool:
    return permission in get_user_permissions(user)
