"""Create an admin or manager user (Postgres only).

Usage:
    python -m scripts.create_user <admin|manager> <email> [full_name] [password]
For managers a manager profile is created as well. If password is omitted,
a random one is printed.
"""

import asyncio
import secrets
import sys

from taskdesk.core.config import get_settings
from taskdesk.domain.enums import RecordStatus, UserRole
from taskdesk.domain.exceptions import DuplicateRecordException, StoreUnavailableException
from taskdesk.infrastructure.persistence.database import require_session_factory
from taskdesk.infrastructure.persistence.repositories import (
    ManagerRepository,
    UserRepository,
)

_USAGE = (
    "Usage: python -m scripts.create_user <admin|manager> <email> "
    "[full_name] [password]"
)


async def main() -> None:
    """Create the user, and the manager profile for managers."""
    if len(sys.argv) < 3 or sys.argv[1] not in UserRole.values():
        print(_USAGE, file=sys.stderr)
        sys.exit(1)
    role = UserRole(sys.argv[1])
    email = sys.argv[2]
    full_name = sys.argv[3] if len(sys.argv) > 3 else None
    password = sys.argv[4] if len(sys.argv) > 4 else secrets.token_urlsafe(12)

    get_settings()
    try:
        session_factory = require_session_factory()
    except StoreUnavailableException:
        print("DATABASE_URL is not configured", file=sys.stderr)
        sys.exit(1)

    async with session_factory() as session:
        async with session.begin():
            try:
                user = await UserRepository(session).create_user(
                    email=email, password=password, role=role, full_name=full_name
                )
            except DuplicateRecordException as e:
                print(e.message, file=sys.stderr)
                sys.exit(1)
            print(f"Created {role.value}: {user.id} ({user.email})")
            if role is UserRole.MANAGER:
                manager = await ManagerRepository(session).create_manager(
                    user.id, phone=None, status=RecordStatus.ACTIVE, created_by=None
                )
                print(f"Manager profile: {manager.id}")
    if len(sys.argv) <= 4:
        print(f"Password: {password}")


if __name__ == "__main__":
    asyncio.run(main())
