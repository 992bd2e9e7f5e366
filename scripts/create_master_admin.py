"""Bootstrap a masterAdmin user (no client). Needed once per deployment,
since only masterAdmin and Admin users can sign up others.

Usage:
    python -m scripts.create_master_admin <username> [password]
If password is omitted, a random one is printed. The user must change it
on first login (resetPassword is set).
"""

import asyncio
import secrets
import sys

from nexus_obra.core.config import get_settings
from nexus_obra.domain.enums import Role
from nexus_obra.domain.exceptions import DuplicateResourceException
from nexus_obra.infrastructure.persistence import database
from nexus_obra.infrastructure.persistence.repositories import UserRepository


async def main() -> None:
    if len(sys.argv) < 2:
        print(
            "Usage: python -m scripts.create_master_admin <username> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    username = sys.argv[1].strip()
    password = sys.argv[2] if len(sys.argv) > 2 else secrets.token_urlsafe(12)

    settings = get_settings()
    if settings.database_auto_create:
        await database.init_models()
    database._ensure_engine()

    try:
        async with database.AsyncSessionLocal() as session:
            async with session.begin():
                user_repo = UserRepository(session)
                user = await user_repo.create_user(
                    username, password, Role.MASTER_ADMIN, reset_password=True
                )
        print(f"Created masterAdmin: {user.id} ({username})")
        if len(sys.argv) <= 2:
            print(f"Password: {password}")
    except DuplicateResourceException:
        print(f"Username already exists: {username}", file=sys.stderr)
        sys.exit(1)
    finally:
        await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
