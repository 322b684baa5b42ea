"""
Seed the first administrator account.

Admin accounts cannot be created over HTTP; run this once per deployment:

    ADMIN_EMAIL=admin@hospital.org ADMIN_PASSWORD=... python -m scripts.seed_admin
"""
import asyncio
import logging
import os
import sys

from hms.core.database import SessionLocal, init_db
from hms.core.security import UserRole, UserStatus, get_password_hash, normalize
from hms.repositories.sql import SQLAlchemyUserRepository

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def seed_admin(users: SQLAlchemyUserRepository, email: str, password: str) -> bool:
    """Create the admin unless one with this email already exists."""
    email = normalize(email)
    existing = await users.find_by_email_and_role(email, UserRole.ADMIN)
    if existing is not None:
        logger.info(f"Admin user already exists: {existing.email}")
        return False

    await users.add({
        "email": email,
        "password_hash": get_password_hash(password),
        "role": UserRole.ADMIN,
        "status": UserStatus.ACTIVE,
        "name": "Super Admin",
    })
    logger.info(f"Admin user created: {email}")
    return True


def main() -> int:
    email = os.getenv("ADMIN_EMAIL", "admin@hospital.org")
    password = os.getenv("ADMIN_PASSWORD")
    if not password:
        logger.error("ADMIN_PASSWORD must be set")
        return 1

    init_db()
    asyncio.run(seed_admin(SQLAlchemyUserRepository(SessionLocal), email, password))
    return 0


if __name__ == "__main__":
    sys.exit(main())
