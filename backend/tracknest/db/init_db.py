"""
Database initialization: schema, first administrator, optional fixtures.

Run as a script to prepare a database without starting the server:

    python -m tracknest.db.init_db [--seed]
"""
import argparse
import logging
from typing import Optional
from sqlalchemy.orm import Session
from tracknest.core.config import settings
from tracknest.core.security import ADMIN
from tracknest.db.seed import seed_fixtures
from tracknest.db.session import SessionLocal, init_db
from tracknest.models.user import User
from tracknest.services.user_service import create_user

logger = logging.getLogger(__name__)


def bootstrap_admin(db: Session) -> Optional[User]:
    """
    Create the first admin user if the users table is empty.

    Only runs when BOOTSTRAP_ADMIN_PASSWORD is set, so no default password
    ever ships.
    """
    if db.query(User).first() is not None:
        return None
    if not settings.BOOTSTRAP_ADMIN_PASSWORD:
        logger.warning("No users present and BOOTSTRAP_ADMIN_PASSWORD not set; skipping admin bootstrap")
        return None

    user = create_user(
        db,
        settings.BOOTSTRAP_ADMIN_USERNAME,
        settings.BOOTSTRAP_ADMIN_PASSWORD,
        ADMIN
    )
    logger.warning(f"Created initial admin user '{user.username}'")
    return user


def startup(seed: bool = None) -> None:
    """Schema creation plus bootstrap, run once at process start."""
    init_db()
    if seed is None:
        seed = settings.SEED_FIXTURES
    db = SessionLocal()
    try:
        # Fixtures bring their own admins, so seeding goes first
        if seed:
            seed_fixtures(db)
        bootstrap_admin(db)
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Initialize the TrackNest database")
    parser.add_argument("--seed", action="store_true", help="load the development fixtures")
    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL)
    print("Initializing database...")
    startup(seed=args.seed or settings.SEED_FIXTURES)
    print("Database initialized successfully!")


if __name__ == "__main__":
    main()
