"""
Create a user (e.g. an extra admin). Run from project root:
  python -m dashboard.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m dashboard.scripts.create_user alice your-secure-password admin
"""
import argparse
import logging
import sys

from dashboard.core.config import get_settings
from dashboard.core.database import build_engine, build_session_factory
from dashboard.core.exceptions import DashboardError
from dashboard.models import Base
from dashboard.services.users import add_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a dashboard user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    settings = get_settings()
    engine = build_engine(settings)
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
    db = build_session_factory(engine)()
    try:
        user = add_user(db, args.username, args.password, args.role, settings)
    except DashboardError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        engine.dispose()
    logger.info("Created user '%s' with role '%s'.", user.username, user.role)
    return 0


if __name__ == "__main__":
    sys.exit(main())
