"""Create an administrator, or promote an existing user.

Usage:
    python -m backend.create_admin <email> <name> <password>
"""
import sys

from backend.auth.users import bootstrap_admin
from backend.database import SessionLocal, init_db


def main(argv: list[str]) -> int:
    if len(argv) != 3:
        print(__doc__.strip(), file=sys.stderr)
        return 2

    email, name, password = argv
    init_db()
    db = SessionLocal()
    try:
        user = bootstrap_admin(db, email=email, password=password, name=name)
    finally:
        db.close()

    if user is None:
        print("Email and password are required.", file=sys.stderr)
        return 1
    print(f"{user.email} ({user.id}) is an administrator.")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
