"""Create a TaskFlow user.

Usage:
    python -m taskflow.scripts.create_user --email alice@example.com --username alice --password <password>
"""

from __future__ import annotations

import argparse
import sys

from taskflow.db.session import SessionLocal
from taskflow.errors import ConflictError
from taskflow.services.auth import create_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a TaskFlow user")
    parser.add_argument("--email", required=True, help="Email address (login name)")
    parser.add_argument("--username", required=True, help="Unique username")
    parser.add_argument("--password", required=True, help="Password for the new user")
    parser.add_argument("--display-name", default=None, help="Display name (defaults to username)")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        try:
            user = create_user(
                db,
                email=args.email,
                username=args.username,
                password=args.password,
                display_name=args.display_name,
            )
        except ConflictError as exc:
            print(f"Cannot create user: {exc.message}.")
            return 1
        print(f"User '{user.username}' created successfully (id={user.id}).")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
