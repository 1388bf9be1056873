"""Issue a session token for local development.

The real token comes from the login service.  This helper makes sure
the user exists in the local database and prints a token for it, to
be used as the ``token`` cookie or as ``MEMO_API_TOKEN`` for
``memo_console.py``.

Usage:
    python create_token.py --email user@example.com --days 30
"""
import argparse
import asyncio

from memo_api.app.core.db import init_db
from memo_api.app.core.security import create_access_token
from memo_api.app.services.user_service import UserService


def main() -> None:
    ap = argparse.ArgumentParser(description="Print a session token for a (new or existing) user.")
    ap.add_argument("--email", required=True, help="User email, used as the token subject")
    ap.add_argument("--days", type=int, default=1, help="Token lifetime in days")
    args = ap.parse_args()

    init_db()
    user = asyncio.run(UserService.get_or_create_user(args.email))
    token = create_access_token({"sub": user.email}, expires_delta=args.days * 24 * 60 * 60)
    print(token)


if __name__ == "__main__":
    main()
