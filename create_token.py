#!/usr/bin/env python3
"""
Mint an ``x-auth-token`` for an existing user id.

The API itself does not issue tokens.  Operators run this script with
the same ``SECRET_KEY`` as the server, for example::

    python create_token.py --user-id 1 --admin --days 365
"""

import argparse

from vidly_api.app.core.security import create_access_token


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a signed Vidly API token.")
    ap.add_argument("--user-id", type=int, required=True, help="Id of the user the token identifies")
    ap.add_argument("--admin", action="store_true", help="Grant the administrator flag")
    ap.add_argument("--days", type=int, default=1, help="Token lifetime in days (default: 1)")
    args = ap.parse_args()

    token = create_access_token(
        {"sub": str(args.user_id), "is_admin": args.admin},
        expires_delta=args.days * 24 * 60 * 60,
    )
    print(token)


if __name__ == "__main__":
    main()
