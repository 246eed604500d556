#!/usr/bin/env python3
"""
CLI script to mint an access token for an operator.

Usage:
    python scripts/create_admin_token.py
    python scripts/create_admin_token.py --role EDITOR --name "Jan Kowalski" --minutes 60
"""

import argparse
import sys
import uuid
from datetime import timedelta
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from smtp_settings.utils.permissions import Role
from smtp_settings.utils.security import create_access_token


def main():
    parser = argparse.ArgumentParser(description="Create an access token")
    parser.add_argument("--user-id", help="User UUID (random if omitted)")
    parser.add_argument("--role", default=Role.ADMINISTRATOR.value, choices=[r.value for r in Role])
    parser.add_argument("--name", default="Administrator")
    parser.add_argument("--minutes", type=int, help="Token lifetime in minutes")
    args = parser.parse_args()

    try:
        user_id = uuid.UUID(args.user_id) if args.user_id else uuid.uuid4()
    except ValueError:
        print("Invalid user id, expected a UUID.")
        sys.exit(1)

    expires = timedelta(minutes=args.minutes) if args.minutes else None
    token = create_access_token(user_id, role=args.role, name=args.name, expires_delta=expires)

    print(f"User ID: {user_id}")
    print(f"Role:    {args.role}")
    print(f"\n{token}\n")
    print("Send it as 'Authorization: Bearer <token>' or in the access_token cookie.")


if __name__ == "__main__":
    main()
