#!/usr/bin/env python3
"""
Issue a bearer token for a user id.

Accounts are managed outside this service; this script lets developers
and operators call the API as a given user.

Usage:
    python scripts/issue_token.py 65f1c0ffee0000000000beef
    python scripts/issue_token.py 65f1c0ffee0000000000beef --minutes 30

Environment variables required:
    JWT_SECRET - Secret shared with the API
"""

import argparse
import asyncio
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bson import ObjectId
from dotenv import load_dotenv

from common.auth import JWTAuth

# Load environment variables
load_dotenv()


async def issue_token(user_id: str, minutes: int) -> str:
    """Create a signed token whose subject is ``user_id``."""
    secret = os.getenv("JWT_SECRET")
    if not secret:
        print("ERROR: JWT_SECRET environment variable not set")
        sys.exit(1)

    auth = JWTAuth(
        secret=secret,
        algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        access_token_expire_minutes=minutes,
    )
    return await auth.create_token(user_id)


def main():
    parser = argparse.ArgumentParser(description="Issue a bearer token for a user id")
    parser.add_argument("user_id", help="24-character hex ObjectId of the user")
    parser.add_argument("--minutes", type=int, default=60, help="Token lifetime in minutes")
    args = parser.parse_args()

    if not ObjectId.is_valid(args.user_id):
        print(f"ERROR: {args.user_id} is not a valid ObjectId")
        sys.exit(1)

    print(asyncio.run(issue_token(args.user_id, args.minutes)))


if __name__ == "__main__":
    main()
