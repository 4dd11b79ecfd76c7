#!/usr/bin/env python3
"""
Issue an access token for the Harvest Direct back office.

Signs a JWT with the configured JWT_SECRET so the admin inventory
routes can be called locally (curl, API docs) without the identity
service.

Usage:
    python scripts/issue_admin_token.py [--subject admin@harvestdirect.local] [--role admin] [--hours 24]
"""

import argparse
import sys
from datetime import timedelta
from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / "config" / ".env")

from harvest_direct.core.config import get_settings
from harvest_direct.security.tokens import issue_access_token


def main():
    parser = argparse.ArgumentParser(description="Issue a Harvest Direct access token")
    parser.add_argument("--subject", default="admin@harvestdirect.local", help="User id to embed as 'sub'")
    parser.add_argument("--role", default="admin", choices=["admin", "user"])
    parser.add_argument("--hours", type=int, default=24, help="Token lifetime in hours")
    args = parser.parse_args()

    settings = get_settings()
    token = issue_access_token(
        args.subject,
        role=args.role,
        expires_delta=timedelta(hours=args.hours),
        settings=settings,
    )

    print("=" * 60)
    print("Harvest Direct Access Token")
    print("=" * 60)
    print(f"\nSubject: {args.subject}")
    print(f"Role:    {args.role}")
    print(f"Expires: in {args.hours}h")
    print("\nUse it as:")
    print(f"   Authorization: Bearer {token}")
    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
