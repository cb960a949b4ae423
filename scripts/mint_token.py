#!/usr/bin/env python
"""
scripts/mint_token.py
─────────────────────
Mint a development bearer token for a tenant.

Usage:
    JWT_ALGORITHM=HS256 JWT_VERIFY_KEY=dev-secret JWT_SIGNING_KEY=dev-secret \\
        python scripts/mint_token.py --sub alice [--minutes 120]

Production tokens come from the identity provider; this only works when
JWT_SIGNING_KEY is configured and matches what JWT_VERIFY_KEY verifies.
"""

from __future__ import annotations

import argparse
import sys
from datetime import timedelta
from pathlib import Path

# Allow running from repo root
sys.path.insert(0, str(Path(__file__).parent.parent))

from ark.core.security import create_access_token


def main(sub: str, minutes: int | None) -> int:
    expires = timedelta(minutes=minutes) if minutes else None
    try:
        token = create_access_token(sub, expires_delta=expires)
    except RuntimeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(token)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Mint a development access token")
    parser.add_argument("--sub", required=True,
                        help="Tenant identifier to place in the sub claim")
    parser.add_argument("--minutes", type=int, default=None,
                        help="Lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)")
    args = parser.parse_args()
    sys.exit(main(args.sub, args.minutes))
