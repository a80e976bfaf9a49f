#!/usr/bin/env python3
"""
Issue a caller token for the Exhibition Registry API.

The token asserts the given principal as the ambient caller identity.
Pass it to the API as ``Authorization: Bearer <token>`` (or as
``api_key`` to ``exhibition_client.ExhibitionAPI``).  The signing key
is read from the ``SECRET_KEY`` environment variable, so it must match
the one the server runs with.

Usage:
    python create_token.py alice-principal --days 365
"""

import argparse
import sys

from exhibition_api.app.core.security import create_access_token


def main(argv=None):
    ap = argparse.ArgumentParser(description="Issue a caller token for the exhibition registry.")
    ap.add_argument("principal", help="Caller principal to embed in the token")
    ap.add_argument("--days", type=int, default=None, help="Token lifetime in days (default: server setting)")
    args = ap.parse_args(argv)

    if not args.principal.strip():
        print("[!] Empty principal is not allowed.", file=sys.stderr)
        sys.exit(1)

    expires = args.days * 24 * 60 * 60 if args.days else None
    print(create_access_token(args.principal.strip(), expires_delta=expires))


if __name__ == "__main__":
    main()
