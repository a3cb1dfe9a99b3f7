"""
Mint a development bearer token signed with SECRET_KEY.

Usage:
  python scripts/issue_dev_token.py [subject]
"""
from __future__ import annotations

import sys

from workflow_sync.core.security import create_access_token


def main() -> None:
    subject = sys.argv[1] if len(sys.argv) > 1 else "dev@localhost"
    print(create_access_token(subject, {"name": subject}))


if __name__ == "__main__":
    main()
