#!/usr/bin/env python3
"""
Reset a user's password in the ConnectApp SQLite database.

This script DOES NOT read or reveal any existing password.  It stores a
fresh PBKDF2 digest for the given email, using the same format as the
API, so the user can log in with the new password immediately.

Usage:
    python -m connect_api.reset_password --db ./connect_app.sqlite --email ann@example.com --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sqlite3
import sys
from typing import List, Optional

from connect_api.app.core.security import hash_password


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Reset a ConnectApp user's password (SQLite).")
    ap.add_argument("--db", required=True, help="Path to the SQLite DB file (e.g., ./connect_app.sqlite)")
    ap.add_argument("--email", required=True, help="Email of the user to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args(argv)

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        return 1

    password = args.password
    if password is None:
        password = getpass.getpass("New password: ")
        if password != getpass.getpass("Repeat password: "):
            print("[!] Passwords do not match", file=sys.stderr)
            return 1
    if not password.strip():
        print("[!] Password must not be empty", file=sys.stderr)
        return 1

    email = args.email.strip().lower()
    conn = sqlite3.connect(args.db)
    try:
        cursor = conn.execute(
            "UPDATE users SET password_hash = ? WHERE email = ?",
            (hash_password(password), email),
        )
        conn.commit()
    finally:
        conn.close()

    if cursor.rowcount == 0:
        print(f"[!] No user with email {email}", file=sys.stderr)
        return 1
    print(f"[+] Password updated for {email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
