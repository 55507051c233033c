#!/usr/bin/env python3
"""
Create or update an admin user (replaces the setup-admin endpoint).

    python create_admin.py admin@example.com --name "Site Admin" --role super_admin
"""
import argparse
import getpass

from app.core.errors import ServiceError
from app.db.session import ServiceSessionLocal
from app.services.admin_service import ROLES, upsert_admin


def main():
    parser = argparse.ArgumentParser(description="Create or update an admin user")
    parser.add_argument("email")
    parser.add_argument("--name", default="")
    parser.add_argument("--role", default="super_admin", choices=ROLES)
    parser.add_argument("--password", help="prompted for when omitted")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    db = ServiceSessionLocal()
    try:
        admin, created = upsert_admin(db, args.email, password, args.name, args.role)
    except ServiceError as e:
        raise SystemExit(f"[create_admin] {e}")
    finally:
        db.close()
    print(f"[create_admin] {'Created' if created else 'Updated'} {admin.email} ({admin.role})")


if __name__ == "__main__":
    main()
