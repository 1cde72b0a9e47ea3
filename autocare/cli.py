"""CLI for AutoCare: create tables, bootstrap an admin, seed the service catalog."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys

DEFAULT_SERVICE_TYPES = [
    {
        "name": "Regular Maintenance",
        "description": "Oil change, filter replacement and a general inspection",
        "features": ["Oil change", "Filter replacement", "Inspection"],
        "estimated_time": 60,
    },
    {
        "name": "Major Service",
        "description": "Full inspection with fluids, filters and brakes",
        "features": ["Full inspection", "Fluids", "Filters", "Brakes"],
        "estimated_time": 180,
    },
    {
        "name": "Oil Change",
        "description": "Engine oil and oil filter replacement",
        "features": ["Engine oil", "Oil filter"],
        "estimated_time": 30,
    },
    {
        "name": "Brake Inspection",
        "description": "Pads, discs and brake fluid check",
        "features": ["Pads", "Discs", "Brake fluid"],
        "estimated_time": 45,
    },
]


async def cmd_init_db(args):
    from autocare.db.engine import create_all

    await create_all()
    print("Database tables created.")


async def cmd_create_admin(args):
    """Create an admin account."""
    from autocare.db import crud
    from autocare.db.engine import async_session_factory, create_all
    from autocare.services.auth import ROLE_ADMIN, hash_password

    await create_all()

    password = args.password
    if not password:
        password = getpass.getpass("Admin password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match")
            sys.exit(1)

    if len(password) < 8:
        print("Password must be at least 8 characters")
        sys.exit(1)

    async with async_session_factory() as db:
        if await crud.get_user_by_email(db, args.email):
            print(f"An account with email {args.email} already exists")
            sys.exit(1)
        admin = await crud.create_user(
            db,
            first_name=args.first_name,
            last_name=args.last_name,
            email=args.email,
            password_hash=hash_password(password),
            role=ROLE_ADMIN,
        )

    print(f"Admin user: {admin.email} (id={admin.id})")


async def cmd_seed_service_types(args):
    """Insert the default service types that are not in the catalog yet."""
    from autocare.db import crud
    from autocare.db.engine import async_session_factory, create_all

    await create_all()

    async with async_session_factory() as db:
        existing = {st.name for st in await crud.list_service_types(db)}
        for entry in DEFAULT_SERVICE_TYPES:
            if entry["name"] in existing:
                print(f"Service type already exists, skipping: {entry['name']}")
                continue
            st = await crud.create_service_type(db, **entry)
            print(f"Created service type: {st.name} (id: {st.id})")


def main(argv=None):
    parser = argparse.ArgumentParser(description="AutoCare CLI")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("init-db", help="Create database tables")

    ca = subparsers.add_parser("create-admin", help="Create an admin account")
    ca.add_argument("--email", required=True, help="Admin email")
    ca.add_argument("--password", default="", help="Admin password (prompted if not given)")
    ca.add_argument("--first-name", default="Admin", help="First name")
    ca.add_argument("--last-name", default="", help="Last name")

    subparsers.add_parser("seed-service-types", help="Seed the default service catalog")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "create-admin":
        asyncio.run(cmd_create_admin(args))
    elif args.command == "seed-service-types":
        asyncio.run(cmd_seed_service_types(args))


if __name__ == "__main__":
    main()
