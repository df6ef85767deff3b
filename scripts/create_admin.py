#!/usr/bin/env python3
"""Create an administrator, or promote an existing user to one.

Usage:
    python scripts/create_admin.py --email admin@example.com --password 'Adm1n!Secure#Pw'

    ADMIN_BOOTSTRAP_EMAIL=... ADMIN_BOOTSTRAP_PASSWORD=... python scripts/create_admin.py

The password must pass the same complexity rules as registration.
Administrators created here are marked email-verified.
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


async def create_admin(email: str, password: str) -> dict:
    from sqlmodel import SQLModel

    from config import ApplicationConfig
    from authkit.bootstrap import build_services
    from authkit.depends import AsyncSessionLocal, engine
    from authkit.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
    from authkit.app.use_cases.users import (
        CreateUserCommand,
        CreateUserUseCase,
        UpdateUserCommand,
        UpdateUserUseCase,
    )
    from authkit.domain.entities import UserRole, normalize_email

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    services = build_services(ApplicationConfig)

    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUnitOfWork(session)

        async with uow:
            existing = await uow.users.get_by_email(normalize_email(email))
            existing_id = existing.id if existing else None
            already_admin = existing is not None and existing.role == UserRole.ADMIN

        if already_admin:
            return {"status": "already_admin", "user_id": str(existing_id)}
        if existing_id is not None:
            result = await UpdateUserUseCase(uow, services).execute(
                existing_id, UpdateUserCommand(role=UserRole.ADMIN.value)
            )
            status = "promoted"
        else:
            result = await CreateUserUseCase(uow, services).execute(
                CreateUserCommand(
                    email=email,
                    password=password,
                    role=UserRole.ADMIN.value,
                    is_email_verified=True,
                )
            )
            status = "created"

    await engine.dispose()

    if result.is_err():
        raise RuntimeError(f"{result.error.code}: {result.error.message}")
    return {"status": status, "user_id": result.value.id}


def main():
    parser = argparse.ArgumentParser(
        description="Create or promote an administrator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--email",
        default=os.environ.get("ADMIN_BOOTSTRAP_EMAIL"),
        help="Admin email (or set ADMIN_BOOTSTRAP_EMAIL)",
    )
    parser.add_argument(
        "--password",
        default=os.environ.get("ADMIN_BOOTSTRAP_PASSWORD"),
        help="Admin password (or set ADMIN_BOOTSTRAP_PASSWORD)",
    )
    args = parser.parse_args()

    if not args.email or not args.password:
        print("Error: --email and --password are required")
        sys.exit(1)

    try:
        result = asyncio.run(create_admin(args.email, args.password))
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)

    if result["status"] == "created":
        print(f"Admin user created (id: {result['user_id']})")
    elif result["status"] == "promoted":
        print(f"Existing user promoted to admin (id: {result['user_id']})")
    else:
        print(f"No changes needed, user is already an admin (id: {result['user_id']})")


if __name__ == "__main__":
    main()
