"""
Subsidiary Manager command line.

Usage:
    python -m subsidiary_manager serve          Run the API server
    python -m subsidiary_manager migrate        Apply pending schema migrations
    python -m subsidiary_manager create-admin   Create the default admin if missing
"""

import argparse
import asyncio
import sys

from subsidiary_manager.config import configure_logging, get_settings


async def _migrate() -> None:
    from subsidiary_manager.infrastructure.storage import close_database, init_database
    from subsidiary_manager.infrastructure.storage.database.migrations import run_migrations

    db = await init_database(get_settings().database)
    try:
        results = await run_migrations(db)
        print(f"Applied {len(results)} migration(s) on {db.engine}")
    finally:
        await close_database()


async def _create_admin() -> None:
    from subsidiary_manager.application.bootstrap import bootstrap_default_admin
    from subsidiary_manager.infrastructure.storage import (
        SQLUserStore,
        close_database,
        init_database,
    )

    settings = get_settings()
    db = await init_database(settings.database)
    try:
        user = await bootstrap_default_admin(SQLUserStore(db), settings.auth)
        if user is None:
            print(f"User '{settings.auth.admin_username}' already exists")
        else:
            print(f"Created '{user.username}'")
    finally:
        await close_database()


def cmd_serve(args: argparse.Namespace) -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "subsidiary_manager.api.main:app",
        host=args.host or settings.api.host,
        port=args.port or settings.api.port,
        reload=args.reload,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="subsidiary-manager", description=__doc__.splitlines()[1])
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--reload", action="store_true")

    sub.add_parser("migrate", help="Apply pending schema migrations")
    sub.add_parser("create-admin", help="Create the default admin if missing")

    args = parser.parse_args(argv)

    if args.command == "serve":
        cmd_serve(args)
        return 0

    configure_logging()
    if args.command == "migrate":
        asyncio.run(_migrate())
    elif args.command == "create-admin":
        asyncio.run(_create_admin())
    return 0


if __name__ == "__main__":
    sys.exit(main())
