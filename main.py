#!/usr/bin/env python3
"""
Quora API -- questions and answers behind session-based authentication.

Usage:
  python main.py serve
  python main.py serve --host 0.0.0.0 --port 8080 --reload
  python main.py create-admin --username root --email root@example.com
  python main.py create-admin --username root --email root@example.com --first-name Ada

Admins cannot sign up over HTTP. create-admin is the only way to get one: it
prompts for the password (twice) so it never lands in shell history.

Environment variables:
  SECRET_KEY     Signs session tokens. Required unless DEBUG=true.
  DATABASE_URL   SQLAlchemy URL. Defaults to sqlite:///quora.db in the repo root.
"""

import argparse
import getpass
import sys

from auth.models import SignupDraft
from auth.service import AuthService
from auth.store import SessionStore, UserStore
from core.config import get_settings
from core.database import create_store_engine
from core.exceptions import QuoraError


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("asgi:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def _prompt_password() -> str:
    """Ask for the admin password twice. Returns "" if the two differ."""
    first = getpass.getpass("  Password: ")
    second = getpass.getpass("  Repeat password: ")
    if first != second:
        return ""
    return first


def _create_admin(args: argparse.Namespace) -> int:
    password = _prompt_password()
    if not password:
        print("  [!] Passwords are empty or do not match.")
        return 1

    settings = get_settings()
    engine = create_store_engine(settings.database_url)
    try:
        service = AuthService(UserStore(engine), SessionStore(engine), secret_key=settings.secret_key)
        draft = SignupDraft(
            username=args.username,
            email=args.email,
            password=password,
            first_name=args.first_name,
            last_name=args.last_name,
        )
        try:
            admin = service.register_admin(draft)
        except QuoraError as e:
            print(f"  [!] {e.code}: {e.message}")
            return 1
    finally:
        engine.dispose()

    print(f"  Admin '{admin.username}' created with id {admin.uuid}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quora",
        description="Quora API server and administration commands.",
    )
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    serve.set_defaults(func=_serve)

    admin = sub.add_parser("create-admin", help="Register an admin user")
    admin.add_argument("--username", required=True)
    admin.add_argument("--email", required=True)
    admin.add_argument("--first-name", default="")
    admin.add_argument("--last-name", default="")
    admin.set_defaults(func=_create_admin)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
