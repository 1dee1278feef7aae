"""CLI entry point and argument parsing"""

import sys
import argparse
from rich.console import Console
from pydantic import ValidationError

from client import ApiError
from utils.logging_setup import configure_logging
from cli.cli_app import AdminCLI


console = Console()


def _parse_pairs(values, separator):
    pairs = []
    for value in values or []:
        key, sep, rest = value.partition(separator)
        if not sep:
            raise ValueError(f"Expected key{separator}value, got '{value}'")
        pairs.append((key, rest))
    return pairs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="admin-cli", description="Storefront admin client")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument("--api-url", default=None, help="Override backend base URL (default: from config)")

    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Log in with email and password")
    login.add_argument("--email", default=None)
    login.add_argument("--password", default=None)

    sub.add_parser("logout", help="Forget stored credentials")
    sub.add_parser("status", help="Show credential and session status")
    sub.add_parser("whoami", help="Show the logged-in identity")

    list_cmd = sub.add_parser("list", help="List an admin resource, e.g. products")
    list_cmd.add_argument("resource")
    list_cmd.add_argument("--page", type=int, default=1)
    list_cmd.add_argument("--size", type=int, default=10)
    list_cmd.add_argument("--filter", action="append", help="field=value, repeatable")
    list_cmd.add_argument("--sort", action="append", help="field:asc|desc, repeatable")

    advertisers = sub.add_parser("advertisers", help="List or search affiliate advertisers")
    advertisers.add_argument("--query", default=None)
    advertisers.add_argument("--page", type=int, default=0)

    sync = sub.add_parser("sync", help="Run an aggregator sync job")
    sync.add_argument("target", choices=["advertisers", "offers", "products"])
    sync.add_argument("advertiser_id", nargs="?", default=None)

    sub.add_parser("cleanup", help="Delete seeded dummy catalog data")
    sub.add_parser("reindex", help="Trigger a search reindex")

    variants = sub.add_parser("variants", help="Preview variants generated from options")
    variants.add_argument("--option", action="append", default=[], help="Title=value1,value2, repeatable")

    sub.add_parser("feed", help="Follow the live activity feed")
    return parser


def run_command(cli: AdminCLI, args) -> int:
    if args.command == "login":
        cli.login(args.email, args.password)
    elif args.command == "logout":
        cli.logout()
    elif args.command == "status":
        cli.status()
    elif args.command == "whoami":
        return 0 if cli.whoami() else 1
    elif args.command == "list":
        filters = dict(_parse_pairs(args.filter, "="))
        sorters = _parse_pairs(args.sort, ":")
        cli.list_resource(args.resource, args.page, args.size, filters, sorters)
    elif args.command == "advertisers":
        cli.list_advertisers(args.query, args.page)
    elif args.command == "sync":
        cli.sync(args.target, args.advertiser_id)
    elif args.command == "cleanup":
        cli.cleanup()
    elif args.command == "reindex":
        cli.reindex()
    elif args.command == "variants":
        cli.preview_variants(args.option)
    elif args.command == "feed":
        cli.feed()
    return 0


def main(argv=None):
    """Entry point for the CLI"""
    args = build_parser().parse_args(argv)
    configure_logging(debug=args.debug)

    cli = AdminCLI(base_url=args.api_url, debug=args.debug, console=console)
    exit_code = 1
    try:
        exit_code = run_command(cli, args)
    except ApiError as e:
        cli.report_error(e)
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Invalid input:[/red] {e}")
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
    finally:
        cli.close()

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
