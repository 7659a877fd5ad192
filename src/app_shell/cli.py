import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from src.components.configuration import ConfigLoadError, run_load
from src.components.configuration.adapters import default_filesystem
from src.components.links import AppendMode

logger = logging.getLogger("cli")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def handle_serve(args: argparse.Namespace) -> None:
    import uvicorn

    from src.api.deps import Settings, parse_address, validate_config_path
    from src.api.main import create_app

    try:
        settings = Settings.from_env()
        if args.config:
            settings = replace(settings, config_path=validate_config_path(args.config))
        if args.address:
            host, port = parse_address(args.address)
            settings = replace(settings, host=host, port=port)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(2)

    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        server_header=False,
        log_level=settings.log_level.lower(),
    )


def handle_check(args: argparse.Namespace) -> None:
    path = Path(args.path)
    try:
        snapshot = run_load(path, fs=default_filesystem)
    except ConfigLoadError as e:
        print(f"{path}: invalid")
        for error in e.errors:
            location = f"{error.field}: " if error.field else ""
            print(f"  [{error.code.value}] {location}{error.message}")
        sys.exit(1)

    print(f"{path}: OK ({len(snapshot)} links)")
    for link_id in sorted(snapshot):
        link = snapshot.links[link_id]
        flags = []
        if link.disabled:
            flags.append("disabled")
        if link.invalid_after is not None:
            flags.append(f"invalid_after={link.invalid_after}")
        if link.append_mode is not AppendMode.NONE:
            flags.append(f"append_mode={link.append_mode.value}")
        suffix = f" ({', '.join(flags)})" if flags else ""
        print(f"  {link_id} -> {link.redirect}{suffix}")


def main() -> None:
    parser = argparse.ArgumentParser(prog="lynx", description="Lynx short link server")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the redirect server")
    serve_parser.add_argument(
        "-c",
        "--config",
        help="Path to the links file; changes trigger a reload (env: LYNX_CONFIG)",
    )
    serve_parser.add_argument(
        "-a",
        "--address",
        help=f"host:port to listen on (env: LYNX_ADDRESS, default "
        f"{os.environ.get('LYNX_ADDRESS', '127.0.0.1:5621')})",
    )

    # check
    check_parser = subparsers.add_parser("check", help="Validate a links file")
    check_parser.add_argument("path", help="Links file to validate")

    args = parser.parse_args()

    if args.command == "serve":
        handle_serve(args)
    elif args.command == "check":
        handle_check(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
