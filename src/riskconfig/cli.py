"""Risk Configuration CLI: init and serve.

Usage:
    riskconfig init                 # Write ~/.risk-config/config.yaml
    riskconfig init --port 8080     # Same, listening on another port
    riskconfig serve                # Start the HTTP server
"""

import argparse
import sys
from pathlib import Path

CONFIG_DIR = Path.home() / ".risk-config"
CONFIG_FILE = CONFIG_DIR / "config.yaml"
DEFAULT_PORT = 3000

CONFIG_TEMPLATE = """\
# Risk Configuration API
# Configurations are held in memory and lost on restart.

server:
  host: 127.0.0.1
  port: {port}
  max_body_bytes: 10485760
  cors_origins:
    - "*"
{guide_block}"""

GUIDE_BLOCK_TEMPLATE = """
guide:
  path: {guide_path}
"""


def cmd_init(args: argparse.Namespace) -> int:
    """Write a starter config file."""
    port = args.port or DEFAULT_PORT
    guide_block = ""
    if args.guide:
        guide_block = GUIDE_BLOCK_TEMPLATE.format(
            guide_path=Path(args.guide).expanduser().resolve()
        )

    config_content = CONFIG_TEMPLATE.format(port=port, guide_block=guide_block)

    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    if CONFIG_FILE.exists() and not args.force:
        print(f"⚠️  Config already exists: {CONFIG_FILE}")
        print("   Use --force to overwrite.")
        return 1

    CONFIG_FILE.write_text(config_content)
    print(f"✅ Config written: {CONFIG_FILE}")
    print()
    print("🚀 Start the server:")
    print("   riskconfig serve")
    return 0


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the HTTP server."""
    from .server.app import run_server
    from .server.config import RiskConfigServiceConfig

    if args.config:
        config = RiskConfigServiceConfig.from_file(args.config)
    else:
        config = RiskConfigServiceConfig.from_env()

    run_server(
        config=config,
        host=args.host,
        port=args.port,
        log_level=args.log_level or "info",
    )


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="riskconfig",
        description="Risk Configuration API — keyed JSON configuration store",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init
    init_parser = subparsers.add_parser("init", help="Write a starter config file")
    init_parser.add_argument("--port", "-p", type=int, default=None,
                             help=f"Port to listen on (default: {DEFAULT_PORT})")
    init_parser.add_argument("--guide", type=str, default=None,
                             help="Markdown file to serve as the risk assessment guide")
    init_parser.add_argument("--force", action="store_true",
                             help="Overwrite existing config")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the HTTP server")
    serve_parser.add_argument("--host", type=str, default=None)
    serve_parser.add_argument("--port", "-p", type=int, default=None)
    serve_parser.add_argument("--config", "-c", type=str, default=None)
    serve_parser.add_argument("--log-level", type=str, default=None,
                              choices=["debug", "info", "warning", "error"])

    args = parser.parse_args()

    if args.command == "init":
        sys.exit(cmd_init(args))
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
