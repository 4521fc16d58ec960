"""CLI entry point and argument parsing"""

import sys
import argparse
from rich.console import Console


console = Console()


def main():
    """Entry point for the CLI"""
    parser = argparse.ArgumentParser(description="OAuth token exchange proxy")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument("--bind", "-b", default=None, help="Override bind address (default: from config)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Override port (default: from config)")
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Print the effective configuration (no secrets) and exit"
    )

    args = parser.parse_args()

    try:
        if args.check_config:
            from cli.status_display import show_config_status
            ok = show_config_status(console)
            if not ok:
                console.print("[yellow]Configuration is incomplete[/yellow]")
            sys.exit(0 if ok else 1)

        from proxy import ProxyServer
        server = ProxyServer(debug=args.debug, bind_address=args.bind, port=args.port)
        server.run()

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
