"""Command-line launcher for the student dashboard.

Starts the API server, opens the terminal board, or prints the dashboard
counters from a running server.
"""

import argparse
import asyncio
import logging
import sys

import httpx

from student_dashboard.config import get_settings


def main(argv=None):
    """Main entry point."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Student Dashboard: track job applications on a kanban board"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("tui", help="Launch the board")

    api_parser = subparsers.add_parser("api", help="Start the API server")
    api_parser.add_argument("--host", default=settings.api_host, help="Interface to bind")
    api_parser.add_argument("--port", type=int, default=settings.api_port, help="Port to run the API server on")

    summary_parser = subparsers.add_parser("summary", help="Print dashboard counters")
    summary_parser.add_argument("--api-url", default=settings.api_url, help="Base URL of the API")

    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level.upper())

    if args.command == "tui" or args.command is None:
        from student_dashboard.tui.app import main as tui_main
        tui_main()
    elif args.command == "api":
        from student_dashboard.main import run
        run(host=args.host, port=args.port)
    elif args.command == "summary":
        return run_summary(args.api_url)
    else:
        parser.print_help()
    return 0


def run_summary(api_url: str) -> int:
    """Fetch and print the dashboard counters."""
    from student_dashboard.tui.client import DashboardClient, error_detail

    async def fetch():
        client = DashboardClient(api_url)
        try:
            return await client.fetch_dashboard()
        finally:
            await client.close()

    try:
        counters = asyncio.run(fetch())
    except httpx.HTTPError as exc:
        print(f"Could not reach {api_url}: {error_detail(exc)}", file=sys.stderr)
        return 1

    print(f"Applications: {counters.total}")
    print(f"Interviews:   {counters.interview_count}")
    print(f"Offers:       {counters.offer_count}")
    print(f"Deadlines:    {counters.deadline_count}")
    return 0


def api():
    """Entry point for the API server alone."""
    from student_dashboard.main import run
    run()


if __name__ == "__main__":
    sys.exit(main())
