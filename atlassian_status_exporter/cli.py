"""Command line entry point for the Atlassian Status Exporter.

Accept the exporter's flags (``-app.url``, ``-svc.port``, ...), merge them over
the environment-backed settings and serve the FastAPI application with uvicorn.
Both single- and double-dash spellings are accepted.
"""

import argparse
import sys
from typing import Any

import uvicorn
from pydantic import ValidationError

from atlassian_status_exporter.config import Settings

NAMESPACE = "atlassian_status"
USAGE_DESCRIPTION = (
    "The Atlassian Status Exporter is used to reach out and collect the info from\n"
    "the /status page, then turn that into a collectable metric."
)

# flag dest -> Settings field
_FLAG_FIELDS = {
    "svc_address": "SVC_ADDRESS",
    "svc_port": "SVC_PORT",
    "svc_timeout": "SVC_TIMEOUT",
    "app_url": "APP_URL",
    "app_protocol": "APP_PROTOCOL",
    "debug": "DEBUG",
    "enable_color_logs": "ENABLE_COLOR_LOGS",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=f"{NAMESPACE}_exporter",
        description=USAGE_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument(
        "-h", "-help", "--help",
        action="help",
        help="help will display this helpful dialog output",
    )
    parser.add_argument(
        "-svc.address", "--svc.address",
        dest="svc_address",
        help="assign an IP address for this service to listen on (default: 0.0.0.0)",
    )
    parser.add_argument(
        "-svc.port", "--svc.port",
        dest="svc_port",
        type=int,
        help="set the port that this service will listen on (default: 9997)",
    )
    parser.add_argument(
        "-svc.timeout", "--svc.timeout",
        dest="svc_timeout",
        type=float,
        help=(
            "set the timeout this service will allow to check the url. by default prometheus "
            "scrape timeout is 10 second. if you know the scrape may take longer, this can be adjusted."
        ),
    )
    parser.add_argument(
        "-app.url", "--app.url",
        dest="app_url",
        help="REQUIRED: provide the application url to be monitored (ie. <bitbucket|confluence|jira>.domain.com)",
    )
    parser.add_argument(
        "-app.protocol", "--app.protocol", "-app.protocal", "--app.protocal",
        dest="app_protocol",
        choices=["http", "https"],
        help="set the protocol used to interact with the application (default: https)",
    )
    parser.add_argument(
        "-debug", "--debug",
        dest="debug",
        action="store_true",
        default=None,
        help="enable the service debug output",
    )
    parser.add_argument(
        "-enable-color-logs", "--enable-color-logs",
        dest="enable_color_logs",
        action="store_true",
        default=None,
        help="when developing in debug mode, prettier to set this for visual colors",
    )
    return parser


def settings_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Return the Settings fields explicitly set on the command line."""
    return {
        field: getattr(args, dest)
        for dest, field in _FLAG_FIELDS.items()
        if getattr(args, dest) is not None
    }


def load_settings(parser: argparse.ArgumentParser, args: argparse.Namespace) -> Settings:
    """Build settings from flags over the environment; exit on invalid input."""
    try:
        return Settings(**settings_overrides(args))
    except ValidationError as exc:
        if any(error["type"] == "missing" and error["loc"] == ("APP_URL",) for error in exc.errors()):
            parser.print_usage(sys.stderr)
            parser.exit(2, "-app.url must be provided\n")
        parser.error(str(exc))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings(parser, args)

    # Imported late so `--help` works without loading the web stack.
    from atlassian_status_exporter.main import app

    app.state.settings = settings
    uvicorn.run(
        app,
        host=settings.SVC_ADDRESS,
        port=settings.SVC_PORT,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
