"""
monday-api-mcp: serve the monday.com toolkit as an MCP server over stdio.

Every option takes a value and falls back to a ``MONDAY_<NAME>`` environment
variable, e.g. ``MONDAY_TOKEN`` or ``MONDAY_READONLYMODE``.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Literal, Optional, Union

from dotenv import load_dotenv  # type: ignore

from monday_toolkit.agents.tool.enums import ToolMode
from monday_toolkit.agents.tools.config import MondayAgentToolkitConfig, ToolsConfiguration
from monday_toolkit.toolkit.mcp_server import run_stdio
from monday_toolkit.toolkit.toolkit import MondayAgentToolkit

logger = logging.getLogger(__name__)

# (name, flags, help, default)
ARG_CONFIGS = [
    ("token", ("--token", "-t"), "Monday API token", None),
    ("version", ("--version", "-v"), "Monday API version", None),
    ("readOnlyMode", ("--read-only", "-ro"), "Enable read-only mode", "false"),
    (
        "mode",
        ("--mode", "-m"),
        'Set the mode for tool selection: "api" - API tools only, "apps" - (Beta) Monday Apps tools only, '
        '"atp" - ATP server mode with GraphQL exploration',
        ToolMode.API.value,
    ),
    (
        "enableDynamicApiTools",
        ("--enable-dynamic-api-tools", "-edat"),
        '(Beta) Enable dynamic API tools. Options: "true" (enables along with other tools), "only" (only '
        'dynamic API tools), "false" (disabled). Not supported when using read-only mode.',
        "false",
    ),
]

UNSUPPORTED_MODES = {
    ToolMode.APPS.value: "Apps mode is not supported by this server: no monday apps tools are available",
    ToolMode.ATP.value: "ATP mode is not supported by this server",
}


def env_var_name(name: str) -> str:
    return f"MONDAY_{name.upper()}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monday-api-mcp",
        description="MCP server exposing monday.com API tools",
    )
    for name, flags, help_text, default in ARG_CONFIGS:
        parser.add_argument(
            *flags,
            dest=name,
            # a bare boolean flag such as `-ro` reads as "true"
            nargs="?" if default == "false" else None,
            const="true" if default == "false" else None,
            default=os.getenv(env_var_name(name), default),
            help=f"{help_text} (env: {env_var_name(name)})",
        )
    return parser


def parse_bool(value: Optional[str]) -> bool:
    return str(value).strip().lower() == "true"


def parse_dynamic_api_tools(value: Optional[str]) -> Union[bool, Literal["only"]]:
    if str(value).strip().lower() == "only":
        return "only"
    return parse_bool(value)


def build_config(args: argparse.Namespace) -> MondayAgentToolkitConfig:
    return MondayAgentToolkitConfig(
        monday_api_token=args.token,
        monday_api_version=args.version or None,
        tools_configuration=ToolsConfiguration(
            read_only_mode=parse_bool(args.readOnlyMode),
            enable_dynamic_api_tools=parse_dynamic_api_tools(args.enableDynamicApiTools),
            mode=ToolMode(args.mode),
            enable_tool_manager=False,
        ),
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.token:
        parser.error(f"--token is required (or set {env_var_name('token')})")

    args.mode = str(args.mode).strip().lower()
    valid_modes = [mode.value for mode in ToolMode]
    if args.mode not in valid_modes:
        parser.error(f"invalid mode {args.mode!r} (choose from {', '.join(valid_modes)})")
    if args.mode in UNSUPPORTED_MODES:
        parser.error(UNSUPPORTED_MODES[args.mode])

    enable_dynamic = str(args.enableDynamicApiTools).strip().lower()
    if enable_dynamic not in ("true", "only", "false"):
        parser.error(
            f"invalid --enable-dynamic-api-tools value {args.enableDynamicApiTools!r} (choose from true, only, false)"
        )
    return args


def main(argv: Optional[List[str]] = None) -> int:
    # Environment first, so MONDAY_TOKEN from .env is picked up as the --token default
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        stream=sys.stderr,
    )

    args = parse_args(argv)
    try:
        toolkit = MondayAgentToolkit(build_config(args))
        asyncio.run(run_stdio(toolkit))
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        print(f"Fatal error in main(): {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
