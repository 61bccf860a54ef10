from __future__ import annotations

import argparse
import asyncio
import json
import logging
import re
import sys
from pathlib import Path
from typing import Sequence

import yaml

from acp_bridge.bridge import AcpBridge
from acp_bridge.config import ConfigResolver, validate_config
from acp_bridge.errors import BridgeError
from acp_bridge.schemas import RegistrationResult


AGENT_PAGE_URL = "https://astrasync.ai/agent/{agent_id}"
SIGNUP_URL = "https://astrasync.ai/signup"


def _read_source(source: str) -> str:
    if source.lstrip().startswith("{"):
        return source
    return Path(source).read_text(encoding="utf-8")


def _default_output_name(result: RegistrationResult) -> str:
    slug = re.sub(r"\s+", "-", result.original.name.lower())
    return f"{slug}-{result.astraSync.agentId}.json"


def _print_summary(result: RegistrationResult) -> None:
    print("Registration Summary:")
    print("-" * 50)
    print("Agent ID:", result.astraSync.agentId)
    print("Trust Score:", result.astraSync.trustScore)
    print("Name:", result.original.name)
    print("Status:", result.astraSync.status)
    print("-" * 50)


def _register(args: argparse.Namespace, resolver: ConfigResolver) -> int:
    settings = validate_config(resolver)
    bridge = AcpBridge(
        settings.api_url,
        args.email or settings.developer_email,
        resolver=resolver,
    )
    descriptor = _read_source(args.source)
    result = asyncio.run(bridge.register_agent(descriptor))

    print("Agent registered successfully!")
    _print_summary(result)

    output = Path(args.output or _default_output_name(result))
    output.write_text(
        json.dumps(result.model_dump(), indent=2), encoding="utf-8"
    )
    print(f"Results saved to: {output}")
    print("Next steps:")
    print("  1. Share your agent ID:", result.astraSync.agentId)
    print(
        "  2. View on web:",
        AGENT_PAGE_URL.format(agent_id=result.astraSync.agentId),
    )
    print("  3. When ready, upgrade at:", SIGNUP_URL)
    return 0


def _verify(args: argparse.Namespace, resolver: ConfigResolver) -> int:
    settings = validate_config(resolver)
    bridge = AcpBridge(settings.api_url, resolver=resolver)
    result = asyncio.run(bridge.verify_agent(args.agent_id))
    print("Agent verified!")
    print(json.dumps(result, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="acp-bridge",
        description="Register ACP agents with AstraSync.",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    register = subparsers.add_parser(
        "register", help="Register an ACP agent from a JSON file or manifest."
    )
    register.add_argument("source", help="Inline JSON or path to a JSON file.")
    register.add_argument(
        "-o", "--output", help="Output file for the registration result."
    )
    register.add_argument(
        "-e", "--email", help="Developer email (overrides environment)."
    )
    register.set_defaults(handler=_register)

    verify = subparsers.add_parser("verify", help="Verify an agent registration.")
    verify.add_argument("agent_id")
    verify.set_defaults(handler=_verify)
    return parser


def main(
    argv: Sequence[str] | None = None, resolver: ConfigResolver | None = None
) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.handler(args, resolver or ConfigResolver())
    except (BridgeError, OSError, RuntimeError, yaml.YAMLError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
