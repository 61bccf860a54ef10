from __future__ import annotations

import sys

import httpx
import yaml

from acp_bridge.config import ConfigResolver, validate_config
from acp_bridge.errors import BridgeError
from acp_bridge.parser import parse_acp_agent


SAMPLE_AGENT = {
    "id": "test-agent",
    "name": "Test ACP Agent",
    "capabilities": ["test"],
    "skills": [],
}


def check_health(
    resolver: ConfigResolver | None = None,
    transport: httpx.BaseTransport | None = None,
) -> bool:
    print("AstraSync ACP Bridge Health Check")
    try:
        settings = validate_config(resolver)
        print("Configuration loaded")
        print(f"  API URL: {settings.api_url}")
        print(f"  Email: {settings.developer_email}")
        print(f"  Demo mode: {settings.demo_mode}")

        with httpx.Client(timeout=10.0, transport=transport) as client:
            response = client.get(settings.api_url)
        if response.is_success:
            print("API is reachable")
        else:
            print(f"API returned status: {response.status_code}")

        parse_acp_agent(SAMPLE_AGENT)
        print("ACP parser working")
    except (BridgeError, httpx.HTTPError, RuntimeError, yaml.YAMLError) as exc:
        print(f"Health check failed: {exc}", file=sys.stderr)
        return False
    print("All systems operational!")
    return True


def main() -> int:
    return 0 if check_health() else 1


if __name__ == "__main__":
    sys.exit(main())
