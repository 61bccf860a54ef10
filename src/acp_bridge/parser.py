from __future__ import annotations

import copy
import json
import logging
from typing import Any, Mapping, Sequence

from acp_bridge.errors import ParseError
from acp_bridge.schemas import AcpMetadata, CanonicalAgent


logger = logging.getLogger(__name__)

DEFAULT_CAPABILITY = "acp-compliant"

ID_FIELDS = ("id", "agentId")
NAME_FIELDS = ("name", "agentName")
DESCRIPTION_FIELDS = ("description", "agentDescription")
VERSION_FIELDS = ("version",)
AUTHENTICATION_FIELDS = ("authentication",)
SKILLS_FIELDS = ("skills",)
FRAMEWORK_FIELDS = ("framework",)
ENDPOINT_FIELDS = ("endpoint", "url")


def _is_set(value: Any) -> bool:
    # Empty containers still count; only blank scalars fall through.
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    return True


def _resolve_field(
    data: Mapping[str, Any], candidates: tuple[str, ...], default: Any = None
) -> Any:
    for key in candidates:
        value = data.get(key)
        if _is_set(value):
            return value
    return default


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _is_ordered(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def _coerce_descriptor(descriptor: str | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(descriptor, str):
        try:
            descriptor = json.loads(descriptor)
        except json.JSONDecodeError as exc:
            raise ParseError("Invalid ACP agent data: Not valid JSON") from exc
    if not isinstance(descriptor, Mapping):
        raise ParseError("Invalid ACP agent data: expected a JSON object")
    return descriptor


def _skill_label(skill: Any) -> str | None:
    if not isinstance(skill, Mapping):
        return None
    return _as_text(_resolve_field(skill, ("id", "name")))


def extract_capabilities(data: Mapping[str, Any]) -> list[str | None]:
    capabilities = data.get("capabilities")
    if _is_ordered(capabilities) and capabilities:
        return [_as_text(item) for item in capabilities]

    capability = data.get("capability")
    if _is_set(capability):
        return [_as_text(capability)]

    skills = data.get("skills")
    if _is_ordered(skills) and skills:
        return [_skill_label(skill) for skill in skills]

    return [DEFAULT_CAPABILITY]


def parse_acp_agent(
    descriptor: str | Mapping[str, Any],
    *,
    logger: logging.Logger = logger,
) -> CanonicalAgent:
    logger.debug("Parsing ACP agent data")
    data = _coerce_descriptor(descriptor)

    skills = _resolve_field(data, SKILLS_FIELDS, [])
    authentication = _resolve_field(data, AUTHENTICATION_FIELDS, {})
    agent = CanonicalAgent(
        id=_as_text(_resolve_field(data, ID_FIELDS, "unknown")),
        name=_as_text(_resolve_field(data, NAME_FIELDS, "Unnamed ACP Agent")),
        description=_as_text(
            _resolve_field(data, DESCRIPTION_FIELDS, "An ACP-compliant agent")
        ),
        version=_as_text(_resolve_field(data, VERSION_FIELDS, "1.0.0")),
        capabilities=extract_capabilities(data),
        authentication=copy.deepcopy(
            dict(authentication) if isinstance(authentication, Mapping) else {}
        ),
        skills=copy.deepcopy(list(skills) if _is_ordered(skills) else []),
        metadata=AcpMetadata(
            originalId=_as_text(_resolve_field(data, ID_FIELDS)),
            framework=_as_text(_resolve_field(data, FRAMEWORK_FIELDS, "beeai")),
            endpoint=_as_text(_resolve_field(data, ENDPOINT_FIELDS)),
        ),
    )
    logger.info("Parsed ACP agent: %s", agent.name)
    return agent
