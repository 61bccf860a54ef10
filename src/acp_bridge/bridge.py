from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any, Callable, Mapping, Protocol
from urllib.parse import quote

import httpx

from acp_bridge.config import (
    DEFAULT_API_URL,
    DEFAULT_DEVELOPER_EMAIL,
    ConfigResolver,
)
from acp_bridge.errors import NetworkError, RegistrationError, VerificationError
from acp_bridge.parser import parse_acp_agent
from acp_bridge.schemas import (
    AgentRegistration,
    AstraSyncRecord,
    CanonicalAgent,
    RegistrationInfo,
    RegistrationPayload,
    RegistrationResult,
)
from acp_bridge.trust import calculate_trust_score


logger = logging.getLogger(__name__)

SOURCE_HEADER = {"x-source": "acp-bridge"}


class ConfigSource(Protocol):
    def get_api_url(self) -> str:
        ...

    def get_developer_email(self) -> str:
        ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso_timestamp(moment: datetime) -> str:
    return (
        moment.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def build_registration_payload(
    agent: CanonicalAgent, email: str, imported_at: str
) -> RegistrationPayload:
    return RegistrationPayload(
        email=email,
        agent=AgentRegistration(
            name=agent.name,
            description=agent.description,
            owner=email,
            capabilities=agent.capabilities,
            version=agent.version,
            acpId=agent.id,
            acpMetadata=agent.metadata,
            skills=len(agent.skills),
            authentication=agent.authentication,
            importedAt=imported_at,
        ),
    )


class AcpBridge:
    """Registers ACP agents with the AstraSync registration service."""

    def __init__(
        self,
        api_url: str | None = None,
        developer_email: str | None = None,
        *,
        resolver: ConfigSource | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger = logger,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        resolver = resolver or ConfigResolver()
        self._api_url = (
            api_url or resolver.get_api_url() or DEFAULT_API_URL
        ).rstrip("/")
        self._developer_email = (
            developer_email
            or resolver.get_developer_email()
            or DEFAULT_DEVELOPER_EMAIL
        )
        self._transport = transport
        self._logger = logger
        self._clock = clock
        self._logger.info("ACP bridge initialized with API: %s", self._api_url)

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def developer_email(self) -> str:
        return self._developer_email

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=None, transport=self._transport)

    def calculate_trust_score(self, agent: CanonicalAgent) -> str:
        return calculate_trust_score(agent)

    async def register_agent(
        self, descriptor: str | Mapping[str, Any]
    ) -> RegistrationResult:
        try:
            return await self._register(descriptor)
        except Exception as exc:
            self._logger.error("Registration failed: %s", exc)
            raise

    async def _register(
        self, descriptor: str | Mapping[str, Any]
    ) -> RegistrationResult:
        agent = parse_acp_agent(descriptor, logger=self._logger)
        payload = build_registration_payload(
            agent, self._developer_email, _iso_timestamp(self._clock())
        )

        self._logger.info("Registering %s with AstraSync", agent.name)
        try:
            async with self._client() as client:
                response = await client.post(
                    f"{self._api_url}/v1/register",
                    json=payload.model_dump(),
                    headers={"Content-Type": "application/json", **SOURCE_HEADER},
                )
        except httpx.TransportError as exc:
            raise NetworkError(f"Registration request failed: {exc}") from exc

        body = _decode_body(response)
        if not response.is_success:
            message = body.get("error") if isinstance(body, dict) else None
            raise RegistrationError(
                message or f"Registration failed: {response.status_code}",
                status_code=response.status_code,
            )
        agent_id = body.get("agentId") if isinstance(body, dict) else None
        if agent_id is None or agent_id == "":
            raise RegistrationError(
                "Registration response did not include an agentId",
                status_code=response.status_code,
            )

        return RegistrationResult(
            astraSync=AstraSyncRecord(
                agentId=str(agent_id),
                status=str(body.get("status") or "registered"),
                trustScore=calculate_trust_score(agent),
                registeredAt=_iso_timestamp(self._clock()),
            ),
            original=agent,
            registration=RegistrationInfo(email=self._developer_email),
        )

    async def verify_agent(self, agent_id: str) -> Any:
        try:
            return await self._verify(agent_id)
        except Exception as exc:
            self._logger.error("Verification failed: %s", exc)
            raise

    async def _verify(self, agent_id: str) -> Any:
        url = f"{self._api_url}/v1/verify/{quote(str(agent_id), safe='')}"
        try:
            async with self._client() as client:
                response = await client.get(url, headers=SOURCE_HEADER)
        except httpx.TransportError as exc:
            raise NetworkError(f"Verification request failed: {exc}") from exc

        if not response.is_success:
            raise VerificationError(
                f"Verification failed: {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise VerificationError(
                "Verification response was not valid JSON",
                status_code=response.status_code,
            ) from exc
