from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class AcpMetadata(BaseModel):
    source: Literal["acp"] = "acp"
    originalId: str | None = None
    framework: str = "beeai"
    endpoint: str | None = None


class CanonicalAgent(BaseModel):
    id: str = "unknown"
    name: str = "Unnamed ACP Agent"
    description: str = "An ACP-compliant agent"
    version: str = "1.0.0"
    capabilities: list[str | None] = Field(
        default_factory=lambda: ["acp-compliant"]
    )
    authentication: dict[str, Any] = Field(default_factory=dict)
    skills: list[Any] = Field(default_factory=list)
    metadata: AcpMetadata = Field(default_factory=AcpMetadata)


class AgentRegistration(BaseModel):
    name: str
    description: str
    owner: str
    capabilities: list[str | None]
    version: str
    agentType: Literal["acp"] = "acp"
    acpId: str
    acpMetadata: AcpMetadata
    skills: int = Field(..., description="Number of skills, not the skills.")
    authentication: dict[str, Any]
    importedAt: str


class RegistrationPayload(BaseModel):
    email: str
    agent: AgentRegistration


class BlockchainStatus(BaseModel):
    status: Literal["pending"] = "pending"
    message: str = "Blockchain registration queued"


class AstraSyncRecord(BaseModel):
    agentId: str
    status: str = "registered"
    trustScore: str
    blockchain: BlockchainStatus = Field(default_factory=BlockchainStatus)
    registeredAt: str


class RegistrationInfo(BaseModel):
    email: str
    source: Literal["acp-bridge"] = "acp-bridge"
    apiVersion: Literal["v1"] = "v1"


class RegistrationResult(BaseModel):
    astraSync: AstraSyncRecord
    original: CanonicalAgent
    registration: RegistrationInfo
