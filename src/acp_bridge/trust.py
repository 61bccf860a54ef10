from __future__ import annotations

from collections.abc import Sized

from acp_bridge.schemas import CanonicalAgent


BASE_SCORE = 70
MAX_SCORE = 100


def _has_auth_schemes(agent: CanonicalAgent) -> bool:
    schemes = agent.authentication.get("schemes")
    return isinstance(schemes, Sized) and len(schemes) > 0


def calculate_trust_score(agent: CanonicalAgent) -> str:
    """Provisional trust score for a normalized agent, e.g. ``TEMP-85%``."""
    score = BASE_SCORE
    if _has_auth_schemes(agent):
        score += 10
    score += min(len(agent.skills) * 2, 10)
    if len(agent.description or "") > 50:
        score += 5
    if agent.version:
        score += 5
    return f"TEMP-{min(score, MAX_SCORE)}%"
