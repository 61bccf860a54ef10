from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    PARSE = "parse"
    REGISTRATION = "registration"
    VERIFICATION = "verification"
    NETWORK = "network"


class BridgeError(Exception):
    """Base class for every failure raised by the bridge.

    Callers branch on ``kind`` instead of matching message text.
    """

    kind: ErrorKind


class ParseError(BridgeError):
    kind = ErrorKind.PARSE


class RegistrationError(BridgeError):
    kind = ErrorKind.REGISTRATION

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class VerificationError(BridgeError):
    kind = ErrorKind.VERIFICATION

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkError(BridgeError):
    kind = ErrorKind.NETWORK
