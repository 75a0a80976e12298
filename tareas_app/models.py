"""
Data shapes exchanged with the tareas API.

Tasks travel as plain JSON objects and are handed to callers as
dictionaries; the ``TypedDict`` declarations below document the fields the
API contract promises without enforcing them at runtime.  The client never
keeps an authoritative copy of a task -- every read goes to the server.

``DecodedToken`` is the one structure the client builds itself: the subset
of JWT claims the screens read (expiry, issue time, subject).  The claims
are decoded without signature verification and are therefore untrusted;
they are only fit for local display logic such as "is my session over?".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypedDict


class Tarea(TypedDict):
    """A task as returned by the server."""

    id: int
    titulo: str
    descripcion: str
    completada: bool


class TareaFields(TypedDict, total=False):
    """Mutable task fields; create sends all of them, update any subset."""

    titulo: str
    descripcion: str
    completada: bool


@dataclass(frozen=True)
class DecodedToken:
    """
    Untrusted view of the claims carried by the stored bearer token.

    Attributes:
        exp: Expiry as epoch seconds, or ``None`` if the claim is missing.
        iat: Issue time as epoch seconds, or ``None`` if missing.
        sub: Subject (user identifier), or ``None`` if missing.
    """

    exp: float | None
    iat: float | None
    sub: str | None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> DecodedToken:
        return cls(
            exp=_numeric_claim(claims.get("exp")),
            iat=_numeric_claim(claims.get("iat")),
            sub=None if claims.get("sub") is None else str(claims["sub"]),
        )


def _numeric_claim(value: Any) -> float | None:
    # bool is an int subclass but never a valid NumericDate.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value
