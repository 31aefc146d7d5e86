"""Institution aggregate: one tenant portal of the platform."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LOGO_URL = "https://cdn-icons-png.flaticon.com/512/3135/3135715.png"


def normalize_code(code: str) -> str:
    """Codes are unique ignoring case and surrounding whitespace."""
    return code.strip().upper()


def normalize_email_domain(email_domain: str | None) -> str | None:
    """Lower-case a restriction domain; blank means unrestricted."""
    if email_domain is None:
        return None
    domain = email_domain.strip().lstrip("@").lower()
    return domain or None


@dataclass(frozen=True)
class Institution:
    """A school, college or university with its own isolated portal.

    Business rules:
    - code is unique across institutions, compared case-insensitively
    - when email_domain is set, only addresses in it may sign up
    """

    id: str
    name: str
    code: str
    logo: str
    description: str
    theme_color: str
    email_domain: str | None = None

    @property
    def normalized_code(self) -> str:
        return normalize_code(self.code)

    def matches_code(self, code: str) -> bool:
        return self.normalized_code == normalize_code(code)
