"""
Path classification for the request gate.

Matching is case-sensitive. The root entry ``/`` matches only the root
path; every other entry matches as a prefix.
"""

from typing import Iterable

from pydantic import BaseModel

from shared.config import Settings
from .models import PathClassification

ROOT_PATH = "/"


def matches_any(path: str, entries: Iterable[str]) -> bool:
    """Check a path against a list of prefixes, treating ``/`` as exact."""
    for entry in entries:
        if entry == ROOT_PATH:
            if path == ROOT_PATH:
                return True
        elif path.startswith(entry):
            return True
    return False


class PathRules(BaseModel):
    """Immutable path tables, loaded once at startup."""

    public_paths: tuple[str, ...]
    auth_only_paths: tuple[str, ...]
    exempt_paths: tuple[str, ...]
    passthrough_paths: tuple[str, ...]

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: Settings) -> "PathRules":
        passthrough = (settings.api_prefix, settings.static_prefix)
        exempt = tuple(settings.exempt_paths)
        if settings.profile_completion_path not in exempt:
            exempt += (settings.profile_completion_path,)

        return cls(
            public_paths=tuple(settings.public_paths),
            auth_only_paths=tuple(settings.auth_only_paths),
            exempt_paths=exempt + passthrough,
            passthrough_paths=passthrough,
        )

    def classify(self, path: str) -> PathClassification:
        return PathClassification(
            is_public=matches_any(path, self.public_paths),
            is_auth_only=matches_any(path, self.auth_only_paths),
            is_exempt=matches_any(path, self.exempt_paths),
            is_passthrough=matches_any(path, self.passthrough_paths),
        )
