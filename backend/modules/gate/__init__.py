"""
Request gate module.

Decides whether a page request may proceed, based on the path, the
session, and whether the user has completed their profile.

Public API:
- RequestGate: The per-request decision procedure
- PathRules: Immutable path tables and classify()
- GateAction, GateDecision, PathClassification: Models
"""

from .models import GateAction, GateDecision, PathClassification
from .paths import PathRules
from .service import RequestGate

__all__ = [
    "RequestGate",
    "PathRules",
    "GateAction",
    "GateDecision",
    "PathClassification",
]
