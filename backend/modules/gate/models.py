"""
Request gate data models.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import Identity


class PathClassification(BaseModel):
    """How the gate treats a request path. Flags are computed independently."""

    is_public: bool = Field(default=False, description="Skip all gating")
    is_auth_only: bool = Field(default=False, description="Only for signed-out visitors")
    is_exempt: bool = Field(default=False, description="Skip the profile check")
    is_passthrough: bool = Field(default=False, description="API or static asset path")

    model_config = {"frozen": True}


class GateAction(str, Enum):
    """Terminal routing decision for one request."""

    ALLOW = "allow"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_FEED = "redirect_feed"
    REDIRECT_PROFILE = "redirect_profile"


class GateDecision(BaseModel):
    """Result of evaluating one request against the gate."""

    action: GateAction
    location: Optional[str] = Field(None, description="Redirect target, None when allowed")
    reason: str = Field(..., description="Short machine-readable reason for logs")
    identity: Optional[Identity] = Field(None, description="Verified identity, if resolved", repr=False)

    model_config = {"frozen": True}

    @property
    def is_redirect(self) -> bool:
        return self.action is not GateAction.ALLOW
