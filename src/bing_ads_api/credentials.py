"""Credential store holding identity values and session flags.

The store is a plain mutable record owned by one ``BingAdsApi`` instance.
Header builders read it before every call; only direct setters and the
scoped flag runner write to it.

Note: the store is not synchronized. If a client instance is shared across
threads or concurrently running tasks, callers must serialize flag setters
and scoped runs themselves; a save/override/restore sequence interleaved
with another writer can clobber that writer's value.
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


class SessionFlag(str, Enum):
    """Session flags that can be toggled per operation.

    Each member's value is the name of the ``CredentialStore`` field it
    controls.
    """

    ACCOUNT_MANAGEMENT = "use_mcc"
    VALIDATE_ONLY = "validate_only"
    PARTIAL_FAILURE = "partial_failure"


class CredentialStore(BaseModel):
    """Long-lived identity plus the three mutable session flags.

    :param developer_token: Developer token issued for the API
    :type developer_token: Optional[str]
    :param customer_id: Customer identifier
    :type customer_id: Optional[str]
    :param account_id: Managed account identifier
    :type account_id: Optional[str]
    :param use_mcc: Run operations at the parent (manager) account level
    :type use_mcc: bool
    :param validate_only: Validate requests without committing them
    :type validate_only: bool
    :param partial_failure: Report per-item failures in batched requests
    :type partial_failure: bool
    """

    model_config = ConfigDict(validate_assignment=True)

    developer_token: Optional[str] = None
    customer_id: Optional[str] = None
    account_id: Optional[str] = None

    use_mcc: bool = False
    validate_only: bool = False
    partial_failure: bool = False

    def get_flag(self, flag: SessionFlag) -> bool:
        """Return the current value of a session flag."""
        return getattr(self, SessionFlag(flag).value)

    def set_flag(self, flag: SessionFlag, value: bool) -> None:
        """Set a session flag permanently."""
        setattr(self, SessionFlag(flag).value, value)

    def identity(self) -> Dict[str, str]:
        """Return the identity fields that are set."""
        fields = {
            "developer_token": self.developer_token,
            "customer_id": self.customer_id,
            "account_id": self.account_id,
        }
        return {k: v for k, v in fields.items() if v}
