"""Session domain model.

``Session`` is a frozen, generic Pydantic model so that stores can
serialize it to JSON and decode the application payload into a concrete
type (``Session[UserInfo]``).

Classes
-------
- Session  — an authenticated session record
"""
from __future__ import annotations

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

D = TypeVar("D")


class Session(BaseModel, Generic[D]):
    """A user session.

    Parameters
    ----------
    id:
        Authenticated random identifier; also the store key and the value
        of the session cookie.
    data:
        Application payload.  ``None`` marks a pre-session, which exists
        only to carry a CSRF token before authentication.
    expiration:
        Time (UTC) after which the session is no longer valid.
    csrf_token:
        Authenticated random token bound to this session, suitable for
        embedding in a hidden form field.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    data: Optional[D] = None
    expiration: datetime
    csrf_token: str

    @property
    def is_pre_session(self) -> bool:
        """True when the session carries no application payload."""
        return self.data is None

    def is_expired(self, now: datetime) -> bool:
        """Return True if the session expired before ``now``."""
        return self.expiration < now
