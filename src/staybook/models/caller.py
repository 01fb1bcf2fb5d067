"""Per-request caller context.

Built by the identity middleware at the start of every request and dropped
when the response is sent. It is never persisted.
"""

from pydantic import BaseModel, ConfigDict

from .user import User


class CallerContext(BaseModel):
    """Resolved identity of the caller, or the lack of one."""

    model_config = ConfigDict(frozen=True)

    user: User | None = None
    clear_credential: bool = False

    @classmethod
    def anonymous(cls, *, clear_credential: bool = False) -> "CallerContext":
        return cls(user=None, clear_credential=clear_credential)

    @classmethod
    def authenticated(cls, user: User) -> "CallerContext":
        return cls(user=user)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> str:
        """ID of the authenticated caller.

        Raises:
            RuntimeError: If the caller is anonymous. Ownership checks must run
                after the authentication guard, so reaching this is a wiring bug.
        """
        if self.user is None:
            raise RuntimeError("Ownership check requires an authenticated caller")
        return self.user.user_id
