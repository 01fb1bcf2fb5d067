"""Identity resolver: turns a request credential into a caller context."""

from staybook.models import CallerContext
from staybook.utils.logging import get_logger, log_auth_event

from .credentials import CredentialCodec
from .store import ResourceStore

logger = get_logger(__name__)


class IdentityResolver:
    """Resolves the caller once per request.

    Never raises for credential problems: public routes must stay reachable
    with a bad cookie. Guards decide whether anonymous callers are allowed.
    """

    def __init__(self, codec: CredentialCodec, store: ResourceStore) -> None:
        self.codec = codec
        self.store = store

    def resolve(self, raw_token: str | None) -> CallerContext:
        """Resolve a raw credential to a caller context.

        Args:
            raw_token: Credential from the request cookie, if any

        Returns:
            Authenticated context, or an anonymous one. The anonymous context
            asks for the cookie to be cleared when the token was valid but its
            user can no longer be loaded.
        """
        if not raw_token:
            return CallerContext.anonymous()

        claims = self.codec.verify(raw_token)
        if claims is None:
            logger.debug("Credential invalid or expired, continuing anonymously")
            return CallerContext.anonymous()

        try:
            user = self.store.find_user_by_id(claims.id)
        except Exception:
            logger.exception("User lookup failed while restoring identity")
            return CallerContext.anonymous(clear_credential=True)

        if user is None:
            log_auth_event(
                logger,
                "credential_subject_missing",
                user_id=claims.id,
                rejected=True,
            )
            return CallerContext.anonymous(clear_credential=True)

        return CallerContext.authenticated(user)
