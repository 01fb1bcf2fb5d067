"""Session endpoints.

- GET /session: public identity of the current caller (or null)
- POST /session/refresh: re-issue the credential for an authenticated caller
- DELETE /session: drop the credential cookie

Issuing the first credential (login) is handled by the account service, which
calls set_token_cookie after verifying the user.
"""

from fastapi import APIRouter, Depends, Response

from staybook.api.cookies import clear_token_cookie, set_token_cookie
from staybook.api.dependencies import get_credential_codec
from staybook.api.guards import authenticated_caller, get_caller
from staybook.api.models import MessageResponse, SessionResponse
from staybook.models import CallerContext
from staybook.services.credentials import CredentialCodec
from staybook.utils.logging import get_logger, log_auth_event

logger = get_logger(__name__)

router = APIRouter(prefix="/session", tags=["session"])


@router.get("", response_model=SessionResponse, summary="Get current session")
def get_session(caller: CallerContext = Depends(get_caller)) -> SessionResponse:
    if caller.user is None:
        return SessionResponse(user=None)
    return SessionResponse(user=caller.user.to_safe_user())


@router.post(
    "/refresh",
    response_model=SessionResponse,
    summary="Refresh session credential",
    responses={401: {"description": "Authentication required"}},
)
def refresh_session(
    response: Response,
    caller: CallerContext = Depends(authenticated_caller),
    codec: CredentialCodec = Depends(get_credential_codec),
) -> SessionResponse:
    """Issue a new credential with a full lifetime for the current user."""
    assert caller.user is not None
    set_token_cookie(response, codec, caller.user)
    log_auth_event(logger, "credential_refreshed", user_id=caller.user_id)
    return SessionResponse(user=caller.user.to_safe_user())


@router.delete("", response_model=MessageResponse, summary="Log out")
def delete_session(
    response: Response,
    codec: CredentialCodec = Depends(get_credential_codec),
) -> MessageResponse:
    clear_token_cookie(response, codec)
    return MessageResponse(message="success")
