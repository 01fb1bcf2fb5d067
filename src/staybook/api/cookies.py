"""Credential cookie helpers."""

from starlette.responses import Response

from staybook.models import User
from staybook.services.credentials import CredentialCodec, IssuedCredential


def set_token_cookie(
    response: Response, codec: CredentialCodec, user: User
) -> IssuedCredential:
    """Issue a credential for the user and set it as the session cookie.

    The cookie is HTTP-only and expires together with the token.
    """
    credential = codec.issue(user)
    response.set_cookie(
        codec.settings.cookie_name,
        credential.token,
        **codec.cookie_options(),
    )
    return credential


def clear_token_cookie(response: Response, codec: CredentialCodec) -> None:
    response.delete_cookie(codec.settings.cookie_name)
