"""
Auth gate: the FastAPI dependency that guards protected routes.

Per request:
  no Authorization header / empty token  -> 401 "token missing"
  token present, verification fails      -> 403 "invalid or expired token"
  token verifies                         -> claims stored on request.state.user

Routers attach it with ``dependencies=[Depends(require_user)]`` so a rejected
request never reaches the handler body. Role checks are left to handlers.
"""

from fastapi import Depends, Request

from care_api.dependencies import get_container
from care_api.container import ServiceContainer
from care_api.exceptions import TokenError, TokenMissing
from care_api.logging_config import get_logger
from care_api.security.tokens import TokenClaims

logger = get_logger(__name__)

BEARER_PREFIX = "bearer "


def extract_token(header_value: str) -> str:
    """Return the token from an Authorization header, with or without a Bearer prefix."""
    value = header_value.strip()
    # A bare scheme with no credentials carries no token
    if value.lower() == BEARER_PREFIX.strip():
        return ""
    if value[:len(BEARER_PREFIX)].lower() == BEARER_PREFIX:
        value = value[len(BEARER_PREFIX):].strip()
    return value


async def require_user(
    request: Request,
    container: ServiceContainer = Depends(get_container),
) -> TokenClaims:
    token = extract_token(request.headers.get("Authorization", ""))
    if not token:
        logger.info("token_rejected", reason="missing", path=request.url.path)
        raise TokenMissing()

    try:
        claims = container.tokens.verify(token)
    except TokenError as e:
        logger.info("token_rejected", reason=e.reason, path=request.url.path)
        raise

    if container.settings.check_active_on_verify:
        user = await container.users.get(claims.user_id)
        if user is None or not user.is_active:
            logger.info("token_rejected", reason="account_inactive", user_id=claims.user_id)
            raise TokenError()

    request.state.user = claims
    return claims
