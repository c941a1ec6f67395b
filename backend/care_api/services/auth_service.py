import asyncio
from typing import Optional

from care_api.exceptions import AccountDisabled, InvalidCredentials, ValidationError
from care_api.logging_config import get_logger
from care_api.schemas.auth import AuthResult, UserPublic
from care_api.security.passwords import PasswordHasher
from care_api.security.tokens import TokenClaims, TokenService
from care_api.services.user_store import CredentialStore

logger = get_logger(__name__)


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class AuthService:
    """Login and registration on top of the credential store, hasher and token service."""

    def __init__(self, store: CredentialStore, hasher: PasswordHasher, tokens: TokenService):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self._pending: set[asyncio.Task] = set()

    async def _touch_last_login(self, user_id: int) -> None:
        try:
            await self.store.touch_last_login(user_id)
        except Exception:
            logger.warning("last_login_update_failed", user_id=user_id, exc_info=True)

    def _touch_in_background(self, user_id: int) -> None:
        task = asyncio.create_task(self._touch_last_login(user_id))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for outstanding last-login updates."""
        if self._pending:
            await asyncio.gather(*self._pending)

    def _result_for(self, user) -> AuthResult:
        token = self.tokens.issue(TokenClaims.for_user(user))
        return AuthResult(token=token, user=UserPublic.model_validate(user))

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        missing = {}
        if _blank(email):
            missing["email"] = "Email is required"
        if _blank(password):
            missing["password"] = "Password is required"
        if missing:
            raise ValidationError.missing_fields("Invalid credentials", missing)

        user = await self.store.find_by_email(email)
        if user is None:
            # Reveals whether the address has an account; kept on purpose, see DESIGN.md
            logger.info("login_failed", reason="unknown_email")
            raise InvalidCredentials(details={"email": "No account found with this email"})

        if not user.is_active:
            logger.info("login_failed", reason="account_disabled", user_id=user.id)
            raise AccountDisabled(details={"email": "Your account is disabled"})

        if not await self.hasher.verify(password, user.password):
            logger.info("login_failed", reason="wrong_password", user_id=user.id)
            raise InvalidCredentials(details={"password": "Incorrect password"})

        self._touch_in_background(user.id)
        logger.info("login_succeeded", user_id=user.id)
        return self._result_for(user)

    async def register(self, email: Optional[str], password: Optional[str], name: Optional[str] = None) -> AuthResult:
        missing = {}
        if _blank(email):
            missing["email"] = "Required field"
        if _blank(password):
            missing["password"] = "Required field"
        if missing:
            raise ValidationError.missing_fields("Email and password are required", missing)

        password_hash = await self.hasher.hash(password)
        user = await self.store.create(email, password_hash, name=name)
        logger.info("user_registered", user_id=user.id)
        return self._result_for(user)
