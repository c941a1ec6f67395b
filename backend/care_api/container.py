from care_api.config import Settings
from care_api.database import Database
from care_api.logging_config import get_logger
from care_api.security.passwords import PasswordHasher
from care_api.security.tokens import TokenService
from care_api.services.auth_service import AuthService
from care_api.services.monitoring_service import MonitoringService
from care_api.services.report_service import ReportService
from care_api.services.transactions import TransactionCoordinator
from care_api.services.user_store import CredentialStore

logger = get_logger(__name__)


class ServiceContainer:
    """Every long-lived object of one application instance, built from settings."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.database = Database(settings)
        self.hasher = PasswordHasher(rounds=settings.salt_rounds)
        self.tokens = TokenService(
            settings.secret_key,
            default_ttl=settings.token_ttl,
            algorithm=settings.jwt_algorithm,
        )
        self.users = CredentialStore(self.database.sessions)
        self.auth = AuthService(self.users, self.hasher, self.tokens)
        self.coordinator = TransactionCoordinator(self.database.sessions)
        self.monitoring = MonitoringService(self.coordinator)
        self.reports = ReportService()

    async def startup(self) -> None:
        await self.database.startup()
        logger.info("services_started", environment=self.settings.environment)

    async def shutdown(self) -> None:
        await self.auth.drain()
        await self.database.shutdown()
        logger.info("services_stopped")
