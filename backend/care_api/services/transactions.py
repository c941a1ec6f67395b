"""All-or-nothing execution of dependent writes.

A compound write (for example "insert a pregnancy record, then flag the
patient as pregnant") is expressed as a list of async steps. Each step gets
the same session and therefore the same connection and transaction. The
coordinator commits only when every step has succeeded.
"""

from typing import Any, Awaitable, Callable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from care_api.exceptions import CareAPIError, TransactionFailure
from care_api.logging_config import get_logger

logger = get_logger(__name__)

Step = Callable[[AsyncSession], Awaitable[Any]]


class TransactionCoordinator:
    def __init__(self, sessions: async_sessionmaker[AsyncSession]):
        self._sessions = sessions

    async def run(self, steps: Sequence[Step], label: str = "transaction") -> list:
        """Run ``steps`` in order inside one transaction and return their results.

        On any failure the transaction is rolled back before the session is
        released. Domain errors (CareAPIError) propagate unchanged; anything
        else is wrapped in TransactionFailure. If the rollback itself fails,
        that failure is only logged and the original error is raised.
        """
        session = self._sessions()
        try:
            await session.begin()
            results = []
            for step in steps:
                results.append(await step(session))
            await session.commit()
            logger.debug("transaction_committed", label=label, steps=len(steps))
            return results
        except Exception as exc:
            try:
                await session.rollback()
            except Exception:
                logger.error("transaction_rollback_failed", label=label, exc_info=True)
            if isinstance(exc, CareAPIError):
                logger.info("transaction_aborted", label=label, error=exc.message)
                raise
            logger.error("transaction_failed", label=label, error=str(exc), exc_info=exc)
            raise TransactionFailure(details=str(exc)) from exc
        finally:
            try:
                await session.close()
            except Exception:
                logger.error("transaction_close_failed", label=label, exc_info=True)
