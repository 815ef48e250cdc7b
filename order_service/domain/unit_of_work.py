"""
Unit of Work pattern for transaction management.

The Unit of Work ensures:
1. An order change and the events it produced are stored in one transaction
2. Atomic commit (all or nothing)
3. Post-commit hooks run AFTER a successful commit (event publication)
4. Proper resource cleanup

Publishing from a post-commit hook means consumers never see an event for a
transition that was rolled back.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
import inspect
import logging

if TYPE_CHECKING:
    from order_service.core.interfaces import IEventStore, IOrderRepository

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """
    Abstract Unit of Work for transaction management.

    Provides:
    - Transaction boundaries (commit/rollback)
    - Repository access (orders, events)
    - Post-commit hooks for side effects (event publication)
    """

    orders: 'IOrderRepository'
    events: 'IEventStore'

    async def __aenter__(self):
        """Enter async context"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """
        Exit async context.

        On success: commits and runs post-commit hooks
        On exception: rolls back (no hooks run)
        """
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            await self.close()

    @abstractmethod
    async def commit(self):
        """Commit transaction and execute post-commit hooks"""
        pass

    @abstractmethod
    async def rollback(self):
        """Rollback transaction"""
        pass

    @abstractmethod
    async def close(self):
        """Close resources"""
        pass

    @abstractmethod
    def add_post_commit_hook(self, hook: Callable):
        """
        Register a post-commit hook.

        Hook will be called AFTER successful commit.

        Args:
            hook: Sync or async callable to execute after commit
        """
        pass


async def run_hooks(hooks: List[Callable]) -> None:
    """
    Run post-commit hooks in registration order.

    Hook failures are logged but don't propagate - the transaction
    is already committed.
    """
    for hook in hooks:
        try:
            result = hook()
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"❌ Post-commit hook failed: {e}", exc_info=True)


class SQLAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work.

    Features:
    - Transaction management via SQLAlchemy session
    - Post-commit hooks for side effects
    - Repository initialization
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize Unit of Work.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session
        self._post_commit_hooks: List[Callable] = []

        # Import here to avoid circular dependencies
        from order_service.repositories.order_repository import OrderRepository
        from order_service.repositories.event_store import SQLAlchemyEventStore

        self.orders = OrderRepository(session)
        self.events = SQLAlchemyEventStore(session)

    async def commit(self):
        """
        Commit transaction and execute post-commit hooks.

        Hooks are cleared whether or not the commit succeeds.
        """
        try:
            await self._session.commit()
            logger.debug(
                f"✅ Transaction committed, running {len(self._post_commit_hooks)} post-commit hooks"
            )
            hooks = list(self._post_commit_hooks)
            self._post_commit_hooks.clear()
            await run_hooks(hooks)
        finally:
            self._post_commit_hooks.clear()

    async def rollback(self):
        """
        Rollback transaction.

        Discards all pending changes and clears post-commit hooks.
        """
        try:
            await self._session.rollback()
            logger.debug("↩️  Transaction rolled back")
        finally:
            self._post_commit_hooks.clear()

    async def close(self):
        """Close session and release resources"""
        await self._session.close()

    def add_post_commit_hook(self, hook: Callable):
        """
        Add a post-commit hook.

        Args:
            hook: Callable (sync or async) to execute after commit

        Example:
            async with unit_of_work(session) as uow:
                await uow.orders.add(order)
                uow.add_post_commit_hook(lambda: publisher.publish(event))
        """
        self._post_commit_hooks.append(hook)


def unit_of_work(session: AsyncSession) -> AbstractUnitOfWork:
    """
    Factory function for Unit of Work.

    Args:
        session: SQLAlchemy async session

    Returns:
        Configured Unit of Work instance
    """
    return SQLAlchemyUnitOfWork(session)
