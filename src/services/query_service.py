"""
Query service - one active query at a time, debounced hash input.

Stale outcomes are dropped: a result is applied only while its query is the
newest one and the current input hash still equals the hash it was started for.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from explainer.configuration import config
from explainer.models import ExplanationResult, QueryState, get_default_query_state
from explainer.utils import GENERIC_FETCH_ERROR, ExplainerError, is_valid_transaction_hash
from .explain_service import explain_transaction

logger = logging.getLogger(__name__)

QueryRunner = Callable[[str, str], Awaitable[ExplanationResult]]


class DebounceTimer:
    """Runs a callback once `delay` seconds have passed without a reschedule"""

    def __init__(self, delay: float):
        self.delay = delay
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, callback: Callable[[], object]) -> asyncio.Task:
        self.cancel()
        self._task = asyncio.ensure_future(self._fire(callback))
        return self._task

    def cancel(self) -> bool:
        if self.pending:
            self._task.cancel()
            return True
        return False

    async def wait(self) -> None:
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    async def _fire(self, callback: Callable[[], object]) -> None:
        await asyncio.sleep(self.delay)
        callback()


class QueryController:
    """Owns the QueryState for one presentation session"""

    def __init__(
        self,
        runner: Optional[QueryRunner] = None,
        debounce_seconds: Optional[float] = None,
        network: Optional[str] = None,
    ):
        self._runner = runner or explain_transaction
        delay = config.QUERY_DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds
        self._timer = DebounceTimer(delay)
        self._generation = 0
        self._query_task: Optional[asyncio.Task] = None
        self.state: QueryState = get_default_query_state(network or config.DEFAULT_NETWORK)

    def on_hash_input(self, tx_hash: str, network: Optional[str] = None) -> None:
        """Record a keystroke; a well-formed hash starts a query after the debounce delay."""
        network = network or self.state["network"]
        self.state["hash"] = tx_hash
        self.state["network"] = network

        if self._timer.cancel():
            logger.debug("debounce timer cancelled by new input")
        if not is_valid_transaction_hash(tx_hash):
            return

        logger.debug(f"query scheduled in {self._timer.delay}s: {tx_hash[:20]}...")
        self._timer.schedule(lambda: self.start_query(tx_hash, network))

    def start_query(self, tx_hash: str, network: Optional[str] = None) -> Optional[asyncio.Task]:
        """Start a query in the background, aborting the one in flight."""
        if not tx_hash.strip():
            return None
        if self._query_task is not None and not self._query_task.done():
            logger.debug("cancelling in-flight query")
            self._query_task.cancel()
        self._query_task = asyncio.ensure_future(self.run_query(tx_hash, network))
        return self._query_task

    async def run_query(self, tx_hash: str, network: Optional[str] = None) -> None:
        network = network or self.state["network"]
        if not tx_hash.strip():
            return

        self._generation += 1
        generation = self._generation
        self.state.update(hash=tx_hash, network=network, loading=True, error=None, result=None)

        try:
            result = await self._runner(tx_hash, network)
        except asyncio.CancelledError:
            if generation == self._generation:
                self.state["loading"] = False
            raise
        except ExplainerError as e:
            self._settle(generation, tx_hash, error=e.message)
        except Exception as e:
            logger.error(f"unexpected error while querying {tx_hash[:20]}... → {e}", exc_info=True)
            self._settle(generation, tx_hash, error=GENERIC_FETCH_ERROR)
        else:
            self._settle(generation, tx_hash, result=result)

    async def wait(self) -> None:
        """Wait for the pending debounce and the query it starts"""
        await self._timer.wait()
        if self._query_task is not None:
            await asyncio.gather(self._query_task, return_exceptions=True)

    def cancel(self) -> None:
        self._timer.cancel()
        if self._query_task is not None and not self._query_task.done():
            self._query_task.cancel()

    def _settle(
        self,
        generation: int,
        tx_hash: str,
        result: Optional[ExplanationResult] = None,
        error: Optional[str] = None,
    ) -> bool:
        if generation != self._generation:
            logger.debug(f"discarding outcome of superseded query {tx_hash[:20]}...")
            return False

        self.state["loading"] = False
        if self.state["hash"] != tx_hash:
            logger.debug(f"discarding outcome for {tx_hash[:20]}..., input has changed")
            return False

        self.state["result"] = result
        self.state["error"] = error
        return True
