"""
Concurrent fan-out to external judge providers.

Every configured provider runs as its own task. The orchestrator waits for
all of them to settle, keeps the successful judgments and records why the
others failed. One provider's failure never discards another's success.
"""

import asyncio
from typing import Dict, List, Optional, Sequence

from provenance.core.exceptions import ProviderAuthMissing, ProviderTimeout
from provenance.core.interfaces import ProviderClientProtocol
from provenance.core.log import get_logger
from provenance.core.types import ProviderJudgment, ProviderSettlement


logger = get_logger(__name__)


class ProviderOrchestrator:
    """
    Settle-all orchestrator over a set of provider clients.

    Clients without credentials are skipped without being called. Each
    remaining client runs under its own timeout; an optional deadline
    bounds the whole fan-out and cancels whatever is still in flight.
    """

    def __init__(
        self,
        clients: Sequence[ProviderClientProtocol],
        timeout: Optional[float] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            clients: Provider clients to fan out to, in reporting order
            timeout: Per-provider timeout in seconds (None for no limit)
        """
        self.clients = list(clients)
        self.timeout = timeout

    @property
    def active_clients(self) -> List[ProviderClientProtocol]:
        return [client for client in self.clients if client.is_configured]

    async def judge(self, text: str, deadline: Optional[float] = None) -> List[ProviderJudgment]:
        """
        Collect judgments from every configured provider.

        Args:
            text: Passage to judge
            deadline: Seconds to wait for the whole fan-out (None for no limit)

        Returns:
            Successful judgments in client order; empty if none succeeded
        """
        settlement = await self.settle(text, deadline=deadline)
        return list(settlement.judgments)

    async def settle(self, text: str, deadline: Optional[float] = None) -> ProviderSettlement:
        """
        Fan out to every configured provider and wait for all to settle.

        Args:
            text: Passage to judge
            deadline: Seconds to wait for the whole fan-out (None for no limit)

        Returns:
            ProviderSettlement with judgments, attempt count and failures
        """
        active = self.active_clients
        skipped = [client.name for client in self.clients if not client.is_configured]
        if skipped:
            logger.debug("providers_skipped", providers=skipped, reason="no credentials")
        if not active:
            return ProviderSettlement(judgments=(), attempted=0, failures={})

        tasks: Dict[asyncio.Task, ProviderClientProtocol] = {
            asyncio.ensure_future(self._run(client, text)): client for client in active
        }
        try:
            _, pending = await asyncio.wait(tasks, timeout=deadline)
        finally:
            # Caller cancellation and deadline expiry both land here
            unfinished = [task for task in tasks if not task.done()]
            for task in unfinished:
                task.cancel()
            if unfinished:
                await asyncio.gather(*unfinished, return_exceptions=True)

        judgments: List[ProviderJudgment] = []
        failures: Dict[str, str] = {}
        for task, client in tasks.items():
            if task in pending or task.cancelled():
                failures[client.name] = str(ProviderTimeout(client.name, deadline))
                logger.warning("provider_deadline_exceeded", provider=client.name, deadline=deadline)
                continue

            error = task.exception()
            if error is None:
                judgments.append(task.result())
            elif isinstance(error, ProviderAuthMissing):
                logger.debug("provider_absent", provider=client.name)
            else:
                failures[client.name] = str(error)
                logger.warning(
                    "provider_failed",
                    provider=client.name,
                    error_type=error.__class__.__name__,
                    error=str(error),
                )

        logger.info(
            "providers_settled",
            attempted=len(active),
            succeeded=len(judgments),
            failed=sorted(failures),
        )
        return ProviderSettlement(
            judgments=tuple(judgments),
            attempted=len(active),
            failures=failures,
        )

    async def _run(self, client: ProviderClientProtocol, text: str) -> ProviderJudgment:
        if self.timeout is None:
            return await client.judge(text)
        try:
            return await asyncio.wait_for(client.judge(text), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise ProviderTimeout(client.name, self.timeout, original_error=e)
