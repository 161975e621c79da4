"""리소스 종류별 주기 폴러"""

import asyncio
import logging
from typing import Callable, Sequence

from dms_exporter.config import POLL_INTERVAL
from dms_exporter.credentials import CredentialError
from dms_exporter.gauges import GaugeStore, StatusItem, map_statuses
from dms_exporter.models.resource import ResourceKind
from dms_exporter.providers.base import ProviderError

logger = logging.getLogger(__name__)


class ResourcePoller:
    """fetch → map → merge 를 interval 간격으로 반복한다.

    fetch는 블로킹 호출이므로 기본 executor에서 실행한다. 실패한 주기는
    merge를 건너뛰어 기존 게이지 값을 그대로 둔다. 재시도는 다음 주기가 담당.
    """

    def __init__(
        self,
        kind: ResourceKind,
        fetch: Callable[[], Sequence[StatusItem]],
        store: GaugeStore,
        interval: float = POLL_INTERVAL,
    ) -> None:
        self.kind = kind
        self.fetch = fetch
        self.store = store
        self.interval = interval

    async def poll_once(self) -> bool:
        logger.info("Checking migration %ss", self.kind.name)
        loop = asyncio.get_running_loop()
        try:
            items = await loop.run_in_executor(None, self.fetch)
        except CredentialError as exc:
            logger.error("Credential error, skipping %s poll: %s", self.kind.name, exc)
            return False
        except ProviderError as exc:
            logger.error("Error gathering migration %ss: %s", self.kind.name, exc)
            return False

        values = map_statuses(items, self.kind.healthy_status)
        self.store.merge(self.kind, values)
        logger.debug("Updated %d %s gauges", len(values), self.kind.name)
        return True

    async def run_forever(self) -> None:
        while True:
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Unexpected error polling migration %ss", self.kind.name)
            await asyncio.sleep(self.interval)
