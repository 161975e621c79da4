"""AWS DMS 프로바이더

DescribeReplicationTasks / DescribeReplicationInstances 를 boto3 paginator로
끝까지 따라가며 조회한다.
"""

import logging
import threading

from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from dms_exporter.config import AWS_CONNECT_TIMEOUT, AWS_READ_TIMEOUT
from dms_exporter.credentials import CredentialError, CredentialResolver
from dms_exporter.models.resource import ReplicationInstance, ReplicationTask
from dms_exporter.providers.base import BaseProvider, ProviderError

logger = logging.getLogger(__name__)


class AWSProvider(BaseProvider):
    """boto3 기반 DMS 상태 조회"""

    def __init__(self, resolver: CredentialResolver, client=None) -> None:
        self.resolver = resolver
        self._client = client
        self._lock = threading.Lock()

    def _dms(self):
        with self._lock:
            if self._client is None:
                session = self.resolver.resolve()
                self._client = session.client(
                    "dms",
                    region_name=self.resolver.region,
                    config=Config(
                        connect_timeout=AWS_CONNECT_TIMEOUT,
                        read_timeout=AWS_READ_TIMEOUT,
                        retries={"total_max_attempts": 1},
                    ),
                )
            return self._client

    def _paginate(self, operation: str, result_key: str, **params) -> list[dict]:
        items: list[dict] = []
        try:
            paginator = self._dms().get_paginator(operation)
            for page in paginator.paginate(**params):
                items.extend(page.get(result_key, []))
        except NoCredentialsError as exc:
            raise CredentialError(str(exc)) from exc
        except (BotoCoreError, ClientError) as exc:
            raise ProviderError(f"{operation}: {exc}") from exc
        return items

    def describe_replication_tasks(self) -> list[ReplicationTask]:
        items = self._paginate(
            "describe_replication_tasks",
            "ReplicationTasks",
            WithoutSettings=True,
        )
        return [ReplicationTask.from_api(item) for item in items]

    def describe_replication_instances(self) -> list[ReplicationInstance]:
        items = self._paginate(
            "describe_replication_instances",
            "ReplicationInstances",
        )
        return [ReplicationInstance.from_api(item) for item in items]
