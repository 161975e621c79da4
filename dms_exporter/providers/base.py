"""상태 조회 프로바이더 추상 베이스 클래스"""

from abc import ABC, abstractmethod

from dms_exporter.models.resource import ReplicationInstance, ReplicationTask


class ProviderError(Exception):
    """클라우드 API 호출 실패 (네트워크, 타임아웃, 권한, 스로틀링)"""


class BaseProvider(ABC):
    """DMS 상태 조회 인터페이스

    두 메서드 모두 블로킹 호출이며 폴러가 executor에서 실행한다.
    실패 시 빈 목록 대신 예외를 던진다.
    """

    @abstractmethod
    def describe_replication_tasks(self) -> list[ReplicationTask]:
        """복제 작업 목록 조회"""
        ...

    @abstractmethod
    def describe_replication_instances(self) -> list[ReplicationInstance]:
        """복제 인스턴스 목록 조회"""
        ...
