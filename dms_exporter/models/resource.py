"""DMS 리소스 모델 (매 폴링마다 새로 만들어지며 저장하지 않음)"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceKind:
    """폴링 대상 리소스 종류별 파라미터"""

    name: str
    metric_name: str
    help: str
    healthy_status: str


TASK = ResourceKind(
    name="task",
    metric_name="migration_task_up",
    help="AWS Database Migration Task Status",
    healthy_status="running",
)

INSTANCE = ResourceKind(
    name="instance",
    metric_name="migration_instance_up",
    help="AWS Database Migration Instance Status",
    healthy_status="available",
)


@dataclass
class ReplicationTask:
    """DMS 복제 작업"""

    identifier: str
    status: str

    @classmethod
    def from_api(cls, item: dict) -> "ReplicationTask":
        return cls(
            identifier=item["ReplicationTaskIdentifier"],
            status=item.get("Status", ""),
        )


@dataclass
class ReplicationInstance:
    """DMS 복제 인스턴스"""

    identifier: str
    status: str

    @classmethod
    def from_api(cls, item: dict) -> "ReplicationInstance":
        return cls(
            identifier=item["ReplicationInstanceIdentifier"],
            status=item.get("ReplicationInstanceStatus", ""),
        )
