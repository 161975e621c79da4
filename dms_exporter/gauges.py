"""리소스 상태 → up/down 게이지 매핑과 게이지 저장소"""

from typing import Iterable, Protocol

from prometheus_client import (
    CollectorRegistry,
    Gauge,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

from dms_exporter.config import METRIC_NAMESPACE, METRIC_SUBSYSTEM
from dms_exporter.models.resource import INSTANCE, TASK, ResourceKind


class StatusItem(Protocol):
    identifier: str
    status: str


def map_statuses(items: Iterable[StatusItem], healthy_status: str) -> dict[str, int]:
    """status가 healthy_status와 정확히 같으면 1, 아니면 0"""
    return {
        item.identifier: 1 if item.status == healthy_status else 0
        for item in items
    }


class GaugeStore:
    """종류별 up 게이지를 가진 저장소

    자체 CollectorRegistry를 가지므로 여러 인스턴스를 만들어도 충돌하지
    않는다. 값은 덮어쓰기만 하며 삭제하지 않는다.
    """

    def __init__(self, kinds: Iterable[ResourceKind] = (TASK, INSTANCE)) -> None:
        self.registry = CollectorRegistry()
        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        self._gauges: dict[str, Gauge] = {}
        for kind in kinds:
            self._gauges[kind.name] = Gauge(
                kind.metric_name,
                kind.help,
                ["id"],
                namespace=METRIC_NAMESPACE,
                subsystem=METRIC_SUBSYSTEM,
                registry=self.registry,
            )

    def merge(self, kind: ResourceKind, values: dict[str, int]) -> None:
        gauge = self._gauges[kind.name]
        for identifier, value in values.items():
            gauge.labels(id=identifier).set(value)

    def value(self, kind: ResourceKind, identifier: str) -> float | None:
        return self.registry.get_sample_value(
            f"{METRIC_NAMESPACE}_{METRIC_SUBSYSTEM}_{kind.metric_name}",
            {"id": identifier},
        )

    def render(self) -> bytes:
        return generate_latest(self.registry)
