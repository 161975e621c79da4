"""
Tests for status-to-gauge mapping and the gauge store.
"""

import threading

import pytest

from dms_exporter.gauges import GaugeStore, map_statuses
from dms_exporter.models.resource import (
    INSTANCE,
    TASK,
    ReplicationInstance,
    ReplicationTask,
)


def dms_lines(store: GaugeStore) -> list[str]:
    return [
        line
        for line in store.render().decode().splitlines()
        if "aws_database_migration_service_" in line
    ]


class TestMapStatuses:
    def test_running_task_is_up(self) -> None:
        items = [ReplicationTask("task-1", "running")]

        assert map_statuses(items, TASK.healthy_status) == {"task-1": 1}

    @pytest.mark.parametrize(
        "status",
        ["stopped", "failed", "starting", "", "Running", "RUNNING", " running", "running "],
    )
    def test_other_task_statuses_are_down(self, status: str) -> None:
        items = [ReplicationTask("task-1", status)]

        assert map_statuses(items, TASK.healthy_status) == {"task-1": 0}

    def test_available_instance_is_up(self) -> None:
        items = [
            ReplicationInstance("db-1", "available"),
            ReplicationInstance("db-2", "modifying"),
        ]

        assert map_statuses(items, INSTANCE.healthy_status) == {"db-1": 1, "db-2": 0}

    def test_running_is_not_healthy_for_instances(self) -> None:
        items = [ReplicationInstance("db-1", "running")]

        assert map_statuses(items, INSTANCE.healthy_status) == {"db-1": 0}

    def test_empty_input(self) -> None:
        assert map_statuses([], TASK.healthy_status) == {}


class TestGaugeStore:
    def test_unset_value_is_none(self, store: GaugeStore) -> None:
        assert store.value(TASK, "missing") is None

    def test_merge_sets_values(self, store: GaugeStore) -> None:
        store.merge(TASK, {"task-1": 1, "task-2": 0})

        assert store.value(TASK, "task-1") == 1.0
        assert store.value(TASK, "task-2") == 0.0

    def test_merge_is_idempotent(self, store: GaugeStore) -> None:
        values = {"task-1": 1, "task-2": 0}

        store.merge(TASK, values)
        first = dms_lines(store)
        store.merge(TASK, values)

        assert dms_lines(store) == first

    def test_absent_identifier_keeps_last_value(self, store: GaugeStore) -> None:
        store.merge(TASK, {"task-1": 1, "task-2": 1})
        store.merge(TASK, {"task-2": 0})

        assert store.value(TASK, "task-1") == 1.0
        assert store.value(TASK, "task-2") == 0.0

    def test_kinds_are_independent(self, store: GaugeStore) -> None:
        store.merge(TASK, {"same-id": 1})
        store.merge(INSTANCE, {"same-id": 0})

        assert store.value(TASK, "same-id") == 1.0
        assert store.value(INSTANCE, "same-id") == 0.0

    def test_stores_do_not_share_registries(self) -> None:
        first, second = GaugeStore(), GaugeStore()

        first.merge(TASK, {"task-1": 1})

        assert second.value(TASK, "task-1") is None

    def test_render_families(self, store: GaugeStore) -> None:
        store.merge(TASK, {"task-1": 1})
        store.merge(INSTANCE, {"db-1": 0})

        body = store.render().decode()

        assert "# HELP aws_database_migration_service_migration_task_up AWS Database Migration Task Status" in body
        assert "# TYPE aws_database_migration_service_migration_task_up gauge" in body
        assert 'aws_database_migration_service_migration_task_up{id="task-1"} 1.0' in body
        assert "# TYPE aws_database_migration_service_migration_instance_up gauge" in body
        assert 'aws_database_migration_service_migration_instance_up{id="db-1"} 0.0' in body

    def test_concurrent_merge_and_render(self, store: GaugeStore) -> None:
        ids = [f"task-{n}" for n in range(50)]
        errors: list[str] = []

        def writer(value: int) -> None:
            for _ in range(20):
                store.merge(TASK, {identifier: value for identifier in ids})

        def reader() -> None:
            for _ in range(20):
                for line in store.render().decode().splitlines():
                    if line.startswith("aws_database_migration_service_migration_task_up{"):
                        if not line.endswith((" 0.0", " 1.0")):
                            errors.append(line)

        threads = [
            threading.Thread(target=writer, args=(0,)),
            threading.Thread(target=writer, args=(1,)),
            threading.Thread(target=reader),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert all(store.value(TASK, identifier) in (0.0, 1.0) for identifier in ids)

    def test_render_includes_runtime_collectors(self, store: GaugeStore) -> None:
        body = store.render().decode()

        assert "# TYPE python_info gauge" in body
