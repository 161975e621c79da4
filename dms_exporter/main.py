"""AWS DMS Exporter - Entrypoint

/metrics 로 복제 작업/인스턴스 up 게이지를 제공하고,
작업과 인스턴스를 각각 독립된 주기로 폴링한다.
"""

import asyncio
import logging
import sys

from aiohttp import web
from prometheus_client import CONTENT_TYPE_LATEST

from dms_exporter.config import LOG_LEVEL, Settings, parse_args, parse_listen_address
from dms_exporter.credentials import CredentialResolver
from dms_exporter.gauges import GaugeStore
from dms_exporter.models.resource import INSTANCE, TASK
from dms_exporter.poller import ResourcePoller
from dms_exporter.providers.aws import AWSProvider
from dms_exporter.providers.base import BaseProvider

logger = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", GaugeStore)

LANDING_PAGE = """<html>
<head><title>AWS DMS Exporter</title></head>
<body>
<h1>AWS Database Migration Service Exporter</h1>
<p><a href='/metrics'>Metrics</a></p>
</body>
</html>
"""


async def handle_index(request: web.Request) -> web.Response:
    return web.Response(text=LANDING_PAGE, content_type="text/html")


async def handle_healthz(request: web.Request) -> web.Response:
    return web.Response(text="ok")


async def handle_metrics(request: web.Request) -> web.Response:
    store = request.app[STORE_KEY]
    return web.Response(
        body=store.render(),
        headers={"Content-Type": CONTENT_TYPE_LATEST},
    )


def create_app(store: GaugeStore) -> web.Application:
    app = web.Application()
    app[STORE_KEY] = store
    app.router.add_get("/", handle_index)
    app.router.add_get("/healthz", handle_healthz)
    app.router.add_get("/metrics", handle_metrics)
    return app


def create_pollers(provider: BaseProvider, store: GaugeStore) -> list[ResourcePoller]:
    return [
        ResourcePoller(TASK, provider.describe_replication_tasks, store),
        ResourcePoller(INSTANCE, provider.describe_replication_instances, store),
    ]


async def serve(settings: Settings) -> None:
    store = GaugeStore()
    provider = AWSProvider(CredentialResolver(settings.region, settings.role))

    runner = web.AppRunner(create_app(store))
    await runner.setup()
    host, port = parse_listen_address(settings.listen_address)
    site = web.TCPSite(runner, host, port)
    try:
        await site.start()
    except OSError as exc:
        logger.error("Unable to listen on %s: %s", settings.listen_address, exc)
        await runner.cleanup()
        sys.exit(1)

    logger.info("Starting up webserver on %s", settings.listen_address)
    tasks = [
        asyncio.create_task(poller.run_forever(), name=f"poll-{poller.kind.name}")
        for poller in create_pollers(provider, store)
    ]
    try:
        await asyncio.Event().wait()
    finally:
        for task in tasks:
            task.cancel()
        await runner.cleanup()


def main(argv: list[str] | None = None) -> None:
    settings = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    logger.info("Starting up (region=%s, role=%s)", settings.region, settings.role or "-")
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
