"""Prometheus adapter for the status translator.

`StatusCollector` is a custom `prometheus_client` collector: every scrape of
the registry runs one probe and converts the resulting `ProbeResult` into gauge
metric families. Nothing is cached between scrapes.
"""

from typing import Iterable

import httpx
from prometheus_client import (
    GC_COLLECTOR,
    PLATFORM_COLLECTOR,
    PROCESS_COLLECTOR,
    CollectorRegistry,
)
from prometheus_client.core import GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from atlassian_status_exporter.core.logging_config import get_logger
from atlassian_status_exporter.core.translator import probe
from atlassian_status_exporter.core.types import ProbeResult, ProbeTarget

logger = get_logger(__name__)

DEFAULT_NAMESPACE = "atlassian_status"

SCRAPE_URL_UP_HELP = "metric shows the status of the connection to the atlassian application endpoint"
STATE_HELP = "metric returns the state of the monitored atlassian application"
COLLECT_DURATION_HELP = "metric keeps track of how long the exporter took to collect metrics"


class StatusCollector(Collector):
    """Collector exposing the state of one Atlassian application.

    Metrics:
        - <namespace>_scrape_url_up
            Labels: httpcode, url
            Values: 1 (any HTTP response), 0 (unreachable)
        - <namespace>_state
            Labels: state, httpcode, description, url
            Values: 0-6, see `ApplicationState`
        - <namespace>_collect_duration_seconds
            Labels: url
            Values: seconds spent probing
    """

    def __init__(
        self,
        target: ProbeTarget,
        client: httpx.Client,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        self.target = target
        self.client = client
        self.namespace = namespace

    def _scrape_url_up_family(self) -> GaugeMetricFamily:
        return GaugeMetricFamily(
            f"{self.namespace}_scrape_url_up",
            SCRAPE_URL_UP_HELP,
            labels=["httpcode", "url"],
        )

    def _state_family(self) -> GaugeMetricFamily:
        return GaugeMetricFamily(
            f"{self.namespace}_state",
            STATE_HELP,
            labels=["state", "httpcode", "description", "url"],
        )

    def _duration_family(self) -> GaugeMetricFamily:
        return GaugeMetricFamily(
            f"{self.namespace}_collect_duration_seconds",
            COLLECT_DURATION_HELP,
            labels=["url"],
        )

    def describe(self) -> Iterable[Metric]:
        """Return empty families so registration never triggers a probe."""
        return [
            self._scrape_url_up_family(),
            self._state_family(),
            self._duration_family(),
        ]

    def collect(self) -> Iterable[Metric]:
        result = probe(self.target, self.client)
        yield from self.to_metric_families(result)

    def to_metric_families(self, result: ProbeResult) -> list[Metric]:
        """Convert a probe result into families, skipping absent metrics."""
        reachability = result.reachability
        up = self._scrape_url_up_family()
        up.add_metric([reachability.http_code, reachability.url], reachability.value)
        families: list[Metric] = [up]

        if result.state is not None:
            state = self._state_family()
            state.add_metric(
                [
                    result.state.state_label,
                    result.state.http_code,
                    result.state.description,
                    result.state.url,
                ],
                result.state.value,
            )
            families.append(state)

        if result.duration is not None:
            duration = self._duration_family()
            duration.add_metric([result.duration.url], result.duration.seconds)
            families.append(duration)

        return families


def build_registry(
    target: ProbeTarget,
    client: httpx.Client,
    namespace: str = DEFAULT_NAMESPACE,
    include_process_metrics: bool = True,
) -> CollectorRegistry:
    """Create a registry holding the status collector.

    Args:
        target: Endpoint to probe on every scrape.
        client: Shared HTTP client.
        namespace: Metric name prefix.
        include_process_metrics: Also expose process, platform and GC metrics
            of the exporter itself.

    Returns:
        CollectorRegistry: A fresh registry, independent of the global one.
    """
    registry = CollectorRegistry(auto_describe=True)
    registry.register(StatusCollector(target, client, namespace=namespace))
    if include_process_metrics:
        for collector in (PROCESS_COLLECTOR, PLATFORM_COLLECTOR, GC_COLLECTOR):
            registry.register(collector)
    logger.debug("registered status collector", namespace=namespace, url=target.url)
    return registry
