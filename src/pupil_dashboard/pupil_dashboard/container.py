from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .common.datetime_utils import now_local
from .core.constants import DEFAULT_REQUEST_TIMEOUT
from .dashboard.service import DashboardService
from .records.classcharts import DEFAULT_BASE_URL, ClassChartsClient
from .records.client import ClientFactory
from .session.service import SessionService


@dataclass(frozen=True)
class Container:
    client_factory: ClientFactory

    session_service: SessionService
    dashboard_service: DashboardService


def classcharts_factory(*, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_REQUEST_TIMEOUT) -> ClientFactory:
    def factory(pupil_code: str, date_of_birth: str) -> ClassChartsClient:
        return ClassChartsClient(pupil_code, date_of_birth, base_url=base_url, timeout=timeout)

    return factory


def build_container(
    *,
    records_config: dict,
    client_factory: Optional[ClientFactory] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    factory = client_factory or classcharts_factory(
        base_url=str(records_config.get("base_url") or DEFAULT_BASE_URL),
        timeout=float(records_config.get("timeout", DEFAULT_REQUEST_TIMEOUT)),
    )

    session_service = SessionService(factory)
    dashboard_service = DashboardService(clock=clock)

    return Container(
        client_factory=factory,
        session_service=session_service,
        dashboard_service=dashboard_service,
    )
