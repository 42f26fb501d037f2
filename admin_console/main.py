"""Console factory — wires settings, transport, gateways and orchestrators."""

import logging

import httpx

from admin_console.application.resources import RIDES, USERS, RecordKind
from admin_console.application.services import CrudOrchestrator
from admin_console.config import Settings, get_settings
from admin_console.domain.entities import Ride, User
from admin_console.infrastructure.api import ApiClient, HttpResourceGateway
from admin_console.infrastructure.logging.log_config import setup_logging

logger = logging.getLogger(__name__)


class AdminConsole:
    """The headless console: one orchestrator per managed record type.

    Usage:
        async with create_console() as console:
            await console.users.load()
            console.users.open_create()
    """

    def __init__(
        self,
        api_client: ApiClient,
        users: CrudOrchestrator[User],
        rides: CrudOrchestrator[Ride],
    ):
        self.api_client = api_client
        self.users = users
        self.rides = rides

    def screen(self, kind: RecordKind | str) -> CrudOrchestrator:
        """Return the orchestrator for a record-type tag."""
        return {RecordKind.USER: self.users, RecordKind.RIDE: self.rides}[RecordKind(kind)]

    async def aclose(self) -> None:
        self.users.abandon()
        self.rides.abandon()
        await self.api_client.aclose()

    async def __aenter__(self) -> "AdminConsole":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def create_console(
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    configure_logging: bool = True,
) -> AdminConsole:
    """Factory function that builds a ready-to-use console."""
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings)

    api_client = ApiClient(
        settings.api_base_url,
        timeout=settings.api_timeout_seconds,
        http_client=http_client,
    )
    console = AdminConsole(
        api_client=api_client,
        users=CrudOrchestrator(USERS, HttpResourceGateway(USERS, api_client)),
        rides=CrudOrchestrator(RIDES, HttpResourceGateway(RIDES, api_client)),
    )
    logger.info("%s %s → %s", settings.app_title, settings.app_version, api_client.base_url)
    return console
