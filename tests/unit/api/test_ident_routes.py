"""Unit tests for the ident admin API routes."""

from collections.abc import AsyncIterator, Iterator

import pytest
from httpx import ASGITransport, AsyncClient

from identserv.api.dependencies.ident import (
    get_ident_listener_service,
    init_ident_services,
    is_initialized,
    reset_ident_services,
)
from identserv.api.main import app
from identserv.bootstrap.ident import IdentServices
from identserv.infrastructure.monitoring.metrics import reset_metrics_collector
from identserv.infrastructure.stubs.listener_factory_stub import ListenerFactoryStub
from identserv.infrastructure.stubs.owner_directory_stub import IdentOwnerStub


@pytest.fixture
def installed_services(ident_services: IdentServices) -> Iterator[IdentServices]:
    init_ident_services(ident_services)
    yield ident_services
    reset_ident_services()


@pytest.fixture
async def client(installed_services: IdentServices) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestHealth:
    """Tests for GET /v1/health."""

    @pytest.mark.asyncio
    async def test_healthy(self, client: AsyncClient) -> None:
        response = await client.get("/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestStatusRoute:
    """Tests for GET /v1/ident/status."""

    @pytest.mark.asyncio
    async def test_inactive(self, client: AsyncClient) -> None:
        response = await client.get("/v1/ident/status")

        assert response.status_code == 200
        body = response.json()
        assert body["state"] == "inactive"
        assert body["owners"] is None

    @pytest.mark.asyncio
    async def test_non_admin_hides_owners(
        self, client: AsyncClient, installed_services: IdentServices
    ) -> None:
        await installed_services.listener_service.register(
            IdentOwnerStub("alice", "libera", "alice")
        )

        body = (await client.get("/v1/ident/status")).json()

        assert body["state"] == "listening"
        assert body["address"] == "127.0.0.1"
        assert body["owners"] is None
        assert body["last_request"] is None

    @pytest.mark.asyncio
    async def test_admin_sees_owners(
        self, client: AsyncClient, installed_services: IdentServices
    ) -> None:
        await installed_services.listener_service.register(
            IdentOwnerStub("alice", "libera", "alice")
        )
        installed_services.resolver.resolve("1, 2", "127.0.0.1", "10.0.0.1")

        body = (await client.get("/v1/ident/status", params={"admin": True})).json()

        assert body["owners"] == ["alice/libera"]
        assert body["last_request"] == "1, 2 from 10.0.0.1 on 127.0.0.1"
        assert body["last_reply"] == "1, 2 : ERROR : NO-USER"

    @pytest.mark.asyncio
    async def test_failed_state(
        self,
        client: AsyncClient,
        installed_services: IdentServices,
        listener_factory: ListenerFactoryStub,
    ) -> None:
        listener_factory.set_bind_failure(True)
        await installed_services.listener_service.register(
            IdentOwnerStub("alice", "libera", "alice")
        )

        body = (await client.get("/v1/ident/status")).json()

        assert body["state"] == "failed"
        assert body["listen_failed"] is True


class TestCommandsRoute:
    """Tests for POST /v1/ident/commands."""

    @pytest.mark.asyncio
    async def test_status_command(self, client: AsyncClient) -> None:
        response = await client.post("/v1/ident/commands", json={"command": "status"})

        assert response.status_code == 200
        assert response.json() == {"lines": ["IdentServer isn't listening."]}

    @pytest.mark.asyncio
    async def test_unknown_command(self, client: AsyncClient) -> None:
        response = await client.post("/v1/ident/commands", json={"command": "reboot"})

        assert response.json() == {"lines": ["Unknown command [reboot] try 'Help'"]}

    @pytest.mark.asyncio
    async def test_admin_flag_is_passed(self, client: AsyncClient) -> None:
        response = await client.post(
            "/v1/ident/commands", json={"command": "status", "admin": True}
        )

        assert "Last IDENT request: " in response.json()["lines"]

    @pytest.mark.asyncio
    async def test_overlong_command_rejected(self, client: AsyncClient) -> None:
        response = await client.post(
            "/v1/ident/commands", json={"command": "x" * 600}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_command_rejected(self, client: AsyncClient) -> None:
        response = await client.post("/v1/ident/commands", json={})

        assert response.status_code == 422


class TestMetricsRoute:
    """Tests for GET /v1/metrics."""

    @pytest.fixture(autouse=True)
    def fresh_metrics(self) -> Iterator[None]:
        reset_metrics_collector()
        yield
        reset_metrics_collector()

    @pytest.mark.asyncio
    async def test_resolved_queries_are_exported(
        self, client: AsyncClient, installed_services: IdentServices
    ) -> None:
        installed_services.resolver.resolve("1, 2", "127.0.0.1", "10.0.0.1")

        response = await client.get("/v1/metrics")

        assert "ident_queries_total{" in response.text
        assert 'reply_type="ERROR"' in response.text
        assert 'error="NO-USER"' in response.text

    @pytest.mark.asyncio
    async def test_prometheus_exposition(self, client: AsyncClient) -> None:
        response = await client.get("/v1/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "ident_queries_total" in response.text


class TestDependencies:
    """Tests for service installation."""

    def test_uninitialized_raises(self) -> None:
        reset_ident_services()

        assert not is_initialized()
        with pytest.raises(RuntimeError, match="not initialized"):
            get_ident_listener_service()

    def test_initialized(self, installed_services: IdentServices) -> None:
        assert is_initialized()
        assert get_ident_listener_service() is installed_services.listener_service
