"""Unit tests for the in-memory ident stubs."""

import pytest

from identserv.domain.errors.ident import ListenerBindError
from identserv.domain.models.owner import LiveAddressing
from identserv.infrastructure.stubs.listener_factory_stub import ListenerFactoryStub
from identserv.infrastructure.stubs.owner_directory_stub import (
    IdentOwnerStub,
    OwnerDirectoryStub,
    OwnerLookupError,
)


async def _noop_callback(reader, writer) -> None:
    return None


class TestIdentOwnerStub:
    """Tests for IdentOwnerStub."""

    def test_connected_defaults_identity_to_account(self) -> None:
        owner = IdentOwnerStub.connected(
            "alice", "net1", local=("1.2.3.4", 1), remote=("5.6.7.8", 2)
        )

        assert owner.get_identity_string() == "alice"
        assert owner.get_live_addressing() == LiveAddressing("1.2.3.4", 1, "5.6.7.8", 2)

    def test_disconnect_and_reconnect(self) -> None:
        owner = IdentOwnerStub("alice", "net1", "alice")
        assert owner.get_live_addressing() is None

        owner.connect(LiveAddressing("1.2.3.4", 1, "5.6.7.8", 2))
        assert owner.get_live_addressing() is not None

        owner.disconnect()
        assert owner.get_live_addressing() is None

    def test_fail_lookup(self) -> None:
        owner = IdentOwnerStub("alice", "net1", "alice", fail_lookup=True)

        with pytest.raises(OwnerLookupError):
            owner.get_live_addressing()
        with pytest.raises(OwnerLookupError):
            owner.get_identity_string()

    def test_compared_by_identity(self) -> None:
        assert IdentOwnerStub("a", "n", "a") != IdentOwnerStub("a", "n", "a")


class TestOwnerDirectoryStub:
    """Tests for OwnerDirectoryStub."""

    def test_lists_in_insertion_order(self) -> None:
        a = IdentOwnerStub("a", "n", "a")
        b = IdentOwnerStub("b", "n", "b")
        directory = OwnerDirectoryStub([a])
        directory.add_owner(b)

        assert directory.list_all_known_owners() == (a, b)
        assert directory.enumeration_count == 1

    def test_remove_and_owners_of(self) -> None:
        a1 = IdentOwnerStub("a", "n1", "a")
        a2 = IdentOwnerStub("a", "n2", "a")
        directory = OwnerDirectoryStub([a1, a2])

        assert directory.owners_of("a") == [a1, a2]
        assert directory.remove_owner(a1) is True
        assert directory.remove_owner(a1) is False
        assert directory.list_all_known_owners() == (a2,)

    def test_clear(self) -> None:
        directory = OwnerDirectoryStub([IdentOwnerStub("a", "n", "a")])

        directory.clear()

        assert directory.list_all_known_owners() == ()


class TestListenerFactoryStub:
    """Tests for ListenerFactoryStub."""

    @pytest.mark.asyncio
    async def test_bind_records_handle(self) -> None:
        factory = ListenerFactoryStub()

        handle = await factory.bind_listener("", 113, _noop_callback)

        assert factory.bind_attempts == 1
        assert handle.address == "127.0.0.1"
        assert handle.port == 113
        assert factory.current is handle

    @pytest.mark.asyncio
    async def test_close_removes_from_open_handles(self) -> None:
        factory = ListenerFactoryStub()
        handle = await factory.bind_listener("::1", 113, _noop_callback)

        await handle.close()

        assert factory.open_handles == []
        assert factory.current is None
        assert len(factory.handles) == 1

    @pytest.mark.asyncio
    async def test_bind_failure(self) -> None:
        factory = ListenerFactoryStub()
        factory.set_bind_failure(True)

        with pytest.raises(ListenerBindError, match="Address already in use"):
            await factory.bind_listener("", 113, _noop_callback)

        assert factory.bind_attempts == 1
        assert factory.handles == []

    @pytest.mark.asyncio
    async def test_closed_handle_refuses_connections(self) -> None:
        factory = ListenerFactoryStub()
        handle = await factory.bind_listener("", 113, _noop_callback)
        await handle.close()

        with pytest.raises(RuntimeError):
            await handle.simulate_connection(None, None)  # type: ignore[arg-type]
