"""Unit tests for PendingConnectionRegistry."""

from identserv.application.services.pending_registry import PendingConnectionRegistry
from identserv.infrastructure.stubs.owner_directory_stub import IdentOwnerStub


def _owner(name: str) -> IdentOwnerStub:
    return IdentOwnerStub(account_name=name, connection_name="net1", identity=name)


class TestPendingConnectionRegistry:
    """Tests for registry membership rules."""

    def test_starts_empty(self) -> None:
        registry = PendingConnectionRegistry()

        assert registry.is_empty
        assert len(registry) == 0
        assert registry.snapshot() == ()

    def test_add_then_contains(self) -> None:
        registry = PendingConnectionRegistry()
        alice = _owner("alice")

        assert registry.add(alice) is True
        assert alice in registry
        assert not registry.is_empty

    def test_add_twice_is_noop(self) -> None:
        registry = PendingConnectionRegistry()
        alice = _owner("alice")

        registry.add(alice)

        assert registry.add(alice) is False
        assert len(registry) == 1

    def test_equal_looking_owners_are_distinct(self) -> None:
        registry = PendingConnectionRegistry()

        registry.add(_owner("alice"))
        registry.add(_owner("alice"))

        assert len(registry) == 2

    def test_remove_absent_is_noop(self) -> None:
        registry = PendingConnectionRegistry()
        registry.add(_owner("alice"))

        assert registry.remove(_owner("bob")) is False
        assert len(registry) == 1

    def test_remove_present(self) -> None:
        registry = PendingConnectionRegistry()
        alice = _owner("alice")
        registry.add(alice)

        assert registry.remove(alice) is True
        assert registry.is_empty
        assert alice not in registry

    def test_snapshot_keeps_registration_order(self) -> None:
        registry = PendingConnectionRegistry()
        owners = [_owner(name) for name in ("carol", "alice", "bob")]
        for owner in owners:
            registry.add(owner)

        assert registry.snapshot() == tuple(owners)

    def test_snapshot_is_detached(self) -> None:
        registry = PendingConnectionRegistry()
        alice = _owner("alice")
        registry.add(alice)

        snapshot = registry.snapshot()
        registry.remove(alice)

        assert snapshot == (alice,)

    def test_clear(self) -> None:
        registry = PendingConnectionRegistry()
        registry.add(_owner("alice"))
        registry.add(_owner("bob"))

        registry.clear()

        assert registry.is_empty
