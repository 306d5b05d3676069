"""
Pytest configuration and shared fixtures for identserv tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Unit tests go in tests/unit/ and never open sockets
- Integration tests go in tests/integration/ and bind loopback only
"""

import pytest

from identserv.bootstrap.ident import IdentServices, build_ident_services
from identserv.config.ident_config import TEST_IDENT_SERVER_CONFIG, IdentServerConfig
from identserv.infrastructure.stubs.listener_factory_stub import ListenerFactoryStub
from identserv.infrastructure.stubs.owner_directory_stub import OwnerDirectoryStub


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from identserv import __version__

    return __version__


@pytest.fixture
def ident_config() -> IdentServerConfig:
    """Loopback config with an OS-assigned port and short timeouts."""
    return TEST_IDENT_SERVER_CONFIG


@pytest.fixture
def owner_directory() -> OwnerDirectoryStub:
    """Create an empty owner directory."""
    return OwnerDirectoryStub()


@pytest.fixture
def listener_factory() -> ListenerFactoryStub:
    """Create a listener factory that opens no sockets."""
    return ListenerFactoryStub()


@pytest.fixture
def ident_services(
    owner_directory: OwnerDirectoryStub,
    listener_factory: ListenerFactoryStub,
    ident_config: IdentServerConfig,
) -> IdentServices:
    """Wire the ident services against in-memory stubs."""
    return build_ident_services(
        owner_directory=owner_directory,
        config=ident_config,
        listener_factory=listener_factory,
    )
