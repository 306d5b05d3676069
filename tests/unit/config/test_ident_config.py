"""Unit tests for IdentServerConfig."""

import pytest

from identserv.config.ident_config import (
    DEFAULT_IDENT_PORT,
    DEFAULT_IDENT_SERVER_CONFIG,
    TEST_IDENT_SERVER_CONFIG,
    IdentServerConfig,
)

_ENV_KEYS = (
    "IDENT_PORT",
    "IDENT_BIND_HOST",
    "IDENT_IDLE_TIMEOUT",
    "IDENT_MAX_LINE_LENGTH",
    "IDENT_BACKLOG",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestDefaults:
    """Tests for default values."""

    def test_default_port(self) -> None:
        assert DEFAULT_IDENT_PORT == 11300
        assert DEFAULT_IDENT_SERVER_CONFIG.port == 11300

    def test_default_binds_all_interfaces(self) -> None:
        assert DEFAULT_IDENT_SERVER_CONFIG.bind_host == ""

    def test_test_config_is_loopback_ephemeral(self) -> None:
        assert TEST_IDENT_SERVER_CONFIG.bind_host == "127.0.0.1"
        assert TEST_IDENT_SERVER_CONFIG.port == 0

    def test_config_is_frozen(self) -> None:
        config = IdentServerConfig()

        with pytest.raises(AttributeError):
            config.port = 113  # type: ignore[misc]


class TestValidation:
    """Tests for __post_init__ validation."""

    @pytest.mark.parametrize("port", [-1, 65536])
    def test_rejects_out_of_range_port(self, port: int) -> None:
        with pytest.raises(ValueError, match="port"):
            IdentServerConfig(port=port)

    def test_accepts_port_zero(self) -> None:
        assert IdentServerConfig(port=0).port == 0

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_rejects_non_positive_timeout(self, timeout: float) -> None:
        with pytest.raises(ValueError, match="idle_timeout_seconds"):
            IdentServerConfig(idle_timeout_seconds=timeout)

    def test_rejects_tiny_line_length(self) -> None:
        with pytest.raises(ValueError, match="max_line_length"):
            IdentServerConfig(max_line_length=8)

    def test_rejects_zero_backlog(self) -> None:
        with pytest.raises(ValueError, match="backlog"):
            IdentServerConfig(backlog=0)


class TestFromEnvironment:
    """Tests for environment loading."""

    def test_defaults_when_unset(self, clean_env: pytest.MonkeyPatch) -> None:
        assert IdentServerConfig.from_environment() == IdentServerConfig()

    def test_reads_all_variables(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("IDENT_PORT", "113")
        clean_env.setenv("IDENT_BIND_HOST", "::")
        clean_env.setenv("IDENT_IDLE_TIMEOUT", "2.5")
        clean_env.setenv("IDENT_MAX_LINE_LENGTH", "256")
        clean_env.setenv("IDENT_BACKLOG", "16")

        config = IdentServerConfig.from_environment()

        assert config == IdentServerConfig(
            port=113,
            bind_host="::",
            idle_timeout_seconds=2.5,
            max_line_length=256,
            backlog=16,
        )

    def test_unparseable_values_fall_back(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("IDENT_PORT", "ident")
        clean_env.setenv("IDENT_IDLE_TIMEOUT", "soon")

        config = IdentServerConfig.from_environment()

        assert config.port == DEFAULT_IDENT_PORT
        assert config.idle_timeout_seconds == 10.0

    def test_out_of_range_value_is_rejected(
        self, clean_env: pytest.MonkeyPatch
    ) -> None:
        clean_env.setenv("IDENT_PORT", "70000")

        with pytest.raises(ValueError):
            IdentServerConfig.from_environment()
