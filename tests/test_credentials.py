"""Tests for credentials, endpoints, configuration and logging."""

import base64
import logging
import threading

import pytest

from blockstack_client import (
    BlockstackError,
    ClientConfig,
    ConfigurationError,
    Credentials,
    DEFAULT_ENDPOINTS,
    Endpoints,
    RegistryResult,
    get_default_credentials,
    initialize,
)
from blockstack_client import credentials as credentials_module
from blockstack_client.utils.logger import ContextFormatter, get_logger, set_log_level


class TrackingLock:
    """Lock stand-in that records whether it is held."""

    def __init__(self):
        self._lock = threading.Lock()
        self.held = False
        self.acquisitions = 0

    def __enter__(self):
        self._lock.acquire()
        self.held = True
        self.acquisitions += 1
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.held = False
        self._lock.release()


class TestCredentials:
    """Test the credential pair and the process-wide default."""

    def test_default_is_unset(self):
        assert get_default_credentials() is None

    def test_initialize_overwrites(self):
        """A later initialize replaces the earlier pair."""
        initialize(app_id="a", app_secret="b")
        initialize(app_id="c", app_secret="d")
        assert get_default_credentials() == Credentials("c", "d")

    def test_reset(self):
        initialize(app_id="a", app_secret="b")
        credentials_module.reset()
        assert get_default_credentials() is None

    def test_credentials_are_immutable(self):
        credentials = Credentials("a", "b")
        with pytest.raises(AttributeError):
            credentials.app_id = "other"

    def test_repr_hides_secret(self):
        assert "s3cr3t" not in repr(Credentials("id", "s3cr3t"))

    def test_basic_auth_value(self):
        value = Credentials("id", "secret").basic_auth_value()
        assert base64.b64decode(value[len("Basic "):]) == b"id:secret"

    def test_basic_auth_requires_both_fields(self):
        with pytest.raises(ValueError):
            Credentials("id", None).basic_auth_value()

    def test_initialize_swaps_pair_under_lock(self, monkeypatch):
        """The new pair is built and stored while the module lock is held."""
        lock = TrackingLock()
        monkeypatch.setattr(credentials_module, "_lock", lock)
        real_credentials = credentials_module.Credentials

        def build(**fields):
            assert lock.held, "credentials built outside the lock"
            return real_credentials(**fields)

        monkeypatch.setattr(credentials_module, "Credentials", build)

        initialize(app_id="a", app_secret="b")

        assert lock.acquisitions == 1
        assert not lock.held
        assert credentials_module._default_credentials == real_credentials("a", "b")

    def test_reads_and_reset_take_the_lock(self, monkeypatch):
        """Readers and reset go through the same lock as writers."""
        lock = TrackingLock()
        monkeypatch.setattr(credentials_module, "_lock", lock)

        get_default_credentials()
        credentials_module.reset()

        assert lock.acquisitions == 2

    def test_concurrent_initialize_smoke(self):
        """Smoke test: many writers and a reader only ever see whole pairs."""
        pairs = [(f"id-{i}", f"secret-{i}") for i in range(20)]
        seen = []

        def writer(pair):
            for _ in range(200):
                initialize(app_id=pair[0], app_secret=pair[1])

        def reader():
            for _ in range(2000):
                credentials = get_default_credentials()
                if credentials is not None:
                    seen.append(credentials)

        threads = [threading.Thread(target=writer, args=(pair,)) for pair in pairs]
        threads.append(threading.Thread(target=reader))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for credentials in seen:
            assert credentials.app_id.split("-")[1] == credentials.app_secret.split("-")[1]


class TestEndpoints:
    """Test endpoint templates."""

    def test_defaults(self):
        assert DEFAULT_ENDPOINTS.lookup == "https://api.onename.com/v1/users"
        assert DEFAULT_ENDPOINTS.search == "https://api.onename.com/v1/search?query="
        assert DEFAULT_ENDPOINTS.all_users == "https://api.onename.com/v1/users"
        assert DEFAULT_ENDPOINTS.addresses == "https://api.onename.com/v1/addresses"
        assert DEFAULT_ENDPOINTS.domains == "https://api.onename.com/v1/domains"
        assert DEFAULT_ENDPOINTS.transactions == "https://api.onename.com/v1/transactions"

    def test_from_base_url(self):
        endpoints = Endpoints.from_base_url("http://localhost:6270/v1")
        assert endpoints.addresses == "http://localhost:6270/v1/addresses"
        assert endpoints.search == "http://localhost:6270/v1/search?query="

    def test_endpoints_are_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_ENDPOINTS.lookup = "http://evil.example"


class TestClientConfig:
    """Test environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        for name in ("BLOCKSTACK_APP_ID", "BLOCKSTACK_APP_SECRET", "BLOCKSTACK_API_URL", "BLOCKSTACK_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)

        config = ClientConfig.from_env()

        assert config.app_id is None
        assert config.app_secret is None
        assert config.base_url == "https://api.onename.com/v1"
        assert config.timeout == 30.0

    @pytest.mark.parametrize("raw", ["not-a-number", "-1", "0"])
    def test_invalid_timeout_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv("BLOCKSTACK_TIMEOUT", raw)
        assert ClientConfig.from_env().timeout == 30.0


class TestErrorsAndResults:
    """Test error and result helpers."""

    def test_error_to_dict(self):
        error = ConfigurationError(details={"operation": "search"})
        data = error.to_dict()

        assert data["error"] == "ConfigurationError"
        assert data["code"] == "CONFIG_ERROR"
        assert data["details"] == {"operation": "search"}
        assert isinstance(error, BlockstackError)
        assert str(error) == "[CONFIG_ERROR] Configuration error"

    def test_result_unpacking(self):
        payload, error = RegistryResult(payload={"a": 1})
        assert payload == {"a": 1}
        assert error is None


class TestLogger:
    """Test the package logger."""

    def test_logger_is_cached_and_prefixed(self):
        logger = get_logger("tests.sample")
        assert logger is get_logger("tests.sample")
        assert logger.logger.name == "blockstack.tests.sample"

    def test_set_log_level(self):
        logger = get_logger("tests.level")
        set_log_level(logging.DEBUG)
        try:
            assert logger.logger.level == logging.DEBUG
        finally:
            set_log_level(logging.INFO)

    def test_context_rendered_in_output(self):
        """Keyword context is attached to the record and rendered after the message."""
        logger = get_logger("tests.context")
        records = []

        class Collect(logging.Handler):
            def emit(self, record):
                records.append(record)

        handler = Collect()
        logger.logger.addHandler(handler)
        try:
            logger.warning("search returned HTTP 429", operation="search", status_code=429)
        finally:
            logger.logger.removeHandler(handler)

        record = records[0]
        assert record.operation == "search"
        assert record.status_code == 429
        line = ContextFormatter("%(message)s").format(record)
        assert line == "search returned HTTP 429 [operation=search status_code=429]"

    def test_no_context_leaves_message_alone(self):
        record = logging.LogRecord("blockstack.x", logging.INFO, __file__, 1, "plain", None, None)
        assert ContextFormatter("%(message)s").format(record) == "plain"
