import pytest

from gramgpt.bootstrap import components

_TRACING_VARS = (
    "OTEL_EXPORTER_OTLP_ENDPOINT",
    "OTEL_EXPORTER_OTLP_HEADERS",
    "LANGFUSE_PUBLIC_KEY",
    "LANGFUSE_SECRET_KEY",
    "LANGFUSE_BASE_URL",
)


@pytest.fixture
def clean_tracing_env(monkeypatch):
    for name in _TRACING_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
class TestComponentsOTELEnvVarsValidation:
    """Test suite for OpenTelemetry/Langfuse environment variables validation."""

    def test_otel_validation_raises_error_when_endpoint_not_set(
        self, clean_tracing_env
    ):
        with pytest.raises(RuntimeError) as exc_info:
            components._validate_otel_env_vars()

        assert "OTEL_EXPORTER_OTLP_ENDPOINT" in str(exc_info.value)
        assert "not set or is empty" in str(exc_info.value)

    def test_otel_validation_raises_error_when_endpoint_is_empty(
        self, clean_tracing_env
    ):
        clean_tracing_env.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "")

        with pytest.raises(RuntimeError) as exc_info:
            components._validate_otel_env_vars()

        assert "OTEL_EXPORTER_OTLP_ENDPOINT" in str(exc_info.value)

    def test_otel_validation_raises_error_when_headers_not_set(
        self, clean_tracing_env
    ):
        clean_tracing_env.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "https://example.com/otlp")

        with pytest.raises(RuntimeError) as exc_info:
            components._validate_otel_env_vars()

        assert "OTEL_EXPORTER_OTLP_HEADERS" in str(exc_info.value)
        assert "not set or is empty" in str(exc_info.value)

    def test_otel_validation_succeeds_with_direct_headers(self, clean_tracing_env):
        clean_tracing_env.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "https://example.com/otlp")
        clean_tracing_env.setenv("OTEL_EXPORTER_OTLP_HEADERS", "Authorization=Basic dGVzdA==")

        components._validate_otel_env_vars()

    def test_otel_validation_skipped_with_full_langfuse_config(
        self, clean_tracing_env
    ):
        clean_tracing_env.setenv("LANGFUSE_PUBLIC_KEY", "pk-test")
        clean_tracing_env.setenv("LANGFUSE_SECRET_KEY", "sk-test")
        clean_tracing_env.setenv("LANGFUSE_BASE_URL", "https://cloud.langfuse.com")

        components._validate_otel_env_vars()


@pytest.mark.unit
class TestConfigureTracing:
    def test_tracing_not_requested_without_variables(self, clean_tracing_env):
        assert components._is_tracing_requested() is False

    def test_tracing_requested_with_langfuse_key(self, clean_tracing_env):
        clean_tracing_env.setenv("LANGFUSE_PUBLIC_KEY", "pk-test")

        assert components._is_tracing_requested() is True

    def test_configure_tracing_is_disabled_under_tests(self, clean_tracing_env):
        clean_tracing_env.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "https://example.com/otlp")

        assert components._is_test_environment() is True
        assert components.configure_tracing() is False


@pytest.mark.unit
def test_components_reject_unknown_environment():
    with pytest.raises(ValueError):
        components.Components("qa", "configuration")
