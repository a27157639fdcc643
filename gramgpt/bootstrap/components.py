import os
from pathlib import Path
from threading import Lock
from typing import Any, TypeVar, cast

from dotenv import load_dotenv
from openinference.instrumentation.google_genai import GoogleGenAIInstrumentor
from telethon import TelegramClient

from gramgpt.components.configuration.configuration import Configuration
from gramgpt.components.logger.logger import Logger


load_dotenv()


def _is_test_environment() -> bool:
    """
    Check if we are running in a test environment.

    Returns:
        True if running under pytest or if TESTING env var is set, False otherwise.
    """
    import sys

    if any("pytest" in arg for arg in sys.argv):
        return True

    if os.getenv("TESTING", "").lower() in ("true", "1", "yes"):
        return True

    return False


def _is_tracing_requested() -> bool:
    """
    Tracing is opt-in: it is switched on by providing either Langfuse keys or
    an OTLP endpoint. A run without any of them sends no traces.
    """
    keys = (
        "LANGFUSE_PUBLIC_KEY",
        "LANGFUSE_SECRET_KEY",
        "OTEL_EXPORTER_OTLP_ENDPOINT",
    )
    return any(os.getenv(key, "").strip() for key in keys)


def _validate_otel_env_vars() -> None:
    """
    Validate OpenTelemetry/Langfuse environment variables for instrumentation.

    Two configuration paths are supported:

    1.  **Langfuse Native Integration:** If `LANGFUSE_PUBLIC_KEY`, `LANGFUSE_SECRET_KEY`,
        and `LANGFUSE_BASE_URL` are all set, validation is skipped.

    2.  **Manual OpenTelemetry Configuration:** Otherwise both
        `OTEL_EXPORTER_OTLP_ENDPOINT` and `OTEL_EXPORTER_OTLP_HEADERS` are required.

    Raises:
        RuntimeError: If the manual OpenTelemetry configuration is incomplete.
    """

    otel_endpoint: str = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "").strip()
    otel_headers: str = os.getenv("OTEL_EXPORTER_OTLP_HEADERS", "").strip()

    langfuse_public_key: str = os.getenv("LANGFUSE_PUBLIC_KEY", "").strip()
    langfuse_secret_key: str = os.getenv("LANGFUSE_SECRET_KEY", "").strip()
    langfuse_base_url: str = os.getenv("LANGFUSE_BASE_URL", "").strip()

    if langfuse_public_key and langfuse_secret_key and langfuse_base_url:
        return

    if not otel_endpoint:
        raise RuntimeError(
            "OTEL_EXPORTER_OTLP_ENDPOINT environment variable is not set or is empty. "
            "Please set the OTEL_EXPORTER_OTLP_ENDPOINT environment variable with a valid OTLP endpoint URL."
        )

    if not otel_headers:
        raise RuntimeError(
            "OTEL_EXPORTER_OTLP_HEADERS environment variable is not set or is empty, "
            "and LANGFUSE_PUBLIC_KEY/LANGFUSE_SECRET_KEY/LANGFUSE_BASE_URL are not all available. "
            "Please set OTEL_EXPORTER_OTLP_HEADERS (e.g., 'Authorization=Basic <base64_credentials>') "
            "or provide the full set of Langfuse variables."
        )


def configure_tracing() -> bool:
    """Instrument the Gen AI SDK when tracing is requested. Returns True if installed."""
    if _is_test_environment() or not _is_tracing_requested():
        return False

    _validate_otel_env_vars()
    GoogleGenAIInstrumentor().instrument()
    return True


T = TypeVar("T")


class ComponentsMeta(type):
    _instances: dict[tuple[type, str], "Components"] = {}
    _lock: Lock = Lock()

    def __call__(cls, *args, **kwargs):
        env = args[0] if args else kwargs.get("env")
        if env is None:
            raise ValueError("Environment must be provided")

        env_key = str(env)
        key = (cls, env_key)
        with cls._lock:
            if key not in cls._instances:
                instance = super().__call__(*args, **kwargs)
                cls._instances[key] = instance
        return cls._instances[key]


class Components(metaclass=ComponentsMeta):
    def __init__(self, env: str, config_path: str) -> None:
        self.__env: str = env
        root_dir: str = str(Path(__file__).resolve().parents[2])
        self.__config_path: str = os.path.join(root_dir, config_path)
        self.__components: dict[type[Any], Any] = self.__bootstrap_components()

    def __bootstrap_components(self) -> dict[type[Any], Any]:
        if self.__env in {"development", "staging", "production"}:
            return self.__get_components()

        raise ValueError(f"Invalid environment: {self.__env}")

    def __get_components(self) -> dict[type[Any], Any]:
        configuration: Configuration = Configuration(self.__env, self.__config_path)

        logger: Logger = Logger(
            log_format=configuration.get_configuration("LOG_FORMAT", str),
            log_level=configuration.get_configuration("LOG_LEVEL", str),
        )
        logger_instance = logger.get_logger("Components")

        if configure_tracing():
            logger_instance.info("Gen AI tracing enabled")

        telegram_api_id: int = configuration.get_configuration("TELEGRAM_API_ID", int)
        telegram_api_hash: str = configuration.get_configuration(
            "TELEGRAM_APP_HASH", str
        )
        session_name: str = configuration.get_configuration(
            "TELEGRAM_SESSION_NAME", str, default="gramgpt"
        )

        telegram_client: TelegramClient = TelegramClient(
            session_name, telegram_api_id, telegram_api_hash
        )

        components: dict[type[Any], Any] = {
            Configuration: configuration,
            Logger: logger,
            TelegramClient: telegram_client,
        }

        logger_instance.info("Components ready for environment %s", self.__env)
        return components

    def get_component(self, component_name: type[T]) -> T:
        if component_name not in self.__components:
            raise ValueError(f"Component {component_name} not found")

        return cast(T, self.__components[component_name])
