import os
from pathlib import Path
from typing import Any, TypeVar, overload

import yaml


T = TypeVar("T")

_MISSING: Any = object()


class Configuration:
    """
    Layered settings for one environment.

    Values come from ``<config_path>/<env>.yaml``; an environment variable with
    the same key always wins over the file.
    """

    def __init__(self, env: str, config_path: str) -> None:
        self.env = env
        self.config_path = config_path
        self.__values: dict[str, Any] = self.__load(Path(config_path) / f"{env}.yaml")

    @staticmethod
    def __load(path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}

        with path.open(encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        return loaded

    @overload
    def get_configuration(self, key: str, value_type: type[T]) -> T: ...

    @overload
    def get_configuration(
        self, key: str, value_type: type[T], default: T | None
    ) -> T | None: ...

    def get_configuration(
        self, key: str, value_type: type[T], default: Any = _MISSING
    ) -> Any:
        raw: Any = os.getenv(key)
        if raw is None or raw.strip() == "":
            raw = self.__values.get(key)

        if raw is None:
            if default is _MISSING:
                raise KeyError(f"Configuration key {key} is not set for {self.env}")
            return default

        try:
            return value_type(raw)  # type: ignore[call-arg]
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"Configuration key {key} cannot be read as {value_type.__name__}"
            ) from exc
