"""Config – EnvSettingsLoader."""
from __future__ import annotations

import dataclasses
import os
from typing import Any, Mapping

from eventflit.config.settings import ClientSettings
from eventflit.kernel.errors import ConfigurationError


class EnvSettingsLoader:
    """Load :class:`ClientSettings` from ``EVENTFLIT_*`` environment variables.

    ``EVENTFLIT_URL`` (or the variable named by *url_var*) supplies the base
    configuration; individual variables such as ``EVENTFLIT_HOST`` override
    it. ``EVENTFLIT_CLUSTER`` and ``EVENTFLIT_ENCRYPTED`` are applied last.
    """

    def __init__(self, url_var: str = "EVENTFLIT_URL", environ: Mapping[str, str] | None = None) -> None:
        self._url_var = url_var
        self._environ = environ

    def load(self) -> ClientSettings:
        env = os.environ if self._environ is None else self._environ
        prefix = ClientSettings._prefix
        overrides: dict[str, Any] = {}

        for field in dataclasses.fields(ClientSettings):
            raw = env.get(f"{prefix}_{field.name}".upper())
            if raw is not None:
                overrides[field.name] = self._coerce(field.name, raw, field.type)

        url = env.get(self._url_var)
        try:
            if url:
                settings = ClientSettings.from_url(url, **overrides)
            else:
                settings = ClientSettings(**overrides)
        except TypeError as exc:
            raise ConfigurationError(self._url_var, f"Failed to load settings: {exc}") from exc

        if "port" not in overrides:
            encrypted = env.get(f"{prefix}_ENCRYPTED")
            if encrypted is not None:
                settings = settings.with_encryption(self._coerce_bool(encrypted))
        cluster = env.get(f"{prefix}_CLUSTER")
        if cluster and "host" not in overrides:
            settings = settings.with_cluster(cluster)
        return settings

    @staticmethod
    def _coerce_bool(value: str) -> bool:
        return value.lower() in ("1", "true", "yes", "on")

    def _coerce(self, name: str, value: str, type_hint: Any) -> Any:
        hint = str(type_hint).replace(" | None", "")
        try:
            if hint in ("int", str(int)):
                return int(value)
            if hint in ("float", str(float)):
                return float(value)
        except ValueError as exc:
            raise ConfigurationError(name, f"setting '{name}' has invalid value {value!r}") from exc
        return value


__all__ = ["EnvSettingsLoader"]
