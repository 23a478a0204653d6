"""Config – Credentials, the three secrets every signature depends on."""
from __future__ import annotations

import dataclasses

from eventflit.kernel.errors import ConfigurationError


@dataclasses.dataclass(frozen=True)
class Credentials:
    """Application id, key and secret for one eventflit app.

    Fields may be ``None`` while a client is being configured;
    :meth:`require` fails on the first missing one when the credentials are
    actually used.
    """

    app_id: str | None = None
    key: str | None = None
    secret: str | None = dataclasses.field(default=None, repr=False)

    def require(self, *fields: str) -> "Credentials":
        """Raise :class:`ConfigurationError` naming the first empty field."""
        for name in fields or ("app_id", "key", "secret"):
            if not getattr(self, name):
                raise ConfigurationError(name)
        return self

    @property
    def secret_bytes(self) -> bytes:
        self.require("secret")
        return self.secret.encode("utf-8")  # type: ignore[union-attr]


__all__ = ["Credentials"]
