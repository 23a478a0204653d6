"""Config – credentials, client settings and loaders."""

from eventflit.config.credentials import Credentials
from eventflit.config.loaders import EnvSettingsLoader
from eventflit.config.settings import ClientSettings

__all__ = ["ClientSettings", "Credentials", "EnvSettingsLoader"]
