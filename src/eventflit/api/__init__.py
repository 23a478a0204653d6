"""API – client, channels, webhooks and notifications."""
from eventflit.api.channel import Channel
from eventflit.api.client import Client
from eventflit.api.notifications import NativeNotificationClient
from eventflit.api.request import Request
from eventflit.api.webhook import Webhook

__all__ = ["Channel", "Client", "NativeNotificationClient", "Request", "Webhook"]
