"""Signing – REST request signatures, channel auth tokens, webhook checks."""

from eventflit.signing.channel import (
    MAX_CHANNEL_NAME_LENGTH,
    ChannelAuthenticator,
    encode_channel_data,
    is_presence,
    is_private,
    requires_authentication,
    validate_channel_name,
    validate_socket_id,
)
from eventflit.signing.request import (
    AUTH_VERSION,
    RequestSigner,
    SignableRequest,
    SignedRequest,
    parameter_string,
    sign_request,
    string_to_sign,
)
from eventflit.signing.webhook import WebhookVerifier

__all__ = [
    "AUTH_VERSION",
    "MAX_CHANNEL_NAME_LENGTH",
    "ChannelAuthenticator",
    "RequestSigner",
    "SignableRequest",
    "SignedRequest",
    "WebhookVerifier",
    "encode_channel_data",
    "is_presence",
    "is_private",
    "parameter_string",
    "requires_authentication",
    "sign_request",
    "string_to_sign",
    "validate_channel_name",
    "validate_socket_id",
]
