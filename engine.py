"""
The interaction pipeline: authenticate, decode, dispatch, encode.

Nothing here performs I/O; the caller supplies the raw request parts and
receives the JSON envelope to send back, or an InteractionError.

"""

import logging

from commands import CommandRegistry, dispatch
from interaction import ApplicationCommand, Ping, decode_interaction
from response import InteractionResponse, Pong, encode_response
from signature import authenticate

log_event = logging.getLogger(__name__)


def respond(interaction, registry: CommandRegistry) -> InteractionResponse:
    if isinstance(interaction, Ping):
        log_event.info("Received PING.")
        return Pong()

    if isinstance(interaction, ApplicationCommand):
        common = interaction.common
        log_event.info(
            "[{app} | {guild} | {channel}] {name}".format(
                app=common.application_id,
                guild=common.guild_id or "No guild",
                channel=common.channel_id or "No channel",
                name=interaction.data.name,
            )
        )
        return dispatch(registry, interaction.data)

    raise TypeError(
        "Cannot respond to interaction of type {t}".format(
            t=type(interaction).__name__
        )
    )


def process_interaction(
    public_key_hex, signature_hex, timestamp, body: bytes, registry
) -> dict:
    authenticate(public_key_hex, signature_hex, timestamp, body)

    log_event.debug("Body: {body!r}".format(body=body))
    interaction = decode_interaction(body)
    log_event.debug("Decoded: {interaction!r}".format(interaction=interaction))

    return encode_response(respond(interaction, registry))
