"""
Outbound interaction response: data model and encoder.

"""

import enum
from typing import Any, ClassVar, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

FLAGS_MASK = 0xFFFFFFFF


class InteractionResponseType(enum.IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    DEFERRED_UPDATE_MESSAGE = 6
    UPDATE_MESSAGE = 7
    APPLICATION_COMMAND_AUTOCOMPLETE_RESULT = 8
    MODAL = 9


# -----------------------------------------------------------------------------
class MessageFlags:
    """
    A 32 bit set of message flags.

    Values are immutable; union and intersection return new instances.
    The named single bit flags are defined as class attributes below.

    """

    __slots__ = ("_bits",)

    def __init__(self, bits=0):
        if isinstance(bits, bool) or not isinstance(bits, int):
            raise TypeError("MessageFlags bits must be an int")
        if bits < 0 or bits > FLAGS_MASK:
            raise ValueError("MessageFlags bits must fit in 32 bits")
        self._bits = bits

    def union(self, other):
        return MessageFlags(self._bits | int(other))

    def intersection(self, other):
        return MessageFlags(self._bits & int(other))

    def contains(self, other):
        bits = int(other)
        return (self._bits & bits) == bits

    __or__ = union
    __and__ = intersection
    __contains__ = contains

    def __int__(self):
        return self._bits

    def __bool__(self):
        return self._bits != 0

    def __eq__(self, other):
        if not isinstance(other, MessageFlags):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self):
        return hash(self._bits)

    def __repr__(self):
        names = [name for name, flag in _NAMED_FLAGS if self.contains(flag)]
        return "MessageFlags({names})".format(names="|".join(names) or "0")


MessageFlags.CROSSPOSTED = MessageFlags(1 << 0)
MessageFlags.IS_CROSSPOST = MessageFlags(1 << 1)
MessageFlags.SUPPRESS_EMBEDS = MessageFlags(1 << 2)
MessageFlags.SOURCE_MESSAGE_DELETED = MessageFlags(1 << 3)
MessageFlags.URGENT = MessageFlags(1 << 4)
MessageFlags.HAS_THREAD = MessageFlags(1 << 5)
MessageFlags.EPHEMERAL = MessageFlags(1 << 6)
MessageFlags.LOADING = MessageFlags(1 << 7)
MessageFlags.FAILED_TO_MENTION_SOME_ROLES_IN_THREAD = MessageFlags(1 << 8)

_NAMED_FLAGS = tuple(
    (name, getattr(MessageFlags, name))
    for name in (
        "CROSSPOSTED",
        "IS_CROSSPOST",
        "SUPPRESS_EMBEDS",
        "SOURCE_MESSAGE_DELETED",
        "URGENT",
        "HAS_THREAD",
        "EPHEMERAL",
        "LOADING",
        "FAILED_TO_MENTION_SOME_ROLES_IN_THREAD",
    )
)


# -----------------------------------------------------------------------------
class ChannelMessageData(BaseModel):
    model_config = ConfigDict(frozen=True)

    tts: Optional[bool] = None
    content: Optional[str] = None
    embeds: Optional[List[Dict[str, Any]]] = None
    allowed_mentions: Optional[Dict[str, Any]] = None
    flags: Optional[int] = Field(default=None, ge=0, le=FLAGS_MASK)
    components: Optional[List[Dict[str, Any]]] = None
    attachments: Optional[List[Dict[str, Any]]] = None

    @field_validator("flags", mode="before")
    @classmethod
    def _flags_to_int(cls, value):
        if isinstance(value, MessageFlags):
            return int(value)
        return value

    @classmethod
    def from_content(cls, content, **fields):
        return cls(content=content, **fields)


class Pong(BaseModel):
    model_config = ConfigDict(frozen=True)
    response_type: ClassVar = InteractionResponseType.PONG


class ChannelMessage(BaseModel):
    model_config = ConfigDict(frozen=True)
    response_type: ClassVar = InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE

    data: ChannelMessageData


InteractionResponse = Union[Pong, ChannelMessage]


# -----------------------------------------------------------------------------
def encode_response(response: InteractionResponse) -> dict:
    """
    Return the JSON envelope for response.

    Fields of the message data that are not set are left out entirely.
    Anything other than a Pong or a ChannelMessage is a programming error
    and raises TypeError.

    """

    if isinstance(response, Pong):
        return {"type": int(Pong.response_type)}
    if isinstance(response, ChannelMessage):
        return {
            "type": int(ChannelMessage.response_type),
            "data": response.data.model_dump(exclude_none=True),
        }
    raise TypeError(
        "Cannot encode interaction response of type {t}".format(
            t=type(response).__name__
        )
    )
