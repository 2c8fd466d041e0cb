"""
Inbound interaction envelope: data model and decoder.

The platform sends one JSON object per request. Its top level "type"
selects the interaction variant and, inside an application command, every
option carries its own "type" that selects how its "value" is read. Both
discriminants are read first and the rest of the object is then checked
against the shape the discriminant promises. Unknown discriminants and
mismatched payloads are rejected, never coerced.

"""

import enum
import json
from typing import ClassVar, Optional, Tuple, Union

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from errors import DecodeError, UnknownDiscriminantError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class InteractionType(enum.IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class ApplicationCommandOptionType(enum.IntEnum):
    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8
    MENTIONABLE = 9
    NUMBER = 10
    ATTACHMENT = 11


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)


# -----------------------------------------------------------------------------
# Option value variants.


class SubCommand(_Frozen):
    option_type: ClassVar = ApplicationCommandOptionType.SUB_COMMAND
    options: Tuple["ApplicationCommandOption", ...] = ()


class SubCommandGroup(_Frozen):
    option_type: ClassVar = ApplicationCommandOptionType.SUB_COMMAND_GROUP
    options: Tuple["ApplicationCommandOption", ...] = ()


class String(_Frozen):
    option_type: ClassVar = ApplicationCommandOptionType.STRING
    value: str


class Integer(_Frozen):
    option_type: ClassVar = ApplicationCommandOptionType.INTEGER
    value: int = Field(ge=INT64_MIN, le=INT64_MAX)


class Boolean(_Frozen):
    option_type: ClassVar = ApplicationCommandOptionType.BOOLEAN
    value: bool


class Number(_Frozen):
    option_type: ClassVar = ApplicationCommandOptionType.NUMBER
    value: float


class User(_Frozen):
    option_type: ClassVar = ApplicationCommandOptionType.USER
    id: Optional[str] = None


class Channel(_Frozen):
    option_type: ClassVar = ApplicationCommandOptionType.CHANNEL
    id: Optional[str] = None


class Role(_Frozen):
    option_type: ClassVar = ApplicationCommandOptionType.ROLE
    id: Optional[str] = None


class Mentionable(_Frozen):
    option_type: ClassVar = ApplicationCommandOptionType.MENTIONABLE
    id: Optional[str] = None


class Attachment(_Frozen):
    option_type: ClassVar = ApplicationCommandOptionType.ATTACHMENT
    id: Optional[str] = None


ApplicationCommandOptionValue = Union[
    SubCommand,
    SubCommandGroup,
    String,
    Integer,
    Boolean,
    User,
    Channel,
    Role,
    Mentionable,
    Number,
    Attachment,
]

_GROUP_VARIANTS = {cls.option_type: cls for cls in (SubCommand, SubCommandGroup)}
_REFERENCE_VARIANTS = {
    cls.option_type: cls for cls in (User, Channel, Role, Mentionable, Attachment)
}


# -----------------------------------------------------------------------------
# Envelope.


class ApplicationCommandOption(_Frozen):
    name: str
    value: ApplicationCommandOptionValue


class InteractionCommon(_Frozen):
    id: str
    token: str
    application_id: str
    guild_id: Optional[str] = None
    channel_id: Optional[str] = None


class ApplicationCommandData(_Frozen):
    id: str
    name: str = Field(min_length=1)
    command_type: int = Field(alias="type")
    options: Optional[Tuple[ApplicationCommandOption, ...]] = None

    def option(self, name):
        """Return the value of the first option called name, or None."""
        for item in self.options or ():
            if item.name == name:
                return item.value
        return None


class Ping(_Frozen):
    interaction_type: ClassVar = InteractionType.PING


class ApplicationCommand(_Frozen):
    interaction_type: ClassVar = InteractionType.APPLICATION_COMMAND
    common: InteractionCommon
    data: ApplicationCommandData


Interaction = Union[Ping, ApplicationCommand]

ApplicationCommandOption.model_rebuild()
SubCommand.model_rebuild()
SubCommandGroup.model_rebuild()
ApplicationCommandData.model_rebuild()
ApplicationCommand.model_rebuild()


# -----------------------------------------------------------------------------
def decode_interaction(body: Union[bytes, str]) -> Interaction:
    """
    Decode a raw request body into an Interaction.

    Raises DecodeError (or its UnknownDiscriminantError subclass) when the
    body is not a JSON object, when a discriminant is missing or not
    supported, or when any field does not have the shape its discriminant
    requires.

    """

    try:
        return _decode_envelope(body)
    except RecursionError as err:
        raise DecodeError("Interaction is nested too deeply") from err


def _decode_envelope(body):
    envelope = _parse_json(body)
    if not isinstance(envelope, dict):
        raise DecodeError("Interaction must be a JSON object")

    kind = _discriminant(envelope, "Interaction")
    if kind == InteractionType.PING:
        return Ping()
    if kind == InteractionType.APPLICATION_COMMAND:
        return _decode_application_command(envelope)
    raise UnknownDiscriminantError(
        "Unsupported interaction type: {kind}".format(kind=kind)
    )


def _reject_constant(name):
    raise ValueError("{name} is not valid JSON".format(name=name))


def _parse_json(body):
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except ValueError as err:
        raise DecodeError("Body is not valid JSON: {err}".format(err=err)) from err


def _discriminant(obj, what):
    if "type" not in obj:
        raise DecodeError("{what} has no type discriminant".format(what=what))
    kind = obj["type"]
    # bool is an int subclass; true/false are never valid discriminants.
    if isinstance(kind, bool) or not isinstance(kind, int):
        raise DecodeError(
            "{what} type discriminant must be an integer, got {kind!r}".format(
                what=what, kind=kind
            )
        )
    return kind


def _validate(cls, fields):
    try:
        return cls.model_validate(fields)
    except pydantic.ValidationError as err:
        raise DecodeError(
            "Invalid {name}: {n} error(s): {errors}".format(
                name=cls.__name__,
                n=err.error_count(),
                errors="; ".join(
                    "{loc}: {msg}".format(
                        loc=".".join(str(part) for part in e["loc"]), msg=e["msg"]
                    )
                    for e in err.errors()
                ),
            )
        ) from err


def _decode_application_command(envelope):
    data = envelope.get("data")
    if not isinstance(data, dict):
        raise DecodeError("Application command interaction requires a data object")

    fields = {key: value for key, value in data.items() if key != "options"}
    fields["options"] = _decode_options(data.get("options"), "data.options")

    return ApplicationCommand(
        common=_validate(InteractionCommon, envelope),
        data=_validate(ApplicationCommandData, fields),
    )


def _decode_options(raw, where):
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise DecodeError("{where} must be a list".format(where=where))
    return tuple(
        _decode_option(item, "{where}[{i}]".format(where=where, i=i))
        for i, item in enumerate(raw)
    )


def _decode_option(raw, where):
    if not isinstance(raw, dict):
        raise DecodeError("{where} must be an object".format(where=where))

    name = raw.get("name")
    if not isinstance(name, str):
        raise DecodeError("{where} requires a string name".format(where=where))

    code = _discriminant(raw, where)
    try:
        kind = ApplicationCommandOptionType(code)
    except ValueError:
        raise UnknownDiscriminantError(
            "{where} ({name!r}) has unknown option type {code}".format(
                where=where, name=name, code=code
            )
        )

    value = _decode_option_value(kind, raw, name, where)
    return _validate(ApplicationCommandOption, {"name": name, "value": value})


def _decode_option_value(kind, raw, name, where):
    if kind in _GROUP_VARIANTS:
        nested = _decode_options(raw.get("options"), where + ".options")
        return _validate(_GROUP_VARIANTS[kind], {"options": nested or ()})

    if kind in _REFERENCE_VARIANTS:
        reference = raw.get("value")
        if reference is not None and not isinstance(reference, str):
            raise _mismatch(kind, reference, name)
        return _validate(_REFERENCE_VARIANTS[kind], {"id": reference})

    if "value" not in raw:
        raise DecodeError(
            "{where} ({name!r}) of type {kind} has no value".format(
                where=where, name=name, kind=kind.name
            )
        )
    value = raw["value"]

    if kind == ApplicationCommandOptionType.STRING:
        if not isinstance(value, str):
            raise _mismatch(kind, value, name)
        return String(value=value)

    if kind == ApplicationCommandOptionType.INTEGER:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _mismatch(kind, value, name)
        return _validate(Integer, {"value": value})

    if kind == ApplicationCommandOptionType.BOOLEAN:
        if not isinstance(value, bool):
            raise _mismatch(kind, value, name)
        return Boolean(value=value)

    if kind == ApplicationCommandOptionType.NUMBER:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _mismatch(kind, value, name)
        try:
            number = float(value)
        except OverflowError:
            raise _mismatch(kind, value, name)
        return Number(value=number)

    raise UnknownDiscriminantError(
        "Option {name!r} has unhandled type {kind}".format(name=name, kind=kind)
    )


def _mismatch(kind, value, name):
    return DecodeError(
        "Option {name!r} declared {kind} but value is {actual}".format(
            name=name, kind=kind.name, actual=type(value).__name__
        )
    )
