"""
Slash command table and dispatch.

The table is built once at import time from COMMANDS and never changes
afterwards, so it is shared by concurrent requests without locking.

"""

import logging
import types
from typing import Callable, NamedTuple

from errors import UnknownCommandError
from interaction import ApplicationCommandData, String
from response import ChannelMessage, ChannelMessageData, InteractionResponse

log_event = logging.getLogger(__name__)


class Command(NamedTuple):
    name: str
    description: str
    handler: Callable[[ApplicationCommandData], InteractionResponse]


# -----------------------------------------------------------------------------
class CommandRegistry:
    """
    Read-only mapping from command name to Command.

    Names are matched exactly: no case folding and no trimming.

    """

    def __init__(self, commands):
        table = dict()
        for command in commands:
            if not isinstance(command.name, str) or not command.name:
                raise ValueError("Command names must be non-empty strings")
            if command.name in table:
                raise ValueError(
                    "Duplicate command name: {name!r}".format(name=command.name)
                )
            table[command.name] = command
        self._table = types.MappingProxyType(table)

    def get(self, name):
        return self._table.get(name)

    def descriptions(self):
        """Return (name, description) pairs in declaration order."""
        return [(command.name, command.description) for command in self]

    def __contains__(self, name):
        return name in self._table

    def __iter__(self):
        return iter(self._table.values())

    def __len__(self):
        return len(self._table)


def dispatch(
    registry: CommandRegistry, data: ApplicationCommandData
) -> InteractionResponse:
    command = registry.get(data.name)
    if command is None:
        raise UnknownCommandError(data.name)
    log_event.debug("Dispatch {name}.".format(name=data.name))
    return command.handler(data)


# -----------------------------------------------------------------------------
def ping(data):
    return ChannelMessage(data=ChannelMessageData.from_content("Pong!"))


def hello(data):
    who = data.option("name")
    if isinstance(who, String) and who.value:
        text = "Hello {name}!".format(name=who.value)
    else:
        text = "Hello World!"
    return ChannelMessage(data=ChannelMessageData.from_content(text))


COMMANDS = [
    Command("ping", "Simple ping", ping),
    Command("hello", "hello world!", hello),
]

REGISTRY = CommandRegistry(COMMANDS)
