import logging
import os

ENV_PUBLIC_KEY = "DISCORD_PUBLIC_KEY"
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_TOKEN = "DISCORD_TOKEN"
ENV_APPLICATION_ID = "DISCORD_APPLICATION_ID"
ENV_GUILD_ID = "DISCORD_GUILD_ID"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def public_key_hex():
    """
    Return the hex encoded application public key, or None if unset.

    Read on every call so a rotated secret is picked up without a restart.

    """

    return os.environ.get(ENV_PUBLIC_KEY) or None


def log_level():
    name = os.environ.get(ENV_LOG_LEVEL, "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(
            "{env} must name a logging level, got {name!r}".format(
                env=ENV_LOG_LEVEL, name=name
            )
        )
    return level


def configure_logging():
    logging.basicConfig(level=log_level(), format=LOG_FORMAT)
