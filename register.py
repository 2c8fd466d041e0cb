"""
Register the slash command table with the platform.

Run once after changing COMMANDS in commands.py. Uses the bulk overwrite
endpoint, so commands missing from the table are removed remotely.

"""

import argparse
import os
import sys

import httpx

import commands
import config

API_BASE = "https://discord.com/api/v10/"
USER_AGENT = "DiscordBot (https://github.com/discord/discord-example-app, 1.0.0)"
COMMAND_TYPE_CHAT_INPUT = 1


def command_payload(registry):
    return [
        {"name": name, "description": description, "type": COMMAND_TYPE_CHAT_INPUT}
        for (name, description) in registry.descriptions()
    ]


def commands_url(application_id, guild_id=None):
    if guild_id:
        path = "applications/{app}/guilds/{guild}/commands".format(
            app=application_id, guild=guild_id
        )
    else:
        path = "applications/{app}/commands".format(app=application_id)
    return API_BASE + path


def register_commands(token, application_id, guild_id, registry, client=None):
    """
    PUT the command table and return the httpx.Response.

    Raises httpx.HTTPStatusError if the platform rejects the request.

    """

    headers = {
        "Authorization": "Bot {token}".format(token=token),
        "Content-Type": "application/json; charset=UTF-8",
        "User-Agent": USER_AGENT,
    }
    url = commands_url(application_id, guild_id)
    payload = command_payload(registry)

    if client is None:
        with httpx.Client() as owned:
            response = owned.put(url, headers=headers, json=payload)
    else:
        response = client.put(url, headers=headers, json=payload)

    response.raise_for_status()
    return response


def _parser():
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument(
        "-t",
        "--token",
        default=os.environ.get(config.ENV_TOKEN),
        help="Bot token (default: ${env})".format(env=config.ENV_TOKEN),
    )
    parser.add_argument(
        "-a",
        "--application-id",
        default=os.environ.get(config.ENV_APPLICATION_ID),
        help="Application id (default: ${env})".format(env=config.ENV_APPLICATION_ID),
    )
    parser.add_argument(
        "-g",
        "--guild-id",
        default=os.environ.get(config.ENV_GUILD_ID),
        help="Register in this guild only (default: ${env}, else global)".format(
            env=config.ENV_GUILD_ID
        ),
    )
    return parser


def main(argv=None):
    parser = _parser()
    args = parser.parse_args(argv)
    if not args.token:
        parser.error("--token or ${env} is required".format(env=config.ENV_TOKEN))
    if not args.application_id:
        parser.error(
            "--application-id or ${env} is required".format(
                env=config.ENV_APPLICATION_ID
            )
        )

    try:
        response = register_commands(
            args.token, args.application_id, args.guild_id, commands.REGISTRY
        )
    except httpx.HTTPError as err:
        print("Error registering commands")
        print(err)
        return 1

    print("Registered commands")
    print(response.text or "No response body")
    return 0


if __name__ == "__main__":
    sys.exit(main())
