import logging

import nacl.signing
import pytest

import commands
import config
import engine
import errors
from response import Pong

SIGNING_KEY = nacl.signing.SigningKey.generate()
PUBLIC_KEY_HEX = bytes(SIGNING_KEY.verify_key).hex()


def signed(body, timestamp="1"):
    return SIGNING_KEY.sign(timestamp.encode() + body).signature.hex(), timestamp


def test_process_interaction_ping():
    body = b'{"type":1}'
    (sig, ts) = signed(body)
    assert engine.process_interaction(
        PUBLIC_KEY_HEX, sig, ts, body, commands.REGISTRY
    ) == {"type": 1}


def test_process_interaction_logs_call_context(caplog):
    body = (
        b'{"type":2,"id":"1","token":"t","application_id":"app",'
        b'"channel_id":"chan","data":{"id":"2","name":"ping","type":1}}'
    )
    (sig, ts) = signed(body)
    with caplog.at_level(logging.INFO, logger="engine"):
        envelope = engine.process_interaction(
            PUBLIC_KEY_HEX, sig, ts, body, commands.REGISTRY
        )
    assert envelope == {"type": 4, "data": {"content": "Pong!"}}
    assert "[app | No guild | chan] ping" in caplog.text


def test_unsigned_interaction_is_never_decoded(monkeypatch):
    monkeypatch.setattr(engine, "decode_interaction", pytest.fail)
    with pytest.raises(errors.SignatureMismatchError):
        engine.process_interaction(
            PUBLIC_KEY_HEX, "00" * 64, "1", b'{"type":1}', commands.REGISTRY
        )


def test_respond_to_ping():
    assert engine.respond(engine.Ping(), commands.REGISTRY) == Pong()


def test_respond_rejects_unknown_interaction():
    with pytest.raises(TypeError):
        engine.respond(object(), commands.REGISTRY)


# -----------------------------------------------------------------------------
def test_public_key_from_environment(monkeypatch):
    monkeypatch.setenv("DISCORD_PUBLIC_KEY", PUBLIC_KEY_HEX)
    assert config.public_key_hex() == PUBLIC_KEY_HEX
    monkeypatch.setenv("DISCORD_PUBLIC_KEY", "")
    assert config.public_key_hex() is None
    monkeypatch.delenv("DISCORD_PUBLIC_KEY")
    assert config.public_key_hex() is None


def test_log_level(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    assert config.log_level() == logging.INFO
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert config.log_level() == logging.DEBUG
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValueError):
        config.log_level()
