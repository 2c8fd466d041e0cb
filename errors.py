class InteractionError(Exception):
    """
    Base class for every per-request failure of the interaction endpoint.

    Each subclass carries the HTTP status it is reported with and a short
    public detail string. The constructor message is for the log only and
    is never sent back to the caller.

    """

    status_code = 400
    detail = "Bad request"


# -----------------------------------------------------------------------------
class AuthenticationError(InteractionError):
    status_code = 401
    detail = "Invalid request signature"


class MissingHeaderError(AuthenticationError):
    pass


class MalformedKeyError(AuthenticationError):
    pass


class MalformedSignatureError(AuthenticationError):
    pass


class SignatureMismatchError(AuthenticationError):
    pass


# -----------------------------------------------------------------------------
class DecodeError(InteractionError):
    detail = "Malformed interaction payload"


class UnknownDiscriminantError(DecodeError):
    detail = "Unsupported interaction type"


# -----------------------------------------------------------------------------
class UnknownCommandError(InteractionError):
    detail = "Unknown command"

    def __init__(self, name):
        super().__init__("Unknown command: {name!r}".format(name=name))
        self.name = name
