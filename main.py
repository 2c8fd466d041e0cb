import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

import commands
import config
import engine
from errors import InteractionError
from signature import SIGNATURE_HEADER, TIMESTAMP_HEADER

config.configure_logging()
log_event = logging.getLogger(__name__)

app = FastAPI()


def get_public_key():
    return config.public_key_hex()


def get_registry():
    return commands.REGISTRY


def log_request(request: Request):
    client = request.client.host if request.client else "unknown client"
    log_event.info(
        "{method} {path} from {client}".format(
            method=request.method, path=request.url.path, client=client
        )
    )


@app.exception_handler(InteractionError)
async def interaction_error_handler(request: Request, exc: InteractionError):
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    log_event.log(
        level,
        "{path} rejected with {status} ({kind}): {err}".format(
            path=request.url.path,
            status=exc.status_code,
            kind=type(exc).__name__,
            err=exc,
        ),
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.post("/interactions")
async def interactions(
    request: Request,
    public_key: str = Depends(get_public_key),
    registry: commands.CommandRegistry = Depends(get_registry),
):
    log_request(request)

    body = await request.body()
    envelope = engine.process_interaction(
        public_key,
        request.headers.get(SIGNATURE_HEADER),
        request.headers.get(TIMESTAMP_HEADER),
        body,
        registry,
    )
    return JSONResponse(content=envelope)
