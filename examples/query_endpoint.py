#!/usr/bin/env python3
"""
Example FastAPI service decoding query parameters into a dataclass.

Usage:
    uvicorn examples.query_endpoint:app --port 8080
    curl 'http://localhost:8080/foo?string_val=abc&int_vals=1,2,3'

Settings such as QUERYBIND_LOG_LEVEL can be placed in a .env file.
"""

from dataclasses import asdict, dataclass, field

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request

from querybind import CoercionError, DecodeError, Decoder, DecoderConfig, QueryStringLookup, param
from querybind.utils import get_logger, setup_logging

load_dotenv()

config = DecoderConfig.from_env()
setup_logging(level=config.log_level, include_timestamp=False)
logger = get_logger(__name__)

decoder = Decoder(config)
app = FastAPI()


@dataclass
class Paging:
    page: int = param("page", default=1)
    per_page: int = param("per_page", default=20)


@dataclass
class FooRequest:
    # These fields will be loaded
    bool_val: bool = param("bool_val", default=False)
    string_val: str = param("string_val", default="")
    int_vals: list[int] = param("int_vals", default_factory=list)
    paging: Paging = field(default_factory=Paging)

    # These fields will be ignored
    ignored_val1: str = param("-", default="")
    ignored_val2: str = ""


@app.get("/foo")
async def foo(request: Request):
    req = FooRequest()
    try:
        decoder.decode(req, QueryStringLookup(request.url.query))
    except DecodeError as e:
        # Bad client input, possibly inside a nested record
        if isinstance(e.root_cause, CoercionError):
            raise HTTPException(status_code=400, detail=str(e))
        logger.error("Can't read params: %s", e)
        raise HTTPException(status_code=500, detail="Can't read params")
    return asdict(req)
