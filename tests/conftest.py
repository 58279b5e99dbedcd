import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Annotated

import pytest

from tagbind.tags import Default, Env, Key, Mode, Validate

SERVERS_ENV = "TAGBIND_TEST_SERVERS"
PORT_ENV = "TAGBIND_TEST_PORT"


@dataclass
class ServerConfig:
    """Settings for a message broker client."""

    loglevel: Annotated[str, Key("loglevel"), Default("warn"), Validate("enum=debug,info,warn,error")] = ""
    identity: Annotated[str, Key("identity"), Mode("title_string")] = ""
    servers: Annotated[list[str], Key("servers"), Mode("comma_split"), Env(SERVERS_ENV)] = field(default_factory=list)
    libdir: Annotated[list[str], Key("libdir"), Mode("colon_split")] = field(default_factory=list)
    path: Annotated[list[str], Key("path"), Mode("path_split"), Default(os.pathsep.join(["/bin", "/usr/bin"]))] = field(
        default_factory=list
    )
    collectives: Annotated[list[str], Key("collectives")] = field(default_factory=list)
    port: Annotated[int, Key("port"), Default("4222"), Env(PORT_ENV)] = 0
    interval: Annotated[timedelta, Key("interval"), Mode("duration"), Default("1h")] = timedelta(0)
    debug: Annotated[bool, Key("debug"), Default("false")] = False
    address: Annotated[str, Key("address"), Validate("ipv4")] = ""
    comment: str = ""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(SERVERS_ENV, raising=False)
    monkeypatch.delenv(PORT_ENV, raising=False)


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig()
