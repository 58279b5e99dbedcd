"""
Environment lookup for field overrides.

The binder reads variables through a plain mapping, os.environ by default.
load_environment() layers the process environment over a .env file without
writing anything back to os.environ.
"""

import logging
import os
from collections import ChainMap
from types import MappingProxyType
from typing import Mapping, Optional

from dotenv import dotenv_values, find_dotenv

from tagbind.descriptors import FieldDescriptor

LOG = logging.getLogger(__name__)


def load_environment(dotenv_path: Optional[str] = None) -> Mapping[str, str]:
    """
    Read-only view of os.environ backed by the values of a .env file.

    - dotenv_path: file to read (default: the nearest .env found by find_dotenv)
    - Process variables win over .env values, and variables the .env file
      declares without a value are dropped.
    """
    path = dotenv_path if dotenv_path is not None else find_dotenv(usecwd=True)
    file_values = {k: v for k, v in dotenv_values(path).items() if v is not None} if path else {}
    if path:
        LOG.debug("read %d variables from %s", len(file_values), path)
    return MappingProxyType(ChainMap(os.environ, file_values))


def resolve_value(descriptor: FieldDescriptor, raw: str, env: Optional[Mapping[str, str]] = None) -> str:
    """Return the value of the field's environment variable when set, raw otherwise."""
    if not descriptor.env:
        return raw
    if env is None:
        env = os.environ
    value = env.get(descriptor.env)
    if value is None:
        return raw
    LOG.debug("key '%s' overridden from environment variable %s", descriptor.key, descriptor.env)
    return value
