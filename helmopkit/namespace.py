"""Selection of the namespaces a manager watches."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

WATCH_NAMESPACE_ENV_VAR = "WATCH_NAMESPACE"
NAMESPACE_ALL = ""

_log = logging.getLogger(__name__)


@dataclass
class ManagerOptions:
    """Manager settings that control which namespaces are watched.

    ``namespace`` restricts the manager to a single namespace; the empty
    string means all namespaces. ``cache_namespaces`` is set when a cache
    spanning several namespaces is required.
    """

    namespace: str = NAMESPACE_ALL
    cache_namespaces: Optional[list[str]] = None


def split_namespaces(namespaces: str) -> list[str]:
    """Split a comma-separated namespace list, dropping empty entries."""
    return [ns.strip() for ns in namespaces.split(",") if ns != ""]


def lookup_watch_namespaces(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Return the namespaces named in the environment, or an empty list."""
    env = os.environ if environ is None else environ
    value = env.get(WATCH_NAMESPACE_ENV_VAR)
    if value is None:
        return []
    return split_namespaces(value)


def configure_watch_namespaces(
    options: ManagerOptions,
    logger: Optional[logging.Logger] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ManagerOptions:
    """Configure ``options`` from the watch-namespace environment variable."""
    log = logger or _log
    namespaces = lookup_watch_namespaces(environ)
    if namespaces:
        log.info("watching namespaces: %s", namespaces)
        if len(namespaces) > 1:
            options.cache_namespaces = list(namespaces)
        else:
            options.namespace = namespaces[0]
        return options
    log.info("watching all namespaces")
    options.namespace = NAMESPACE_ALL
    return options