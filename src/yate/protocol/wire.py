"""Builders for the control lines sent to the engine.

Messages proper are rendered by :meth:`Message.encode`; everything else the
application says to the engine is a single short line built here.
"""

from __future__ import annotations

from typing import Any, List, Optional

from . import fields
from .escape import escape


def install(priority: str, name: str, filter_key: Optional[str] = None, filter_value: Optional[Any] = None) -> str:
    """%%>install:[<priority>]:<name>[:<filter-name>:<filter-value>]"""

    parts = [fields.INSTALL, escape(priority), escape(name)]
    if filter_key and filter_value is not None:
        parts.append(escape(filter_key))
        parts.append(escape(filter_value))
    return ':'.join(parts)


def uninstall(name: str) -> str:
    """%%>uninstall:<name>"""
    return fields.UNINSTALL + ':' + escape(name)


def watch(name: str) -> str:
    """%%>watch:<name>"""
    return fields.WATCH + ':' + escape(name)


def unwatch(name: str) -> str:
    """%%>unwatch:<name>"""
    return fields.UNWATCH + ':' + escape(name)


def setlocal(name: str, value: Any) -> str:
    """%%>setlocal:<name>:<value>"""
    return fields.SETLOCAL + ':' + escape(name) + ':' + escape(value)


def output(text: Any) -> List[str]:
    """%%>output:arbitrary unescaped string

    The output verb is not escaped; the only constraint is that a line
    cannot span a newline, so multi-line text becomes several lines.
    """

    lines = list()
    for line in str(text).split('\n'):
        lines.append(fields.OUTPUT + ':' + line.rstrip('\r'))
    return lines
