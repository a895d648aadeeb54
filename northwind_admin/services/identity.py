# northwind_admin/services/identity.py
"""
Who is using the dashboard. Display only: nothing here grants or checks
permissions.
"""

from __future__ import annotations

import getpass
import os
from typing import Mapping, Optional, Protocol

from northwind_admin.models.actor import Actor


class IdentityProvider(Protocol):
    def current_actor(self) -> Actor: ...


class EnvIdentityProvider:
    """Reads NORTHWIND_ACTOR (and NORTHWIND_ACTOR_EMAIL), else the OS user."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ

    def current_actor(self) -> Actor:
        name = (self._environ.get("NORTHWIND_ACTOR") or "").strip()
        email = (self._environ.get("NORTHWIND_ACTOR_EMAIL") or "").strip() or None
        if name:
            return Actor(username=name, display_name=name, email=email)
        try:
            username = getpass.getuser()
        except (KeyError, OSError):
            username = "admin"
        return Actor(username=username, email=email)
