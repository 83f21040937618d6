#
# Copyright 2024 pubgo Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

"""
Credential lookup for Maven repositories.

Credentials are read from two named environment variables per repository.
They are resolved on every publish operation and never cached or written
anywhere.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import MissingCredentialError


@dataclass(frozen=True)
class Credentials:
    """Username/password pair for HTTP Basic authentication."""
    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"

    def as_auth(self):
        """Return the (username, password) tuple accepted by requests."""
        return (self.username, self.password)


def _lookup(environ: Mapping[str, str], slot: str) -> str:
    value = environ.get(slot)
    if not value:
        raise MissingCredentialError(slot)
    return value


def resolve_credentials(username_env: str, password_env: str,
                        environ: Optional[Mapping[str, str]] = None) -> Credentials:
    """
    Resolve a username/password pair from environment variables.

    Args:
        username_env: Name of the variable holding the username
        password_env: Name of the variable holding the password
        environ: Mapping to read from (default: os.environ)

    Returns:
        Credentials instance

    Raises:
        MissingCredentialError: naming the first variable that is unset or empty
    """
    if environ is None:
        environ = os.environ
    username = _lookup(environ, username_env)
    password = _lookup(environ, password_env)
    return Credentials(username=username, password=password)
