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
Repository target resolution.

Turns a RepositoryConfig and the version class of the module being published
into the concrete endpoint to upload to. No network I/O happens here.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from .credentials import Credentials, resolve_credentials
from .model import RepositoryConfig
from .version import VersionClass

CredentialProvider = Callable[[str, str], Credentials]


@dataclass(frozen=True)
class ResolvedTarget:
    """Concrete upload endpoint for one repository and version class."""
    display_name: str
    url: str
    credentials: Optional[Credentials] = None
    local: bool = False
    optional: bool = False


def target_display_name(config: RepositoryConfig, version_class: VersionClass) -> str:
    return config.name + version_class.label


def resolve_target(config: RepositoryConfig,
                   version_class: VersionClass,
                   credential_provider: CredentialProvider = resolve_credentials
                   ) -> Optional[ResolvedTarget]:
    """
    Resolve the endpoint of a repository for a version class.

    Args:
        config: Repository configuration
        version_class: Classification of the version being published
        credential_provider: Callable resolving (username_env, password_env)

    Returns:
        ResolvedTarget, or None when the repository opts out of snapshots

    Raises:
        MissingCredentialError: propagated from the credential provider
    """
    if version_class is VersionClass.SNAPSHOT and not config.snapshots_enabled:
        return None

    display_name = target_display_name(config, version_class)
    url = f"{config.base_url}/{version_class.path}"
    credentials = credential_provider(config.username_env, config.password_env)

    return ResolvedTarget(
        display_name=display_name,
        url=url,
        credentials=credentials,
        optional=config.optional,
    )
