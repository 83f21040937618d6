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
Publication assembly.

Collects, for one module, every target it should be uploaded to: the local
Maven cache plus each configured repository that accepts the module's
version class.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from .credentials import resolve_credentials
from .errors import MissingCredentialError
from .model import ModuleDescriptor, RepositoryConfig
from .resolver import CredentialProvider, ResolvedTarget, resolve_target, target_display_name
from .version import classify

DEFAULT_LOCAL_REPOSITORY = os.path.join('~', '.m2', 'repository')
LOCAL_DISPLAY_NAME = 'mavenLocal'


@dataclass(frozen=True)
class TargetFailure:
    """A repository that could not be resolved into a target."""
    display_name: str
    error: MissingCredentialError = field(compare=False)

    @property
    def slot(self) -> str:
        return self.error.slot


@dataclass(frozen=True)
class PublicationDescriptor:
    module: ModuleDescriptor
    targets: Tuple[ResolvedTarget, ...]
    failures: Tuple[TargetFailure, ...] = ()

    @property
    def remote_targets(self) -> Tuple[ResolvedTarget, ...]:
        return tuple(t for t in self.targets if not t.local)

    def get_summary(self) -> str:
        """Get a summary of the resolved targets for display. Secrets are masked."""
        lines = [f"  {self.module.coordinates}"]
        for target in self.targets:
            if target.credentials is None:
                lines.append(f"    {target.display_name}: {target.url}")
            else:
                lines.append(f"    {target.display_name}: {target.url} "
                             f"(username: ***, password: ***)")
        for failure in self.failures:
            lines.append(f"    {failure.display_name}: {failure.error}")
        return '\n'.join(lines)


def local_target(local_repository: str = DEFAULT_LOCAL_REPOSITORY) -> ResolvedTarget:
    """The always-on target for the local Maven cache. Needs no credentials."""
    path = os.path.abspath(os.path.expanduser(local_repository))
    return ResolvedTarget(
        display_name=LOCAL_DISPLAY_NAME,
        url=Path(path).as_uri(),
        credentials=None,
        local=True,
    )


def assemble(module: ModuleDescriptor,
             configs: Sequence[RepositoryConfig],
             credential_provider: CredentialProvider = resolve_credentials,
             local_repository: str = DEFAULT_LOCAL_REPOSITORY) -> PublicationDescriptor:
    """
    Build the publication descriptor of a module.

    All inputs are validated before any credential is looked up, so a
    malformed repository definition fails the whole operation early.
    A missing credential only fails its own repository and is recorded in
    the descriptor's failures.

    Args:
        module: Module to publish
        configs: Repositories in the order they should be published to
        credential_provider: Callable resolving (username_env, password_env)
        local_repository: Directory of the local Maven cache

    Returns:
        PublicationDescriptor

    Raises:
        ConfigurationError: if the module or any repository is malformed
    """
    module.validate()
    for config in configs:
        config.validate()

    version_class = classify(module.version)

    targets = [local_target(local_repository)]
    failures = []
    for config in configs:
        try:
            target = resolve_target(config, version_class, credential_provider)
        except MissingCredentialError as e:
            failures.append(TargetFailure(target_display_name(config, version_class), e))
            continue
        if target is not None:
            targets.append(target)

    return PublicationDescriptor(module=module, targets=tuple(targets), failures=tuple(failures))
