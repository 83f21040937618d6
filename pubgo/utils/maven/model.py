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
Immutable descriptions of modules, their build outputs and the repositories
they are published to.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlparse

from .errors import ConfigurationError

# Gradle-style dependency visibility -> Maven POM scope. None means the
# dependency is not exposed to consumers.
DEPENDENCY_SCOPES = {
    'api': 'compile',
    'implementation': 'runtime',
    'compileOnly': None,
}

# Module name suffix dropped when deriving the default artifact id
DEFAULT_NAME_SUFFIX = '-common'


def default_artifact_id(module_name: str) -> str:
    """Derive an artifact id from a module name (aegis-common -> aegis).

    Only a trailing suffix is dropped; foo-common-utils keeps its name.
    """
    return module_name.removesuffix(DEFAULT_NAME_SUFFIX)


@dataclass(frozen=True)
class Artifact:
    """A single built file: primary jar, sources jar, javadoc jar, ..."""
    classifier: Optional[str]
    extension: str
    content: bytes = field(repr=False)

    @classmethod
    def from_file(cls, path, classifier: Optional[str] = None) -> 'Artifact':
        path = Path(path)
        extension = path.suffix.lstrip('.')
        if not extension:
            raise ConfigurationError(f"Artifact file has no extension: {path}")
        return cls(classifier=classifier or None, extension=extension,
                   content=path.read_bytes())

    def file_name(self, artifact_id: str, version: str) -> str:
        if self.classifier:
            return f"{artifact_id}-{version}-{self.classifier}.{self.extension}"
        return f"{artifact_id}-{version}.{self.extension}"


@dataclass(frozen=True)
class Dependency:
    """Declared dependency of a module, with Gradle-style scope."""
    group_id: str
    artifact_id: str
    version: str
    scope: str = 'api'

    def __post_init__(self):
        if self.scope not in DEPENDENCY_SCOPES:
            raise ConfigurationError(
                f"Unknown dependency scope '{self.scope}' for "
                f"{self.group_id}:{self.artifact_id}. "
                f"Must be one of {list(DEPENDENCY_SCOPES)}")

    @property
    def maven_scope(self) -> Optional[str]:
        return DEPENDENCY_SCOPES[self.scope]

    @classmethod
    def parse(cls, coordinates: str, scope: str = 'api') -> 'Dependency':
        """Parse 'group:artifact:version' coordinates."""
        parts = coordinates.split(':')
        if len(parts) != 3 or not all(parts):
            raise ConfigurationError(
                f"Invalid dependency coordinates '{coordinates}', "
                f"expected group:artifact:version")
        return cls(group_id=parts[0], artifact_id=parts[1], version=parts[2], scope=scope)


@dataclass(frozen=True)
class ModuleDescriptor:
    """Everything needed to publish one module. Built once, never mutated."""
    group_id: str
    artifact_id: str
    version: str
    outputs: Tuple[Artifact, ...] = ()
    dependencies: Tuple[Dependency, ...] = ()
    name: str = ''

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    @property
    def group_path(self) -> str:
        return self.group_id.replace('.', '/')

    def validate(self):
        for attr in ('group_id', 'artifact_id', 'version'):
            if not getattr(self, attr):
                raise ConfigurationError(
                    f"Module '{self.name or self.artifact_id}' has an empty {attr}")


@dataclass(frozen=True)
class RepositoryConfig:
    """A remote Maven repository split into releases/ and snapshots/."""
    name: str
    base_url: str
    username_env: str
    password_env: str
    snapshots_enabled: bool = True
    optional: bool = False

    def validate(self):
        if not self.name:
            raise ConfigurationError("Repository name must not be empty")
        if not self.base_url:
            raise ConfigurationError(f"Repository '{self.name}' has an empty base URL")
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ConfigurationError(
                f"Repository '{self.name}' base URL must be http(s): {self.base_url}")
        if not self.username_env or not self.password_env:
            raise ConfigurationError(
                f"Repository '{self.name}' must name both credential variables")
