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
Project configuration handler for pubgo.

Reads PUBGO.toml into explicit settings, repository definitions and module
descriptors.

Configuration structure:
    [project]
    group_id = "io.example"         # Default group of every module
    version = "1.0.0"               # Default version of every module

    [publish]
    local_repository = "~/.m2/repository"
    timeout = 60                    # Seconds per upload request
    parallel = 1                    # Targets uploaded concurrently

    [[publish.repositories]]
    name = "acme"                   # Display name prefix
    url = "https://repo.example/acme"
    username = "MAVEN_USERNAME"     # Name of the env var holding the username
    password = "MAVEN_PASSWORD"     # Name of the env var holding the password
    snapshots = true                # Accept -SNAPSHOT versions (default: true)
    optional = false                # Failure does not fail the operation

    [[modules]]
    name = "widget-common"
    artifact_id = "widget"          # Default: name without "-common"
    path = "widget-common"          # Default: name
    dependencies = [
        { module = "widget-store", scope = "api" },
        { coordinates = "io.lettuce:lettuce-core:6.3.0", scope = "compileOnly" },
    ]
    artifacts = [                   # Default: build/libs discovery
        { file = "build/libs/widget.jar" },
    ]
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from .assembler import DEFAULT_LOCAL_REPOSITORY
from .errors import ConfigurationError
from .model import Artifact, Dependency, ModuleDescriptor, RepositoryConfig, default_artifact_id
from .uploader import DEFAULT_TIMEOUT

DEFAULT_CONFIG_FILE = 'PUBGO.toml'

# Classifiers discovered next to the primary jar in build/libs
DISCOVERED_CLASSIFIERS = ('sources', 'javadoc')


def expand_env(value: Any) -> Any:
    """
    Expand environment variables in configuration values.

    Supports ${VAR_NAME} and $VAR_NAME syntax. Unknown variables are left
    untouched.
    """
    if not isinstance(value, str):
        return value

    pattern1 = re.compile(r'\$\{([^}]+)\}')
    value = pattern1.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)

    pattern2 = re.compile(r'\$([A-Za-z_][A-Za-z0-9_]*)')
    value = pattern2.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)

    return value


@dataclass(frozen=True)
class PublishSettings:
    """Build-wide publishing settings, passed explicitly to every step."""
    group_id: str
    version: str
    local_repository: str = DEFAULT_LOCAL_REPOSITORY
    timeout: float = DEFAULT_TIMEOUT
    parallel: int = 1


@dataclass(frozen=True)
class ModuleSpec:
    """A module as declared in the configuration file."""
    name: str
    artifact_id: str
    path: str
    group_id: str
    version: str
    dependencies: Tuple[Dict[str, str], ...] = ()
    artifacts: Tuple[Dict[str, str], ...] = ()


def _number(section: Dict[str, Any], key: str, default, convert):
    value = section.get(key, default)
    # TOML booleans are ints to Python; never accept them as numbers
    if isinstance(value, bool):
        raise ConfigurationError(f"publish.{key} must be a number, got {value!r}")
    try:
        return convert(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"publish.{key} must be a number, got {value!r}") from e


def _flag(raw: Dict[str, Any], key: str, default: bool, where: str) -> bool:
    value = raw.get(key, default)
    if not isinstance(value, bool):
        raise ConfigurationError(f"{where}.{key} must be true or false, got {value!r}")
    return value


def _tables(raw: Dict[str, Any], key: str, where: str) -> Tuple[Dict[str, Any], ...]:
    value = raw.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise ConfigurationError(f"{where}.{key} must be a list of tables")
    return tuple(value)


class ProjectConfig:
    """Handle a multi-module project's publishing configuration."""

    def __init__(self, config: Dict[str, Any], project_dir: str = "."):
        """
        Initialize project configuration.

        Args:
            config: Configuration dictionary from PUBGO.toml
            project_dir: Directory module paths are relative to
        """
        self.raw_config = config
        self.project_dir = Path(project_dir)

        project = config.get('project', {})
        publish = config.get('publish', {})

        self.settings = PublishSettings(
            group_id=expand_env(project.get('group_id', '')),
            version=expand_env(project.get('version', '')),
            local_repository=expand_env(publish.get('local_repository', DEFAULT_LOCAL_REPOSITORY)),
            timeout=_number(publish, 'timeout', DEFAULT_TIMEOUT, float),
            parallel=_number(publish, 'parallel', 1, int),
        )
        if self.settings.timeout <= 0:
            raise ConfigurationError("publish.timeout must be positive")
        if self.settings.parallel < 1:
            raise ConfigurationError("publish.parallel must be at least 1")

        self.repositories = [self._parse_repository(r)
                             for r in _tables(publish, 'repositories', 'publish')]
        self.modules = self._parse_modules(_tables(config, 'modules', 'PUBGO.toml'))

    def _parse_repository(self, raw: Dict[str, Any]) -> RepositoryConfig:
        where = f"publish.repositories[{raw.get('name', '?')}]"
        # username/password are variable names, never expanded
        return RepositoryConfig(
            name=raw.get('name', ''),
            base_url=expand_env(raw.get('url', '')),
            username_env=raw.get('username', ''),
            password_env=raw.get('password', ''),
            snapshots_enabled=_flag(raw, 'snapshots', True, where),
            optional=_flag(raw, 'optional', False, where),
        )

    def _parse_modules(self, raw_modules: List[Dict[str, Any]]) -> Dict[str, ModuleSpec]:
        modules = {}
        for raw in raw_modules:
            name = raw.get('name')
            if not name:
                raise ConfigurationError("Every [[modules]] entry needs a name")
            if name in modules:
                raise ConfigurationError(f"Module '{name}' is declared twice")
            where = f"modules[{name}]"
            artifacts = _tables(raw, 'artifacts', where)
            for artifact in artifacts:
                if not isinstance(artifact.get('file'), str) or not artifact['file']:
                    raise ConfigurationError(f"Every {where}.artifacts entry needs a 'file'")
            modules[name] = ModuleSpec(
                name=name,
                artifact_id=raw.get('artifact_id') or default_artifact_id(name),
                path=raw.get('path', name),
                group_id=expand_env(raw.get('group_id', self.settings.group_id)),
                version=expand_env(raw.get('version', self.settings.version)),
                dependencies=_tables(raw, 'dependencies', where),
                artifacts=artifacts,
            )
        return modules

    def module_names(self) -> List[str]:
        return list(self.modules)

    def _resolve_dependency(self, owner: str, raw: Dict[str, str]) -> Dependency:
        scope = raw.get('scope', 'api')
        if 'module' in raw:
            other = self.modules.get(raw['module'])
            if other is None:
                raise ConfigurationError(
                    f"Module '{owner}' depends on unknown module '{raw['module']}'")
            return Dependency(other.group_id, other.artifact_id, other.version, scope)
        if 'coordinates' in raw:
            return Dependency.parse(raw['coordinates'], scope)
        raise ConfigurationError(
            f"Dependency of '{owner}' needs either 'module' or 'coordinates': {raw}")

    def _load_outputs(self, spec: ModuleSpec) -> List[Artifact]:
        module_dir = self.project_dir / spec.path

        if spec.artifacts:
            outputs = []
            for raw in spec.artifacts:
                path = module_dir / raw['file']
                if not path.is_file():
                    raise ConfigurationError(f"Artifact of '{spec.name}' not found: {path}")
                outputs.append(Artifact.from_file(path, raw.get('classifier')))
            return outputs

        libs_dir = module_dir / 'build' / 'libs'
        primary = libs_dir / f"{spec.name}-{spec.version}.jar"
        if not primary.is_file():
            raise ConfigurationError(
                f"Primary jar of '{spec.name}' not found: {primary}. Build the module first")
        outputs = [Artifact.from_file(primary)]
        for classifier in DISCOVERED_CLASSIFIERS:
            path = libs_dir / f"{spec.name}-{spec.version}-{classifier}.jar"
            if path.is_file():
                outputs.append(Artifact.from_file(path, classifier))
        return outputs

    def build_module(self, name: str, read_outputs: bool = True) -> ModuleDescriptor:
        """
        Build the immutable descriptor of a module.

        Args:
            name: Module name as declared in the configuration
            read_outputs: Read the built files (False for dry runs)

        Raises:
            ConfigurationError: unknown module, bad dependency or missing jar
        """
        spec = self.modules.get(name)
        if spec is None:
            raise ConfigurationError(
                f"Unknown module '{name}'. Declared modules: {', '.join(self.modules)}")

        dependencies = tuple(self._resolve_dependency(name, d) for d in spec.dependencies)
        outputs = tuple(self._load_outputs(spec)) if read_outputs else ()

        descriptor = ModuleDescriptor(
            group_id=spec.group_id,
            artifact_id=spec.artifact_id,
            version=spec.version,
            outputs=outputs,
            dependencies=dependencies,
            name=name,
        )
        descriptor.validate()
        return descriptor

    def get_config_summary(self) -> str:
        """Get a summary of the configuration for display."""
        lines = []
        lines.append(f"  Group ID: {self.settings.group_id}")
        lines.append(f"  Version: {self.settings.version}")
        lines.append(f"  Local Repository: {self.settings.local_repository}")
        for repo in self.repositories:
            snapshots = 'enabled' if repo.snapshots_enabled else 'disabled'
            lines.append(f"  Repository {repo.name}: {repo.base_url} (snapshots {snapshots})")
        lines.append(f"  Modules: {', '.join(self.modules) or 'none'}")
        return '\n'.join(lines)


def load_project(config_path: Optional[str] = None) -> ProjectConfig:
    """
    Load a ProjectConfig from a TOML file.

    Args:
        config_path: Path to PUBGO.toml (default: ./PUBGO.toml)

    Raises:
        ConfigurationError: file missing or not valid TOML
    """
    config_path = config_path or DEFAULT_CONFIG_FILE
    if not os.path.isfile(config_path):
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'rb') as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {config_path}: {e}") from e

    return ProjectConfig(data, project_dir=os.path.dirname(os.path.abspath(config_path)))
