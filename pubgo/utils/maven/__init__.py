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
Maven repository integration for pubgo.

This module resolves where a module is published and uploads it there.
"""

from .assembler import PublicationDescriptor, TargetFailure, assemble, local_target
from .config import ProjectConfig, PublishSettings, load_project
from .credentials import Credentials, resolve_credentials
from .errors import ConfigurationError, MissingCredentialError, PublishError, UploadError
from .model import Artifact, Dependency, ModuleDescriptor, RepositoryConfig
from .publisher import MavenPublisher, PublishReport, TargetOutcome
from .resolver import ResolvedTarget, resolve_target
from .version import VersionClass, classify

__all__ = [
    'Artifact', 'ConfigurationError', 'Credentials', 'Dependency', 'MavenPublisher',
    'MissingCredentialError', 'ModuleDescriptor', 'ProjectConfig', 'PublicationDescriptor',
    'PublishError', 'PublishReport', 'PublishSettings', 'RepositoryConfig', 'ResolvedTarget',
    'TargetFailure', 'TargetOutcome', 'UploadError', 'VersionClass', 'assemble', 'classify',
    'load_project', 'local_target', 'resolve_credentials', 'resolve_target',
]
