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
File uploaders for Maven repositories.

Supports:
- Remote repositories over HTTP PUT with Basic authentication
- The local Maven cache (~/.m2/repository)

Every artifact is uploaded together with its .md5 and .sha1 checksum
files, followed by the module POM. Uploads never retry; re-running a publish
overwrites the same coordinates.
"""

import hashlib
import os
from pathlib import Path
from typing import List, Tuple
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import UploadError
from .model import ModuleDescriptor
from .pom import generate_pom, pom_file_name
from .resolver import ResolvedTarget

# Default timeout in seconds for a single file transfer
DEFAULT_TIMEOUT = 60

CHECKSUM_ALGORITHMS = ('md5', 'sha1')


def publication_files(module: ModuleDescriptor) -> List[Tuple[str, bytes]]:
    """
    List the files of a publication in upload order.

    Returns:
        List of (file_name, content) tuples
    """
    files = []
    for artifact in module.outputs:
        files.append((artifact.file_name(module.artifact_id, module.version), artifact.content))
    files.append((pom_file_name(module), generate_pom(module).encode('utf-8')))

    with_checksums = []
    for name, content in files:
        with_checksums.append((name, content))
        for algorithm in CHECKSUM_ALGORITHMS:
            digest = hashlib.new(algorithm, content).hexdigest()
            with_checksums.append((f"{name}.{algorithm}", digest.encode('ascii')))
    return with_checksums


def module_path(module: ModuleDescriptor) -> str:
    """Repository-relative directory of a module version."""
    return f"{module.group_path}/{module.artifact_id}/{module.version}"


class RemoteUploader:
    """Upload a publication to a remote repository target."""

    def __init__(self, target: ResolvedTarget, timeout: float = DEFAULT_TIMEOUT,
                 verbose: bool = False):
        """
        Initialize remote uploader.

        Args:
            target: Resolved remote target, including credentials
            timeout: Timeout in seconds for each request
            verbose: Enable verbose output
        """
        self.target = target
        self.timeout = timeout
        self.verbose = verbose

        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create HTTP session with retries disabled."""
        session = requests.Session()

        retry = Retry(total=0, raise_on_status=False)
        adapter = HTTPAdapter(max_retries=retry)
        session.mount('http://', adapter)
        session.mount('https://', adapter)

        if self.target.credentials is not None:
            session.auth = self.target.credentials.as_auth()

        return session

    def upload(self, module: ModuleDescriptor) -> List[str]:
        """
        Upload every file of a module.

        Returns:
            List of uploaded URLs

        Raises:
            UploadError: on the first file that fails to transfer
        """
        base = f"{self.target.url}/{module_path(module)}"
        uploaded = []
        try:
            for name, content in publication_files(module):
                url = f"{base}/{name}"
                try:
                    response = self.session.put(url, data=content, timeout=self.timeout)
                except requests.RequestException as e:
                    raise UploadError(self.target.display_name, f"{name}: {e}") from e

                if not 200 <= response.status_code < 300:
                    raise UploadError(
                        self.target.display_name,
                        f"{name}: HTTP {response.status_code} {response.text[:200]}".rstrip())

                if self.verbose:
                    print(f"  ✓ {url}")
                uploaded.append(url)
        finally:
            self.session.close()
        return uploaded


class LocalUploader:
    """Copy a publication into the local Maven cache."""

    def __init__(self, target: ResolvedTarget, verbose: bool = False):
        self.target = target
        self.verbose = verbose
        self.root = Path(url2pathname(urlparse(target.url).path))

    def upload(self, module: ModuleDescriptor) -> List[str]:
        directory = self.root / module_path(module)
        written = []
        try:
            os.makedirs(directory, exist_ok=True)
            for name, content in publication_files(module):
                path = directory / name
                path.write_bytes(content)
                if self.verbose:
                    print(f"  ✓ {path}")
                written.append(str(path))
        except OSError as e:
            raise UploadError(self.target.display_name, str(e)) from e
        return written


def create_uploader(target: ResolvedTarget, timeout: float = DEFAULT_TIMEOUT,
                    verbose: bool = False):
    """Pick the uploader matching a target."""
    if target.local:
        return LocalUploader(target, verbose=verbose)
    return RemoteUploader(target, timeout=timeout, verbose=verbose)
