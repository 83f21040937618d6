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
Maven publisher.

Uploads a PublicationDescriptor to each of its targets and reports the
outcome of every target separately, so one broken repository does not stop
the others from receiving the module.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .assembler import PublicationDescriptor
from .errors import PublishError
from .model import ModuleDescriptor
from .resolver import ResolvedTarget
from .uploader import DEFAULT_TIMEOUT, create_uploader


@dataclass(frozen=True)
class TargetOutcome:
    display_name: str
    success: bool
    error: Optional[PublishError] = None
    local: bool = False
    optional: bool = False
    credential_failure: bool = False

    @property
    def detail(self) -> str:
        return str(self.error) if self.error else ''


@dataclass(frozen=True)
class PublishReport:
    """Per-target outcomes of publishing one module."""
    module: ModuleDescriptor
    outcomes: Tuple[TargetOutcome, ...]

    @property
    def succeeded(self) -> List[TargetOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> List[TargetOutcome]:
        return [o for o in self.outcomes if not o.success]

    def is_success(self) -> bool:
        """
        Overall status of the publish operation.

        Failed when a credential could not be resolved, when a non-optional
        remote target failed, or when every remote target failed. Without
        any remote target the local cache is the only target and decides
        the status.
        """
        remote = [o for o in self.outcomes if not o.local]
        if not remote:
            return all(o.success for o in self.outcomes)
        if any(o.credential_failure for o in remote):
            return False
        if any(not o.success and not o.optional for o in remote):
            return False
        if not any(o.success for o in remote):
            return False
        return True


class MavenPublisher:
    """Handle publishing a module to all of its resolved targets."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, parallel: int = 1,
                 verbose: bool = False,
                 uploader_factory: Optional[Callable] = None):
        """
        Initialize Maven publisher.

        Args:
            timeout: Timeout in seconds for each upload request
            parallel: Number of targets uploaded concurrently
            verbose: Enable verbose output
            uploader_factory: Callable(target, timeout, verbose) returning an
                object with an upload(module) method
        """
        self.timeout = timeout
        self.parallel = max(1, parallel)
        self.verbose = verbose
        self.uploader_factory = uploader_factory or create_uploader

    def _upload_target(self, target: ResolvedTarget, module: ModuleDescriptor) -> TargetOutcome:
        uploader = self.uploader_factory(target, timeout=self.timeout, verbose=self.verbose)
        try:
            uploader.upload(module)
        except PublishError as e:
            return TargetOutcome(target.display_name, False, e,
                                 local=target.local, optional=target.optional)
        return TargetOutcome(target.display_name, True,
                             local=target.local, optional=target.optional)

    def publish(self, descriptor: PublicationDescriptor) -> PublishReport:
        """
        Upload a publication to every target.

        Returns:
            PublishReport with one outcome per target and per credential failure
        """
        module = descriptor.module

        if self.parallel == 1 or len(descriptor.targets) <= 1:
            outcomes = [self._upload_target(t, module) for t in descriptor.targets]
        else:
            executor = ThreadPoolExecutor(max_workers=self.parallel)
            try:
                futures = [executor.submit(self._upload_target, t, module)
                           for t in descriptor.targets]
                outcomes = [f.result() for f in futures]
            except BaseException:
                # abandon in-flight uploads
                executor.shutdown(wait=False, cancel_futures=True)
                raise
            executor.shutdown()

        for failure in descriptor.failures:
            outcomes.append(TargetOutcome(failure.display_name, False, failure.error,
                                          credential_failure=True))

        return PublishReport(module=module, outcomes=tuple(outcomes))
