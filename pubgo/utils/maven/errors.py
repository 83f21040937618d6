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

"""Exceptions raised while resolving and publishing Maven targets."""


class PublishError(Exception):
    """Base class for publishing errors"""
    pass


class ConfigurationError(PublishError):
    """A repository or module definition is malformed.

    Raised before any upload is attempted; it aborts the whole operation.
    """
    pass


class MissingCredentialError(PublishError):
    """A credential environment variable is absent or empty."""

    def __init__(self, slot: str):
        self.slot = slot
        super().__init__(f"Missing {slot} environment variable")


class UploadError(PublishError):
    """Transfer of a file to one target failed."""

    def __init__(self, target: str, detail: str):
        self.target = target
        self.detail = detail
        super().__init__(f"Upload to {target} failed: {detail}")
