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

from enum import Enum

SNAPSHOT_SUFFIX = "-SNAPSHOT"


class VersionClass(Enum):
    RELEASE = "release"
    SNAPSHOT = "snapshot"

    @property
    def label(self) -> str:
        """Capitalized plural used in repository display names."""
        return "Snapshots" if self is VersionClass.SNAPSHOT else "Releases"

    @property
    def path(self) -> str:
        """Path segment under a repository base URL."""
        return "snapshots" if self is VersionClass.SNAPSHOT else "releases"


def classify(version: str) -> VersionClass:
    # exact, case-sensitive suffix match
    if version.endswith(SNAPSHOT_SUFFIX):
        return VersionClass.SNAPSHOT
    return VersionClass.RELEASE
