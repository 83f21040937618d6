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

"""POM generation for published modules."""

from xml.sax.saxutils import escape

from .model import ModuleDescriptor


def pom_file_name(module: ModuleDescriptor) -> str:
    return f"{module.artifact_id}-{module.version}.pom"


def generate_pom(module: ModuleDescriptor) -> str:
    """
    Generate the POM content for a module.

    compileOnly dependencies are left out since consumers never see them.

    Returns:
        String content for the .pom file
    """
    lines = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<project xmlns="http://maven.apache.org/POM/4.0.0" '
                 'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
                 'xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 '
                 'https://maven.apache.org/xsd/maven-4.0.0.xsd">')
    lines.append('  <modelVersion>4.0.0</modelVersion>')
    lines.append(f'  <groupId>{escape(module.group_id)}</groupId>')
    lines.append(f'  <artifactId>{escape(module.artifact_id)}</artifactId>')
    lines.append(f'  <version>{escape(module.version)}</version>')

    published = [d for d in module.dependencies if d.maven_scope]
    if published:
        lines.append('  <dependencies>')
        for dep in published:
            lines.append('    <dependency>')
            lines.append(f'      <groupId>{escape(dep.group_id)}</groupId>')
            lines.append(f'      <artifactId>{escape(dep.artifact_id)}</artifactId>')
            lines.append(f'      <version>{escape(dep.version)}</version>')
            lines.append(f'      <scope>{dep.maven_scope}</scope>')
            lines.append('    </dependency>')
        lines.append('  </dependencies>')

    lines.append('</project>')
    return '\n'.join(lines) + '\n'
