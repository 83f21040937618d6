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

import argparse
import os

from pubgo.utils.context.namespace import CliNameSpace
from pubgo.utils.context.context import CliContext
from pubgo.utils.context.command import CliCommand
from pubgo.utils.console import print_error, print_report, print_step, print_success
from pubgo.utils.maven import ConfigurationError, MavenPublisher, assemble, load_project
from pubgo.utils.maven.config import DEFAULT_CONFIG_FILE


class Publish(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to publish modules to Maven repositories.

        Every module is always published to the local Maven cache, then to
        each repository in PUBGO.toml that accepts its version: releases go
        to <url>/releases, -SNAPSHOT versions to <url>/snapshots unless the
        repository sets snapshots = false.

        Examples:
            pubgo publish                                # All modules
            pubgo publish --module aegis-common          # One module
            pubgo publish --local-only                   # Only ~/.m2/repository
            pubgo publish --timeout 120 --parallel 2     # Tune uploads
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="pubgo publish",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        parser.add_argument(
            "--config",
            type=str,
            default=None,
            help=f"Path to the configuration file (default: ./{DEFAULT_CONFIG_FILE})",
        )
        parser.add_argument(
            "--module",
            type=str,
            action="append",
            default=None,
            help="Module to publish, may be repeated (default: all modules)",
        )
        parser.add_argument(
            "--timeout",
            type=float,
            default=None,
            help="Timeout in seconds for each upload request (default: publish.timeout)",
        )
        parser.add_argument(
            "--parallel",
            type=int,
            default=None,
            help="Number of targets uploaded concurrently (default: publish.parallel)",
        )
        parser.add_argument(
            "--local-only",
            action="store_true",
            help="Skip remote repositories, publish to the local cache only",
        )
        parser.add_argument(
            "-v", "--verbose",
            action="store_true",
            help="Print every uploaded file",
        )
        return parser.parse_args(argv, namespace=CliNameSpace())

    def exec(self, context: CliContext, args: CliNameSpace) -> int:
        config_path = args.config or os.path.join(context.work_dir, DEFAULT_CONFIG_FILE)

        # Everything that can be checked is checked before the first upload
        try:
            project = load_project(config_path)
            settings = project.settings
            names = args.module or project.module_names()
            modules = [project.build_module(name) for name in names]
            repositories = [] if args.local_only else project.repositories
            descriptors = [
                assemble(module, repositories, local_repository=settings.local_repository)
                for module in modules
            ]
        except ConfigurationError as e:
            print_error(f"Configuration error: {e}")
            return 1

        if not descriptors:
            print_error(f"No modules declared in {config_path}")
            return 1

        print("Publishing with configuration...")
        print(project.get_config_summary())

        publisher = MavenPublisher(
            timeout=args.timeout or settings.timeout,
            parallel=args.parallel or settings.parallel,
            verbose=args.verbose,
        )

        failed = []
        for descriptor in descriptors:
            print_step(f"Publishing {descriptor.module.coordinates}")
            report = publisher.publish(descriptor)
            print_report(report)
            if not report.is_success():
                failed.append(descriptor.module.name or descriptor.module.artifact_id)

        if failed:
            print_error(f"Publishing failed for: {', '.join(failed)}")
            return 1

        print_success(f"Published {len(descriptors)} module(s)")
        return 0
