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
from pubgo.utils.console import print_error, print_step, print_success, print_warning
from pubgo.utils.maven import ConfigurationError, assemble, load_project
from pubgo.utils.maven.config import DEFAULT_CONFIG_FILE


class Check(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to check where modules would be published.

        Resolves every publish target, including credentials, without
        reading build outputs or uploading anything.

        Examples:
            pubgo check
            pubgo check --module aegis-common
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="pubgo check",
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
            help="Module to check, may be repeated (default: all modules)",
        )
        return parser.parse_args(argv, namespace=CliNameSpace())

    def exec(self, context: CliContext, args: CliNameSpace) -> int:
        config_path = args.config or os.path.join(context.work_dir, DEFAULT_CONFIG_FILE)

        try:
            project = load_project(config_path)
            print_step("Checking publish targets")
            print(project.get_config_summary())
            print()

            ok = True
            for name in args.module or project.module_names():
                module = project.build_module(name, read_outputs=False)
                descriptor = assemble(module, project.repositories,
                                      local_repository=project.settings.local_repository)
                print(descriptor.get_summary())
                for failure in descriptor.failures:
                    print_warning(f"{failure.display_name}: {failure.error}")
                    ok = False
        except ConfigurationError as e:
            print_error(f"Configuration error: {e}")
            return 1

        if not ok:
            print_error("Some repositories cannot be published to")
            return 1

        print_success("All publish targets resolved")
        return 0
