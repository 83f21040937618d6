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
import importlib
import os
import sys

from pubgo.utils.context.namespace import CliNameSpace
from pubgo.utils.context.context import CliContext
from pubgo.utils.context.command import CliCommand

SCRIPT_PATH = os.path.split(os.path.realpath(__file__))[0]


# Root Class for Command Line Interface
class Cli(CliCommand):
    def description(self) -> str:
        return """pubgo - Maven publishing for multi-module builds

Resolves the repositories each module is published to, from the module
version and the repositories declared in PUBGO.toml, and uploads the
built artifacts there.

USAGE:
    pubgo <command> [options]

COMMANDS:
    check       Resolve publish targets without uploading
    publish     Publish modules to the local cache and remote repositories

EXAMPLES:
    pubgo check                          # Show where every module would go
    pubgo publish                        # Publish every module
    pubgo publish --module aegis-common  # Publish one module
    pubgo publish --local-only           # Publish to ~/.m2/repository only

For more information on a specific command:
    pubgo <command> --help
        """

    def get_command_list(self) -> list:
        arr = []
        for command in os.listdir(os.path.join(SCRIPT_PATH, "commands")):
            if not command.startswith("_") and command.endswith(".py"):
                arr.append(os.path.splitext(os.path.basename(command))[0])
        return sorted(arr)

    def _parser(self, add_help=True) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="pubgo",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
            add_help=add_help,
        )
        parser.add_argument(
            "subcommand",
            metavar=f"{self.get_command_list()}",
            type=str,
            nargs='?',
            choices=self.get_command_list(),
        )
        return parser

    def cli(self, argv=None) -> CliNameSpace:
        argv = sys.argv[1:] if argv is None else argv
        if len(argv) == 1 and argv[0] in ['--help', '-h']:
            self._parser().print_help()
            sys.exit(0)

        # parse only known args - subcommand options are left for the subcommand
        args, unknown = self._parser(add_help=False).parse_known_args(argv, namespace=CliNameSpace())
        args.rest = unknown
        return args

    def exec(self, context: CliContext, args: CliNameSpace) -> int:
        if not args.subcommand:
            print("ERROR: No command specified\n")
            self._parser().print_help()
            return 1

        module = importlib.import_module(f"pubgo.commands.{args.subcommand}")
        klass = getattr(module, args.subcommand.capitalize())
        sub_cmd = klass()
        return sub_cmd.exec(context, sub_cmd.cli(args.rest))


def main(argv=None):
    cmd = Cli()
    sys.exit(cmd.exec(CliContext(), cmd.cli(argv)))


if __name__ == "__main__":
    main()
