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

"""Colored console output of pubgo commands."""


class Colors:
    """ANSI color codes for terminal output."""
    STEP = '\033[94m'
    OK = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    BOLD = '\033[1m'
    ENDC = '\033[0m'


def print_step(message):
    """Print the header of a module or command step."""
    print(f"\n{Colors.STEP}{Colors.BOLD}==> {message}{Colors.ENDC}")


def print_success(message):
    print(f"{Colors.OK}✓ {message}{Colors.ENDC}")


def print_warning(message):
    print(f"{Colors.WARNING}⚠ {message}{Colors.ENDC}")


def print_error(message):
    print(f"{Colors.FAIL}✗ {message}{Colors.ENDC}")


def print_report(report):
    """
    Print one line per target of a PublishReport, then its overall status.

    Failures of optional targets are shown as warnings since they do not
    fail the module.
    """
    print(f"  {report.module.coordinates}")
    for outcome in report.outcomes:
        if outcome.success:
            print(f"    {Colors.OK}✓ {outcome.display_name}: OK{Colors.ENDC}")
        elif outcome.optional:
            print(f"    {Colors.WARNING}⚠ {outcome.display_name}: FAILED (optional) - "
                  f"{outcome.detail}{Colors.ENDC}")
        else:
            print(f"    {Colors.FAIL}✗ {outcome.display_name}: FAILED - "
                  f"{outcome.detail}{Colors.ENDC}")
    succeeded = len(report.succeeded)
    total = len(report.outcomes)
    if report.is_success():
        print_success(f"{report.module.artifact_id}: {succeeded}/{total} targets published")
    else:
        print_error(f"{report.module.artifact_id}: {succeeded}/{total} targets published")
