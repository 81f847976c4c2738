# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
erlbox command line interface.

Subsystems:
  - main: argument parsing and the entrypoint
  - commands: task dispatch and error to exit code mapping
  - exit_codes: the process exit codes
"""
