# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Build tasks.

Subsystems:
  - rules: source discovery, .erl -> .beam mapping, staleness
  - compiler: erlc invocation
  - process: child process execution
  - project: build:compile
  - eunit: eunit:compile, eunit:prepare, eunit:test
  - tasks: the dependency graph tying them together
"""
