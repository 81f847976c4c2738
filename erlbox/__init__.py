# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
erlbox: build tasks for Erlang projects.

Compiles Erlang sources and test modules with erlc, then hands the compiled
tests to an external eunit runner.
"""

__version__ = "0.1.0"
