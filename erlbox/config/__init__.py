# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Configuration loading and validation (YAML in, pydantic models out).
"""
