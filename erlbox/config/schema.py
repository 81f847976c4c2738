# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for erlbox.

Each YAML section gets its own frozen pydantic model. Frozen means once you
create it, you cannot mutate it. The compiler flags in particular are never
appended to in place: test preparation asks for a copy with debug info
(`ErlcConfig.with_debug_info`) and threads that copy onwards.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

Every section has defaults, so a project with no erlbox.yaml at all still
builds with the conventional layout (src/, ebin/, test/).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEBUG_INFO_FLAG = "+debug_info"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GlobalConfig(BaseModel):
    """Cross-cutting settings: schema version and logging."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        default="1.0.0",
        description="Schema version for compatibility tracking",
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output, relative to project root",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return upper


class ErlcConfig(BaseModel):
    """
    How the Erlang compiler is invoked.

    `flags` go first on the command line, then one `-pa <dir>` per code path,
    then one `-I <dir>` per include directory.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    executable: str = Field(default="erlc", description="Compiler executable name or path")
    flags: tuple[str, ...] = Field(
        default=(),
        description="Compiler flags, e.g. '+warn_unused_vars'",
    )
    code_paths: tuple[str, ...] = Field(
        default=(),
        description="Directories added to the code path with -pa",
    )
    include_dirs: tuple[str, ...] = Field(
        default=(),
        description="Header search directories passed with -I",
    )

    def with_debug_info(self) -> "ErlcConfig":
        """Return a copy whose flags end with one more debug-info flag."""
        return self.model_copy(update={"flags": (*self.flags, DEBUG_INFO_FLAG)})


class ProjectConfig(BaseModel):
    """Layout of the project sources compiled by `build:compile`."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    enabled: bool = Field(default=True, description="Compile project sources before tests")
    source_dir: str = Field(default="src", description="Directory holding *.erl sources")
    source_pattern: str = Field(default="*.erl", description="Glob matched inside source_dir")
    ebin_dir: str = Field(default="ebin", description="Where project .beam files are written")


class EunitConfig(BaseModel):
    """Where the tests live and how the eunit runner is called."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    test_dir: str = Field(default="test", description="Directory holding test modules")
    test_pattern: str = Field(
        default="*_tests.erl",
        description="Glob matched inside test_dir to find test modules",
    )
    ebin_dir: str = Field(default="./ebin", description="Passed to the runner with -b")
    runner_script: Optional[str] = Field(
        default=None,
        description="Runner executable; defaults to the script shipped beside erlbox.build.eunit",
    )


class ErlboxConfig(BaseModel):
    """
    Top-level config container.

    A YAML file may carry any subset of the sections. Sections that are
    absent fall back to their defaults.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", validate_default=True, populate_by_name=True
    )

    global_config: GlobalConfig = Field(alias="global", default_factory=GlobalConfig)
    erlc: ErlcConfig = Field(default_factory=ErlcConfig)
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    eunit: EunitConfig = Field(default_factory=EunitConfig)
