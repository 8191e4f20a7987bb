"""
Platform SDK lookup.

Resolves the platform base library archive (``android.jar``) that must be
on the auxiliary classpath of every platform variant analysis.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bugsweep.shared.domain.exceptions import ConfigurationError
from bugsweep.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

SDK_ENV_VARS = ("ANDROID_HOME", "ANDROID_SDK_ROOT")


@dataclass(frozen=True)
class PlatformSdk:
    """Location of an installed platform SDK and the compile SDK version in use."""

    sdk_dir: Optional[Path]
    compile_sdk_version: Optional[str]

    @classmethod
    def from_environment(cls, compile_sdk_version: Optional[str], sdk_dir: Optional[Path] = None) -> "PlatformSdk":
        """Use ``sdk_dir`` when given, otherwise the first SDK environment variable that is set."""
        if sdk_dir is None:
            for var in SDK_ENV_VARS:
                value = os.environ.get(var)
                if value:
                    sdk_dir = Path(value)
                    break
        return cls(sdk_dir=sdk_dir, compile_sdk_version=compile_sdk_version)

    def base_library(self) -> Path:
        """
        Return ``<sdk_dir>/platforms/<compile_sdk_version>/android.jar``.

        Raises:
            ConfigurationError: If the SDK directory or version is unknown,
                or the archive does not exist.
        """
        if self.sdk_dir is None:
            raise ConfigurationError(
                f"Platform SDK directory is not configured (set sdk_dir or one of {', '.join(SDK_ENV_VARS)})"
            )
        if not self.compile_sdk_version:
            raise ConfigurationError("compile_sdk_version is not configured")

        jar = Path(self.sdk_dir) / "platforms" / self.compile_sdk_version / "android.jar"
        if not jar.is_file():
            raise ConfigurationError(
                f"Platform base library not found: {jar}",
                context={"sdk_dir": str(self.sdk_dir), "compile_sdk_version": self.compile_sdk_version},
            )
        logger.debug("platform_base_library_resolved", path=str(jar))
        return jar
