from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["AndroidPackageFormat", "AndroidDeploymentOptions"]


class AndroidPackageFormat(Enum):
    APK = "apk"
    AAB = "aab"

    @property
    def msbuild_value(self) -> str:
        """Value of the ``AndroidPackageFormats`` property."""
        return self.value

    @classmethod
    def parse(cls, value: str) -> AndroidPackageFormat:
        """Raises ValueError for anything but apk/aab."""
        return cls(value.strip().lower())


@dataclass(frozen=True, slots=True)
class AndroidDeploymentOptions:
    package_name: str
    application_id: str
    application_version: int
    display_version: str
    keystore: bytes
    key_alias: str
    key_pass: str
    store_pass: str
    package_format: AndroidPackageFormat = AndroidPackageFormat.APK
    sdk_path: str | None = None

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks.
        return (
            f"AndroidDeploymentOptions(package_name={self.package_name!r}, "
            f"application_id={self.application_id!r}, "
            f"display_version={self.display_version!r}, "
            f"package_format={self.package_format.value!r})"
        )
