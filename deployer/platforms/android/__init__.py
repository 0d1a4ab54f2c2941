"""Android deployment."""

from .deployment import AndroidDeployment, package_file_name, select_packages
from .keystore import TempKeystore
from .options import AndroidDeploymentOptions, AndroidPackageFormat
from .sdk import AndroidSdk
from .workload import AndroidWorkloadGuard

__all__ = [
    "AndroidDeployment",
    "package_file_name",
    "select_packages",
    "TempKeystore",
    "AndroidDeploymentOptions",
    "AndroidPackageFormat",
    "AndroidSdk",
    "AndroidWorkloadGuard",
]
