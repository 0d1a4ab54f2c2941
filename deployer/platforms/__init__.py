"""Per-platform deployments turning a publish output into shippable packages."""

from .android import AndroidDeployment, AndroidDeploymentOptions, AndroidPackageFormat
from .common import run_plan, run_plans
from .linux import LinuxDeployment
from .macos import MacOsDeployment, MacOsDeploymentOptions
from .wasm import WasmDeployment, WasmSite
from .windows import MsixOptions, WindowsDeployment, WindowsDeploymentOptions

__all__ = [
    "AndroidDeployment",
    "AndroidDeploymentOptions",
    "AndroidPackageFormat",
    "run_plan",
    "run_plans",
    "LinuxDeployment",
    "MacOsDeployment",
    "MacOsDeploymentOptions",
    "WasmDeployment",
    "WasmSite",
    "MsixOptions",
    "WindowsDeployment",
    "WindowsDeploymentOptions",
]
