"""WebAssembly deployment."""

from .site import WasmDeployment, WasmSite

__all__ = ["WasmDeployment", "WasmSite"]
