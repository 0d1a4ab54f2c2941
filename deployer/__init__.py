"""deployer - publish and package .NET applications for every platform."""

__version__ = "0.1.0"
