"""Container runtime adapters."""

from .mock_container_runtime import MockContainerRuntime

__all__ = ["MockContainerRuntime"]
