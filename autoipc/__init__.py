"""autoipc: Electron IPC bindings generated from TypeScript channel declarations."""

from .orchestrator import GenerationReport, Orchestrator

__all__ = ["GenerationReport", "Orchestrator"]

__version__ = "0.1.0"
