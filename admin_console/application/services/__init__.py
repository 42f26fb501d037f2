from .crud_orchestrator import CrudOrchestrator, StateListener

__all__ = [
    "CrudOrchestrator",
    "StateListener",
]
