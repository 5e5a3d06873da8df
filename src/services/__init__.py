from src.services import task_service


__all__ = [
    "task_service",
]
