from fastapi import Request

from core.application.task_store import TaskStore
from infrastructure.container import build_task_store


def task_store(request: Request) -> TaskStore:
    return build_task_store(request.app.state.task_repository)
