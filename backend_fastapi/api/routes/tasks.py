from typing import Any

from fastapi import APIRouter, Body, Depends, status

from backend_fastapi.api.deps import task_store
from core.application.create_task import parse_create_task
from core.application.task_store import TaskStore
from core.domain.models.task import Task

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post(
    "",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    summary="Crear una nueva tarea",
)
def create_task(
    payload: Any = Body(...),
    store: TaskStore = Depends(task_store),
) -> Task:
    """
    Crea una nueva tarea incompleta.

    - **title**: Título, obligatorio, hasta 255 caracteres.
    - **description**: Descripción opcional.
    """
    cmd = parse_create_task(payload)
    return store.create(cmd.title, cmd.description)


@router.get(
    "",
    response_model=list[Task],
    summary="Listar las 5 tareas incompletas más recientes",
)
def list_recent_tasks(store: TaskStore = Depends(task_store)) -> list[Task]:
    return store.find_recent_incomplete()


@router.get(
    "/{task_id}",
    response_model=Task,
    summary="Obtener una tarea",
)
def get_task(task_id: int, store: TaskStore = Depends(task_store)) -> Task:
    return store.find_by_id(task_id)


@router.patch(
    "/{task_id}/complete",
    response_model=Task,
    summary="Marcar una tarea como completada",
)
def complete_task(task_id: int, store: TaskStore = Depends(task_store)) -> Task:
    """
    Marca la tarea como completada y refresca `updated_at`.

    - **task_id**: id entero de la tarea.
    """
    return store.mark_complete(task_id)
