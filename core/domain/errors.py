"""
Errores del dominio de tareas.

La capa HTTP los traduce a códigos de estado:
ValidationError → 400, NotFoundError → 404, PersistenceError → 500.
"""


class TaskError(Exception):
    """Error base de la aplicación."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskError):
    """Entrada mal formada (título vacío o demasiado largo, tipos incorrectos)."""


class NotFoundError(TaskError):
    """La tarea referenciada no existe."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f'Task with ID "{task_id}" not found.')
        self.task_id = task_id


class PersistenceError(TaskError):
    """La base de datos no está disponible o rechazó la operación."""
