from peewee import (
    AutoField,
    BooleanField,
    CharField,
    Database,
    DateTimeField,
    Model,
    TextField,
)


class TaskModel(Model):
    # Sin Meta.database: cada repositorio usa una subclase de bind_task_model().
    id = AutoField()
    title = CharField(max_length=255)
    description = TextField(null=True)
    is_completed = BooleanField(default=False, index=True)
    created_at = DateTimeField(index=True)
    updated_at = DateTimeField()

    class Meta:
        table_name = "tasks"


def bind_task_model(database: Database) -> type[TaskModel]:
    """
    Devuelve una subclase de TaskModel enlazada solo a `database`.

    Database.bind() modificaría TaskModel para todo el proceso.
    """
    meta = type("Meta", (), {"database": database, "table_name": "tasks"})
    return type("TaskModel", (TaskModel,), {"Meta": meta, "__module__": __name__})
