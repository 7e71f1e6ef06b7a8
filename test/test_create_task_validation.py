"""Tests de validación del cuerpo de POST /tasks."""

import pytest

from core.application.create_task import (
    TITLE_MAX_LENGTH,
    CreateTaskCommand,
    parse_create_task,
    validate_new_task,
)
from core.domain.errors import ValidationError


class TestValidateNewTask:
    def test_acepta_titulo_y_descripcion(self):
        cmd = validate_new_task("Título", "Descripción")

        assert cmd == CreateTaskCommand(title="Título", description="Descripción")

    def test_acepta_titulo_en_el_limite(self):
        assert validate_new_task("a" * TITLE_MAX_LENGTH).title == "a" * TITLE_MAX_LENGTH

    @pytest.mark.parametrize(
        "title, message",
        [
            ("", "Title cannot be empty."),
            ("a" * (TITLE_MAX_LENGTH + 1), "Title cannot be longer than 255 characters."),
            (None, "Title must be a string."),
            (123, "Title must be a string."),
        ],
    )
    def test_rechaza_titulos_invalidos(self, title, message):
        with pytest.raises(ValidationError) as exc_info:
            validate_new_task(title)

        assert exc_info.value.message == message

    @pytest.mark.parametrize("description", [1, ["a"], {"a": 1}, True])
    def test_rechaza_descripcion_que_no_es_texto(self, description):
        with pytest.raises(ValidationError, match="Description"):
            validate_new_task("ok", description)


class TestParseCreateTask:
    def test_description_es_opcional(self):
        assert parse_create_task({"title": "ok"}) == CreateTaskCommand(title="ok")

    def test_description_null_es_valida(self):
        assert parse_create_task({"title": "ok", "description": None}).description is None

    def test_rechaza_propiedades_desconocidas(self):
        with pytest.raises(ValidationError, match="property is_completed should not exist"):
            parse_create_task({"title": "ok", "is_completed": True})

    def test_titulo_obligatorio(self):
        with pytest.raises(ValidationError, match="Title cannot be empty"):
            parse_create_task({"description": "sin título"})

    @pytest.mark.parametrize("payload", [[], "texto", 3, None])
    def test_rechaza_cuerpos_que_no_son_objeto(self, payload):
        with pytest.raises(ValidationError, match="JSON object"):
            parse_create_task(payload)
