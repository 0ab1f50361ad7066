from __future__ import annotations

import pytest

from clavesalud.app.application.security import Role, UserContext, parse_role
from clavesalud.app.domain.exceptions import AuthorizationError


@pytest.mark.parametrize(
    ("valor", "esperado"),
    [
        (None, Role.ADMIN),
        ("", Role.ADMIN),
        ("admin", Role.ADMIN),
        (" readonly ", Role.READONLY),
        ("superuser", Role.READONLY),
    ],
)
def test_parse_role(valor, esperado) -> None:
    assert parse_role(valor) == esperado


def test_require_write_en_solo_lectura() -> None:
    contexto = UserContext(role=Role.READONLY, username="auditor")

    assert contexto.can_write is False
    with pytest.raises(AuthorizationError, match="guardar_config_agenda"):
        contexto.require_write("guardar_config_agenda")


def test_require_write_admin() -> None:
    UserContext().require_write("alternar_bloque_agenda")


def test_container_lee_rol_y_usuario_del_entorno(db_connection, monkeypatch: pytest.MonkeyPatch) -> None:
    from clavesalud.app.container import ROLE_ENV, USER_ENV, build_container

    monkeypatch.setenv(ROLE_ENV, "readonly")
    monkeypatch.setenv(USER_ENV, "auditor")

    container = build_container(db_connection)

    assert container.user_context.role == Role.READONLY
    assert container.user_context.username == "auditor"
