"""Centros (tenants), profesionales y plantillas de mensajería por centro."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from clavesalud.app.domain.agenda import ConfigAgenda
from clavesalud.app.domain.enums import EstadoSuscripcionCentro, RolProfesional
from clavesalud.app.domain.value_objects import _require_non_empty


@dataclass(slots=True)
class Centro:
    """Centro de salud (tabla SQL: centros)."""

    id: str = ""
    nombre: str = ""
    estado_suscripcion: EstadoSuscripcionCentro = EstadoSuscripcionCentro.ACTIVE
    activo: bool = True

    @property
    def suspendido(self) -> bool:
        return self.estado_suscripcion == EstadoSuscripcionCentro.SUSPENDED

    def validar(self) -> None:
        self.id = _require_non_empty(self.id, "id")
        self.nombre = _require_non_empty(self.nombre, "nombre")


@dataclass(slots=True)
class Profesional:
    """Profesional dueño de una agenda dentro de un centro."""

    id: str = ""
    centro_id: str = ""
    nombre: str = ""
    rol: RolProfesional = RolProfesional.MEDICO
    config_agenda: ConfigAgenda = field(default_factory=ConfigAgenda)
    activo: bool = True

    def validar(self) -> None:
        self.id = _require_non_empty(self.id, "id")
        self.centro_id = _require_non_empty(self.centro_id, "centro_id")
        self.nombre = _require_non_empty(self.nombre, "nombre")


@dataclass(slots=True)
class PlantillaWhatsapp:
    id: str = ""
    titulo: str = ""
    cuerpo: str = ""
    habilitada: bool = True
    orden: Optional[int] = None

    def validar(self) -> None:
        self.id = _require_non_empty(self.id, "id")
        self.titulo = _require_non_empty(self.titulo, "titulo")
        self.cuerpo = _require_non_empty(self.cuerpo, "cuerpo")
