from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from clavesalud.app.application.agenda.notificaciones import placeholders_invalidos
from clavesalud.app.application.auditoria_agenda import AccionAuditoriaAgenda
from clavesalud.app.application.ports.centros_port import RepositorioPlantillasWhatsapp
from clavesalud.app.application.security import UserContext
from clavesalud.app.application.usecases.registrar_auditoria_agenda import RegistrarAuditoriaAgenda
from clavesalud.app.bootstrap_logging import get_logger
from clavesalud.app.domain.centros import PlantillaWhatsapp
from clavesalud.app.domain.exceptions import ValidationError

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class ListarPlantillasWhatsapp:
    repositorio: RepositorioPlantillasWhatsapp

    def ejecutar(self, centro_id: str) -> list[PlantillaWhatsapp]:
        return self.repositorio.listar(centro_id)


@dataclass(slots=True)
class GuardarPlantillasWhatsapp:
    """Reemplaza las plantillas del centro; rechaza marcadores fuera de los permitidos."""

    repositorio: RepositorioPlantillasWhatsapp
    traductor: Callable[[str], str]
    auditoria: RegistrarAuditoriaAgenda | None = None

    def ejecutar(
        self,
        contexto_usuario: UserContext,
        centro_id: str,
        plantillas: Sequence[PlantillaWhatsapp],
    ) -> list[PlantillaWhatsapp]:
        contexto_usuario.require_write("guardar_plantillas_whatsapp")
        normalizadas: list[PlantillaWhatsapp] = []
        for orden, plantilla in enumerate(plantillas):
            plantilla.validar()
            invalidos = placeholders_invalidos(plantilla.titulo) + placeholders_invalidos(plantilla.cuerpo)
            if invalidos:
                raise ValidationError(
                    self.traductor("plantillas.error.placeholders").format(
                        titulo=plantilla.titulo,
                        placeholders=", ".join(dict.fromkeys(invalidos)),
                    )
                )
            plantilla.orden = orden
            normalizadas.append(plantilla)

        ids = [p.id for p in normalizadas]
        if len(set(ids)) != len(ids):
            raise ValidationError(self.traductor("plantillas.error.duplicadas"))

        self.repositorio.reemplazar(centro_id, normalizadas)
        LOGGER.info(
            "plantillas_whatsapp_guardadas",
            extra={"action": "guardar_plantillas_whatsapp", "total": len(normalizadas)},
        )
        if self.auditoria is not None:
            self.auditoria.execute(
                contexto_usuario=contexto_usuario,
                centro_id=centro_id,
                accion=AccionAuditoriaAgenda.GUARDAR_PLANTILLAS_WHATSAPP,
                entidad_id=centro_id,
                metadata={"total": len(normalizadas)},
            )
        return normalizadas
