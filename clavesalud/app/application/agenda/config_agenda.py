from __future__ import annotations

from dataclasses import dataclass

from clavesalud.app.application.auditoria_agenda import AccionAuditoriaAgenda
from clavesalud.app.application.ports.config_agenda_port import RepositorioConfigAgenda
from clavesalud.app.application.security import UserContext
from clavesalud.app.application.usecases.registrar_auditoria_agenda import RegistrarAuditoriaAgenda
from clavesalud.app.bootstrap_logging import get_logger
from clavesalud.app.domain.agenda import ConfigAgenda
from clavesalud.app.domain.value_objects import _require_non_empty

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class ObtenerConfigAgenda:
    repositorio: RepositorioConfigAgenda

    def ejecutar(self, centro_id: str, profesional_id: str) -> ConfigAgenda:
        return self.repositorio.obtener(centro_id, profesional_id) or ConfigAgenda()


@dataclass(slots=True)
class GuardarConfigAgenda:
    repositorio: RepositorioConfigAgenda
    auditoria: RegistrarAuditoriaAgenda | None = None

    def ejecutar(
        self,
        contexto_usuario: UserContext,
        centro_id: str,
        profesional_id: str,
        config: ConfigAgenda,
    ) -> ConfigAgenda:
        contexto_usuario.require_write("guardar_config_agenda")
        centro_id = _require_non_empty(centro_id, "centro_id")
        profesional_id = _require_non_empty(profesional_id, "profesional_id")
        config.validar()
        normalizada = ConfigAgenda(
            hora_inicio=config.inicio_efectivo,
            hora_fin=config.fin_efectivo,
            duracion_minutos=config.duracion_efectiva,
        )
        self.repositorio.guardar(centro_id, profesional_id, normalizada)
        LOGGER.info(
            "config_agenda_guardada",
            extra={
                "action": "guardar_config_agenda",
                "hora_inicio": normalizada.hora_inicio,
                "hora_fin": normalizada.hora_fin,
                "duracion_minutos": normalizada.duracion_minutos,
            },
        )
        if self.auditoria is not None:
            self.auditoria.execute(
                contexto_usuario=contexto_usuario,
                centro_id=centro_id,
                accion=AccionAuditoriaAgenda.GUARDAR_CONFIG_AGENDA,
                entidad_id=profesional_id,
                metadata={
                    "hora_inicio": normalizada.hora_inicio,
                    "hora_fin": normalizada.hora_fin,
                    "duracion_minutos": normalizada.duracion_minutos,
                },
            )
        return normalizada
