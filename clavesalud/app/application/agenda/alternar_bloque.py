"""
Protocolo de clic sobre un slot de la agenda.

Cerrado -> se crea un bloque 'available' (condicional: solo si sigue libre).
Abierto -> se eliminan los bloques del slot que siguen disponibles.
Reservado -> no se toca el almacén; se devuelve el bloque para el detalle.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from clavesalud.app.application.agenda.dtos import AccionToggle, ContextoAgenda, ResultadoAlternarBloque
from clavesalud.app.application.agenda.resolver_slots import bloques_del_slot, es_fecha_pasada, resolver_slot
from clavesalud.app.application.auditoria_agenda import AccionAuditoriaAgenda
from clavesalud.app.application.ports.bloques_agenda_port import RepositorioBloquesAgenda
from clavesalud.app.application.ports.notificador_port import NotificadorUsuario
from clavesalud.app.application.usecases.registrar_auditoria_agenda import RegistrarAuditoriaAgenda
from clavesalud.app.bootstrap_logging import get_logger, log_soft_exception
from clavesalud.app.domain.agenda import BloqueAgenda, SlotResuelto
from clavesalud.app.domain.enums import EstadoSlot
from clavesalud.app.domain.exceptions import (
    AuthorizationError,
    BusinessRuleError,
    CentroNoSeleccionadoError,
    DomainError,
    ErrorAlmacenAgenda,
    ValidationError,
)
from clavesalud.app.domain.value_objects import parse_fecha_iso, parse_hhmm_a_minutos

LOGGER = get_logger(__name__)
_OPERACION = "alternar_bloque_agenda"


@dataclass(slots=True)
class AlternarBloqueAgenda:
    repositorio: RepositorioBloquesAgenda
    notificador: NotificadorUsuario
    traductor: Callable[[str], str]
    reloj: Callable[[], date] = date.today
    auditoria: RegistrarAuditoriaAgenda | None = None

    def ejecutar(self, contexto: ContextoAgenda, fecha: str, hora: str) -> ResultadoAlternarBloque:
        try:
            self._comprobar_guardas(contexto, fecha, hora)
        except DomainError as exc:
            LOGGER.info(
                "agenda_toggle_rechazado",
                extra={"action": _OPERACION, "fecha": fecha, "hora": hora, "reason": type(exc).__name__},
            )
            self.notificador.warning(str(exc))
            return ResultadoAlternarBloque(AccionToggle.RECHAZADO, fecha, hora, motivo=type(exc).__name__)

        centro_id = contexto.centro_id or ""
        profesional_id = contexto.profesional_id or ""
        slot = SlotResuelto(hora=hora, estado=EstadoSlot.CERRADO)
        try:
            candidatos = self._candidatos(centro_id, profesional_id, fecha, hora)
            slot = resolver_slot(candidatos, hora)
            if slot.reservado:
                return self._mostrar_reserva(contexto, slot, fecha)
            if slot.abierto:
                return self._cerrar(contexto, candidatos, fecha, hora)
            return self._abrir(contexto, fecha, hora)
        except ErrorAlmacenAgenda as exc:
            log_soft_exception(
                LOGGER,
                exc,
                {"action": _OPERACION, "centro_id": centro_id, "fecha": fecha, "hora": hora},
            )
            self.notificador.error(self.traductor("agenda.toast.error_guardar"))
            return ResultadoAlternarBloque(
                AccionToggle.FALLIDO,
                fecha,
                hora,
                estado_final=slot.estado,
                bloque=slot.bloque,
                motivo=type(exc).__name__,
            )

    def _comprobar_guardas(self, contexto: ContextoAgenda, fecha: str, hora: str) -> None:
        if contexto.centro is None or not contexto.centro.activo:
            raise CentroNoSeleccionadoError(self.traductor("agenda.toast.sin_centro"))
        if contexto.solo_lectura:
            raise AuthorizationError(self.traductor("agenda.toast.solo_lectura"))
        if not contexto.profesional_id:
            raise ValidationError(self.traductor("agenda.toast.sin_profesional"))
        parse_hhmm_a_minutos(hora)
        if es_fecha_pasada(parse_fecha_iso(fecha), self.reloj()):
            raise BusinessRuleError(self.traductor("agenda.toast.fecha_pasada"))

    def _candidatos(self, centro_id: str, profesional_id: str, fecha: str, hora: str) -> list[BloqueAgenda]:
        bloques = self.repositorio.listar_activos(centro_id, profesional_id=profesional_id, fecha=fecha)
        return bloques_del_slot(bloques, profesional_id=profesional_id, fecha=fecha, hora=hora)

    def _mostrar_reserva(self, contexto: ContextoAgenda, slot: SlotResuelto, fecha: str) -> ResultadoAlternarBloque:
        bloque = slot.bloque
        self._auditar(contexto, AccionAuditoriaAgenda.VER_DETALLE_RESERVA, bloque.id if bloque else "")
        return ResultadoAlternarBloque(
            AccionToggle.DETALLE_RESERVA,
            fecha,
            slot.hora,
            estado_final=EstadoSlot.RESERVADO,
            bloque=bloque,
        )

    def _cerrar(
        self,
        contexto: ContextoAgenda,
        candidatos: list[BloqueAgenda],
        fecha: str,
        hora: str,
    ) -> ResultadoAlternarBloque:
        ids = [bloque.id for bloque in candidatos]
        eliminados = self.repositorio.eliminar_disponibles(ids)
        if eliminados < len(ids):
            actual = resolver_slot(
                self._candidatos(contexto.centro_id or "", contexto.profesional_id or "", fecha, hora),
                hora,
            )
            if actual.estado != EstadoSlot.CERRADO:
                return self._ocupado(actual, fecha, hora)
        LOGGER.info(
            "agenda_bloque_cerrado",
            extra={"action": _OPERACION, "fecha": fecha, "hora": hora, "eliminados": eliminados},
        )
        self.notificador.info(self.traductor("agenda.toast.bloque_cerrado"))
        self._auditar(contexto, AccionAuditoriaAgenda.CERRAR_BLOQUE, ids[0], {"eliminados": eliminados})
        return ResultadoAlternarBloque(AccionToggle.CERRADO, fecha, hora, estado_final=EstadoSlot.CERRADO)

    def _abrir(self, contexto: ContextoAgenda, fecha: str, hora: str) -> ResultadoAlternarBloque:
        centro_id = contexto.centro_id or ""
        profesional_id = contexto.profesional_id or ""
        bloque = BloqueAgenda.disponible(centro_id, profesional_id, fecha, hora)
        bloque.validar()
        if not self.repositorio.crear_si_libre(bloque):
            actual = resolver_slot(self._candidatos(centro_id, profesional_id, fecha, hora), hora)
            return self._ocupado(actual, fecha, hora)
        LOGGER.info("agenda_bloque_abierto", extra={"action": _OPERACION, "fecha": fecha, "hora": hora})
        self.notificador.success(self.traductor("agenda.toast.bloque_abierto"))
        self._auditar(contexto, AccionAuditoriaAgenda.ABRIR_BLOQUE, bloque.id)
        return ResultadoAlternarBloque(AccionToggle.ABIERTO, fecha, hora, estado_final=EstadoSlot.ABIERTO, bloque=bloque)

    def _ocupado(self, actual: SlotResuelto, fecha: str, hora: str) -> ResultadoAlternarBloque:
        """Otro puesto o una reserva cambió el slot entre la lectura y la escritura."""
        LOGGER.info(
            "agenda_bloque_ocupado",
            extra={"action": _OPERACION, "fecha": fecha, "hora": hora, "estado": actual.estado.value},
        )
        self.notificador.info(self.traductor("agenda.toast.bloque_ocupado"))
        return ResultadoAlternarBloque(
            AccionToggle.OCUPADO,
            fecha,
            hora,
            estado_final=actual.estado,
            bloque=actual.bloque,
        )

    def _auditar(
        self,
        contexto: ContextoAgenda,
        accion: AccionAuditoriaAgenda,
        entidad_id: str,
        metadata: dict[str, str | int | float | bool | None] | None = None,
    ) -> None:
        if self.auditoria is None:
            return
        try:
            self.auditoria.execute(
                contexto_usuario=contexto.usuario,
                centro_id=contexto.centro_id or "",
                accion=accion,
                entidad_id=entidad_id,
                metadata=metadata,
            )
        except ErrorAlmacenAgenda as exc:
            log_soft_exception(LOGGER, exc, {"action": "auditoria_agenda", "accion": accion.value})
