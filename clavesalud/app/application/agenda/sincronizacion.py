"""
Instantánea viva de la agenda de un profesional.

La agenda se recarga cada vez que el almacén publica un cambio para el centro
seleccionado. Mientras hay escrituras en curso se expone `sincronizando`.
Un fallo de lectura deja la instantánea vacía (todo cerrado) y avisa una vez.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from clavesalud.app.application.ports.bloques_agenda_port import CancelarSuscripcion, RepositorioBloquesAgenda
from clavesalud.app.application.ports.notificador_port import NotificadorUsuario
from clavesalud.app.bootstrap_logging import get_logger, log_soft_exception
from clavesalud.app.domain.agenda import BloqueAgenda
from clavesalud.app.domain.exceptions import ErrorAlmacenAgenda

LOGGER = get_logger(__name__)

Despachador = Callable[[Callable[[], None]], None]
ObservadorInstantanea = Callable[["InstantaneaAgenda"], None]


def _despachar_inmediato(tarea: Callable[[], None]) -> None:
    tarea()


@dataclass(frozen=True, slots=True)
class InstantaneaAgenda:
    centro_id: str | None = None
    profesional_id: str | None = None
    bloques: tuple[BloqueAgenda, ...] = ()
    error_lectura: bool = False
    sincronizando: bool = False


@dataclass(slots=True)
class AgendaEnVivo:
    repositorio: RepositorioBloquesAgenda
    notificador: NotificadorUsuario
    traductor: Callable[[str], str]
    despachar: Despachador = _despachar_inmediato
    _centro_id: str | None = field(default=None, init=False)
    _profesional_id: str | None = field(default=None, init=False)
    _bloques: tuple[BloqueAgenda, ...] = field(default=(), init=False)
    _error_lectura: bool = field(default=False, init=False)
    _escrituras_pendientes: int = field(default=0, init=False)
    _cancelar: CancelarSuscripcion | None = field(default=None, init=False)
    _observadores: list[ObservadorInstantanea] = field(default_factory=list, init=False)

    @property
    def sincronizando(self) -> bool:
        return self._escrituras_pendientes > 0

    @property
    def instantanea(self) -> InstantaneaAgenda:
        return InstantaneaAgenda(
            centro_id=self._centro_id,
            profesional_id=self._profesional_id,
            bloques=self._bloques,
            error_lectura=self._error_lectura,
            sincronizando=self.sincronizando,
        )

    def observar(self, callback: ObservadorInstantanea) -> Callable[[], None]:
        self._observadores.append(callback)

        def _cancelar() -> None:
            if callback in self._observadores:
                self._observadores.remove(callback)

        return _cancelar

    def seleccionar(self, centro_id: str | None, profesional_id: str | None) -> None:
        if centro_id != self._centro_id:
            self._desuscribir()
            if centro_id:
                self._cancelar = self.repositorio.suscribir(centro_id, self._al_cambiar_centro)
        self._centro_id = centro_id
        self._profesional_id = profesional_id
        self._error_lectura = False
        self.recargar()

    def recargar(self) -> None:
        if not self._centro_id or not self._profesional_id:
            self._bloques = ()
            self._notificar()
            return
        try:
            bloques = self.repositorio.listar_activos(self._centro_id, profesional_id=self._profesional_id)
        except ErrorAlmacenAgenda as exc:
            log_soft_exception(
                LOGGER,
                exc,
                {"action": "agenda_en_vivo_recargar", "centro_id": self._centro_id},
            )
            self._bloques = ()
            if not self._error_lectura:
                self._error_lectura = True
                self.notificador.error(self.traductor("agenda.toast.error_lectura"))
        else:
            self._bloques = tuple(bloques)
            self._error_lectura = False
            LOGGER.debug(
                "agenda_en_vivo_recargada",
                extra={"action": "agenda_en_vivo_recargar", "bloques": len(self._bloques)},
            )
        self._notificar()

    def iniciar_escritura(self) -> None:
        self._escrituras_pendientes += 1
        self._notificar()

    def finalizar_escritura(self) -> None:
        self._escrituras_pendientes = max(0, self._escrituras_pendientes - 1)
        self._notificar()

    def cerrar(self) -> None:
        self._desuscribir()
        self._observadores.clear()

    def _al_cambiar_centro(self, centro_id: str) -> None:
        self.despachar(lambda: self._recargar_si_corresponde(centro_id))

    def _recargar_si_corresponde(self, centro_id: str) -> None:
        if centro_id == self._centro_id:
            self.recargar()

    def _desuscribir(self) -> None:
        if self._cancelar is not None:
            self._cancelar()
            self._cancelar = None

    def _notificar(self) -> None:
        instantanea = self.instantanea
        for callback in list(self._observadores):
            callback(instantanea)
