from __future__ import annotations

from clavesalud.app.application.agenda.dtos import AccionToggle, ContextoAgenda
from clavesalud.app.application.agenda.plantilla_slots import generar_slots
from clavesalud.app.application.agenda.resolver_slots import listar_reservas_del_dia, resolver_estados_slots
from clavesalud.app.domain.enums import EstadoSlot

FECHA = "2026-03-10"


def _estados(container, en_vivo) -> list[EstadoSlot]:
    horas = generar_slots(container.obtener_config_agenda().ejecutar("c1", "p2"))
    return [
        s.estado
        for s in resolver_estados_slots(en_vivo.instantanea.bloques, profesional_id="p2", fecha=FECHA, horas=horas)
    ]


def test_jornada_de_recepcion_con_reserva_externa(container, seed_agenda, nuevo_bloque_reservado) -> None:
    en_vivo = container.agenda_en_vivo()
    en_vivo.seleccionar("c1", "p2")
    contexto = ContextoAgenda(centro=seed_agenda["centro"], profesional_id="p2", usuario=container.user_context)
    uc = container.alternar_bloque()

    assert _estados(container, en_vivo) == [EstadoSlot.CERRADO] * 3

    assert uc.ejecutar(contexto, FECHA, "09:00").accion == AccionToggle.ABIERTO
    assert uc.ejecutar(contexto, FECHA, "09:20").accion == AccionToggle.ABIERTO
    assert _estados(container, en_vivo) == [EstadoSlot.ABIERTO, EstadoSlot.ABIERTO, EstadoSlot.CERRADO]

    # Un paciente reserva 09:20 desde el portal público.
    container.bloques_repo.create(
        nuevo_bloque_reservado(id="portal-1", profesional_id="p2", fecha=FECHA, hora="09:20")
    )
    assert _estados(container, en_vivo) == [EstadoSlot.ABIERTO, EstadoSlot.RESERVADO, EstadoSlot.CERRADO]

    detalle = uc.ejecutar(contexto, FECHA, "09:20")
    assert detalle.accion == AccionToggle.DETALLE_RESERVA
    assert detalle.bloque is not None and detalle.bloque.id == "portal-1"

    assert uc.ejecutar(contexto, FECHA, "09:00").accion == AccionToggle.CERRADO
    assert _estados(container, en_vivo) == [EstadoSlot.CERRADO, EstadoSlot.RESERVADO, EstadoSlot.CERRADO]

    reservas = listar_reservas_del_dia(en_vivo.instantanea.bloques, "p2", FECHA)
    assert [r.hora for r in reservas] == ["09:20"]

    mensajes = container.preparar_mensajes_reserva().ejecutar(
        detalle.bloque,
        centro_id="c1",
        centro_nombre=seed_agenda["centro"].nombre,
        profesional_nombre="Pedro Rojas",
    )
    assert mensajes.confirmacion is not None
    assert "Pedro Rojas" in mensajes.confirmacion.mensaje

    acciones = [e.accion.value for e in reversed(container.auditoria_repo.listar("c1"))]
    assert acciones == ["ABRIR_BLOQUE", "ABRIR_BLOQUE", "VER_DETALLE_RESERVA", "CERRAR_BLOQUE"]
    assert [t["tipo"] for t in container.toasts.notificaciones] == ["success", "success", "info"]


def test_dos_puestos_sobre_el_mismo_centro_ven_los_cambios(container, seed_agenda, db_connection) -> None:
    puesto_a = container.agenda_en_vivo()
    puesto_b = container.agenda_en_vivo()
    puesto_a.seleccionar("c1", "p2")
    puesto_b.seleccionar("c1", "p2")
    contexto = ContextoAgenda(centro=seed_agenda["centro"], profesional_id="p2", usuario=container.user_context)

    otra_conexion = container.proveedor_conexion.obtener()
    try:
        resultado = container.alternar_bloque(otra_conexion).ejecutar(contexto, FECHA, "09:40")
    finally:
        container.proveedor_conexion.cerrar_conexion_del_hilo_actual()

    assert resultado.accion == AccionToggle.ABIERTO
    assert [b.hora for b in puesto_a.instantanea.bloques] == ["09:40"]
    assert [b.hora for b in puesto_b.instantanea.bloques] == ["09:40"]


def test_clic_rechazado_no_cambia_la_agenda(container, seed_agenda) -> None:
    en_vivo = container.agenda_en_vivo()
    en_vivo.seleccionar("c1", "p2")
    contexto = ContextoAgenda(centro=seed_agenda["centro"], profesional_id="p2", usuario=container.user_context)

    resultado = container.alternar_bloque().ejecutar(contexto, "2026-03-01", "09:00")

    assert resultado.accion == AccionToggle.RECHAZADO
    assert en_vivo.instantanea.bloques == ()
    assert container.auditoria_repo.listar("c1") == []
