from __future__ import annotations

import pytest

from clavesalud.app.application.agenda.notificaciones import (
    PrepararMensajesReserva,
    aplicar_plantilla,
    construir_enlace_whatsapp,
    etiqueta_fecha_larga,
    formatear_nombre_persona,
    mensaje_cancelacion,
    mensaje_confirmacion,
    normalizar_telefono,
    placeholders_invalidos,
)
from clavesalud.app.domain.agenda import BloqueAgenda
from clavesalud.app.domain.centros import PlantillaWhatsapp


@pytest.mark.parametrize(
    ("entrada", "esperado"),
    [
        ("912345678", "+56912345678"),
        ("56912345678", "+56912345678"),
        ("9 1234 5678", "+56912345678"),
        ("+56 9 1234-5678", "+56912345678"),
        ("(2) 2345 6789", "223456789"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalizar_telefono_chileno(entrada, esperado) -> None:
    assert normalizar_telefono(entrada) == esperado


def test_formatear_nombre_persona() -> None:
    assert formatear_nombre_persona("  JUAN   pérez ") == "Juan Pérez"
    assert formatear_nombre_persona("josé-luis araya") == "José-Luis Araya"
    assert formatear_nombre_persona(None) == ""


def test_etiqueta_fecha_larga() -> None:
    assert etiqueta_fecha_larga("2026-03-05") == "5 de marzo de 2026"
    assert etiqueta_fecha_larga("2026-12-31") == "31 de diciembre de 2026"
    assert etiqueta_fecha_larga("mañana") == "mañana"


def test_enlace_whatsapp_usa_solo_digitos_y_codifica_el_texto() -> None:
    url = construir_enlace_whatsapp("+56 9 1234 5678", "Hola Juan, ¿confirmas?")

    assert url == "https://wa.me/56912345678?text=Hola%20Juan%2C%20%C2%BFconfirmas%3F"


def test_enlace_whatsapp_no_escapa_signos_seguros() -> None:
    url = construir_enlace_whatsapp("912345678", "ok (sí)!")

    assert url.endswith("?text=ok%20(s%C3%AD)!")


def test_aplicar_plantilla_deja_marcadores_desconocidos() -> None:
    texto = "Hola {patientName}, control {nextControlDate} en {centerName}. {foo}"

    resultado = aplicar_plantilla(texto, {"patientName": "Juan", "centerName": "Los Andes"})

    assert resultado == "Hola Juan, control  en Los Andes. {foo}"


def test_placeholders_invalidos() -> None:
    assert placeholders_invalidos("Hola {patientName} {foo} {centerName} {bar}") == ["{foo}", "{bar}"]
    assert placeholders_invalidos(None) == []


def test_mensaje_confirmacion_texto_exacto(nuevo_bloque_reservado) -> None:
    bloque = nuevo_bloque_reservado()

    mensaje = mensaje_confirmacion(bloque, centro_nombre="Centro Los Andes", profesional_nombre="ana soto")

    assert mensaje == (
        "Estimado/a Juan Pérez, lo saludamos desde Centro Los Andes y queremos confirmar su hora "
        "con Ana Soto para el día 10 de marzo de 2026 a las 09:00. Agradecemos su confirmación, por favor."
    )


def test_mensaje_confirmacion_sin_nombres_usa_valores_por_defecto(nuevo_bloque_reservado) -> None:
    bloque = nuevo_bloque_reservado(nombre="x")
    bloque.paciente_nombre = ""

    mensaje = mensaje_confirmacion(bloque, centro_nombre=None, profesional_nombre=None)

    assert mensaje.startswith("Estimado/a Paciente, lo saludamos desde Centro Médico ")
    assert "con el profesional para el día" in mensaje


def test_mensaje_cancelacion(nuevo_bloque_reservado) -> None:
    bloque = nuevo_bloque_reservado()

    con_profesional = mensaje_cancelacion(bloque, centro_nombre="Centro Los Andes", profesional_nombre="ana soto")
    sin_profesional = mensaje_cancelacion(
        bloque,
        centro_nombre="Centro Los Andes",
        profesional_nombre=None,
        booking_url="https://reservas.example",
    )

    assert "el Dr. Ana Soto no podrá asistir a la consulta del 10 de marzo de 2026 a las 09:00." in con_profesional
    assert con_profesional.endswith("Puedes solicitar una nueva hora aquí: https://clavesalud-2.web.app")
    assert "el profesional asignado no podrá asistir" in sin_profesional
    assert sin_profesional.endswith("aquí: https://reservas.example")


def test_preparar_mensajes_de_bloque_no_reservado(repo_plantillas, traductor) -> None:
    uc = PrepararMensajesReserva(repo_plantillas, traductor)

    mensajes = uc.ejecutar(
        BloqueAgenda.disponible("c1", "p1", "2026-03-10", "09:00"),
        centro_id="c1",
        centro_nombre="Centro Los Andes",
        profesional_nombre="Ana Soto",
    )

    assert mensajes.disponible is False
    assert mensajes.plantillas == ()


def test_preparar_mensajes_de_reserva(repo_plantillas, traductor, nuevo_bloque_reservado) -> None:
    repo_plantillas.reemplazar(
        "c1",
        [
            PlantillaWhatsapp(id="control", titulo="Control", cuerpo="Hola {patientName}, tu control es el {nextControlDate}."),
            PlantillaWhatsapp(id="off", titulo="Apagada", cuerpo="No debe salir", habilitada=False),
        ],
    )
    uc = PrepararMensajesReserva(repo_plantillas, traductor)

    mensajes = uc.ejecutar(
        nuevo_bloque_reservado(telefono="9 8765 4321"),
        centro_id="c1",
        centro_nombre="Centro Los Andes",
        profesional_nombre="Ana Soto",
    )

    assert mensajes.disponible is True
    assert mensajes.confirmacion.titulo == "agenda.detalle.confirmar_whatsapp"
    assert mensajes.confirmacion.url.startswith("https://wa.me/56987654321?text=Estimado%2Fa%20Juan%20P%C3%A9rez")
    assert mensajes.cancelacion.clave == "cancelar"
    assert [p.clave for p in mensajes.plantillas] == ["control"]
    assert mensajes.plantillas[0].mensaje == "Hola Juan Pérez, tu control es el 10 de marzo de 2026."
