from clavesalud.app.domain.agenda import BloqueAgenda, ConfigAgenda, SlotResuelto, generar_id_bloque
from clavesalud.app.domain.centros import Centro, PlantillaWhatsapp, Profesional
from clavesalud.app.domain.enums import *  # noqa: F401,F403
from clavesalud.app.domain.exceptions import *  # noqa: F401,F403

__all__ = [
    "BloqueAgenda",
    "ConfigAgenda",
    "SlotResuelto",
    "generar_id_bloque",
    "Centro",
    "Profesional",
    "PlantillaWhatsapp",
]
