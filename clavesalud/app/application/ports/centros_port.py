from __future__ import annotations

from typing import Protocol

from clavesalud.app.domain.centros import Centro, PlantillaWhatsapp, Profesional


class RepositorioCentros(Protocol):
    def list_all(self, *, solo_activos: bool = True) -> list[Centro]:
        ...

    def get_by_id(self, centro_id: str) -> Centro | None:
        ...


class RepositorioProfesionales(Protocol):
    def listar_por_centro(self, centro_id: str, *, solo_activos: bool = True) -> list[Profesional]:
        ...

    def get_by_id(self, centro_id: str, profesional_id: str) -> Profesional | None:
        ...


class RepositorioPlantillasWhatsapp(Protocol):
    def listar(self, centro_id: str) -> list[PlantillaWhatsapp]:
        ...

    def reemplazar(self, centro_id: str, plantillas: list[PlantillaWhatsapp]) -> None:
        ...
