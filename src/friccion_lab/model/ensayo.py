"""
Estructuras de datos del experimento de friccion

- Medicion: sale de ExperimentoFriccion.medir_friccion() (lectura del dinamometro)
- Ensayo: una fila de la tabla de resultados (una por cantidad de pesas)

Estas clases son el contrato comun entre Model, Controller y View.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from friccion_lab.config.settings import SETTINGS
from friccion_lab.model.ecuaciones import coeficiente_friccion


@dataclass
class Medicion:
    masa_total_kg: float
    fuerza_normal_n: float
    fuerza_friccion_n: float


@dataclass
class Ensayo:
    indice: int
    n_pesas: int

    masa_total_kg: Optional[float] = None
    fuerza_normal_n: Optional[float] = None
    fuerza_friccion_n: Optional[float] = None

    mu: Optional[float] = None
    hecho: bool = False

    def registrar(self, medicion: Medicion) -> None:
        """
        Guarda una medicion en el ensayo y calcula mu = F / N.

        Si el ensayo ya estaba hecho, la medicion nueva reemplaza a la anterior.
        """
        self.masa_total_kg = medicion.masa_total_kg
        self.fuerza_normal_n = medicion.fuerza_normal_n
        self.fuerza_friccion_n = medicion.fuerza_friccion_n

        self.mu = coeficiente_friccion(medicion.fuerza_friccion_n, medicion.fuerza_normal_n)
        self.hecho = True

    def a_dict(self) -> dict:
        # Claves del formato de exportacion (JSON)
        return {
            "trial": self.indice,
            "weightsCount": self.n_pesas,
            "totalMassKg": self.masa_total_kg,
            "normalForceN": self.fuerza_normal_n,
            "frictionForceN": self.fuerza_friccion_n,
            "mu": self.mu,
            "done": self.hecho,
        }


def crear_ensayos(pesas_por_ensayo=SETTINGS.pesas_por_ensayo) -> list:
    """Crea un Ensayo por cada cantidad de pesas, con indice desde 1."""
    return [Ensayo(indice=i + 1, n_pesas=n) for i, n in enumerate(pesas_por_ensayo)]
