"""
Modelo del experimento de friccion (capa Modelo del patron MVC)

Responsabilidad:
- Guardar los settings del montaje (masa del bloque, masa de cada pesa, ruido)
- Mantener el coeficiente de friccion "real" (oculto al usuario)
- Simular las lecturas del dinamometro con ruido
- Registrar los 4 ensayos (0, 1, 2 y 3 pesas) y calcular el mu promedio
- Preparar el snapshot que exporta la vista

Este modulo no conoce al Controller ni a la View.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from friccion_lab.config.settings import SETTINGS, Settings
from friccion_lab.model import ecuaciones
from friccion_lab.model.ensayo import Ensayo, Medicion, crear_ensayos

logger = logging.getLogger(__name__)


class ExperimentoFriccion:
    """
    Experimento simulado de medicion del coeficiente de friccion.

    Parametros:
    - rng: fuente de aleatoriedad con metodo uniform(a, b) (por defecto random.Random())
    - settings: limites y valores por defecto (por defecto SETTINGS)

    El usuario solo ve "mediciones". El mu real se sortea al crear el experimento
    y en cada reset, y nunca se expone.
    """

    def __init__(self, rng=None, settings: Settings = SETTINGS):
        self._rng = rng if rng is not None else random.Random()
        self._settings = settings

        self.g = settings.g

        self._mu_real = self._sortear_mu_real()

        self.masa_bloque_kg = settings.masa_bloque_default_kg
        self.masa_pesa_kg = settings.masa_pesa_default_kg
        self.ruido_pct = settings.ruido_default_pct

        self._ensayos = crear_ensayos(settings.pesas_por_ensayo)

    # ----------------------------
    # Settings
    # ----------------------------

    def actualizar_settings(self, masa_bloque_kg: float, masa_pesa_kg: float, ruido_pct: float) -> None:
        """
        Actualiza los settings del montaje.

        Los valores fuera de rango se limitan al borde mas cercano (no se rechazan).
        Los ensayos ya medidos no se modifican.
        """
        s = self._settings
        self.masa_bloque_kg = ecuaciones.limitar(masa_bloque_kg, s.masa_bloque_min_kg, s.masa_bloque_max_kg)
        self.masa_pesa_kg = ecuaciones.limitar(masa_pesa_kg, s.masa_pesa_min_kg, s.masa_pesa_max_kg)
        self.ruido_pct = ecuaciones.limitar(ruido_pct, s.ruido_min_pct, s.ruido_max_pct)

        logger.debug(
            "Settings: bloque=%.3f kg pesa=%.3f kg ruido=%.1f%%",
            self.masa_bloque_kg, self.masa_pesa_kg, self.ruido_pct,
        )

    # ----------------------------
    # Mediciones simuladas
    # ----------------------------

    def medir_peso_bloque_n(self) -> float:
        """Peso del bloque (N) = m * g, leido con ruido."""
        ideal = ecuaciones.peso(self.masa_bloque_kg, self.g)
        return self._con_ruido(ideal)

    def medir_friccion(self, n_pesas: int) -> Medicion:
        """
        Simula el arrastre del bloque con n_pesas encima.

        - N = (m_bloque + n * m_pesa) * g   (+ ruido)
        - F = mu_real * N                   (+ ruido, sorteo independiente)

        No modifica ningun ensayo: el que llama decide donde registrar la medicion.
        """
        masa = ecuaciones.masa_total(self.masa_bloque_kg, n_pesas, self.masa_pesa_kg)
        normal = ecuaciones.peso(masa, self.g)
        friccion = ecuaciones.fuerza_friccion(self._mu_real, normal)

        return Medicion(
            masa_total_kg=masa,
            fuerza_normal_n=self._con_ruido(normal),
            fuerza_friccion_n=self._con_ruido(friccion),
        )

    # ----------------------------
    # Ensayos
    # ----------------------------

    @property
    def ensayos(self) -> tuple:
        return tuple(self._ensayos)

    def buscar_ensayo(self, n_pesas: int) -> Optional[Ensayo]:
        for ensayo in self._ensayos:
            if ensayo.n_pesas == n_pesas:
                return ensayo
        return None

    def registrar_ensayo(self, n_pesas: int, medicion: Medicion) -> Optional[Ensayo]:
        """
        Registra la medicion en el ensayo de n_pesas y retorna ese ensayo.

        Si no existe un ensayo con esa cantidad de pesas retorna None (no levanta error).
        """
        ensayo = self.buscar_ensayo(n_pesas)
        if ensayo is None:
            logger.warning("No existe ensayo para %s pesas", n_pesas)
            return None

        ensayo.registrar(medicion)
        logger.debug("Ensayo %d registrado: mu=%.4f", ensayo.indice, ensayo.mu)
        return ensayo

    def autocompletar_ensayos(self) -> None:
        """Mide y registra los 4 ensayos en orden, cada uno con su propio ruido."""
        for ensayo in self._ensayos:
            medicion = self.medir_friccion(ensayo.n_pesas)
            self.registrar_ensayo(ensayo.n_pesas, medicion)

        logger.info("Autocompletado: %d/%d ensayos", self.conteo_hechos(), len(self._ensayos))

    def reset(self) -> None:
        """
        Nuevo mu real y ensayos vacios.

        Los settings (masas y ruido) se mantienen.
        """
        self._mu_real = self._sortear_mu_real()
        self._ensayos = crear_ensayos(self._settings.pesas_por_ensayo)
        logger.info("Experimento reiniciado")

    # ----------------------------
    # Resultados
    # ----------------------------

    def conteo_hechos(self) -> int:
        return sum(1 for e in self._ensayos if e.hecho)

    def mu_promedio(self) -> Optional[float]:
        """Promedio de mu sobre los ensayos hechos, None si no hay ninguno."""
        return ecuaciones.promedio(e.mu for e in self._ensayos if e.hecho)

    def exportar_snapshot(self) -> dict:
        """
        Snapshot serializable del experimento:
            {"settings": {...}, "results": [ {...} x 4 ]}

        Los campos sin medir quedan en None (null en JSON), nunca en 0.
        """
        return {
            "settings": {
                "gravity": self.g,
                "blockMassKg": self.masa_bloque_kg,
                "weightMassKg": self.masa_pesa_kg,
                "noisePercent": self.ruido_pct,
            },
            "results": [e.a_dict() for e in self._ensayos],
        }

    # ----------------------------
    # Internos
    # ----------------------------

    def _sortear_mu_real(self) -> float:
        return ecuaciones.muestrear_uniforme(
            self._rng, self._settings.mu_real_min, self._settings.mu_real_max
        )

    def _con_ruido(self, valor: float) -> float:
        return ecuaciones.aplicar_ruido(valor, self.ruido_pct, self._rng)
