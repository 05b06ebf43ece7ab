"""
Controller del simulador de friccion (capa Controller del patron MVC)

El Controller es responsable de:
- Traducir las acciones del usuario (sliders, botones) a llamadas sobre ExperimentoFriccion
- Guardar el estado de la pantalla: pesas seleccionadas, ultimas lecturas, mensaje de estado
- Entregar a la vista los textos ya formateados (tabla, mu promedio, conteo)

Contrato con la View:
- ctrl.actualizar_settings(masa_bloque, masa_pesa, ruido)
- ctrl.seleccionar_pesas(n)
- ctrl.medir_peso()
- ctrl.medir_friccion()
- ctrl.autocompletar()
- ctrl.exportar()
- ctrl.reset()
- ctrl.filas_tabla() / ctrl.texto_promedio() / ctrl.texto_conteo() / ctrl.get_estado()

Este modulo no importa streamlit: se puede probar sin interfaz.
"""

from __future__ import annotations

import logging
from typing import Optional

from friccion_lab.config.settings import SETTINGS, Settings
from friccion_lab.model.almacenamiento import snapshot_a_dataframe, snapshot_a_json
from friccion_lab.model.ensayo import Ensayo
from friccion_lab.model.experimento import ExperimentoFriccion

logger = logging.getLogger(__name__)

SIN_DATO = "—"


def formatear(valor: Optional[float], digitos: int) -> str:
    """Numero con digitos decimales fijos, o SIN_DATO si no hay valor."""
    if valor is None:
        return SIN_DATO
    return f"{float(valor):.{digitos}f}"


class FriccionController:
    def __init__(self, experimento: Optional[ExperimentoFriccion] = None, settings: Settings = SETTINGS):
        self.settings = settings
        self.experimento = experimento if experimento is not None else ExperimentoFriccion(settings=settings)

        self.n_pesas_seleccionado = settings.pesas_por_ensayo[0]

        self.lectura_peso_n: Optional[float] = None
        self.lectura_friccion_n: Optional[float] = None

        # None = cuadro de exportacion oculto
        self.snapshot_export: Optional[dict] = None
        self.texto_export: Optional[str] = None

        self._estado = "Listo"

    # ----------------------------
    # Entradas del usuario
    # ----------------------------

    def actualizar_settings(self, masa_bloque, masa_pesa, ruido) -> None:
        """
        Recibe los valores crudos de los inputs y los pasa al modelo.

        Errores:
        - ValueError si algun valor no es numerico (el modelo no se modifica)
        """
        try:
            masa_bloque_kg = float(masa_bloque)
            masa_pesa_kg = float(masa_pesa)
            ruido_pct = float(ruido)
        except (TypeError, ValueError) as e:
            raise ValueError("Settings invalidos: conversion a numero fallo") from e

        self.experimento.actualizar_settings(masa_bloque_kg, masa_pesa_kg, ruido_pct)
        self._estado = "Settings actualizados"

    def seleccionar_pesas(self, n_pesas) -> None:
        """
        Selecciona la cantidad de pesas del proximo ensayo.

        Errores:
        - ValueError si n_pesas no es exactamente una de settings.pesas_por_ensayo
          (2.7, None o "2" se rechazan, no se truncan)
        """
        if isinstance(n_pesas, str) or n_pesas not in self.settings.pesas_por_ensayo:
            raise ValueError(
                f"Cantidad de pesas invalida: debe ser una de {list(self.settings.pesas_por_ensayo)}"
            )

        self.n_pesas_seleccionado = int(n_pesas)
        self._estado = f"Pesas seleccionadas: {self.n_pesas_seleccionado}"

    # ----------------------------
    # Botones
    # ----------------------------

    def medir_peso(self) -> float:
        self.lectura_peso_n = self.experimento.medir_peso_bloque_n()
        self._estado = "Peso del bloque medido"
        return self.lectura_peso_n

    def medir_friccion(self) -> Optional[Ensayo]:
        """
        Mide la friccion con las pesas seleccionadas y registra el ensayo.

        Retorna el ensayo registrado, o None si no existe (no cambia nada).
        """
        n = self.n_pesas_seleccionado
        if self.experimento.buscar_ensayo(n) is None:
            logger.warning("Medicion ignorada: no hay ensayo para %s pesas", n)
            return None

        medicion = self.experimento.medir_friccion(n)
        ensayo = self.experimento.registrar_ensayo(n, medicion)

        self.lectura_friccion_n = medicion.fuerza_friccion_n
        self._estado = self._estado_tras_medicion(f"Ensayo N° {ensayo.indice} completado")
        return ensayo

    def autocompletar(self) -> None:
        self.experimento.autocompletar_ensayos()
        self._estado = self._estado_tras_medicion("Autocompletado realizado")

    def exportar(self) -> str:
        """
        Congela el snapshot actual: el cuadro JSON y las descargas (JSON y CSV)
        salen de este mismo snapshot hasta el proximo exportar() o reset().
        """
        self.snapshot_export = self.experimento.exportar_snapshot()
        self.texto_export = snapshot_a_json(self.snapshot_export)
        self._estado = "JSON exportado"
        return self.texto_export

    def csv_export(self) -> Optional[str]:
        """CSV del ultimo snapshot exportado (None si no se ha exportado)."""
        if self.snapshot_export is None:
            return None
        return snapshot_a_dataframe(self.snapshot_export).to_csv(index=False)

    def reset(self) -> None:
        self.experimento.reset()

        self.lectura_peso_n = None
        self.lectura_friccion_n = None
        self.snapshot_export = None
        self.texto_export = None

        self._estado = "Reset. Puede comenzar de nuevo"

    def _estado_tras_medicion(self, mensaje: str) -> str:
        # Al completar todos los ensayos el estado pasa a "Completado (k/k)"
        total = len(self.experimento.ensayos)
        if self.experimento.conteo_hechos() == total:
            return f"Completado ({total}/{total})"
        return mensaje

    # ----------------------------
    # Salidas para la vista
    # ----------------------------

    def get_estado(self) -> str:
        return self._estado

    def filas_tabla(self) -> list:
        """Filas de la tabla de resultados, ya como texto."""
        dig = self.settings.digitos_fuerza
        filas = []
        for e in self.experimento.ensayos:
            filas.append({
                "Ensayo": str(e.indice),
                "Pesas": str(e.n_pesas),
                "m total (kg)": formatear(e.masa_total_kg, dig),
                "N (N)": formatear(e.fuerza_normal_n, dig),
                "F (N)": formatear(e.fuerza_friccion_n, dig),
                "mu": formatear(e.mu, self.settings.digitos_mu),
            })
        return filas

    def texto_promedio(self) -> str:
        return formatear(self.experimento.mu_promedio(), self.settings.digitos_mu)

    def texto_conteo(self) -> str:
        return f"{self.experimento.conteo_hechos()}/{len(self.experimento.ensayos)}"

    def texto_lectura_peso(self) -> str:
        return formatear(self.lectura_peso_n, self.settings.digitos_fuerza)

    def texto_lectura_friccion(self) -> str:
        return formatear(self.lectura_friccion_n, self.settings.digitos_fuerza)
