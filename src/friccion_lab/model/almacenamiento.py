"""
Almacenamiento / exportacion de resultados

Este modulo convierte el snapshot del experimento (ExperimentoFriccion.exportar_snapshot())
a los formatos de salida:

- Texto JSON (lo que muestra la vista en el cuadro de exportacion)
- DataFrame de pandas (tabla de resultados con los settings como columnas)
- Archivos JSON y CSV en disco

Nota:
- Solo se escribe. Nada de lo exportado se vuelve a leer en otra sesion.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)


# Orden de columnas del CSV (mismo orden que la tabla de la vista)
COLUMNAS_RESULTADOS = [
    "trial",
    "weightsCount",
    "totalMassKg",
    "normalForceN",
    "frictionForceN",
    "mu",
    "done",
]


def snapshot_a_json(snapshot: dict, indent: int = 2) -> str:
    """Texto JSON legible del snapshot (None -> null)."""
    return json.dumps(snapshot, indent=indent, ensure_ascii=False)


def snapshot_a_dataframe(snapshot: dict) -> pd.DataFrame:
    """
    Una fila por ensayo, en orden de indice.

    Los settings se repiten en cada fila para que el CSV sea autocontenido.
    """
    df = pd.DataFrame(snapshot["results"], columns=COLUMNAS_RESULTADOS)

    for clave, valor in snapshot["settings"].items():
        df[clave] = valor

    return df


def nombre_archivo(prefijo: str, extension: str, ahora: Optional[datetime] = None) -> str:
    """<prefijo>_<YYYY-mm-dd_HH-MM-SS>.<extension>"""
    ahora = ahora if ahora is not None else datetime.now()
    timestamp = ahora.strftime("%Y-%m-%d_%H-%M-%S")
    return f"{prefijo}_{timestamp}.{extension}"


def guardar_json(snapshot: dict, ruta) -> Path:
    """Escribe el snapshot como JSON. Crea la carpeta si no existe."""
    path = Path(ruta)
    path.parent.mkdir(parents=True, exist_ok=True)

    path.write_text(snapshot_a_json(snapshot), encoding="utf-8")

    logger.info("JSON generado: %s", path)
    return path


def guardar_csv(snapshot: dict, ruta) -> Path:
    """Escribe la tabla de resultados como CSV. Crea la carpeta si no existe."""
    path = Path(ruta)
    path.parent.mkdir(parents=True, exist_ok=True)

    snapshot_a_dataframe(snapshot).to_csv(path, index=False)

    logger.info("CSV generado: %s", path)
    return path
