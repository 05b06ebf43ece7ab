"""
sesion.py
=========

Sesion completa del experimento desde la terminal, sin interfaz grafica.

FLUJO
-----
1) Se crea el experimento (con semilla opcional, para repetir la misma sesion).
2) Se aplican los settings de la linea de comandos (se limitan igual que en la vista).
3) Se autocompletan los 4 ensayos.
4) Se imprime la tabla de resultados y el mu promedio.
5) Se guardan los archivos JSON y/o CSV en la carpeta de salida.

Uso:
    python -m friccion_lab.sesion
    python -m friccion_lab.sesion --masa-bloque 1.2 --ruido 5 --seed 42 --formato ambos
    friccion-sesion --salida data --formato csv
"""

from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path

from friccion_lab.config.settings import SETTINGS
from friccion_lab.controller.controller import FriccionController
from friccion_lab.model.almacenamiento import guardar_csv, guardar_json, nombre_archivo
from friccion_lab.model.experimento import ExperimentoFriccion

logger = logging.getLogger(__name__)


def construir_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulador de friccion: sesion automatica")
    parser.add_argument("--masa-bloque", type=float, default=SETTINGS.masa_bloque_default_kg,
                        help="Masa del bloque (kg)")
    parser.add_argument("--masa-pesa", type=float, default=SETTINGS.masa_pesa_default_kg,
                        help="Masa de cada pesa (kg)")
    parser.add_argument("--ruido", type=float, default=SETTINGS.ruido_default_pct,
                        help="Ruido de medicion (+/- %%)")
    parser.add_argument("--seed", type=int, default=None, help="Semilla del generador aleatorio")
    parser.add_argument("--salida", default=SETTINGS.carpeta_salida, help="Carpeta de salida")
    parser.add_argument("--formato", choices=["json", "csv", "ambos"], default="json",
                        help="Formato de exportacion")
    return parser


def imprimir_resultados(ctrl: FriccionController) -> None:
    filas = ctrl.filas_tabla()
    columnas = list(filas[0].keys())

    print(" | ".join(f"{c:>12}" for c in columnas))
    print("-" * (15 * len(columnas)))
    for fila in filas:
        print(" | ".join(f"{fila[c]:>12}" for c in columnas))

    print()
    print(f"mu promedio: {ctrl.texto_promedio()}   ensayos: {ctrl.texto_conteo()}")


def ejecutar(args: argparse.Namespace) -> list:
    """Corre la sesion y retorna la lista de archivos generados."""
    experimento = ExperimentoFriccion(rng=random.Random(args.seed))
    ctrl = FriccionController(experimento)

    ctrl.actualizar_settings(args.masa_bloque, args.masa_pesa, args.ruido)
    ctrl.autocompletar()

    imprimir_resultados(ctrl)

    snapshot = experimento.exportar_snapshot()
    carpeta = Path(args.salida)

    generados = []
    if args.formato in ("json", "ambos"):
        ruta = carpeta / nombre_archivo(SETTINGS.prefijo_archivo, "json")
        generados.append(guardar_json(snapshot, ruta))
    if args.formato in ("csv", "ambos"):
        ruta = carpeta / nombre_archivo(SETTINGS.prefijo_archivo, "csv")
        generados.append(guardar_csv(snapshot, ruta))

    return generados


def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    args = construir_parser().parse_args(argv)

    try:
        generados = ejecutar(args)
    except OSError as e:
        logger.error("No se pudo escribir la salida: %s", e)
        return 1

    for path in generados:
        print(f"Archivo generado: {path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
