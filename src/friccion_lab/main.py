"""
Lanzador de la vista Streamlit (script de consola "friccion-lab").

Uso:
    friccion-lab                          # abre la vista en el navegador
    friccion-lab --server.port 8600       # opciones extra se pasan a streamlit run

Equivale a:
    streamlit run <paquete>/view/vista_streamlit.py [opciones]
"""

import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def ruta_vista() -> Path:
    """Ruta al script de la vista dentro del paquete instalado."""
    return Path(__file__).resolve().parent / "view" / "vista_streamlit.py"


def construir_argv(extra=None) -> list:
    """argv que recibe la CLI de streamlit: run <vista> + opciones extra."""
    return ["streamlit", "run", str(ruta_vista())] + list(extra or [])


def main(argv=None) -> int:
    # Import aca: la CLI de streamlit es pesada y solo se necesita al lanzar
    from streamlit.web import cli as stcli

    extra = sys.argv[1:] if argv is None else argv
    sys.argv = construir_argv(extra)

    logger.info("Lanzando vista: %s", ruta_vista())
    return stcli.main()


if __name__ == "__main__":
    raise SystemExit(main())
