"""
Vista Streamlit del simulador de friccion (MVC)

Esta vista NO implementa el modelo ni la logica del experimento.
Solo:
- arma los controles (settings, pesas, botones)
- llama al FriccionController en respuesta a cada accion
- muestra lecturas, tabla de resultados y exportacion JSON / CSV

Contrato con Controller:
- ctrl.actualizar_settings(masa_bloque, masa_pesa, ruido)
- ctrl.seleccionar_pesas(n)
- ctrl.medir_peso() / ctrl.medir_friccion()
- ctrl.autocompletar() / ctrl.exportar() / ctrl.csv_export() / ctrl.reset()
- ctrl.filas_tabla() / ctrl.texto_promedio() / ctrl.texto_conteo() / ctrl.get_estado()

Nota:
- El controller vive en st.session_state (un experimento por sesion del navegador).
"""

import pandas as pd
import streamlit as st

from friccion_lab.config.settings import SETTINGS
from friccion_lab.controller.controller import FriccionController
from friccion_lab.model.almacenamiento import nombre_archivo


# ============================================================
# Helpers de session_state
# ============================================================

def _get_ctrl() -> FriccionController:
    ctrl = st.session_state.get("ctrl")
    if ctrl is None:
        ctrl = FriccionController()
        st.session_state["ctrl"] = ctrl
    return ctrl


# ============================================================
# Sidebar: settings del montaje
# ============================================================

def _sidebar_settings(ctrl: FriccionController) -> None:
    st.sidebar.header("Montaje")

    exp = ctrl.experimento

    masa_bloque = st.sidebar.slider(
        "Masa del bloque (kg)",
        min_value=float(SETTINGS.masa_bloque_min_kg),
        max_value=float(SETTINGS.masa_bloque_max_kg),
        value=float(exp.masa_bloque_kg),
        step=0.05,
    )

    masa_pesa = st.sidebar.slider(
        "Masa de cada pesa (kg)",
        min_value=float(SETTINGS.masa_pesa_min_kg),
        max_value=float(SETTINGS.masa_pesa_max_kg),
        value=float(exp.masa_pesa_kg),
        step=0.01,
    )

    ruido = st.sidebar.slider(
        "Ruido de medicion (%)",
        min_value=float(SETTINGS.ruido_min_pct),
        max_value=float(SETTINGS.ruido_max_pct),
        value=float(exp.ruido_pct),
        step=0.5,
    )

    cambio = (
        masa_bloque != exp.masa_bloque_kg
        or masa_pesa != exp.masa_pesa_kg
        or ruido != exp.ruido_pct
    )
    if cambio:
        try:
            ctrl.actualizar_settings(masa_bloque, masa_pesa, ruido)
        except ValueError as e:
            st.sidebar.error(str(e))


# ============================================================
# UI principal
# ============================================================

def iniciar():
    st.set_page_config(page_title="Laboratorio de friccion", layout="wide")

    st.title("Coeficiente de friccion")
    st.caption("Bloque arrastrado con dinamometro: 4 ensayos con 0, 1, 2 y 3 pesas")

    ctrl = _get_ctrl()

    _sidebar_settings(ctrl)

    col_med, col_res = st.columns([1, 2])

    # ------------------------------
    # Columna: mediciones
    # ------------------------------
    with col_med:
        st.subheader("Mediciones")

        n_pesas = st.radio(
            "Pesas sobre el bloque",
            list(SETTINGS.pesas_por_ensayo),
            index=list(SETTINGS.pesas_por_ensayo).index(ctrl.n_pesas_seleccionado),
            horizontal=True,
        )
        if n_pesas != ctrl.n_pesas_seleccionado:
            try:
                ctrl.seleccionar_pesas(n_pesas)
            except ValueError as e:
                st.error(str(e))

        if st.button("Medir peso del bloque"):
            ctrl.medir_peso()

        if st.button("Medir friccion"):
            if ctrl.medir_friccion() is None:
                st.warning("No existe ensayo para esa cantidad de pesas")

        if st.button("Autocompletar ensayos"):
            ctrl.autocompletar()

        if st.button("Exportar JSON"):
            ctrl.exportar()

        if st.button("Reset"):
            ctrl.reset()
            st.rerun()

        c1, c2 = st.columns(2)
        c1.metric("Peso del bloque (N)", ctrl.texto_lectura_peso())
        c2.metric("Friccion (N)", ctrl.texto_lectura_friccion())

    # ------------------------------
    # Columna: resultados
    # ------------------------------
    with col_res:
        st.subheader("Resultados")
        st.info(ctrl.get_estado())

        st.dataframe(pd.DataFrame(ctrl.filas_tabla()), hide_index=True)

        c1, c2 = st.columns(2)
        c1.metric("mu promedio", ctrl.texto_promedio())
        c2.metric("Ensayos", ctrl.texto_conteo())

        if ctrl.texto_export is not None:
            st.subheader("Exportacion")
            st.code(ctrl.texto_export, language="json")

            # JSON y CSV salen del mismo snapshot exportado
            csv_bytes = ctrl.csv_export().encode("utf-8")

            d1, d2 = st.columns(2)
            d1.download_button(
                "Descargar JSON",
                data=ctrl.texto_export.encode("utf-8"),
                file_name=nombre_archivo(SETTINGS.prefijo_archivo, "json"),
                mime="application/json",
            )
            d2.download_button(
                "Descargar CSV",
                data=csv_bytes,
                file_name=nombre_archivo(SETTINGS.prefijo_archivo, "csv"),
                mime="text/csv",
            )


if __name__ == "__main__":
    iniciar()
