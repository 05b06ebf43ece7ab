"""
Configuracion central del simulador de friccion.

Idea:
- Aqui van los parametros fijos del experimento (gravedad, rangos, valores por defecto).
- El Modelo usa estos valores para limitar los settings y muestrear el mu real.
- El Controller y la View leen estos limites para armar sliders y opciones de pesas.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    # -------------------------------
    # Constantes fisicas
    # -------------------------------
    g: float = 9.81                  # aceleracion de gravedad (m/s^2), fija durante toda la sesion

    # -------------------------------
    # Coeficiente de friccion "real" (oculto al usuario)
    # Madera sobre madera
    # -------------------------------
    mu_real_min: float = 0.25
    mu_real_max: float = 0.45

    # -------------------------------
    # Bloque (kg)
    # -------------------------------
    masa_bloque_min_kg: float = 0.05
    masa_bloque_max_kg: float = 5.0
    masa_bloque_default_kg: float = 0.5

    # -------------------------------
    # Pesa adicional (kg)
    # -------------------------------
    masa_pesa_min_kg: float = 0.01
    masa_pesa_max_kg: float = 2.0
    masa_pesa_default_kg: float = 0.2

    # -------------------------------
    # Ruido de medicion (+/- %)
    # -------------------------------
    ruido_min_pct: float = 0.0
    ruido_max_pct: float = 20.0
    ruido_default_pct: float = 3.0

    # -------------------------------
    # Ensayos: un ensayo por cada cantidad de pesas
    # -------------------------------
    pesas_por_ensayo: tuple = (0, 1, 2, 3)

    # -------------------------------
    # Presentacion (decimales en la tabla)
    # -------------------------------
    digitos_fuerza: int = 2
    digitos_mu: int = 3

    # -------------------------------
    # Salida de datos
    # -------------------------------
    carpeta_salida: str = "salidas"  # carpeta por defecto de los archivos exportados
    prefijo_archivo: str = "friccion"


# Instancia global utilizada por el resto del proyecto
SETTINGS = Settings()
