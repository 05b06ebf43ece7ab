"""
Ecuaciones del simulador de friccion

Este modulo contiene las funciones matematicas utilizadas por el modelo:

- Utilidades numericas (limitar rangos, muestreo uniforme, promedio)
- Dinamica basica del bloque (peso, masa total, fuerza de friccion)
- Coeficiente de friccion a partir de las fuerzas medidas
- Ruido de medicion del dinamometro

Nota:
- Todas las funciones son puras. La aleatoriedad llega siempre como parametro (rng),
  nunca desde el estado global del modulo random.
"""

from __future__ import annotations

from typing import Iterable, Optional


# -------------------------------------------------------
# Utilidades basicas
# -------------------------------------------------------

def limitar(valor: float, minimo: float, maximo: float) -> float:
    """Limita valor al rango [minimo, maximo]."""
    return min(maximo, max(minimo, valor))


def muestrear_uniforme(rng, minimo: float, maximo: float) -> float:
    """Valor uniforme en [minimo, maximo] tomado desde rng."""
    return rng.uniform(minimo, maximo)


def promedio(valores: Iterable[float]) -> Optional[float]:
    """
    Promedio aritmetico simple.

    Si no hay valores retorna None (no 0), para que la vista muestre "sin dato".
    """
    valores = list(valores)
    if len(valores) == 0:
        return None
    return sum(valores) / len(valores)


# -------------------------------------------------------
# Dinamica del bloque sobre la mesa
# -------------------------------------------------------

def peso(masa_kg: float, g: float) -> float:
    """Peso (N): P = m * g"""
    return masa_kg * g


def masa_total(masa_bloque_kg: float, n_pesas: int, masa_pesa_kg: float) -> float:
    """
    Masa total sobre la mesa (kg):
        m_total = m_bloque + n * m_pesa
    """
    return masa_bloque_kg + n_pesas * masa_pesa_kg


def fuerza_friccion(mu: float, normal_n: float) -> float:
    """Fuerza de friccion cinetica (N): F = mu * N"""
    return mu * normal_n


def coeficiente_friccion(friccion_n: float, normal_n: float) -> float:
    """
    Coeficiente de friccion a partir de las fuerzas medidas:
        mu = F / N
    """
    return friccion_n / normal_n


# -------------------------------------------------------
# Ruido del dinamometro
# -------------------------------------------------------

def aplicar_ruido(valor: float, ruido_pct: float, rng) -> float:
    """
    Aplica ruido uniforme de +/- ruido_pct % sobre valor.

    - Si ruido_pct es 0 retorna valor sin tocar rng.
    - Cada llamada hace su propio sorteo.
    - El resultado nunca es negativo (fuerzas y masas).
    """
    p = ruido_pct / 100.0
    if p == 0:
        return valor

    delta = valor * p
    ruidoso = valor + rng.uniform(-delta, delta)
    return max(0.0, ruidoso)
