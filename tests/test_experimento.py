"""
Unit tests for the friction experiment model.
"""

import unittest
import random

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from friccion_lab.model.ensayo import Medicion
from friccion_lab.model.experimento import ExperimentoFriccion


class RngSecuencia:
    """
    Deterministic random source.

    uniform(a, b) returns a + f * (b - a), taking f from the given fractions
    in order and repeating the last one when they run out.
    """

    def __init__(self, *fracciones):
        self.fracciones = list(fracciones) or [0.5]
        self.llamadas = 0

    def uniform(self, a, b):
        i = min(self.llamadas, len(self.fracciones) - 1)
        self.llamadas += 1
        return a + self.fracciones[i] * (b - a)


def experimento_sin_ruido(*fracciones):
    exp = ExperimentoFriccion(rng=RngSecuencia(*fracciones))
    exp.actualizar_settings(0.5, 0.2, 0)
    return exp


class TestConstruccion(unittest.TestCase):
    """Tests for the initial state."""

    def setUp(self):
        self.exp = ExperimentoFriccion(rng=RngSecuencia(0.5))

    def test_settings_por_defecto(self):
        self.assertEqual(self.exp.g, 9.81)
        self.assertEqual(self.exp.masa_bloque_kg, 0.5)
        self.assertEqual(self.exp.masa_pesa_kg, 0.2)
        self.assertEqual(self.exp.ruido_pct, 3)

    def test_cuatro_ensayos(self):
        ensayos = self.exp.ensayos
        self.assertEqual(len(ensayos), 4)
        self.assertEqual([e.indice for e in ensayos], [1, 2, 3, 4])
        self.assertEqual([e.n_pesas for e in ensayos], [0, 1, 2, 3])
        for e in ensayos:
            self.assertFalse(e.hecho)
            self.assertIsNone(e.mu)
            self.assertIsNone(e.fuerza_normal_n)

    def test_sin_resultados(self):
        self.assertEqual(self.exp.conteo_hechos(), 0)
        self.assertIsNone(self.exp.mu_promedio())

    def test_mu_real_en_rango(self):
        for seed in range(20):
            exp = ExperimentoFriccion(rng=random.Random(seed))
            exp.actualizar_settings(1.0, 0.2, 0)
            m = exp.medir_friccion(0)
            mu = m.fuerza_friccion_n / m.fuerza_normal_n
            self.assertGreaterEqual(mu, 0.25)
            self.assertLessEqual(mu, 0.45)


class TestSettings(unittest.TestCase):
    """Tests for settings clamping."""

    def setUp(self):
        self.exp = ExperimentoFriccion(rng=RngSecuencia(0.5))

    def test_limite_inferior(self):
        self.exp.actualizar_settings(-10, -1, -5)
        self.assertEqual(self.exp.masa_bloque_kg, 0.05)
        self.assertEqual(self.exp.masa_pesa_kg, 0.01)
        self.assertEqual(self.exp.ruido_pct, 0)

    def test_limite_superior(self):
        self.exp.actualizar_settings(999, 50, 100)
        self.assertEqual(self.exp.masa_bloque_kg, 5)
        self.assertEqual(self.exp.masa_pesa_kg, 2)
        self.assertEqual(self.exp.ruido_pct, 20)

    def test_dentro_de_rango(self):
        self.exp.actualizar_settings(1.25, 0.3, 7.5)
        self.assertEqual(self.exp.masa_bloque_kg, 1.25)
        self.assertEqual(self.exp.masa_pesa_kg, 0.3)
        self.assertEqual(self.exp.ruido_pct, 7.5)

    def test_no_modifica_ensayos(self):
        self.exp.actualizar_settings(0.5, 0.2, 0)
        self.exp.autocompletar_ensayos()
        antes = [e.a_dict() for e in self.exp.ensayos]

        self.exp.actualizar_settings(2.0, 1.0, 10)
        self.assertEqual([e.a_dict() for e in self.exp.ensayos], antes)


class TestMediciones(unittest.TestCase):
    """Tests for simulated readings."""

    def test_peso_bloque_sin_ruido(self):
        exp = experimento_sin_ruido(0.5)
        self.assertAlmostEqual(exp.medir_peso_bloque_n(), 0.5 * 9.81)

    def test_escenario_dos_pesas(self):
        # f = 0.5 -> mu real = 0.35
        exp = experimento_sin_ruido(0.5)
        m = exp.medir_friccion(2)

        self.assertAlmostEqual(m.masa_total_kg, 0.9)
        self.assertAlmostEqual(m.fuerza_normal_n, 8.829)
        self.assertAlmostEqual(m.fuerza_friccion_n, 0.35 * 8.829)

    def test_sin_ruido_es_determinista(self):
        exp = experimento_sin_ruido(0.5)
        self.assertEqual(exp.medir_friccion(3), exp.medir_friccion(3))

    def test_medir_no_registra(self):
        exp = experimento_sin_ruido(0.5)
        exp.medir_friccion(1)
        exp.medir_peso_bloque_n()
        self.assertEqual(exp.conteo_hechos(), 0)

    def test_ruido_dentro_de_rango(self):
        exp = ExperimentoFriccion(rng=random.Random(7))
        exp.actualizar_settings(0.5, 0.2, 10)

        # Noise-free reference from a model with the same ground truth
        ref = ExperimentoFriccion(rng=random.Random(7))
        ref.actualizar_settings(0.5, 0.2, 0)
        ideal = ref.medir_friccion(2)

        normales = set()
        for _ in range(200):
            m = exp.medir_friccion(2)
            self.assertEqual(m.masa_total_kg, ideal.masa_total_kg)
            self.assertGreaterEqual(m.fuerza_normal_n, ideal.fuerza_normal_n * 0.9 - 1e-9)
            self.assertLessEqual(m.fuerza_normal_n, ideal.fuerza_normal_n * 1.1 + 1e-9)
            self.assertGreaterEqual(m.fuerza_friccion_n, ideal.fuerza_friccion_n * 0.9 - 1e-9)
            self.assertLessEqual(m.fuerza_friccion_n, ideal.fuerza_friccion_n * 1.1 + 1e-9)
            normales.add(m.fuerza_normal_n)

        self.assertGreater(len(normales), 1)

    def test_ruido_independiente_en_n_y_f(self):
        # f = 0.5 for mu, then 0.0 for N noise and 1.0 for F noise
        exp = ExperimentoFriccion(rng=RngSecuencia(0.5, 0.0, 1.0))
        exp.actualizar_settings(0.5, 0.2, 10)
        m = exp.medir_friccion(0)

        self.assertAlmostEqual(m.fuerza_normal_n, 4.905 * 0.9)
        self.assertAlmostEqual(m.fuerza_friccion_n, 0.35 * 4.905 * 1.1)


class TestEnsayos(unittest.TestCase):
    """Tests for trial recording and aggregates."""

    def setUp(self):
        self.exp = experimento_sin_ruido(0.5)

    def test_registrar_calcula_mu(self):
        m = self.exp.medir_friccion(1)
        ensayo = self.exp.registrar_ensayo(1, m)

        self.assertIs(ensayo, self.exp.ensayos[1])
        self.assertTrue(ensayo.hecho)
        self.assertEqual(ensayo.masa_total_kg, m.masa_total_kg)
        self.assertEqual(ensayo.mu, ensayo.fuerza_friccion_n / ensayo.fuerza_normal_n)

    def test_registrar_sobrescribe(self):
        self.exp.registrar_ensayo(0, Medicion(0.5, 10.0, 3.0))
        self.exp.registrar_ensayo(0, Medicion(0.5, 10.0, 4.0))

        ensayo = self.exp.buscar_ensayo(0)
        self.assertEqual(ensayo.fuerza_friccion_n, 4.0)
        self.assertEqual(ensayo.mu, 0.4)
        self.assertEqual(self.exp.conteo_hechos(), 1)

    def test_registrar_no_existe(self):
        with self.assertLogs('friccion_lab.model.experimento', level='WARNING'):
            resultado = self.exp.registrar_ensayo(7, Medicion(1.0, 9.81, 3.0))
        self.assertIsNone(resultado)
        self.assertEqual(self.exp.conteo_hechos(), 0)

    def test_buscar_ensayo(self):
        self.assertEqual(self.exp.buscar_ensayo(3).indice, 4)
        self.assertIsNone(self.exp.buscar_ensayo(-1))

    def test_conteo_hechos(self):
        self.exp.registrar_ensayo(0, self.exp.medir_friccion(0))
        self.assertEqual(self.exp.conteo_hechos(), 1)
        self.exp.registrar_ensayo(2, self.exp.medir_friccion(2))
        self.assertEqual(self.exp.conteo_hechos(), 2)

    def test_mu_promedio(self):
        self.exp.registrar_ensayo(0, Medicion(0.5, 10.0, 3.0))
        self.exp.registrar_ensayo(3, Medicion(1.1, 10.0, 3.4))
        self.assertAlmostEqual(self.exp.mu_promedio(), 0.32)

    def test_autocompletar(self):
        self.exp.autocompletar_ensayos()

        self.assertEqual(self.exp.conteo_hechos(), 4)
        for e in self.exp.ensayos:
            self.assertTrue(e.hecho)
            self.assertEqual(e.mu, e.fuerza_friccion_n / e.fuerza_normal_n)
        self.assertAlmostEqual(self.exp.mu_promedio(), 0.35)

    def test_autocompletar_sortea_ruido_por_ensayo(self):
        rng = RngSecuencia(0.5)
        exp = ExperimentoFriccion(rng=rng)
        llamadas_inicio = rng.llamadas

        exp.autocompletar_ensayos()

        # N and F for each of the four trials
        self.assertEqual(rng.llamadas - llamadas_inicio, 8)


class TestReset(unittest.TestCase):
    """Tests for reset semantics."""

    def test_reset_limpia_ensayos(self):
        exp = experimento_sin_ruido(0.5)
        exp.autocompletar_ensayos()
        exp.reset()

        self.assertEqual(exp.conteo_hechos(), 0)
        self.assertIsNone(exp.mu_promedio())
        for e in exp.ensayos:
            self.assertFalse(e.hecho)
            self.assertIsNone(e.mu)

    def test_reset_conserva_settings(self):
        exp = ExperimentoFriccion(rng=RngSecuencia(0.5))
        exp.actualizar_settings(1.5, 0.4, 12)
        exp.reset()

        self.assertEqual(exp.masa_bloque_kg, 1.5)
        self.assertEqual(exp.masa_pesa_kg, 0.4)
        self.assertEqual(exp.ruido_pct, 12)

    def test_reset_sortea_nuevo_mu(self):
        exp = experimento_sin_ruido(0.0, 1.0)

        m = exp.medir_friccion(0)
        self.assertAlmostEqual(m.fuerza_friccion_n / m.fuerza_normal_n, 0.25)

        exp.reset()
        m = exp.medir_friccion(0)
        self.assertAlmostEqual(m.fuerza_friccion_n / m.fuerza_normal_n, 0.45)


class TestSnapshot(unittest.TestCase):
    """Tests for the export snapshot."""

    def test_snapshot_inicial(self):
        exp = ExperimentoFriccion(rng=RngSecuencia(0.5))
        snap = exp.exportar_snapshot()

        self.assertEqual(set(snap.keys()), {"settings", "results"})
        self.assertEqual(len(snap["results"]), 4)
        for r in snap["results"]:
            self.assertIsNone(r["totalMassKg"])
            self.assertIsNone(r["normalForceN"])
            self.assertIsNone(r["frictionForceN"])
            self.assertIsNone(r["mu"])
            self.assertFalse(r["done"])

    def test_snapshot_no_expone_mu_real(self):
        snap = ExperimentoFriccion(rng=RngSecuencia(0.5)).exportar_snapshot()
        self.assertNotIn("muTrue", snap["settings"])
        self.assertEqual(
            set(snap["settings"].keys()),
            {"gravity", "blockMassKg", "weightMassKg", "noisePercent"},
        )

    def test_snapshot_despues_de_autocompletar(self):
        exp = ExperimentoFriccion(rng=random.Random(3))
        exp.actualizar_settings(0.8, 0.25, 5)
        exp.autocompletar_ensayos()
        snap = exp.exportar_snapshot()

        self.assertEqual(snap["settings"], {
            "gravity": 9.81,
            "blockMassKg": exp.masa_bloque_kg,
            "weightMassKg": exp.masa_pesa_kg,
            "noisePercent": exp.ruido_pct,
        })
        self.assertEqual([r["trial"] for r in snap["results"]], [1, 2, 3, 4])
        self.assertEqual([r["weightsCount"] for r in snap["results"]], [0, 1, 2, 3])
        for r in snap["results"]:
            self.assertTrue(r["done"])
            self.assertEqual(r["mu"], r["frictionForceN"] / r["normalForceN"])


if __name__ == '__main__':
    unittest.main()
