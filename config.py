"""
Configuración de la calculadora científica
"""
import os

APP_TITLE = "Calculadora Científica"

# Motor matemático: mpmath (True) o el módulo math de Python (False)
USE_MPMATH = False
MPMATH_DIGITS = 15

# Modo angular al iniciar la sesión y tras AC
DEFAULT_ANGLE_MODE = "DEG"

# Ventana
WINDOW_GEOMETRY = "420x640"
WINDOW_MIN_SIZE = (380, 600)

# Registro
LOG_LEVEL = os.environ.get("CALCULADORA_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
