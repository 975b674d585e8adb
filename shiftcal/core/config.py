# shiftcal/core/config.py

import os
from pathlib import Path
from typing import Final


# ==========================
# Entorno
# ==========================

#: Production mode switches logging to JSON files and enables Sentry.
IS_PRODUCTION: Final[bool] = os.getenv("PRODUCTION", "false").lower() == "true"

#: SQLAlchemy database URL.
DATABASE_URL: Final[str] = os.getenv("SHIFTCAL_DATABASE_URL", "sqlite:///./shiftcal.db")

#: Directory with settings.json and shift_types.json.
#: Defaults to the data files shipped inside the package.
DATA_DIR: Final[Path] = Path(os.getenv("SHIFTCAL_DATA_DIR", str(Path(__file__).resolve().parent.parent / "data")))

#: Comma-separated origins allowed by CORS in production.
CORS_ORIGINS: Final[list[str]] = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]


# ==========================
# Formatos de fecha
# ==========================

#: Formato ISO para fechas (YYYY-MM-DD) en la API y en el almacenamiento.
DATE_FORMAT_ISO: Final[str] = "%Y-%m-%d"


# ==========================
# Referencia de ciclos
# ==========================

#: Lunes desde el que se cuentan todos los ciclos de semanas y días.
#: Se usa solo si settings.json no define cycle_reference_date.
DEFAULT_CYCLE_REFERENCE_DATE: Final[str] = "2025-12-29"

#: Largo por defecto de las plantillas manuales (ESPECIAL).
DEFAULT_MANUAL_CYCLE_DAYS: Final[int] = 28

#: Zona horaria anunciada en los calendarios exportados.
DEFAULT_TIMEZONE: Final[str] = "America/Santiago"


# ==========================
# Ley 40 horas
# ==========================

#: Horas de trabajo en un día normal (10 horas menos 1 hora de colación).
REGULAR_DAY_HOURS: Final[int] = 9

#: Horas de trabajo en un día reducido.
REDUCED_DAY_HOURS: Final[int] = 8

#: Desplazamientos desde el lunes para los días reducidos (martes, jueves).
REDUCED_DAY_OFFSETS: Final[tuple[int, ...]] = (1, 3)
