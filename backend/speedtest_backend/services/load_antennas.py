# speedtest_backend/services/load_antennas.py

from typing import Optional

import pandas as pd
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import InputError, StorageError
from ..models.antennas import Antenna

# Operator export schema:
# "nom","latitude","longitude","wilaya","commune","cell_id_A","cell_id_B","cell_id_C"
REQUIRED_COLUMNS = ["latitude", "longitude"]
TEXT_COLUMNS = ["nom", "wilaya", "commune", "cell_id_A", "cell_id_B", "cell_id_C"]


def _text_or_none(value) -> Optional[str]:
    # short rows come back as NaN even with keep_default_na=False
    if value is None or pd.isna(value):
        return None
    value = str(value).strip()
    return value or None


def read_antennas_csv(source) -> pd.DataFrame:
    """
    Read and clean an antenna CSV (path or file-like).

    Everything is read as text so cell ids keep leading zeros. Rows whose
    coordinates are missing, non-numeric or out of range are dropped.
    """
    df = pd.read_csv(source, dtype=str, keep_default_na=False)
    df.columns = [c.strip() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise InputError(f"antenna CSV is missing columns: {missing}")

    for col in TEXT_COLUMNS:
        if col not in df.columns:
            df[col] = ""

    df["latitude"] = pd.to_numeric(df["latitude"].str.strip(), errors="coerce").astype(float)
    df["longitude"] = pd.to_numeric(df["longitude"].str.strip(), errors="coerce").astype(float)

    valid = df["latitude"].between(-90, 90) & df["longitude"].between(-180, 180)
    dropped = int((~valid).sum())
    if dropped:
        print(f"[load_antennas] Dropping {dropped} rows without usable coordinates.")

    return df[valid].reset_index(drop=True)


def load_antennas_csv(db: Session, source, replace: bool = False) -> int:
    """
    Load an operator antenna export into bts_antennas.

    With replace=True the existing catalog is cleared first, in the same
    transaction. Returns the number of antennas inserted.
    """
    df = read_antennas_csv(source)

    antennas = [
        Antenna(
            latitude=float(row["latitude"]),
            longitude=float(row["longitude"]),
            **{col: _text_or_none(row[col]) for col in TEXT_COLUMNS},
        )
        for row in df.to_dict(orient="records")
    ]

    try:
        if replace:
            db.query(Antenna).delete(synchronize_session=False)
        db.add_all(antennas)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("could not load antenna catalog") from e

    print(f"[load_antennas] Inserted {len(antennas)} antennas (replace={replace}).")
    return len(antennas)
