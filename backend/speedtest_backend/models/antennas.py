from sqlalchemy import Column, Integer, Text, Float
from ..db import Base


class Antenna(Base):
    __tablename__ = "bts_antennas"

    id = Column(Integer, primary_key=True, index=True)

    # Site name, e.g. "ALG_BAB_EZZOUAR_01"
    nom = Column(Text)

    latitude = Column(Float, index=True, nullable=False)
    longitude = Column(Float, index=True, nullable=False)

    wilaya = Column(Text)
    commune = Column(Text)

    # One logical cell per 120 degree sector; NULL if the sector is not configured
    cell_id_A = Column(Text)
    cell_id_B = Column(Text)
    cell_id_C = Column(Text)

    def __repr__(self) -> str:
        return f"<Antenna {self.nom!r} ({self.latitude}, {self.longitude})>"
