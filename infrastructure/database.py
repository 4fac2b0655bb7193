"""Relational schema and session factory

One table per entity family; the specialization is stored in a discriminator
column and the variant-specific columns are nullable.
"""
import logging
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Float,
    ForeignKey,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
from sqlalchemy.pool import StaticPool

from infrastructure.config import DATABASE_URL

logger = logging.getLogger(__name__)

Base = declarative_base()


# =========================================================
# CLIENT
# =========================================================
class ClientRecord(Base):
    __tablename__ = "clients"

    client_id = Column(Integer, primary_key=True, autoincrement=True)
    nom = Column(String(50), nullable=False, index=True)
    prenom = Column(String(50), nullable=False, default="")
    email = Column(String(255), nullable=False)
    telephone = Column(String(20), nullable=False, default="")

    # STANDARD | VIP
    type_client = Column(String(10), nullable=False, default="STANDARD")
    remise = Column(Float, nullable=True)

    reservations = relationship("ReservationRecord", back_populates="client", cascade="all, delete", passive_deletes=True)


# =========================================================
# EMPLOYE
# =========================================================
class EmployeeRecord(Base):
    __tablename__ = "employees"

    employe_id = Column(Integer, primary_key=True, autoincrement=True)
    nom = Column(String(50), nullable=False, index=True)
    poste = Column(String(50), nullable=False, default="", index=True)
    salaire = Column(Float, nullable=False, default=0.0)

    reservations = relationship("ReservationRecord", back_populates="employe", cascade="all, delete", passive_deletes=True)


# =========================================================
# CHAMBRE
# =========================================================
class RoomRecord(Base):
    __tablename__ = "chambres"

    chambre_id = Column(Integer, primary_key=True, autoincrement=True)
    numero = Column(Integer, nullable=False)
    prix = Column(Float, nullable=False)

    # SIMPLE | SUITE
    type_chambre = Column(String(10), nullable=False, default="SIMPLE", index=True)
    suite_nom = Column(String(100), nullable=True)
    nombre_pieces = Column(Integer, nullable=True)
    jacuzzi = Column(Boolean, nullable=True)

    reservations = relationship("ReservationRecord", back_populates="chambre", cascade="all, delete", passive_deletes=True)


# =========================================================
# RESERVATION
# =========================================================
class ReservationRecord(Base):
    __tablename__ = "reservations"

    reservation_id = Column(Integer, primary_key=True, autoincrement=True)
    date_debut = Column(Date, nullable=False, index=True)
    date_fin = Column(Date, nullable=False)
    statut = Column(String(20), nullable=False, default="EN_ATTENTE", index=True)

    client_id = Column(Integer, ForeignKey("clients.client_id", ondelete="CASCADE"), nullable=False)
    chambre_id = Column(Integer, ForeignKey("chambres.chambre_id", ondelete="CASCADE"), nullable=False)
    employe_id = Column(Integer, ForeignKey("employees.employe_id", ondelete="CASCADE"), nullable=True)

    # STANDARD | ONLINE
    type_reservation = Column(String(10), nullable=False, default="STANDARD")
    plateforme = Column(String(100), nullable=True)
    remise = Column(Float, nullable=True)

    client = relationship("ClientRecord", back_populates="reservations", lazy="joined")
    chambre = relationship("RoomRecord", back_populates="reservations", lazy="joined")
    employe = relationship("EmployeeRecord", back_populates="reservations", lazy="joined")


def build_engine(url: str = DATABASE_URL) -> Engine:
    """Create the engine; in-memory SQLite shares a single connection"""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create missing tables"""
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready on %s", engine.url.render_as_string(hide_password=True))
