"""API Schemas - Request and Response DTOs

Field names on the wire follow the public API (French camelCase aliases);
Python attributes use the domain names.
"""
from pydantic import BaseModel, EmailStr, Field, validator
from datetime import date, datetime
from typing import Generic, List, Optional, TypeVar

from domain.enums import ReservationStatus

PHONE_PATTERN = r"^[0-9+\-\s()]{10,20}$"
ROOM_TYPE_PATTERN = r"^(SIMPLE|SUITE)$"

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for every DTO: accepts both aliases and attribute names"""

    class Config:
        populate_by_name = True


# ============================================================================
# ROOM SCHEMAS
# ============================================================================

class RoomRequest(ApiModel):
    """Create / update room request DTO"""
    number: int = Field(alias="numero", ge=1, le=9999)
    price: float = Field(alias="prix", ge=0, le=999999.99)
    room_type: str = Field(alias="typeChambre", pattern=ROOM_TYPE_PATTERN)


class SuiteRequest(ApiModel):
    """Create suite request DTO"""
    number: int = Field(alias="numero", ge=1)
    price: float = Field(alias="prix", ge=0)
    suite_name: str = Field(alias="suiteNom", min_length=2, max_length=100)
    room_count: int = Field(alias="nombrePieces", ge=1, le=20, default=2)
    jacuzzi: bool = False

    @validator("suite_name")
    def suite_name_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Suite name is required")
        return v


class RoomResponse(ApiModel):
    """Room response DTO"""
    room_id: int = Field(alias="chambreId")
    number: int = Field(alias="numero")
    price: float = Field(alias="prix")
    room_type: str = Field(alias="typeChambre")
    suite_name: Optional[str] = Field(alias="suiteNom", default=None)
    room_count: Optional[int] = Field(alias="nombrePieces", default=None)
    jacuzzi: Optional[bool] = None


# ============================================================================
# CLIENT SCHEMAS
# ============================================================================

class ClientRequest(ApiModel):
    """Create / update client request DTO"""
    name: str = Field(alias="nom", min_length=2, max_length=50)
    first_name: str = Field(alias="prenom", min_length=2, max_length=50)
    email: EmailStr
    phone: str = Field(alias="telephone", pattern=PHONE_PATTERN)


class VipClientRequest(ClientRequest):
    """Create VIP client request DTO"""
    discount: float = Field(alias="remise", ge=0, le=1, default=0.15)


class ClientResponse(ApiModel):
    """Client response DTO"""
    client_id: int = Field(alias="clientId")
    name: str = Field(alias="nom")
    first_name: str = Field(alias="prenom")
    email: str
    phone: str = Field(alias="telephone")
    kind: str = Field(alias="typeClient")
    discount: Optional[float] = Field(alias="remise", default=None)


# ============================================================================
# EMPLOYEE SCHEMAS
# ============================================================================

class EmployeeRequest(ApiModel):
    """Create / update employee request DTO"""
    name: str = Field(alias="nom", min_length=2, max_length=50)
    job_title: str = Field(alias="poste", min_length=2, max_length=50)
    salary: float = Field(alias="salaire", ge=0, le=999999.99)


class EmployeeResponse(ApiModel):
    """Employee response DTO"""
    employee_id: int = Field(alias="employeId")
    name: str = Field(alias="nom")
    job_title: str = Field(alias="poste")
    salary: float = Field(alias="salaire")


# ============================================================================
# RESERVATION SCHEMAS
# ============================================================================

class ReservationDates(ApiModel):
    """Stay dates: start today or later, end in the future"""
    start_date: date = Field(alias="dateDebut")
    end_date: date = Field(alias="dateFin")

    @validator("start_date")
    def start_not_in_past(cls, v):
        if v < date.today():
            raise ValueError("Start date must be today or later")
        return v

    @validator("end_date")
    def end_in_future(cls, v):
        if v <= date.today():
            raise ValueError("End date must be in the future")
        return v


class CreateReservationRequest(ReservationDates):
    """Create reservation request DTO"""
    client_id: int = Field(alias="clientId", ge=1)
    room_id: int = Field(alias="chambreId", ge=1)
    employee_id: Optional[int] = Field(alias="employeId", ge=1, default=None)


class CreateOnlineReservationRequest(ReservationDates):
    """Create online reservation request DTO"""
    client_id: int = Field(alias="clientId")
    room_id: int = Field(alias="chambreId")
    platform: str = Field(alias="plateforme", min_length=1, default="SiteWeb")
    discount: float = Field(alias="remise", ge=0, le=1, default=0.0)

    @validator("platform")
    def platform_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Platform is required")
        return v


class UpdateReservationRequest(CreateReservationRequest):
    """Update reservation request DTO"""
    status: Optional[ReservationStatus] = Field(alias="statut", default=None)


class ReservationResponse(ApiModel):
    """Reservation response DTO"""
    reservation_id: int = Field(alias="reservationId")
    start_date: date = Field(alias="dateDebut")
    end_date: date = Field(alias="dateFin")
    status: str = Field(alias="statut")
    kind: str = Field(alias="typeReservation")
    client: ClientResponse
    room: RoomResponse = Field(alias="chambre")
    employee: Optional[EmployeeResponse] = Field(alias="employe", default=None)
    platform: Optional[str] = Field(alias="plateforme", default=None)
    discount: Optional[float] = Field(alias="remise", default=None)
    amount: float = Field(alias="montant")


class AmountResponse(ApiModel):
    """Computed amount response DTO"""
    amount: float = Field(alias="montant")


# ============================================================================
# SHARED SCHEMAS
# ============================================================================

class PageResponse(ApiModel, Generic[T]):
    """One page of a listing"""
    content: List[T]
    total_elements: int = Field(alias="totalElements")
    total_pages: int = Field(alias="totalPages")
    number: int
    size: int


class ErrorResponse(ApiModel):
    """Uniform error body"""
    timestamp: datetime = Field(default_factory=datetime.now)
    status: int
    error: str
    message: str
    path: Optional[str] = None
    errors: Optional[List[str]] = None
