"""Domain Enums"""
from enum import Enum


class ReservationStatus(str, Enum):
    EN_ATTENTE = "EN_ATTENTE"
    CONFIRMEE = "CONFIRMEE"
    ANNULEE = "ANNULEE"


class ReservationKind(str, Enum):
    STANDARD = "STANDARD"
    ONLINE = "ONLINE"


class ClientKind(str, Enum):
    STANDARD = "STANDARD"
    VIP = "VIP"


class RoomType(str, Enum):
    SIMPLE = "SIMPLE"
    SUITE = "SUITE"
