"""Domain Repository Interfaces"""
from abc import ABC, abstractmethod
from typing import Optional, List
from datetime import date

from domain.entities import Client, Employee, Room, Reservation
from domain.enums import ReservationStatus
from domain.value_objects import Page, PageRequest


class ClientRepository(ABC):
    """Repository interface for Client (both variants)"""

    @abstractmethod
    async def save(self, client: Client) -> Client:
        """Insert or update client, assigning an id on insert"""
        pass

    @abstractmethod
    async def find_by_id(self, client_id: int) -> Optional[Client]:
        pass

    @abstractmethod
    async def find_all(self, page_request: PageRequest) -> Page:
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> List[Client]:
        pass

    @abstractmethod
    async def exists_by_id(self, client_id: int) -> bool:
        pass

    @abstractmethod
    async def delete(self, client_id: int) -> bool:
        pass


class EmployeeRepository(ABC):
    """Repository interface for Employee"""

    @abstractmethod
    async def save(self, employee: Employee) -> Employee:
        pass

    @abstractmethod
    async def find_by_id(self, employee_id: int) -> Optional[Employee]:
        pass

    @abstractmethod
    async def find_all(self, page_request: PageRequest) -> Page:
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> List[Employee]:
        pass

    @abstractmethod
    async def find_by_job_title(self, job_title: str) -> List[Employee]:
        pass

    @abstractmethod
    async def exists_by_id(self, employee_id: int) -> bool:
        pass

    @abstractmethod
    async def delete(self, employee_id: int) -> bool:
        pass


class RoomRepository(ABC):
    """Repository interface for Room (both variants)"""

    @abstractmethod
    async def save(self, room: Room) -> Room:
        pass

    @abstractmethod
    async def find_by_id(self, room_id: int) -> Optional[Room]:
        pass

    @abstractmethod
    async def find_all(self, page_request: PageRequest) -> Page:
        pass

    @abstractmethod
    async def find_by_type(self, room_type: str) -> List[Room]:
        pass

    @abstractmethod
    async def find_by_max_price(self, max_price: float) -> List[Room]:
        """Rooms whose price is lower than or equal to max_price"""
        pass

    @abstractmethod
    async def exists_by_id(self, room_id: int) -> bool:
        pass

    @abstractmethod
    async def delete(self, room_id: int) -> bool:
        pass


class ReservationRepository(ABC):
    """Repository interface for Reservation Aggregate"""

    @abstractmethod
    async def save(self, reservation: Reservation) -> Reservation:
        pass

    @abstractmethod
    async def find_by_id(self, reservation_id: int) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def find_all(self, page_request: PageRequest) -> Page:
        pass

    @abstractmethod
    async def find_by_status(self, status: ReservationStatus) -> List[Reservation]:
        pass

    @abstractmethod
    async def find_by_client_id(self, client_id: int) -> List[Reservation]:
        pass

    @abstractmethod
    async def find_by_room_id(self, room_id: int) -> List[Reservation]:
        pass

    @abstractmethod
    async def find_by_start_date_between(self, start: date, end: date) -> List[Reservation]:
        """Reservations whose start date lies in [start, end]"""
        pass

    @abstractmethod
    async def exists_by_id(self, reservation_id: int) -> bool:
        pass

    @abstractmethod
    async def delete(self, reservation_id: int) -> bool:
        pass

    @abstractmethod
    async def delete_by_client_id(self, client_id: int) -> int:
        """Delete reservations owned by a client, return how many"""
        pass

    @abstractmethod
    async def delete_by_room_id(self, room_id: int) -> int:
        pass

    @abstractmethod
    async def delete_by_employee_id(self, employee_id: int) -> int:
        pass
