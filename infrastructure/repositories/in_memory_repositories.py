"""In-Memory Repository Implementations"""
import itertools
from typing import Optional, List, Dict, Any
from datetime import date

from domain.repositories import ClientRepository, EmployeeRepository, RoomRepository, ReservationRepository
from domain.entities import Client, Employee, Room, Reservation
from domain.enums import ReservationStatus
from domain.value_objects import Page, PageRequest


def _sort_key(field: str):
    """Sort by field with missing values last"""
    def key(entity: Any):
        value = getattr(entity, field)
        return (value is None, value if value is not None else 0)
    return key


class _InMemoryStore:
    """Id-keyed storage with an auto-increment primary key"""

    def __init__(self):
        self._storage: Dict[int, Any] = {}
        self._ids = itertools.count(1)

    def _next_id(self) -> int:
        return next(self._ids)

    def _page(self, page_request: PageRequest) -> Page:
        items = sorted(self._storage.values(), key=_sort_key(page_request.sort_by))
        return Page.of(items, page_request)

    def _where(self, predicate) -> List[Any]:
        return [entity for entity in self._storage.values() if predicate(entity)]

    def _remove(self, entity_id: int) -> bool:
        if entity_id in self._storage:
            del self._storage[entity_id]
            return True
        return False


class InMemoryClientRepository(_InMemoryStore, ClientRepository):
    """In-memory implementation of ClientRepository"""

    async def save(self, client: Client) -> Client:
        if client.client_id is None:
            client.client_id = self._next_id()
        self._storage[client.client_id] = client
        return client

    async def find_by_id(self, client_id: int) -> Optional[Client]:
        return self._storage.get(client_id)

    async def find_all(self, page_request: PageRequest) -> Page:
        return self._page(page_request)

    async def find_by_name(self, name: str) -> List[Client]:
        return self._where(lambda c: c.name == name)

    async def exists_by_id(self, client_id: int) -> bool:
        return client_id in self._storage

    async def delete(self, client_id: int) -> bool:
        return self._remove(client_id)


class InMemoryEmployeeRepository(_InMemoryStore, EmployeeRepository):
    """In-memory implementation of EmployeeRepository"""

    async def save(self, employee: Employee) -> Employee:
        if employee.employee_id is None:
            employee.employee_id = self._next_id()
        self._storage[employee.employee_id] = employee
        return employee

    async def find_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._storage.get(employee_id)

    async def find_all(self, page_request: PageRequest) -> Page:
        return self._page(page_request)

    async def find_by_name(self, name: str) -> List[Employee]:
        return self._where(lambda e: e.name == name)

    async def find_by_job_title(self, job_title: str) -> List[Employee]:
        return self._where(lambda e: e.job_title == job_title)

    async def exists_by_id(self, employee_id: int) -> bool:
        return employee_id in self._storage

    async def delete(self, employee_id: int) -> bool:
        return self._remove(employee_id)


class InMemoryRoomRepository(_InMemoryStore, RoomRepository):
    """In-memory implementation of RoomRepository"""

    async def save(self, room: Room) -> Room:
        if room.room_id is None:
            room.room_id = self._next_id()
        self._storage[room.room_id] = room
        return room

    async def find_by_id(self, room_id: int) -> Optional[Room]:
        return self._storage.get(room_id)

    async def find_all(self, page_request: PageRequest) -> Page:
        return self._page(page_request)

    async def find_by_type(self, room_type: str) -> List[Room]:
        return self._where(lambda r: r.room_type == room_type)

    async def find_by_max_price(self, max_price: float) -> List[Room]:
        return self._where(lambda r: r.price <= max_price)

    async def exists_by_id(self, room_id: int) -> bool:
        return room_id in self._storage

    async def delete(self, room_id: int) -> bool:
        return self._remove(room_id)


class InMemoryReservationRepository(_InMemoryStore, ReservationRepository):
    """In-memory implementation of ReservationRepository"""

    async def save(self, reservation: Reservation) -> Reservation:
        if reservation.reservation_id is None:
            reservation.reservation_id = self._next_id()
        self._storage[reservation.reservation_id] = reservation
        return reservation

    async def find_by_id(self, reservation_id: int) -> Optional[Reservation]:
        return self._storage.get(reservation_id)

    async def find_all(self, page_request: PageRequest) -> Page:
        return self._page(page_request)

    async def find_by_status(self, status: ReservationStatus) -> List[Reservation]:
        return self._where(lambda r: r.status == status)

    async def find_by_client_id(self, client_id: int) -> List[Reservation]:
        return self._where(lambda r: r.client.client_id == client_id)

    async def find_by_room_id(self, room_id: int) -> List[Reservation]:
        return self._where(lambda r: r.room.room_id == room_id)

    async def find_by_start_date_between(self, start: date, end: date) -> List[Reservation]:
        return self._where(lambda r: start <= r.start_date <= end)

    async def exists_by_id(self, reservation_id: int) -> bool:
        return reservation_id in self._storage

    async def delete(self, reservation_id: int) -> bool:
        return self._remove(reservation_id)

    def _remove_where(self, predicate) -> int:
        doomed = [r.reservation_id for r in self._where(predicate)]
        for reservation_id in doomed:
            del self._storage[reservation_id]
        return len(doomed)

    async def delete_by_client_id(self, client_id: int) -> int:
        return self._remove_where(lambda r: r.client.client_id == client_id)

    async def delete_by_room_id(self, room_id: int) -> int:
        return self._remove_where(lambda r: r.room.room_id == room_id)

    async def delete_by_employee_id(self, employee_id: int) -> int:
        return self._remove_where(
            lambda r: r.employee is not None and r.employee.employee_id == employee_id
        )
