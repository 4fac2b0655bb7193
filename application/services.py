"""Application Services - Business use cases"""
import logging
from datetime import date
from typing import List, Optional, Iterable

from domain.repositories import ClientRepository, EmployeeRepository, RoomRepository, ReservationRepository
from domain.entities import Client, Employee, Room, Reservation
from domain.enums import ClientKind, ReservationStatus, RoomType
from domain.exceptions import BadRequestError, ResourceNotFoundError
from domain.value_objects import Page, PageRequest

logger = logging.getLogger(__name__)

CLIENT_SORT_FIELDS = ("client_id", "name", "first_name", "email", "phone", "kind", "discount")
EMPLOYEE_SORT_FIELDS = ("employee_id", "name", "job_title", "salary")
ROOM_SORT_FIELDS = ("room_id", "number", "price", "room_type", "suite_name", "room_count", "jacuzzi")
RESERVATION_SORT_FIELDS = ("reservation_id", "start_date", "end_date", "status", "kind", "platform", "discount")


def _check_sortable(page_request: PageRequest, fields: Iterable[str]) -> None:
    if page_request.sort_by not in fields:
        raise BadRequestError(f"Cannot sort by '{page_request.sort_by}'")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _check_discount(discount: Optional[float]) -> None:
    if discount is None or discount < 0 or discount > 1:
        raise BadRequestError("Discount must be between 0 and 1")


class ClientService:
    """Service for Client business use cases"""

    def __init__(self, repository: ClientRepository, reservation_repo: ReservationRepository):
        self.repository = repository
        self.reservation_repo = reservation_repo

    @staticmethod
    def _validate(client: Client) -> None:
        if _is_blank(client.name):
            raise BadRequestError("Name cannot be blank")
        if _is_blank(client.email):
            raise BadRequestError("Email cannot be blank")

    async def list_clients(self, page_request: PageRequest) -> Page:
        """Get one page of clients"""
        _check_sortable(page_request, CLIENT_SORT_FIELDS)
        return await self.repository.find_all(page_request)

    async def get_client(self, client_id: int) -> Client:
        """Get client by ID"""
        client = await self.repository.find_by_id(client_id)
        if client is None:
            raise ResourceNotFoundError(f"Client with id {client_id} not found")
        return client

    async def add_client(self, client: Client) -> Client:
        """Register a new client"""
        self._validate(client)
        saved = await self.repository.save(client)
        logger.info("Client %s created", saved.client_id)
        return saved

    async def add_vip_client(self, client: Client) -> Client:
        """Register a new VIP client"""
        self._validate(client)
        _check_discount(client.discount)
        client.kind = ClientKind.VIP
        saved = await self.repository.save(client)
        logger.info("VIP client %s created with discount %s", saved.client_id, saved.discount)
        return saved

    async def update_client(self, client_id: int, updated: Client) -> Client:
        """Update contact details of an existing client"""
        existing = await self.get_client(client_id)
        self._validate(updated)

        existing.name = updated.name
        existing.first_name = updated.first_name
        existing.email = updated.email
        existing.phone = updated.phone
        return await self.repository.save(existing)

    async def delete_client(self, client_id: int) -> None:
        """Delete client together with its reservations"""
        if not await self.repository.exists_by_id(client_id):
            raise ResourceNotFoundError(f"Client with id {client_id} not found")
        removed = await self.reservation_repo.delete_by_client_id(client_id)
        await self.repository.delete(client_id)
        logger.info("Client %s deleted (%d reservations removed)", client_id, removed)

    async def find_by_name(self, name: str) -> List[Client]:
        return await self.repository.find_by_name(name)


class EmployeeService:
    """Service for Employee business use cases"""

    def __init__(self, repository: EmployeeRepository, reservation_repo: ReservationRepository):
        self.repository = repository
        self.reservation_repo = reservation_repo

    @staticmethod
    def _validate(employee: Employee) -> None:
        if _is_blank(employee.name):
            raise BadRequestError("Name cannot be blank")
        if employee.salary < 0:
            raise BadRequestError("Salary cannot be negative")

    async def list_employees(self, page_request: PageRequest) -> Page:
        """Get one page of employees"""
        _check_sortable(page_request, EMPLOYEE_SORT_FIELDS)
        return await self.repository.find_all(page_request)

    async def get_employee(self, employee_id: int) -> Employee:
        """Get employee by ID"""
        employee = await self.repository.find_by_id(employee_id)
        if employee is None:
            raise ResourceNotFoundError(f"Employee with id {employee_id} not found")
        return employee

    async def add_employee(self, employee: Employee) -> Employee:
        """Hire a new employee"""
        self._validate(employee)
        saved = await self.repository.save(employee)
        logger.info("Employee %s created", saved.employee_id)
        return saved

    async def update_employee(self, employee_id: int, updated: Employee) -> Employee:
        """Update an existing employee"""
        existing = await self.get_employee(employee_id)
        self._validate(updated)

        existing.name = updated.name
        existing.job_title = updated.job_title
        existing.salary = updated.salary
        return await self.repository.save(existing)

    async def delete_employee(self, employee_id: int) -> None:
        """Delete employee together with the reservations they handled"""
        if not await self.repository.exists_by_id(employee_id):
            raise ResourceNotFoundError(f"Employee with id {employee_id} not found")
        removed = await self.reservation_repo.delete_by_employee_id(employee_id)
        await self.repository.delete(employee_id)
        logger.info("Employee %s deleted (%d reservations removed)", employee_id, removed)

    async def find_by_name(self, name: str) -> List[Employee]:
        return await self.repository.find_by_name(name)

    async def find_by_job_title(self, job_title: str) -> List[Employee]:
        return await self.repository.find_by_job_title(job_title)


class RoomService:
    """Service for Room business use cases"""

    def __init__(self, repository: RoomRepository, reservation_repo: ReservationRepository):
        self.repository = repository
        self.reservation_repo = reservation_repo

    @staticmethod
    def _validate(room: Room) -> None:
        if room.price < 0:
            raise BadRequestError("Price cannot be negative")
        if room.number <= 0:
            raise BadRequestError("Room number must be positive")

    async def list_rooms(self, page_request: PageRequest) -> Page:
        """Get one page of rooms"""
        _check_sortable(page_request, ROOM_SORT_FIELDS)
        return await self.repository.find_all(page_request)

    async def get_room(self, room_id: int) -> Room:
        """Get room by ID"""
        room = await self.repository.find_by_id(room_id)
        if room is None:
            raise ResourceNotFoundError(f"Room with id {room_id} not found")
        return room

    async def add_room(self, room: Room) -> Room:
        """Add a room after checking price and number"""
        self._validate(room)
        saved = await self.repository.save(room)
        logger.info("Room %s (number %s) created", saved.room_id, saved.number)
        return saved

    async def add_suite(self, suite: Room) -> Room:
        """Add a suite after checking price, number and room count"""
        self._validate(suite)
        if suite.room_count is None or suite.room_count <= 0:
            raise BadRequestError("Room count must be positive")
        suite.room_type = RoomType.SUITE.value
        saved = await self.repository.save(suite)
        logger.info("Suite %s (%s) created", saved.room_id, saved.suite_name)
        return saved

    async def update_room(self, room_id: int, updated: Room) -> Room:
        """Update number and price of an existing room; the type tag is fixed at creation"""
        existing = await self.get_room(room_id)
        self._validate(updated)
        if updated.room_type != existing.room_type:
            raise BadRequestError(
                f"Room type cannot change from {existing.room_type} to {updated.room_type}"
            )

        existing.number = updated.number
        existing.price = updated.price
        return await self.repository.save(existing)

    async def delete_room(self, room_id: int) -> None:
        """Delete room together with its reservations"""
        if not await self.repository.exists_by_id(room_id):
            raise ResourceNotFoundError(f"Room with id {room_id} not found")
        removed = await self.reservation_repo.delete_by_room_id(room_id)
        await self.repository.delete(room_id)
        logger.info("Room %s deleted (%d reservations removed)", room_id, removed)

    async def find_by_type(self, room_type: str) -> List[Room]:
        return await self.repository.find_by_type(room_type)

    async def find_by_max_price(self, max_price: float) -> List[Room]:
        return await self.repository.find_by_max_price(max_price)


class ReservationService:
    """Service for Reservation business use cases"""

    def __init__(self,
                 repository: ReservationRepository,
                 client_repo: ClientRepository,
                 room_repo: RoomRepository,
                 employee_repo: EmployeeRepository):
        self.repository = repository
        self.client_repo = client_repo
        self.room_repo = room_repo
        self.employee_repo = employee_repo

    # ==================== PRIVATE HELPERS ====================
    @staticmethod
    def _validate_dates(start_date: date, end_date: date) -> None:
        """End strictly after start, start not in the past"""
        if end_date <= start_date:
            raise BadRequestError("End date must be after start date")
        if start_date < date.today():
            raise BadRequestError("Start date cannot be in the past")

    async def _resolve_client(self, client_id: int) -> Client:
        client = await self.client_repo.find_by_id(client_id)
        if client is None:
            raise ResourceNotFoundError(f"Client with id {client_id} not found")
        return client

    async def _resolve_room(self, room_id: int) -> Room:
        room = await self.room_repo.find_by_id(room_id)
        if room is None:
            raise ResourceNotFoundError(f"Room with id {room_id} not found")
        return room

    async def _resolve_employee(self, employee_id: Optional[int]) -> Optional[Employee]:
        """None when no id is given; a given but unknown id is an error"""
        if employee_id is None:
            return None
        employee = await self.employee_repo.find_by_id(employee_id)
        if employee is None:
            raise ResourceNotFoundError(f"Employee with id {employee_id} not found")
        return employee

    # ==================== QUERIES ====================
    async def list_reservations(self, page_request: PageRequest) -> Page:
        """Get one page of reservations"""
        _check_sortable(page_request, RESERVATION_SORT_FIELDS)
        return await self.repository.find_all(page_request)

    async def get_reservation(self, reservation_id: int) -> Reservation:
        """Get reservation by ID"""
        reservation = await self.repository.find_by_id(reservation_id)
        if reservation is None:
            raise ResourceNotFoundError(f"Reservation with id {reservation_id} not found")
        return reservation

    async def compute_amount(self, reservation_id: int) -> float:
        """Total amount of a reservation"""
        reservation = await self.get_reservation(reservation_id)
        return reservation.compute_amount()

    async def get_reservations_by_status(self, status: ReservationStatus) -> List[Reservation]:
        return await self.repository.find_by_status(status)

    async def get_reservations_by_client(self, client_id: int) -> List[Reservation]:
        return await self.repository.find_by_client_id(client_id)

    async def get_reservations_by_room(self, room_id: int) -> List[Reservation]:
        return await self.repository.find_by_room_id(room_id)

    async def get_reservations_between_dates(self, start: date, end: date) -> List[Reservation]:
        """Reservations starting between start and end, both inclusive"""
        return await self.repository.find_by_start_date_between(start, end)

    # ==================== COMMANDS ====================
    async def create_reservation(
        self,
        start_date: date,
        end_date: date,
        client_id: int,
        room_id: int,
        employee_id: Optional[int] = None
    ) -> Reservation:
        """Create a standard reservation, pending confirmation"""
        self._validate_dates(start_date, end_date)

        client = await self._resolve_client(client_id)
        room = await self._resolve_room(room_id)
        employee = await self._resolve_employee(employee_id)

        reservation = Reservation.create(
            start_date=start_date,
            end_date=end_date,
            client=client,
            room=room,
            employee=employee
        )
        saved = await self.repository.save(reservation)
        logger.info("Reservation %s created for client %s", saved.reservation_id, client_id)
        return saved

    async def create_online_reservation(
        self,
        start_date: date,
        end_date: date,
        client_id: int,
        room_id: int,
        platform: str,
        discount: float
    ) -> Reservation:
        """Create an online reservation carrying a platform and a discount"""
        self._validate_dates(start_date, end_date)
        _check_discount(discount)

        client = await self._resolve_client(client_id)
        room = await self._resolve_room(room_id)

        reservation = Reservation.create_online(
            start_date=start_date,
            end_date=end_date,
            client=client,
            room=room,
            platform=platform,
            discount=discount
        )
        saved = await self.repository.save(reservation)
        logger.info("Online reservation %s created via %s", saved.reservation_id, platform)
        return saved

    async def update_reservation(
        self,
        reservation_id: int,
        start_date: date,
        end_date: date,
        client_id: int,
        room_id: int,
        employee_id: Optional[int] = None,
        status: Optional[ReservationStatus] = None
    ) -> Reservation:
        """Replace dates, references and optionally status of a reservation"""
        existing = await self.get_reservation(reservation_id)
        self._validate_dates(start_date, end_date)

        client = await self._resolve_client(client_id)
        room = await self._resolve_room(room_id)
        employee = await self._resolve_employee(employee_id)

        existing.start_date = start_date
        existing.end_date = end_date
        existing.client = client
        existing.room = room
        existing.employee = employee
        if status is not None:
            existing.status = status
        return await self.repository.save(existing)

    async def confirm_reservation(self, reservation_id: int, employee_id: Optional[int] = None) -> Reservation:
        """Confirm reservation, optionally on behalf of an employee"""
        reservation = await self.get_reservation(reservation_id)
        employee = await self._resolve_employee(employee_id)

        reservation.confirm(employee)
        return await self.repository.save(reservation)

    async def cancel_reservation(self, reservation_id: int, employee_id: Optional[int] = None) -> Reservation:
        """Cancel reservation, recording who cancelled it (or nobody)"""
        reservation = await self.get_reservation(reservation_id)
        employee = await self._resolve_employee(employee_id)

        reservation.cancel(employee)
        return await self.repository.save(reservation)

    async def delete_reservation(self, reservation_id: int) -> None:
        """Delete reservation"""
        if not await self.repository.exists_by_id(reservation_id):
            raise ResourceNotFoundError(f"Reservation with id {reservation_id} not found")
        await self.repository.delete(reservation_id)
        logger.info("Reservation %s deleted", reservation_id)
