"""SQLAlchemy Repository Implementations

Each repository call runs in its own session and transaction, on a threadpool
worker so the event loop is never held by database I/O.
"""
from typing import Optional, List, Dict
from datetime import date

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import delete, func, select
from sqlalchemy.orm import sessionmaker

from domain.repositories import ClientRepository, EmployeeRepository, RoomRepository, ReservationRepository
from domain.entities import Client, Employee, Room, Reservation
from domain.enums import ClientKind, ReservationKind, ReservationStatus
from domain.value_objects import Page, PageRequest
from infrastructure.database import ClientRecord, EmployeeRecord, RoomRecord, ReservationRecord


# ============================================================================
# RECORD <-> ENTITY MAPPING
# ============================================================================

def _client_to_entity(record: ClientRecord) -> Client:
    return Client(
        client_id=record.client_id,
        name=record.nom,
        first_name=record.prenom,
        email=record.email,
        phone=record.telephone,
        kind=ClientKind(record.type_client),
        discount=record.remise
    )


def _client_to_record(client: Client, record: ClientRecord) -> ClientRecord:
    record.nom = client.name
    record.prenom = client.first_name
    record.email = client.email
    record.telephone = client.phone
    record.type_client = client.kind.value
    record.remise = client.discount
    return record


def _employee_to_entity(record: EmployeeRecord) -> Employee:
    return Employee(
        employee_id=record.employe_id,
        name=record.nom,
        job_title=record.poste,
        salary=record.salaire
    )


def _employee_to_record(employee: Employee, record: EmployeeRecord) -> EmployeeRecord:
    record.nom = employee.name
    record.poste = employee.job_title
    record.salaire = employee.salary
    return record


def _room_to_entity(record: RoomRecord) -> Room:
    return Room(
        room_id=record.chambre_id,
        number=record.numero,
        price=record.prix,
        room_type=record.type_chambre,
        suite_name=record.suite_nom,
        room_count=record.nombre_pieces,
        jacuzzi=record.jacuzzi
    )


def _room_to_record(room: Room, record: RoomRecord) -> RoomRecord:
    record.numero = room.number
    record.prix = room.price
    record.type_chambre = room.room_type
    record.suite_nom = room.suite_name
    record.nombre_pieces = room.room_count
    record.jacuzzi = room.jacuzzi
    return record


def _reservation_to_entity(record: ReservationRecord) -> Reservation:
    return Reservation(
        reservation_id=record.reservation_id,
        start_date=record.date_debut,
        end_date=record.date_fin,
        status=ReservationStatus(record.statut),
        kind=ReservationKind(record.type_reservation),
        client=_client_to_entity(record.client),
        room=_room_to_entity(record.chambre),
        employee=_employee_to_entity(record.employe) if record.employe is not None else None,
        platform=record.plateforme,
        discount=record.remise
    )


def _reservation_to_record(reservation: Reservation, record: ReservationRecord) -> ReservationRecord:
    record.date_debut = reservation.start_date
    record.date_fin = reservation.end_date
    record.statut = reservation.status.value
    record.type_reservation = reservation.kind.value
    record.client_id = reservation.client.client_id
    record.chambre_id = reservation.room.room_id
    record.employe_id = reservation.employee.employee_id if reservation.employee is not None else None
    record.plateforme = reservation.platform
    record.remise = reservation.discount
    return record


# ============================================================================
# BASE
# ============================================================================

class _SqlRepository:
    """Shared plumbing: session handling, paging, existence checks"""

    record_type = None
    columns_id = ""
    # entity field name -> mapped column
    columns: Dict[str, object] = {}

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    async def _run(self, func, *args):
        """Run blocking session work in the threadpool, off the event loop"""
        return await run_in_threadpool(func, *args)

    def _session(self):
        """Session bound to a transaction that commits on exit"""
        return self._session_factory.begin()

    def _page(self, page_request: PageRequest, to_entity) -> Page:
        column = self.columns.get(page_request.sort_by)
        if column is None:
            raise ValueError(f"Cannot sort by '{page_request.sort_by}'")

        with self._session() as session:
            total = session.scalar(select(func.count()).select_from(self.record_type))
            records = session.scalars(
                select(self.record_type)
                .order_by(column.asc().nullslast(), getattr(self.record_type, self.columns_id))
                .offset(page_request.offset)
                .limit(page_request.size)
            ).all()
            content = [to_entity(r) for r in records]

        return Page(
            content=content,
            total_elements=total or 0,
            number=page_request.page,
            size=page_request.size
        )

    def _where(self, to_entity, *criteria) -> list:
        with self._session() as session:
            records = session.scalars(select(self.record_type).where(*criteria)).all()
            return [to_entity(r) for r in records]

    def _get(self, entity_id: int, to_entity):
        with self._session() as session:
            record = session.get(self.record_type, entity_id)
            return to_entity(record) if record is not None else None

    def _exists(self, entity_id: int) -> bool:
        with self._session() as session:
            return session.get(self.record_type, entity_id) is not None

    def _delete(self, entity_id: int) -> bool:
        with self._session() as session:
            record = session.get(self.record_type, entity_id)
            if record is None:
                return False
            session.delete(record)
            return True

    def _upsert(self, entity_id: Optional[int], fill) -> int:
        """Insert when entity_id is None or unknown, update otherwise; return the primary key"""
        with self._session() as session:
            record = session.get(self.record_type, entity_id) if entity_id is not None else None
            if record is None:
                record = self.record_type()
                if entity_id is not None:
                    setattr(record, self.columns_id, entity_id)
                session.add(record)
            fill(record)
            session.flush()
            return getattr(record, self.columns_id)


# ============================================================================
# REPOSITORIES
# ============================================================================

class SqlClientRepository(_SqlRepository, ClientRepository):
    """SQLAlchemy implementation of ClientRepository"""

    record_type = ClientRecord
    columns_id = "client_id"
    columns = {
        "client_id": ClientRecord.client_id,
        "name": ClientRecord.nom,
        "first_name": ClientRecord.prenom,
        "email": ClientRecord.email,
        "phone": ClientRecord.telephone,
        "kind": ClientRecord.type_client,
        "discount": ClientRecord.remise,
    }

    async def save(self, client: Client) -> Client:
        client.client_id = await self._run(
            self._upsert, client.client_id, lambda r: _client_to_record(client, r)
        )
        return client

    async def find_by_id(self, client_id: int) -> Optional[Client]:
        return await self._run(self._get, client_id, _client_to_entity)

    async def find_all(self, page_request: PageRequest) -> Page:
        return await self._run(self._page, page_request, _client_to_entity)

    async def find_by_name(self, name: str) -> List[Client]:
        return await self._run(self._where, _client_to_entity, ClientRecord.nom == name)

    async def exists_by_id(self, client_id: int) -> bool:
        return await self._run(self._exists, client_id)

    async def delete(self, client_id: int) -> bool:
        return await self._run(self._delete, client_id)


class SqlEmployeeRepository(_SqlRepository, EmployeeRepository):
    """SQLAlchemy implementation of EmployeeRepository"""

    record_type = EmployeeRecord
    columns_id = "employe_id"
    columns = {
        "employee_id": EmployeeRecord.employe_id,
        "name": EmployeeRecord.nom,
        "job_title": EmployeeRecord.poste,
        "salary": EmployeeRecord.salaire,
    }

    async def save(self, employee: Employee) -> Employee:
        employee.employee_id = await self._run(
            self._upsert, employee.employee_id, lambda r: _employee_to_record(employee, r)
        )
        return employee

    async def find_by_id(self, employee_id: int) -> Optional[Employee]:
        return await self._run(self._get, employee_id, _employee_to_entity)

    async def find_all(self, page_request: PageRequest) -> Page:
        return await self._run(self._page, page_request, _employee_to_entity)

    async def find_by_name(self, name: str) -> List[Employee]:
        return await self._run(self._where, _employee_to_entity, EmployeeRecord.nom == name)

    async def find_by_job_title(self, job_title: str) -> List[Employee]:
        return await self._run(self._where, _employee_to_entity, EmployeeRecord.poste == job_title)

    async def exists_by_id(self, employee_id: int) -> bool:
        return await self._run(self._exists, employee_id)

    async def delete(self, employee_id: int) -> bool:
        return await self._run(self._delete, employee_id)


class SqlRoomRepository(_SqlRepository, RoomRepository):
    """SQLAlchemy implementation of RoomRepository"""

    record_type = RoomRecord
    columns_id = "chambre_id"
    columns = {
        "room_id": RoomRecord.chambre_id,
        "number": RoomRecord.numero,
        "price": RoomRecord.prix,
        "room_type": RoomRecord.type_chambre,
        "suite_name": RoomRecord.suite_nom,
        "room_count": RoomRecord.nombre_pieces,
        "jacuzzi": RoomRecord.jacuzzi,
    }

    async def save(self, room: Room) -> Room:
        room.room_id = await self._run(self._upsert, room.room_id, lambda r: _room_to_record(room, r))
        return room

    async def find_by_id(self, room_id: int) -> Optional[Room]:
        return await self._run(self._get, room_id, _room_to_entity)

    async def find_all(self, page_request: PageRequest) -> Page:
        return await self._run(self._page, page_request, _room_to_entity)

    async def find_by_type(self, room_type: str) -> List[Room]:
        return await self._run(self._where, _room_to_entity, RoomRecord.type_chambre == room_type)

    async def find_by_max_price(self, max_price: float) -> List[Room]:
        return await self._run(self._where, _room_to_entity, RoomRecord.prix <= max_price)

    async def exists_by_id(self, room_id: int) -> bool:
        return await self._run(self._exists, room_id)

    async def delete(self, room_id: int) -> bool:
        return await self._run(self._delete, room_id)


class SqlReservationRepository(_SqlRepository, ReservationRepository):
    """SQLAlchemy implementation of ReservationRepository"""

    record_type = ReservationRecord
    columns_id = "reservation_id"
    columns = {
        "reservation_id": ReservationRecord.reservation_id,
        "start_date": ReservationRecord.date_debut,
        "end_date": ReservationRecord.date_fin,
        "status": ReservationRecord.statut,
        "kind": ReservationRecord.type_reservation,
        "platform": ReservationRecord.plateforme,
        "discount": ReservationRecord.remise,
    }

    async def save(self, reservation: Reservation) -> Reservation:
        reservation.reservation_id = await self._run(
            self._upsert,
            reservation.reservation_id,
            lambda r: _reservation_to_record(reservation, r)
        )
        return reservation

    async def find_by_id(self, reservation_id: int) -> Optional[Reservation]:
        return await self._run(self._get, reservation_id, _reservation_to_entity)

    async def find_all(self, page_request: PageRequest) -> Page:
        return await self._run(self._page, page_request, _reservation_to_entity)

    async def find_by_status(self, status: ReservationStatus) -> List[Reservation]:
        return await self._run(self._where, _reservation_to_entity, ReservationRecord.statut == status.value)

    async def find_by_client_id(self, client_id: int) -> List[Reservation]:
        return await self._run(self._where, _reservation_to_entity, ReservationRecord.client_id == client_id)

    async def find_by_room_id(self, room_id: int) -> List[Reservation]:
        return await self._run(self._where, _reservation_to_entity, ReservationRecord.chambre_id == room_id)

    async def find_by_start_date_between(self, start: date, end: date) -> List[Reservation]:
        return await self._run(
            self._where, _reservation_to_entity, ReservationRecord.date_debut.between(start, end)
        )

    async def exists_by_id(self, reservation_id: int) -> bool:
        return await self._run(self._exists, reservation_id)

    async def delete(self, reservation_id: int) -> bool:
        return await self._run(self._delete, reservation_id)

    def _delete_where(self, *criteria) -> int:
        with self._session() as session:
            result = session.execute(delete(ReservationRecord).where(*criteria))
            return result.rowcount

    async def delete_by_client_id(self, client_id: int) -> int:
        return await self._run(self._delete_where, ReservationRecord.client_id == client_id)

    async def delete_by_room_id(self, room_id: int) -> int:
        return await self._run(self._delete_where, ReservationRecord.chambre_id == room_id)

    async def delete_by_employee_id(self, employee_id: int) -> int:
        return await self._run(self._delete_where, ReservationRecord.employe_id == employee_id)
