import logging
from fastapi import FastAPI, Depends, Query, Response
from datetime import date
from typing import List, Optional, Type

from api.errors import register_exception_handlers
from api.schemas import (
    # Rooms
    RoomRequest, SuiteRequest, RoomResponse,
    # Clients
    ClientRequest, VipClientRequest, ClientResponse,
    # Employees
    EmployeeRequest, EmployeeResponse,
    # Reservations
    CreateReservationRequest, CreateOnlineReservationRequest, UpdateReservationRequest,
    ReservationResponse, AmountResponse,
    # Shared
    ApiModel, PageResponse
)

from application.services import ClientService, EmployeeService, RoomService, ReservationService
from domain.entities import Client, Employee, Room, Reservation
from domain.enums import ReservationStatus
from domain.exceptions import BadRequestError
from domain.value_objects import Page, PageRequest
from infrastructure.config import (
    STORAGE_BACKEND, DATABASE_URL, LOG_LEVEL, LOG_FORMAT, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
)

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger("hotel")

app = FastAPI(
    title="Hotel Management API",
    description="Clients, employees, rooms and reservations of a hotel",
    version="1.0.0"
)
register_exception_handlers(app)

# Initialize repositories
if STORAGE_BACKEND == "sql":
    from infrastructure.database import build_engine, build_session_factory, init_db
    from infrastructure.repositories.sqlalchemy_repositories import (
        SqlClientRepository, SqlEmployeeRepository, SqlRoomRepository, SqlReservationRepository
    )

    engine = build_engine(DATABASE_URL)
    init_db(engine)
    session_factory = build_session_factory(engine)
    client_repo = SqlClientRepository(session_factory)
    employee_repo = SqlEmployeeRepository(session_factory)
    room_repo = SqlRoomRepository(session_factory)
    reservation_repo = SqlReservationRepository(session_factory)
else:
    from infrastructure.repositories.in_memory_repositories import (
        InMemoryClientRepository, InMemoryEmployeeRepository, InMemoryRoomRepository,
        InMemoryReservationRepository
    )

    client_repo = InMemoryClientRepository()
    employee_repo = InMemoryEmployeeRepository()
    room_repo = InMemoryRoomRepository()
    reservation_repo = InMemoryReservationRepository()

logger.info("Using %s storage", STORAGE_BACKEND)

# Dependency injection
def get_client_service() -> ClientService:
    return ClientService(client_repo, reservation_repo)

def get_employee_service() -> EmployeeService:
    return EmployeeService(employee_repo, reservation_repo)

def get_room_service() -> RoomService:
    return RoomService(room_repo, reservation_repo)

def get_reservation_service() -> ReservationService:
    return ReservationService(reservation_repo, client_repo, room_repo, employee_repo)

# ============================================================================
# HEALTH
# ============================================================================

@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "storage": STORAGE_BACKEND}

# ============================================================================
# ROOM ENDPOINTS
# ============================================================================

@app.get("/api/chambres", response_model=PageResponse[RoomResponse], tags=["Rooms"])
async def get_all_rooms(
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    sort_by: str = Query("chambreId", alias="sortBy"),
    service: RoomService = Depends(get_room_service)
):
    """Get one page of rooms"""
    page_request = _page_request(RoomResponse, page, size, sort_by)
    return _page_to_response(await service.list_rooms(page_request), _room_to_response)

@app.get("/api/chambres/type/{room_type}", response_model=List[RoomResponse], tags=["Rooms"])
async def find_rooms_by_type(room_type: str, service: RoomService = Depends(get_room_service)):
    """Get rooms of a given type"""
    return [_room_to_response(r) for r in await service.find_by_type(room_type)]

@app.get("/api/chambres/prix-max/{max_price}", response_model=List[RoomResponse], tags=["Rooms"])
async def find_rooms_by_max_price(max_price: float, service: RoomService = Depends(get_room_service)):
    """Get rooms priced at most max_price"""
    return [_room_to_response(r) for r in await service.find_by_max_price(max_price)]

@app.get("/api/chambres/{room_id}", response_model=RoomResponse, tags=["Rooms"])
async def get_room(room_id: int, service: RoomService = Depends(get_room_service)):
    """Get room by ID"""
    return _room_to_response(await service.get_room(room_id))

@app.post("/api/chambres", response_model=RoomResponse, status_code=201, tags=["Rooms"])
async def create_room(request: RoomRequest, service: RoomService = Depends(get_room_service)):
    """Create a standard room"""
    room = Room(number=request.number, price=request.price, room_type=request.room_type)
    return _room_to_response(await service.add_room(room))

@app.post("/api/chambres/suite", response_model=RoomResponse, status_code=201, tags=["Rooms"])
async def create_suite(request: SuiteRequest, service: RoomService = Depends(get_room_service)):
    """Create a suite"""
    suite = Room.suite(
        number=request.number,
        price=request.price,
        suite_name=request.suite_name,
        room_count=request.room_count,
        jacuzzi=request.jacuzzi
    )
    return _room_to_response(await service.add_suite(suite))

@app.put("/api/chambres/{room_id}", response_model=RoomResponse, tags=["Rooms"])
async def update_room(room_id: int, request: RoomRequest, service: RoomService = Depends(get_room_service)):
    """Update number and price of a room"""
    updated = Room(number=request.number, price=request.price, room_type=request.room_type)
    return _room_to_response(await service.update_room(room_id, updated))

@app.delete("/api/chambres/{room_id}", status_code=204, tags=["Rooms"])
async def delete_room(room_id: int, service: RoomService = Depends(get_room_service)):
    """Delete a room and its reservations"""
    await service.delete_room(room_id)
    return Response(status_code=204)

# ============================================================================
# CLIENT ENDPOINTS
# ============================================================================

@app.get("/api/clients", response_model=PageResponse[ClientResponse], tags=["Clients"])
async def get_all_clients(
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    sort_by: str = Query("clientId", alias="sortBy"),
    service: ClientService = Depends(get_client_service)
):
    """Get one page of clients"""
    page_request = _page_request(ClientResponse, page, size, sort_by)
    return _page_to_response(await service.list_clients(page_request), _client_to_response)

@app.get("/api/clients/search/nom/{name}", response_model=List[ClientResponse], tags=["Clients"])
async def find_clients_by_name(name: str, service: ClientService = Depends(get_client_service)):
    """Get clients by last name"""
    return [_client_to_response(c) for c in await service.find_by_name(name)]

@app.get("/api/clients/{client_id}", response_model=ClientResponse, tags=["Clients"])
async def get_client(client_id: int, service: ClientService = Depends(get_client_service)):
    """Get client by ID"""
    return _client_to_response(await service.get_client(client_id))

@app.post("/api/clients", response_model=ClientResponse, status_code=201, tags=["Clients"])
async def create_client(request: ClientRequest, service: ClientService = Depends(get_client_service)):
    """Register a client"""
    client = Client(
        name=request.name,
        first_name=request.first_name,
        email=request.email,
        phone=request.phone
    )
    return _client_to_response(await service.add_client(client))

@app.post("/api/clients/vip", response_model=ClientResponse, status_code=201, tags=["Clients"])
async def create_vip_client(request: VipClientRequest, service: ClientService = Depends(get_client_service)):
    """Register a VIP client"""
    client = Client.vip(
        name=request.name,
        first_name=request.first_name,
        email=request.email,
        phone=request.phone,
        discount=request.discount
    )
    return _client_to_response(await service.add_vip_client(client))

@app.put("/api/clients/{client_id}", response_model=ClientResponse, tags=["Clients"])
async def update_client(
    client_id: int,
    request: ClientRequest,
    service: ClientService = Depends(get_client_service)
):
    """Update client contact details"""
    updated = Client(
        name=request.name,
        first_name=request.first_name,
        email=request.email,
        phone=request.phone
    )
    return _client_to_response(await service.update_client(client_id, updated))

@app.delete("/api/clients/{client_id}", status_code=204, tags=["Clients"])
async def delete_client(client_id: int, service: ClientService = Depends(get_client_service)):
    """Delete a client and its reservations"""
    await service.delete_client(client_id)
    return Response(status_code=204)

# ============================================================================
# EMPLOYEE ENDPOINTS
# ============================================================================

@app.get("/api/employees", response_model=PageResponse[EmployeeResponse], tags=["Employees"])
async def get_all_employees(
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    sort_by: str = Query("employeId", alias="sortBy"),
    service: EmployeeService = Depends(get_employee_service)
):
    """Get one page of employees"""
    page_request = _page_request(EmployeeResponse, page, size, sort_by)
    return _page_to_response(await service.list_employees(page_request), _employee_to_response)

@app.get("/api/employees/search/nom/{name}", response_model=List[EmployeeResponse], tags=["Employees"])
async def find_employees_by_name(name: str, service: EmployeeService = Depends(get_employee_service)):
    """Get employees by name"""
    return [_employee_to_response(e) for e in await service.find_by_name(name)]

@app.get("/api/employees/search/poste/{job_title}", response_model=List[EmployeeResponse], tags=["Employees"])
async def find_employees_by_job_title(job_title: str, service: EmployeeService = Depends(get_employee_service)):
    """Get employees holding a position"""
    return [_employee_to_response(e) for e in await service.find_by_job_title(job_title)]

@app.get("/api/employees/{employee_id}", response_model=EmployeeResponse, tags=["Employees"])
async def get_employee(employee_id: int, service: EmployeeService = Depends(get_employee_service)):
    """Get employee by ID"""
    return _employee_to_response(await service.get_employee(employee_id))

@app.post("/api/employees", response_model=EmployeeResponse, status_code=201, tags=["Employees"])
async def create_employee(request: EmployeeRequest, service: EmployeeService = Depends(get_employee_service)):
    """Hire an employee"""
    employee = Employee(name=request.name, job_title=request.job_title, salary=request.salary)
    return _employee_to_response(await service.add_employee(employee))

@app.put("/api/employees/{employee_id}", response_model=EmployeeResponse, tags=["Employees"])
async def update_employee(
    employee_id: int,
    request: EmployeeRequest,
    service: EmployeeService = Depends(get_employee_service)
):
    """Update an employee"""
    updated = Employee(name=request.name, job_title=request.job_title, salary=request.salary)
    return _employee_to_response(await service.update_employee(employee_id, updated))

@app.delete("/api/employees/{employee_id}", status_code=204, tags=["Employees"])
async def delete_employee(employee_id: int, service: EmployeeService = Depends(get_employee_service)):
    """Delete an employee and the reservations they handled"""
    await service.delete_employee(employee_id)
    return Response(status_code=204)

# ============================================================================
# RESERVATION ENDPOINTS
# ============================================================================

@app.get("/api/reservations", response_model=PageResponse[ReservationResponse], tags=["Reservations"])
async def get_all_reservations(
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    sort_by: str = Query("reservationId", alias="sortBy"),
    service: ReservationService = Depends(get_reservation_service)
):
    """Get one page of reservations"""
    page_request = _page_request(ReservationResponse, page, size, sort_by)
    return _page_to_response(await service.list_reservations(page_request), _reservation_to_response)

@app.get("/api/reservations/dates", response_model=List[ReservationResponse], tags=["Reservations"])
async def get_reservations_between_dates(
    start: date,
    end: date,
    service: ReservationService = Depends(get_reservation_service)
):
    """Get reservations starting between start and end (ISO dates, inclusive)"""
    return [_reservation_to_response(r) for r in await service.get_reservations_between_dates(start, end)]

@app.get("/api/reservations/statut/{status}", response_model=List[ReservationResponse], tags=["Reservations"])
async def get_reservations_by_status(
    status: ReservationStatus,
    service: ReservationService = Depends(get_reservation_service)
):
    """Get reservations in a given status"""
    return [_reservation_to_response(r) for r in await service.get_reservations_by_status(status)]

@app.get("/api/reservations/client/{client_id}", response_model=List[ReservationResponse], tags=["Reservations"])
async def get_reservations_by_client(
    client_id: int,
    service: ReservationService = Depends(get_reservation_service)
):
    """Get reservations of a client"""
    return [_reservation_to_response(r) for r in await service.get_reservations_by_client(client_id)]

@app.get("/api/reservations/chambre/{room_id}", response_model=List[ReservationResponse], tags=["Reservations"])
async def get_reservations_by_room(
    room_id: int,
    service: ReservationService = Depends(get_reservation_service)
):
    """Get reservations of a room"""
    return [_reservation_to_response(r) for r in await service.get_reservations_by_room(room_id)]

@app.get("/api/reservations/{reservation_id}", response_model=ReservationResponse, tags=["Reservations"])
async def get_reservation(
    reservation_id: int,
    service: ReservationService = Depends(get_reservation_service)
):
    """Get reservation by ID"""
    return _reservation_to_response(await service.get_reservation(reservation_id))

@app.get("/api/reservations/{reservation_id}/montant", response_model=AmountResponse, tags=["Reservations"])
async def compute_reservation_amount(
    reservation_id: int,
    service: ReservationService = Depends(get_reservation_service)
):
    """Compute the total amount of a reservation"""
    return AmountResponse(amount=await service.compute_amount(reservation_id))

@app.post("/api/reservations", response_model=ReservationResponse, status_code=201, tags=["Reservations"])
async def create_reservation(
    request: CreateReservationRequest,
    service: ReservationService = Depends(get_reservation_service)
):
    """Create a reservation"""
    reservation = await service.create_reservation(
        start_date=request.start_date,
        end_date=request.end_date,
        client_id=request.client_id,
        room_id=request.room_id,
        employee_id=request.employee_id
    )
    return _reservation_to_response(reservation)

@app.post("/api/reservations/online", response_model=ReservationResponse, status_code=201, tags=["Reservations"])
async def create_online_reservation(
    request: CreateOnlineReservationRequest,
    service: ReservationService = Depends(get_reservation_service)
):
    """Create an online reservation with platform and discount"""
    reservation = await service.create_online_reservation(
        start_date=request.start_date,
        end_date=request.end_date,
        client_id=request.client_id,
        room_id=request.room_id,
        platform=request.platform,
        discount=request.discount
    )
    return _reservation_to_response(reservation)

@app.put("/api/reservations/{reservation_id}", response_model=ReservationResponse, tags=["Reservations"])
async def update_reservation(
    reservation_id: int,
    request: UpdateReservationRequest,
    service: ReservationService = Depends(get_reservation_service)
):
    """Update dates, client, room, employee and status of a reservation"""
    reservation = await service.update_reservation(
        reservation_id=reservation_id,
        start_date=request.start_date,
        end_date=request.end_date,
        client_id=request.client_id,
        room_id=request.room_id,
        employee_id=request.employee_id,
        status=request.status
    )
    return _reservation_to_response(reservation)

@app.put("/api/reservations/{reservation_id}/confirmer", response_model=ReservationResponse, tags=["Reservations"])
async def confirm_reservation(
    reservation_id: int,
    employee_id: Optional[int] = Query(None, alias="employeId"),
    service: ReservationService = Depends(get_reservation_service)
):
    """Confirm a reservation"""
    return _reservation_to_response(await service.confirm_reservation(reservation_id, employee_id))

@app.put("/api/reservations/{reservation_id}/annuler", response_model=ReservationResponse, tags=["Reservations"])
async def cancel_reservation(
    reservation_id: int,
    employee_id: Optional[int] = Query(None, alias="employeId"),
    service: ReservationService = Depends(get_reservation_service)
):
    """Cancel a reservation"""
    return _reservation_to_response(await service.cancel_reservation(reservation_id, employee_id))

@app.delete("/api/reservations/{reservation_id}", status_code=204, tags=["Reservations"])
async def delete_reservation(
    reservation_id: int,
    service: ReservationService = Depends(get_reservation_service)
):
    """Delete a reservation"""
    await service.delete_reservation(reservation_id)
    return Response(status_code=204)

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def _page_request(schema: Type[ApiModel], page: int, size: int, sort_by: str) -> PageRequest:
    """Translate a public sort key (alias or attribute name) into a PageRequest"""
    for name, field in schema.model_fields.items():
        if sort_by in (name, field.alias):
            return PageRequest(page=page, size=size, sort_by=name)
    raise BadRequestError(f"Cannot sort by '{sort_by}'")

def _page_to_response(page: Page, convert) -> PageResponse:
    return PageResponse(
        content=[convert(item) for item in page.content],
        total_elements=page.total_elements,
        total_pages=page.total_pages,
        number=page.number,
        size=page.size
    )

def _room_to_response(room: Room) -> RoomResponse:
    """Convert Room entity to RoomResponse"""
    return RoomResponse(
        room_id=room.room_id,
        number=room.number,
        price=room.price,
        room_type=room.room_type,
        suite_name=room.suite_name,
        room_count=room.room_count,
        jacuzzi=room.jacuzzi
    )

def _client_to_response(client: Client) -> ClientResponse:
    """Convert Client entity to ClientResponse"""
    return ClientResponse(
        client_id=client.client_id,
        name=client.name,
        first_name=client.first_name,
        email=client.email,
        phone=client.phone,
        kind=client.kind.value,
        discount=client.discount
    )

def _employee_to_response(employee: Employee) -> EmployeeResponse:
    """Convert Employee entity to EmployeeResponse"""
    return EmployeeResponse(
        employee_id=employee.employee_id,
        name=employee.name,
        job_title=employee.job_title,
        salary=employee.salary
    )

def _reservation_to_response(reservation: Reservation) -> ReservationResponse:
    """Convert Reservation entity to ReservationResponse"""
    return ReservationResponse(
        reservation_id=reservation.reservation_id,
        start_date=reservation.start_date,
        end_date=reservation.end_date,
        status=reservation.status.value,
        kind=reservation.kind.value,
        client=_client_to_response(reservation.client),
        room=_room_to_response(reservation.room),
        employee=_employee_to_response(reservation.employee) if reservation.employee else None,
        platform=reservation.platform,
        discount=reservation.discount,
        amount=reservation.compute_amount()
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
