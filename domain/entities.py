"""Domain Entities

Specializations (VIP client, suite, online reservation) are tagged variants:
one model per family with a discriminator and nullable variant fields.
Polymorphic behavior dispatches on the discriminator.
"""
import logging
from pydantic import BaseModel
from datetime import date
from typing import Optional

from domain.enums import ReservationStatus, ReservationKind, ClientKind, RoomType

logger = logging.getLogger(__name__)

DEFAULT_VIP_DISCOUNT = 0.15
DEFAULT_PLATFORM = "SiteWeb"


def _percent(fraction: float) -> int:
    return int(fraction * 100)


class Employee(BaseModel):
    """Employee Entity"""

    employee_id: Optional[int] = None
    name: str = ""
    job_title: str = ""
    salary: float = 0.0

    class Config:
        from_attributes = True

    def raise_salary(self, amount: float) -> None:
        """Increase salary by a strictly positive amount"""
        if amount <= 0:
            raise ValueError("Salary raise must be positive")
        self.salary += amount
        logger.info("Salary of %s raised by %s, now %s", self.name, amount, self.salary)

    def change_job_title(self, new_title: str) -> None:
        """Move employee to another position"""
        if not new_title or not new_title.strip():
            raise ValueError("Job title cannot be blank")
        old_title = self.job_title
        self.job_title = new_title
        logger.info("%s changed position: %s -> %s", self.name, old_title, new_title)

    def display(self) -> str:
        return f"{self.name} (id={self.employee_id}) works as {self.job_title}"


class Room(BaseModel):
    """Room Entity, SUITE variant carries suite_name, room_count and jacuzzi"""

    room_id: Optional[int] = None
    number: int = 0
    price: float = 0.0
    room_type: str = RoomType.SIMPLE.value

    # SUITE only
    suite_name: Optional[str] = None
    room_count: Optional[int] = None
    jacuzzi: Optional[bool] = None

    class Config:
        from_attributes = True

    @staticmethod
    def suite(
        number: int,
        price: float,
        suite_name: str,
        room_count: int = 2,
        jacuzzi: bool = False
    ) -> "Room":
        """Create a suite; the type tag is always SUITE"""
        return Room(
            number=number,
            price=price,
            room_type=RoomType.SUITE.value,
            suite_name=suite_name,
            room_count=room_count,
            jacuzzi=jacuzzi
        )

    @property
    def is_suite(self) -> bool:
        return self.room_type == RoomType.SUITE.value

    def display(self) -> str:
        if self.is_suite:
            return (
                f"Suite {self.number} (id={self.room_id}) - {self.suite_name} - "
                f"{self.room_count} rooms - Jacuzzi: {'yes' if self.jacuzzi else 'no'} - "
                f"{self.price} DH"
            )
        return f"Room {self.number} (id={self.room_id}) - {self.room_type} - {self.price} DH"


class Client(BaseModel):
    """Client Entity, VIP variant carries a discount fraction"""

    client_id: Optional[int] = None
    name: str = ""
    first_name: str = ""
    email: str = ""
    phone: str = ""
    kind: ClientKind = ClientKind.STANDARD

    # VIP only
    discount: Optional[float] = None

    class Config:
        from_attributes = True

    @staticmethod
    def vip(
        name: str,
        first_name: str,
        email: str,
        phone: str,
        discount: float = DEFAULT_VIP_DISCOUNT
    ) -> "Client":
        return Client(
            name=name,
            first_name=first_name,
            email=email,
            phone=phone,
            kind=ClientKind.VIP,
            discount=discount
        )

    @property
    def is_vip(self) -> bool:
        return self.kind == ClientKind.VIP

    def reserve(self, room: Room, start_date: date, end_date: date) -> "Reservation":
        """Book a room; VIP clients always get an online reservation with their discount"""
        if self.is_vip:
            return Reservation.create_online(
                start_date=start_date,
                end_date=end_date,
                client=self,
                room=room,
                platform=DEFAULT_PLATFORM,
                discount=self.discount or 0.0
            )
        return Reservation.create(
            start_date=start_date,
            end_date=end_date,
            client=self,
            room=room
        )

    def display(self) -> str:
        base = f"{self.first_name} {self.name} (id={self.client_id}) - {self.email} - {self.phone}"
        if self.is_vip:
            return f"{base} - VIP ({_percent(self.discount or 0.0)}%)"
        return base


class Reservation(BaseModel):
    """Reservation Aggregate Root Entity, ONLINE variant carries platform and discount"""

    # Identity
    reservation_id: Optional[int] = None

    start_date: date
    end_date: date
    status: ReservationStatus = ReservationStatus.EN_ATTENTE
    kind: ReservationKind = ReservationKind.STANDARD

    # References
    client: Client
    room: Room
    employee: Optional[Employee] = None

    # ONLINE only
    platform: Optional[str] = None
    discount: Optional[float] = None

    class Config:
        from_attributes = True

    # ==================== FACTORY METHODS ====================
    @staticmethod
    def create(
        start_date: date,
        end_date: date,
        client: Client,
        room: Room,
        employee: Optional[Employee] = None
    ) -> "Reservation":
        return Reservation(
            start_date=start_date,
            end_date=end_date,
            client=client,
            room=room,
            employee=employee
        )

    @staticmethod
    def create_online(
        start_date: date,
        end_date: date,
        client: Client,
        room: Room,
        platform: str = DEFAULT_PLATFORM,
        discount: float = 0.0,
        employee: Optional[Employee] = None
    ) -> "Reservation":
        return Reservation(
            start_date=start_date,
            end_date=end_date,
            client=client,
            room=room,
            employee=employee,
            kind=ReservationKind.ONLINE,
            platform=platform,
            discount=discount
        )

    @property
    def is_online(self) -> bool:
        return self.kind == ReservationKind.ONLINE

    # ==================== STATE TRANSITION METHODS ====================
    def confirm(self, by: Optional[Employee] = None) -> None:
        """Confirm; the employee is recorded only when one is given"""
        self.status = ReservationStatus.CONFIRMEE
        if by is not None:
            self.employee = by
            logger.info("Reservation %s confirmed by %s", self.reservation_id, by.name)
        else:
            logger.info("Reservation %s confirmed automatically", self.reservation_id)

        if self.is_online:
            logger.info("Online reservation %s confirmed via %s", self.reservation_id, self.platform)

    def cancel(self, by: Optional[Employee] = None) -> None:
        """Cancel; the employee is always overwritten, None clears it"""
        self.employee = by
        self.status = ReservationStatus.ANNULEE
        logger.info(
            "Reservation %s cancelled by %s",
            self.reservation_id,
            by.name if by is not None else "system"
        )

    # ==================== QUERY METHODS ====================
    def get_days(self) -> int:
        """Billable days, at least one"""
        return max((self.end_date - self.start_date).days, 1)

    def compute_amount(self) -> float:
        amount = self.room.price * self.get_days()
        if self.is_online:
            amount *= 1 - (self.discount or 0.0)
        return amount

    def display(self) -> str:
        if self.is_online:
            return (
                f"Online reservation {self.reservation_id} [{self.status.value}] via {self.platform}: "
                f"{self.client.first_name} {self.client.name} -> room {self.room.number} "
                f"(discount: {_percent(self.discount or 0.0)}%) - {self.compute_amount()} DH"
            )
        return (
            f"Reservation {self.reservation_id} [{self.status.value}]: "
            f"{self.client.first_name} {self.client.name} -> room {self.room.number} "
            f"from {self.start_date} to {self.end_date} - {self.compute_amount()} DH"
        )
