from datetime import datetime
import uuid

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


RESERVATION_UNIQUE_CONSTRAINT = 'uq_reservation_event_student'


class ReservationModel(Base):
    __tablename__ = 'reservation'
    __table_args__ = (
        UniqueConstraint('event_id', 'student_id', name=RESERVATION_UNIQUE_CONSTRAINT),
    )

    id: Mapped[uuid.UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('event.id'), nullable=False, index=True
    )
    student_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('user.id'), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
