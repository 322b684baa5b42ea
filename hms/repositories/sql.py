"""
SQLAlchemy-backed repositories.

Each call opens its own short-lived session on a worker thread, so several
lookups can be awaited concurrently without sharing a session.
"""
from typing import Any, Callable, Dict, List, Optional
import logging

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..core.exceptions import (
    DepartmentAlreadyExists, DuplicateRecord, EmailAlreadyRegistered,
    ReferenceConflict, StorageUnavailable
)
from ..core.security import UserRole
from ..models import Appointment, Department, Patient, User

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation
PG_UNIQUE_VIOLATION = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell a unique-constraint failure apart from a foreign-key one."""
    pgcode = getattr(error.orig, "pgcode", None)
    if pgcode is not None:
        return pgcode == PG_UNIQUE_VIOLATION
    return "UNIQUE constraint failed" in str(error.orig)


class SQLAlchemyRepository:
    model = None
    duplicate_error = DuplicateRecord

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def _run(self, operation: Callable[..., Any], *args) -> Any:
        return await run_in_threadpool(self._execute, operation, *args)

    def _execute(self, operation: Callable[..., Any], *args) -> Any:
        with self.session_factory() as db:
            try:
                return operation(db, *args)
            except IntegrityError as e:
                db.rollback()
                logger.warning(f"Integrity error on {self.model.__tablename__}: {e.orig}")
                if is_unique_violation(e):
                    raise self.duplicate_error()
                raise ReferenceConflict()
            except SQLAlchemyError:
                db.rollback()
                logger.exception(f"Storage failure on {self.model.__tablename__}")
                raise StorageUnavailable()

    # Shared operations

    def _get(self, db: Session, entity_id: int):
        return db.get(self.model, entity_id)

    def _add(self, db: Session, fields: Dict[str, Any]):
        entity = self.model(**fields)
        db.add(entity)
        db.commit()
        db.refresh(entity)
        return entity

    def _update(self, db: Session, entity_id: int, fields: Dict[str, Any]):
        entity = db.get(self.model, entity_id)
        if entity is None:
            return None
        for key, value in fields.items():
            setattr(entity, key, value)
        db.commit()
        db.refresh(entity)
        return entity

    async def get(self, entity_id: int):
        return await self._run(self._get, entity_id)

    async def add(self, fields: Dict[str, Any]):
        return await self._run(self._add, fields)

    async def update(self, entity_id: int, fields: Dict[str, Any]):
        return await self._run(self._update, entity_id, fields)


class SQLAlchemyUserRepository(SQLAlchemyRepository):
    model = User
    duplicate_error = EmailAlreadyRegistered

    async def find_by_email(self, email: str) -> Optional[User]:
        def operation(db: Session):
            return db.execute(
                select(User).where(func.lower(func.trim(User.email)) == email)
            ).scalars().first()

        return await self._run(operation)

    async def find_by_email_and_role(self, email: str, role: UserRole) -> Optional[User]:
        def operation(db: Session):
            # Inputs arrive normalized and are bound as parameters
            return db.execute(
                select(User).where(
                    func.lower(func.trim(User.email)) == email,
                    User.role == role,
                )
            ).scalars().first()

        return await self._run(operation)

    async def list_by_role(self, role: UserRole) -> List[User]:
        def operation(db: Session):
            return list(
                db.execute(select(User).where(User.role == role).order_by(User.id)).scalars()
            )

        return await self._run(operation)


class SQLAlchemyPatientRepository(SQLAlchemyRepository):
    model = Patient

    async def list(self) -> List[Patient]:
        def operation(db: Session):
            return list(db.execute(select(Patient).order_by(Patient.id)).scalars())

        return await self._run(operation)


class SQLAlchemyDepartmentRepository(SQLAlchemyRepository):
    model = Department
    duplicate_error = DepartmentAlreadyExists

    async def find_by_name(self, name: str) -> Optional[Department]:
        def operation(db: Session):
            return db.execute(
                select(Department).where(Department.name == name)
            ).scalars().first()

        return await self._run(operation)

    async def list(self) -> List[Department]:
        def operation(db: Session):
            return list(db.execute(select(Department).order_by(Department.name)).scalars())

        return await self._run(operation)

    async def delete(self, department_id: int) -> bool:
        def operation(db: Session):
            department = db.get(Department, department_id)
            if department is None:
                return False
            db.delete(department)
            db.commit()
            return True

        return await self._run(operation)


class SQLAlchemyAppointmentRepository(SQLAlchemyRepository):
    model = Appointment

    async def list(self, doctor_id: Optional[int] = None) -> List[Appointment]:
        def operation(db: Session):
            query = select(Appointment).order_by(Appointment.date, Appointment.time)
            if doctor_id is not None:
                query = query.where(Appointment.doctor_id == doctor_id)
            return list(db.execute(query).scalars())

        return await self._run(operation)
