# /app/services/user_service.py

import logging
import re
import uuid
from typing import Optional

from ..core import security
from ..db.models.user_model import User
from ..models.user_model import UserCreate, UserUpdate
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"^[A-Za-z\s]+$")
# 1234567890, +911234567890, +1-234-567-8900 and similar.
PHONE_PATTERN = re.compile(r"^\+?\(?\d{1,4}\)?[-\s.]?\(?\d{1,4}\)?[-\s.]?\d{1,5}[-\s.]?\d{1,6}$")


def create_user(db: DatabaseService, user: UserCreate) -> User:
    """
    Registers a new account. Raises ValueError when the email (or the
    student number) is already taken.
    """
    email = user.email.strip().lower()
    if db.get_user_by_email(email):
        raise ValueError("A user with this email already exists.")

    student_id = user.studentId.strip() if user.studentId and user.studentId.strip() else None
    if student_id and db.get_user_by_student_id(student_id):
        raise ValueError("A user with this student ID already exists.")

    record = {
        "id": f"usr_{uuid.uuid4().hex[:12]}",
        "name": user.name.strip(),
        "email": email,
        "hashed_password": security.get_password_hash(user.password),
        "role": user.role.value,
        "department": user.department.strip(),
        "studentId": student_id,
        "phone": user.phone.strip() if user.phone and user.phone.strip() else None,
    }
    new_user = db.add_user(record)
    logger.info("Registered %s account %s", new_user.role, new_user.id)
    return new_user


def authenticate_user(db: DatabaseService, email: str, password: str) -> Optional[User]:
    user = db.get_user_by_email(email)
    if not user or not security.verify_password(password, user.hashed_password):
        return None
    return user


def update_profile(db: DatabaseService, user: User, profile: UserUpdate) -> User:
    """
    Updates the caller's own name, email, phone and department. Only the
    fields that were sent are touched; an empty phone clears it. Raises
    ValueError on the first invalid field.
    """
    changes = profile.model_dump(exclude_unset=True)
    updates = {}

    if changes.get("name") is not None:
        name = changes["name"].strip()
        if len(name) < 2:
            raise ValueError("Name must be at least 2 characters long")
        if len(name) > 50:
            raise ValueError("Name must not exceed 50 characters")
        if not NAME_PATTERN.match(name):
            raise ValueError("Name can only contain letters and spaces")
        updates["name"] = name

    if changes.get("email") is not None:
        email = changes["email"].strip().lower()
        if email != user.email:
            existing = db.get_user_by_email(email)
            if existing is not None and existing.id != user.id:
                raise ValueError("Email already in use")
        updates["email"] = email

    if "phone" in changes:
        phone = (changes["phone"] or "").strip()
        if phone:
            if re.search(r"[A-Za-z]", phone):
                raise ValueError("Phone number cannot contain letters")
            if not PHONE_PATTERN.match(phone):
                raise ValueError("Please provide a valid phone number (numbers only)")
            if len(re.sub(r"\D", "", phone)) < 10:
                raise ValueError("Phone number must be at least 10 digits")
        updates["phone"] = phone or None

    if changes.get("department") is not None:
        department = changes["department"].strip()
        if len(department) < 2:
            raise ValueError("Department must be at least 2 characters long")
        if len(department) > 100:
            raise ValueError("Department must not exceed 100 characters")
        updates["department"] = department

    if not updates:
        return user
    updated = db.update_user(user, updates)
    logger.info("Profile updated for %s", user.id)
    return updated
