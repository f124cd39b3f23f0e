from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError
import logging

from eca_admin.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from eca_admin.models import User
from eca_admin.models.enum import UserRole
from eca_admin.schemas.user import UserCreate, UserUpdate
from eca_admin.utils.hashing import (
    generate_temporary_password,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 20


async def get_all_users(db: AsyncSession):
    """
    List every user, newest id first.

    Args:
        db: Database session

    Returns:
        list[User]: Users
    """
    result = await db.scalars(select(User).order_by(User.id.desc()))
    return result.all()


async def search_users(db: AsyncSession, query: str):
    """
    Users whose name, first name, last name or email contains ``query``.

    Args:
        db: Database session
        query: Search term (case-insensitive)

    Returns:
        list[User]: At most 20 users, alphabetical by name
    """
    query = query.strip()
    if not query:
        return []
    pattern = f"%{query}%"
    result = await db.scalars(
        select(User)
        .where(
            or_(
                User.name.ilike(pattern),
                User.first_name.ilike(pattern),
                User.last_name.ilike(pattern),
                User.email.ilike(pattern),
            )
        )
        .order_by(User.name.asc())
        .limit(SEARCH_LIMIT)
    )
    return result.all()


async def get_user_by_id(db: AsyncSession, user_id: int):
    """
    Get a user by id.

    Raises:
        NotFoundError: Unknown user
    """
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


async def get_user_by_email(db: AsyncSession, email: str):
    """
    Find a user by email, case-insensitively.

    Returns:
        User | None
    """
    return await db.scalar(
        select(User).where(func.lower(User.email) == email.strip().lower())
    )


async def create_user(db: AsyncSession, data: UserCreate, creator: User):
    """
    Create a user.

    Staff accounts (admin, super_admin) can only be created by a super admin,
    need an email, and get a temporary password that must be changed at
    first login.

    Args:
        db: Database session
        data: New user
        creator: Authenticated staff member creating the account

    Returns:
        tuple[User, str | None]: The user and the temporary password, if any

    Raises:
        ForbiddenError 403: A non super admin creates a staff account
        ValidationError 400: Staff account without email
        ConflictError 409: Email already used
    """
    if data.role.is_staff and creator.role != UserRole.SUPER_ADMIN:
        logger.warning(f"⚠️ User {creator.id} tried to create a {data.role.value} account")
        raise ForbiddenError("Only super admins can create staff accounts")
    if data.role.is_staff and not data.email:
        raise ValidationError("email is required for staff accounts")

    if data.email and await get_user_by_email(db, data.email):
        logger.warning(f"⚠️ Attempt to create duplicate user: {data.email}")
        raise ConflictError("This email is already used")

    temporary_password = None
    fields = data.model_dump()
    fields["name"] = fields.get("name") or " ".join(
        part for part in (data.first_name, data.last_name) if part
    )
    if data.role.is_staff:
        temporary_password = generate_temporary_password()
        fields["password_hash"] = hash_password(temporary_password)
        fields["password_needs_change"] = True

    user = User(**fields)
    try:
        db.add(user)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.error(f"❌ IntegrityError creating user {data.email}: {e}")
        raise ConflictError("This email is already used")

    logger.info(f"✅ User created: {user.id} - {user.name} ({user.role.value})")
    return user, temporary_password


async def update_user(db: AsyncSession, user_id: int, data: UserUpdate, editor: User):
    """
    Partial update of a user.

    Raises:
        NotFoundError 404: Unknown user
        ForbiddenError 403: A non super admin grants or edits a staff role
        ConflictError 409: Email already used
    """
    user = await get_user_by_id(db, user_id)
    fields = data.model_dump(exclude_unset=True)
    for non_nullable in ("role", "is_active", "name"):
        if non_nullable in fields and fields[non_nullable] is None:
            fields.pop(non_nullable)

    new_role = fields.get("role")
    if editor.role != UserRole.SUPER_ADMIN and (
        (new_role is not None and new_role.is_staff) or user.role == UserRole.SUPER_ADMIN
    ):
        raise ForbiddenError("Only super admins can manage staff roles")

    email = fields.get("email")
    if email:
        other = await get_user_by_email(db, email)
        if other is not None and other.id != user_id:
            raise ConflictError("This email is already used")

    try:
        for key, value in fields.items():
            setattr(user, key, value)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.error(f"❌ IntegrityError updating user {user_id}: {e}")
        raise ConflictError("This email is already used")

    logger.info(f"✅ User updated: {user.id} - {sorted(fields)}")
    return user


async def delete_user(db: AsyncSession, user_id: int, current_user: User):
    """
    Delete a user.

    Raises:
        ValidationError 400: Users cannot delete their own account here
        NotFoundError 404: Unknown user
        ConflictError 409: The user is still referenced (orders, assignments...)
    """
    if user_id == current_user.id:
        raise ValidationError("You cannot delete your own account")
    user = await get_user_by_id(db, user_id)
    try:
        await db.delete(user)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"⚠️ User {user_id} is still referenced: {e.orig}")
        raise ConflictError("User is still referenced by other records")
    logger.info(f"🗑️ User deleted: {user_id}")
    return True


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User | None:
    """
    Check a user's credentials.

    Returns:
        User | None: The user when the email/password pair is valid and the
        account is active, otherwise None
    """
    user = await get_user_by_email(db, email)
    if not user:
        logger.warning(f"Login attempt for non-existent user: {email}")
        return None
    if not user.is_active:
        logger.warning(f"Login attempt for inactive user: {email}")
        return None
    if not verify_password(password, user.password_hash):
        logger.warning(f"Invalid password for user: {email}")
        return None

    logger.info(f"✅ User authenticated: {user.id} - {user.email}")
    return user


async def change_password(
    db: AsyncSession, user: User, current_password: str, new_password: str
):
    """
    Replace the password of ``user`` and clear the change-required flag.

    Raises:
        ValidationError 400: Wrong current password
    """
    if not verify_password(current_password, user.password_hash):
        logger.warning(f"Invalid current password for user {user.id}")
        raise ValidationError("Invalid current password")
    user.password_hash = hash_password(new_password)
    user.password_needs_change = False
    await db.commit()
    logger.info(f"🔑 Password changed for user {user.id}")
    return user
