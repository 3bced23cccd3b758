"""
CRUD helper functions shared by the storage backends and the API routes.

These helpers extract common patterns like:
- Get-or-404 logic
- Mapping a blocked delete to 409
- Partial field-set merges over an existing record
- Standard commit/refresh patterns
"""
from typing import Any, Callable, Dict, Optional, TypeVar, Union, TYPE_CHECKING
from fastapi import HTTPException
from pydantic import BaseModel
from sqlmodel import Session
from sqlalchemy.inspection import inspect

from .guards import DeleteCheck

if TYPE_CHECKING:
    from .storage.base import Storage

ModelType = TypeVar("ModelType")


def get_or_404(
    getter: Callable[[Any], Optional[ModelType]],
    model_id: Any,
    resource_name: str
) -> ModelType:
    """
    Fetch a record through a storage getter or raise 404 if not found.

    Args:
        getter: Storage read method, e.g. ``storage.get_position``
        model_id: The primary key value
        resource_name: Human-readable resource name for the error message

    Returns:
        The record

    Raises:
        HTTPException: 404 if the record does not exist
    """
    instance = getter(model_id)
    if instance is None:
        raise HTTPException(
            status_code=404,
            detail=f"{resource_name} {model_id} not found"
        )
    return instance


def ensure_deletable(storage: "Storage", kind: str, model_id: int, resource_name: str) -> None:
    """
    Raise the right HTTP error when an entity cannot be deleted.

    Raises:
        HTTPException: 404 if the entity does not exist, 409 if referrals
            still reference it
    """
    check = storage.check_delete(kind, model_id)
    if check == DeleteCheck.NOT_FOUND:
        raise HTTPException(status_code=404, detail=f"{resource_name} {model_id} not found")
    if check == DeleteCheck.HAS_REFERRALS:
        raise HTTPException(
            status_code=409,
            detail=f"{resource_name} {model_id} cannot be deleted because it has referrals"
        )


def as_changes(partial: Union[BaseModel, Dict[str, Any], None]) -> Dict[str, Any]:
    """
    Normalize a partial update into a plain dict of the fields the caller set.

    Pydantic models contribute only explicitly-set fields, so an omitted field
    is left alone while an explicit ``None`` clears it.
    """
    if partial is None:
        return {}
    if isinstance(partial, BaseModel):
        return partial.model_dump(exclude_unset=True)
    return dict(partial)


def update_model_fields(
    model: Any,
    updates: Dict[str, Any],
    exclude_fields: Optional[set] = None,
    skip_none: bool = False
) -> None:
    """
    Update model fields from a dictionary.

    Unknown fields and the primary key are ignored.

    Args:
        model: The model instance to update
        updates: Dictionary of field_name: value pairs
        exclude_fields: Set of field names to skip even if present in updates
        skip_none: If True, None values leave the current value untouched
    """
    exclude = set(exclude_fields or ()) | {"id"}

    # Get valid column names for the model
    mapper = inspect(model.__class__)
    valid_columns = {col.key for col in mapper.columns}

    for field_name, value in updates.items():
        if field_name in exclude:
            continue
        if field_name not in valid_columns:
            continue
        if skip_none and value is None:
            continue

        setattr(model, field_name, value)


def clone_record(model: ModelType) -> ModelType:
    """Return a detached copy of a table model instance"""
    return type(model)(**model.model_dump())


def commit_and_refresh(session: Session, model: Any) -> Any:
    """
    Standard commit and refresh pattern.

    Args:
        session: Database session
        model: Model instance to commit

    Returns:
        The refreshed model instance
    """
    session.add(model)
    session.commit()
    session.refresh(model)
    return model
