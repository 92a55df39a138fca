from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import Session
from league_backend.core.database import Base


class IdCounter(Base):
    """Highest number ever issued per id prefix. Deleting rows never lowers it."""
    __tablename__ = "id_counters"

    prefix = Column(String, primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)


def _highest_suffix(db: Session, model, prefix: str, id_field: str) -> int:
    highest = 0
    for (value,) in db.query(getattr(model, id_field)).all():
        suffix = value[len(prefix):] if value and value.startswith(prefix) else ""
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return highest


def generate_custom_id(db: Session, model, prefix: str, id_field: str):
    """
    Generate a human-readable unique ID with a prefix.

    Ids are never reissued: events and matches keep plain references to
    players and teams, so a reused id would inherit a deleted row's history.
    The counter row is created on first use, seeded from the highest id
    already stored, and is committed along with the caller's new row.

    :param db: SQLAlchemy session
    :param model: SQLAlchemy model class
    :param prefix: String prefix for the ID (e.g., "T" for team, "P" for player)
    :param id_field: Field name storing the custom ID
    :return: Generated custom ID (e.g., "T1", "P42", "YC7")
    """
    counter = db.query(IdCounter).filter(IdCounter.prefix == prefix).with_for_update().first()
    if counter is None:
        counter = IdCounter(prefix=prefix, last_value=_highest_suffix(db, model, prefix, id_field))
        db.add(counter)

    counter.last_value += 1
    db.flush()
    return f"{prefix}{counter.last_value}"


def apply_updates(instance, updates: dict, allowed_fields):
    """
    Copy the allowed keys of ``updates`` onto ``instance``; returns the names that changed.

    An explicit None clears nullable columns and is ignored for required ones.
    """
    columns = instance.__table__.columns
    changed = []
    for key in allowed_fields:
        if key not in updates:
            continue
        value = updates[key]
        if value is None and key in columns and not columns[key].nullable:
            continue
        if getattr(instance, key) != value:
            setattr(instance, key, value)
            changed.append(key)
    return changed
