"""In-place schema migrations for databases created by older tooling."""
import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from sqlalchemy import CheckConstraint, MetaData, Table, inspect, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.schema import CreateTable

from .database import Base
from .exceptions import SchemaMigrationException

logger = logging.getLogger(__name__)

# Older generations stored "not featured" as 0 in NOT NULL columns
FEATURED_COLUMNS = ("homepage_featured", "category_featured", "country_featured")
TIMESTAMP_COLUMNS = ("created_at", "updated_at")
TEXT_COLUMNS = ("caption", "location", "country")
REQUIRED_COLUMNS = ("filename", "category") + TEXT_COLUMNS


def migrate_schema(engine: Engine, backup: bool = True) -> List[str]:
    """
    Create or upgrade the photos table. Safe to run repeatedly.

    A table whose columns or CHECK constraints differ from the model is
    rebuilt: rows are copied into a new table with the current definition,
    "not featured" zeros become NULL, and the new table replaces the old one.
    File-backed SQLite databases are copied aside first.

    Args:
        engine: Engine bound to the target database
        backup: Copy the database file before rebuilding

    Returns:
        Description of every step applied (empty when already current)

    Raises:
        SchemaMigrationException: If existing rows cannot satisfy the current constraints
    """
    from photo_portfolio.models.database import Photo

    table = Photo.__table__
    applied: List[str] = []
    inspector = inspect(engine)

    if not inspector.has_table(table.name):
        Base.metadata.create_all(engine)
        applied.append(f"created table {table.name}")
        logger.info(f"Created table {table.name}")
        return applied

    existing = {col["name"]: col for col in inspector.get_columns(table.name)}
    reasons = _rebuild_reasons(inspector, table, existing)
    if reasons:
        logger.info(f"Rebuilding table {table.name}: {'; '.join(reasons)}")
        _check_carry_over(engine, table, existing)
        backup_path = backup_database(engine) if backup else None
        if backup_path:
            applied.append(f"backed up database to {backup_path}")
        copied = _rebuild_table(engine, table, existing, backup_path)
        applied.append(f"rebuilt table {table.name} ({copied} row(s) copied)")
        logger.info(f"Rebuilt table {table.name}, {copied} row(s) copied")

    existing_indexes = {idx["name"] for idx in inspect(engine).get_indexes(table.name)}
    with engine.begin() as conn:
        for index in table.indexes:
            if index.name in existing_indexes:
                continue
            index.create(conn, checkfirst=True)
            applied.append(f"created index {index.name}")
            logger.info(f"Created index {index.name}")

    return applied


def backup_database(engine: Engine) -> Optional[Path]:
    """
    Copy a file-backed SQLite database next to itself.

    Returns:
        Path of the copy, or None for other databases
    """
    database = engine.url.database
    if engine.dialect.name != "sqlite" or not database or database == ":memory:":
        return None
    source = Path(database)
    if not source.is_file():
        return None
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
    target = source.with_name(f"{source.stem}-backup-{stamp}{source.suffix}")
    shutil.copy2(source, target)
    logger.info(f"Backed up {source} to {target}")
    return target


def _rebuild_reasons(inspector, table: Table, existing: Dict[str, dict]) -> List[str]:
    """Differences between the stored table and the model that need a rebuild."""
    reasons = []
    for column in table.columns:
        stored = existing.get(column.name)
        if stored is None:
            reasons.append(f"missing column {column.name}")
        elif not column.primary_key and stored["nullable"] != column.nullable:
            reasons.append(f"nullability of {column.name} differs")

    stored_checks = {ck["name"] for ck in inspector.get_check_constraints(table.name)}
    for constraint in table.constraints:
        if isinstance(constraint, CheckConstraint) and constraint.name not in stored_checks:
            reasons.append(f"missing check {constraint.name}")
    return reasons


def _check_carry_over(engine: Engine, table: Table, existing: Dict[str, dict]):
    """Refuse to rebuild when stored rows would break the current constraints."""
    from photo_portfolio.models.database.photo import CATEGORIES

    missing = [name for name in REQUIRED_COLUMNS if name not in existing]
    if missing:
        raise SchemaMigrationException(f"required column(s) missing: {', '.join(missing)}")

    categories = ", ".join(f"'{c}'" for c in CATEGORIES)
    conditions = [f"category IS NULL OR category NOT IN ({categories})"]
    conditions.extend(f"{name} IS NULL OR length(trim({name})) = 0" for name in TEXT_COLUMNS)
    where = " OR ".join(f"({condition})" for condition in conditions)
    with engine.connect() as conn:
        rows = conn.execute(
            text(f"SELECT filename FROM {table.name} WHERE {where} ORDER BY id")
        ).scalars().all()
    if rows:
        shown = ", ".join(str(row) for row in rows[:5]) + (" ..." if len(rows) > 5 else "")
        raise SchemaMigrationException(
            f"{len(rows)} photo(s) have a category outside {', '.join(CATEGORIES)} "
            f"or empty alt text fields: {shown}"
        )


def _carry_over(name: str, existing: Dict[str, dict]) -> str:
    """SELECT expression producing the value of one column of the new table."""
    if name not in existing:
        return "CURRENT_TIMESTAMP" if name in TIMESTAMP_COLUMNS else "NULL"
    if name in FEATURED_COLUMNS:
        return f"NULLIF({name}, 0)"
    if name in TIMESTAMP_COLUMNS:
        return f"COALESCE({name}, CURRENT_TIMESTAMP)"
    if name in ("sub_category", "date"):
        return f"NULLIF(trim({name}), '')"
    return name


def _rebuild_table(
    engine: Engine,
    table: Table,
    existing: Dict[str, dict],
    backup_path: Optional[Path]
) -> int:
    """Copy rows into a table with the current definition and swap it in."""
    staging = table.to_metadata(MetaData(), name=f"{table.name}_new")
    columns = ", ".join(column.name for column in table.columns)
    values = ", ".join(_carry_over(column.name, existing) for column in table.columns)

    try:
        with engine.begin() as conn:
            conn.execute(text(f"DROP TABLE IF EXISTS {staging.name}"))
            conn.execute(CreateTable(staging))
            conn.execute(text(
                f"INSERT INTO {staging.name} ({columns}) SELECT {values} FROM {table.name} ORDER BY id"
            ))
            copied = _count(conn, staging.name)
            conn.execute(text(f"DROP TABLE {table.name}"))
            conn.execute(text(f"ALTER TABLE {staging.name} RENAME TO {table.name}"))
    except IntegrityError as e:
        with engine.begin() as conn:
            conn.execute(text(f"DROP TABLE IF EXISTS {staging.name}"))
        raise SchemaMigrationException(str(e.orig), backup_path) from e
    return copied


def _count(conn: Connection, name: str) -> int:
    return conn.execute(text(f"SELECT COUNT(*) FROM {name}")).scalar_one()
