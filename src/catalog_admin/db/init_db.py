import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from catalog_admin.crud.crud_feature import feature as crud_feature
from catalog_admin.crud.crud_plan_type import plan_type as crud_plan_type
from catalog_admin.db.session import AsyncSessionLocal, engine
from catalog_admin.models import Base, Feature, PlanType

logger = logging.getLogger(__name__)

SEED_DIR = Path(__file__).parent / "seed"


def _load_seed(name: str) -> list[dict[str, Any]]:
    seed_file = SEED_DIR / f"{name}.json"
    if not seed_file.exists():
        logger.info(f"No {name} seed file found - skipping")
        return []
    with open(seed_file, "r") as f:
        return json.load(f)


async def create_tables(db_engine: AsyncEngine, *, drop: bool = False) -> None:
    """Create every catalog table, dropping them first when asked.

    ``drop_all`` walks the foreign keys, so plan_features and
    subscription_plans go before plan_types and features.
    """
    async with db_engine.begin() as conn:
        if drop:
            logger.info("Dropping existing tables...")
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created: %s", ", ".join(Base.metadata.tables))


async def _create_plan_types(db: AsyncSession) -> None:
    """Create plan types from the seed file unless the name is taken.

    Args:
        db: Database session
    """
    for row in _load_seed("plan_types"):
        if await crud_plan_type.get_by_name(db, name=row["name"]):
            logger.info(f"Plan type already exists: {row['name']} - skipping")
            continue
        db.add(PlanType(id=UUID(row["id"]), name=row["name"], description=row.get("description")))
        logger.info(f"Created plan type: {row['name']}")


async def _create_features(db: AsyncSession) -> None:
    """Create features from the seed file unless the label is taken.

    Args:
        db: Database session
    """
    for row in _load_seed("features"):
        if await crud_feature.get_by_label(db, label=row["label"]):
            logger.info(f"Feature already exists: {row['label']} - skipping")
            continue
        db.add(Feature(id=UUID(row["id"]), label=row["label"], description=row.get("description")))
        logger.info(f"Created feature: {row['label']}")


async def seed_catalog(db: AsyncSession) -> None:
    """Insert the initial plan types and features in one transaction."""
    try:
        await _create_plan_types(db)
        await _create_features(db)
        await db.commit()
    except Exception as e:
        logger.error(f"Seeding failed: {str(e)}")
        await db.rollback()
        raise


async def init_db(*, drop: bool = False) -> None:
    """Initialize the database schema and seed data."""
    await create_tables(engine, drop=drop)
    async with AsyncSessionLocal() as db:
        await seed_catalog(db)
    logger.info("Database initialization completed successfully")


def main() -> None:
    """Main function to run database initialization."""
    parser = argparse.ArgumentParser(description="Create and seed the catalog tables.")
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = parser.parse_args()
    try:
        asyncio.run(init_db(drop=args.drop))
        print("✅ Database initialization completed successfully!")
    except Exception as e:
        print(f"❌ Database initialization failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
