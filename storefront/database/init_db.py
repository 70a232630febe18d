"""
Database initialization and seeding.

This script:
- Creates all database tables
- Optionally adds sample data for development/testing
- Can reset the database (drop and recreate)

Usage:
    # Create tables
    python -m storefront.database.init_db

    # Reset database (drops all tables and recreates)
    python -m storefront.database.init_db --reset

    # Add sample data for testing
    python -m storefront.database.init_db --sample-data
"""

import argparse
import logging
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import Engine

from storefront.core.logging import setup_logging
from storefront.database.context import DataContext
from storefront.database.session import create_all_tables, drop_all_tables, get_engine
from storefront.models import Category, Product, User, UserProduct
from storefront.repositories import GenericRepository

logger = logging.getLogger(__name__)


def create_tables(engine: Engine, reset: bool = False) -> None:
    """
    Create all database tables.

    Args:
        engine: Target engine
        reset: If True, drop existing tables first
    """
    if reset:
        print("🗑️  Dropping existing tables...")
        drop_all_tables(engine)
        print("✅ Tables dropped")

    print("📊 Creating database tables...")
    create_all_tables(engine)
    print("✅ Tables created")


def seed_sample_data(engine: Engine) -> bool:
    """
    Seed sample data for development and testing.

    This creates:
    - Two categories
    - A few products in each
    - Two users, each linked to some products

    Skipped when the store already holds categories.

    Returns:
        True if sample data was written
    """
    print("\n🌱 Seeding sample data...")

    with GenericRepository(DataContext(engine=engine)) as repository:
        if repository.filter(Category).total > 0:
            print("  ⏭️  Categories already exist (skipping)")
            return False

        print("  🗂️  Creating categories...")
        categories = [
            repository.create(Category(name="Hardware")),
            repository.create(Category(name="Books")),
        ]

        print("  📦 Creating products...")
        products = [
            repository.create(Product(name="Widget", image="img/widget.png",
                                      order=1, id_category=categories[0].id_category)),
            repository.create(Product(name="Gadget", image="img/gadget.png",
                                      order=2, id_category=categories[0].id_category)),
            repository.create(Product(name="Field Guide", image=None,
                                      order=1, id_category=categories[1].id_category)),
        ]

        print("  👤 Creating users...")
        users = [
            repository.create(User(first_name="Ana", last_name="García",
                                   email="ana@example.com", phone="555-0100",
                                   document="CC-1001", address="Calle 1 #2-3",
                                   birthday=date(1990, 5, 17))),
            repository.create(User(first_name="Luis", last_name="Pérez",
                                   email="luis@example.com", phone="555-0101",
                                   document="CC-1002", address="Carrera 4 #5-6",
                                   birthday=date(1985, 11, 2))),
        ]

        print("  🔗 Linking users to products...")
        links: Dict[int, List[int]] = {
            users[0].id_user: [products[0].id_product, products[2].id_product],
            users[1].id_user: [products[1].id_product],
        }
        for id_user, product_ids in links.items():
            for id_product in product_ids:
                link = repository.create(UserProduct(id_user=id_user, id_product=id_product))
                print(f"    ✅ {link}")

    print("✅ Sample data seeded")
    return True


def table_counts(engine: Engine) -> Dict[str, int]:
    """Row count per table."""
    with GenericRepository(DataContext(engine=engine)) as repository:
        return {
            "users": repository.filter(User).total,
            "categories": repository.filter(Category).total,
            "products": repository.filter(Product).total,
            "user_products": repository.filter(UserProduct).total,
        }


def print_database_status(engine: Engine) -> None:
    """Print current database status and counts."""
    print("\n" + "=" * 60)
    print("📊 Database Status")
    print("=" * 60)

    for table, count in table_counts(engine).items():
        print(f"  {table + ':':<15}{count}")

    print("=" * 60)


def initialize_database(database_url: Optional[str] = None, reset: bool = False,
                        sample_data: bool = False) -> Engine:
    """
    Initialize the database.

    Args:
        database_url: Target database, defaults to settings.database_url
        reset: Drop existing tables before creating
        sample_data: Add sample data for testing
    """
    print("=" * 60)
    print("🗄️  Database Initialization")
    print("=" * 60)

    engine = get_engine(database_url)

    create_tables(engine, reset=reset)

    if sample_data:
        seed_sample_data(engine)

    print_database_status(engine)

    print("\n✅ Database initialization complete!")
    return engine


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Initialize and seed the storefront database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create tables
  python -m storefront.database.init_db

  # Reset database (drop all tables and recreate)
  python -m storefront.database.init_db --reset

  # Full reset with sample data, no prompt
  python -m storefront.database.init_db --reset --sample-data --yes
        """
    )

    parser.add_argument(
        "--database-url",
        default=None,
        help="Database URL (defaults to DATABASE_URL / settings)"
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing tables before creating (WARNING: deletes all data!)"
    )

    parser.add_argument(
        "--sample-data",
        action="store_true",
        help="Add sample data for development/testing"
    )

    parser.add_argument(
        "--yes",
        action="store_true",
        help="Do not ask for confirmation before --reset"
    )

    args = parser.parse_args(argv)
    setup_logging()

    if args.reset and not args.yes:
        print("⚠️  WARNING: This will DELETE ALL DATA in the database!")
        response = input("Are you sure? Type 'yes' to continue: ")
        if response.lower() != 'yes':
            print("❌ Aborted")
            return 1

    try:
        initialize_database(args.database_url, reset=args.reset, sample_data=args.sample_data)
    except Exception:
        logger.exception("Database initialization failed")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
