"""Order management CLI.

Usage:
    order-management setup-db    # Create tables on relational providers
    order-management drop-db     # Drop them
    order-management seed        # Load reference customers and orders
    order-management analytics   # Seed, then print the analytics snapshot
"""

import argparse
import json
import sys

from order_management.domain import order_management


def setup_database():
    from order_management.utils.db import setup_db

    print("Initializing order_management domain...")
    order_management.init()
    count = setup_db(order_management)
    print(f"  schema ready on {count} relational provider(s).")


def drop_database():
    from order_management.utils.db import drop_db

    print("Initializing order_management domain...")
    order_management.init()
    count = drop_db(order_management)
    print(f"  schema dropped on {count} relational provider(s).")


def seed():
    from order_management.seed import seed_reference_data

    order_management.init()
    with order_management.domain_context():
        result = seed_reference_data()

    if result.seeded:
        print(f"Seeded {result.customers} customers and {result.orders} orders.")
    else:
        print("Reference data already present; nothing to do.")


def analytics():
    from order_management.order.requests import GetAnalyticsRequest
    from order_management.order.service import OrderService
    from order_management.seed import seed_reference_data

    order_management.init()
    with order_management.domain_context():
        seed_reference_data()
        result = OrderService().get_analytics(GetAnalyticsRequest())

    if not result.success:
        print(result.message, file=sys.stderr)
        sys.exit(1)
    print(json.dumps(result.data.to_dict(), indent=2))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Order management tooling")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load reference customers and orders")
    subparsers.add_parser("analytics", help="Print the order analytics snapshot")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed()
    elif args.command == "analytics":
        analytics()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
