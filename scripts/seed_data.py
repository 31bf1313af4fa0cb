from __future__ import annotations

import argparse
from datetime import date
from decimal import Decimal

from planpilot.api.app.db.database import get_sessionmaker
from planpilot.api.app.db.init_db import init_db
from planpilot.api.app.services.records import (
    Event,
    Expense,
    Guest,
    RsvpStatus,
    Task,
    TaskStatus,
    Vendor,
)
from planpilot.api.app.services.store_sql import SqlStore
from planpilot.api.app.services.users import register_user


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed PlanPilot sample data")
    parser.add_argument("--host-name", default="John Doe")
    parser.add_argument("--host-email", default="john@example.com")
    parser.add_argument("--host-password", default="password123")
    parser.add_argument("--event-name", default="Summer Wedding")
    args = parser.parse_args()

    init_db()
    store = SqlStore(get_sessionmaker())

    email = args.host_email.strip().lower()
    host = next(store.users.scan(email=email), None)
    if host is None:
        host = register_user(store, name=args.host_name, email=email, password=args.host_password)

    # One sample event per host; rerunning is a no-op.
    if next(store.events.scan(host_id=host.id, name=args.event_name), None) is not None:
        print(f"Already seeded host={host.id}")
        return 0

    event = Event(
        name=args.event_name,
        type="Wedding",
        date=date(2024, 7, 15),
        description="Beautiful summer wedding celebration",
        host_id=host.id,
    )
    store.events.insert(event)

    store.tasks.insert(
        Task(
            name="Book Venue",
            description="Find and book the perfect wedding venue",
            assignee_id=host.id,
            due_date=date(2024, 3, 1),
            status=TaskStatus.TODO,
            event_id=event.id,
        )
    )
    store.guests.insert(
        Guest(
            name="Jane Smith",
            email="jane@example.com",
            plus_one=1,
            notes="Vegetarian meal preference",
            rsvp_status=RsvpStatus.PENDING,
            event_id=event.id,
        )
    )
    store.vendors.insert(
        Vendor(
            company_name="Elegant Catering",
            contact_name="Sarah Johnson",
            email="sarah@elegantcatering.com",
            service_provided="Catering",
            event_id=event.id,
        )
    )
    store.expenses.insert(
        Expense(
            name="Venue Deposit",
            category="Venue",
            amount=Decimal("2500"),
            is_paid=True,
            event_id=event.id,
        )
    )

    print(f"Seeded host={host.id} event={event.id}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
