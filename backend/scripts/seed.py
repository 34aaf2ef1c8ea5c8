from __future__ import annotations

import argparse
from datetime import datetime, timedelta

from mitishirube.auth.passwords import hash_password
from mitishirube.database import Base, SessionLocal, engine
from mitishirube.models.booth import Booth, BoothUser
from mitishirube.models.event import Event
from mitishirube.models.post import BoothPost
from mitishirube.models.schedule import ScheduleEntry
from mitishirube.models.session import LoginSession  # noqa: F401


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed Mitishirube demo data")
    parser.add_argument("--event-id", default="fest2026", help="Id of the demo event")
    parser.add_argument("--booths", type=int, default=3, help="Number of booths (one login each)")
    parser.add_argument("--admin-password", default="admin", help="Password for the 'admin' account")
    parser.add_argument("--booth-password", default="booth", help="Password for each boothN account")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    if args.reset:
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if db.get(Event, args.event_id) is None:
            db.add(Event(
                id=args.event_id,
                name="Mitishirube Festival",
                subtitle="Demo event",
                date=datetime.now().strftime("%Y-%m-%d"),
                location="Main Hall",
            ))

        if not db.query(BoothUser).filter(BoothUser.username == "admin").first():
            db.add(BoothUser(username="admin", password_hash=hash_password(args.admin_password), is_admin=True))

        for i in range(1, args.booths + 1):
            booth_id = f"{args.event_id}-b{i}"
            if db.get(Booth, booth_id) is None:
                db.add(Booth(id=booth_id, event_id=args.event_id, name=f"Booth {i}"))
            username = f"booth{i}"
            if not db.query(BoothUser).filter(BoothUser.username == username).first():
                db.add(BoothUser(username=username, password_hash=hash_password(args.booth_password), booth_id=booth_id))

        if not db.query(ScheduleEntry).filter(ScheduleEntry.event_id == args.event_id).first():
            start = datetime.now().replace(hour=10, minute=0, second=0, microsecond=0)
            for slot, title in enumerate(["Opening", "Keynote", "Booth tour", "Closing"]):
                begins = start + timedelta(hours=2 * slot)
                db.add(ScheduleEntry(
                    event_id=args.event_id,
                    title=title,
                    start_time=begins.strftime("%H:%M"),
                    end_time=(begins + timedelta(hours=1)).strftime("%H:%M"),
                ))

        if not db.query(BoothPost).filter(BoothPost.event_id == args.event_id).first():
            db.add(BoothPost(
                event_id=args.event_id,
                booth_id=f"{args.event_id}-b1",
                title="Welcome",
                body="Booth 1 is open.",
                posted_at=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            ))

        db.commit()
    finally:
        db.close()

    print(f"Seeded event {args.event_id} with {args.booths} booths")


if __name__ == "__main__":
    main()
