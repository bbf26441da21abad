"""
Database initialisation script
Creates the tables and adds the initial services and weekly schedule
Run: python init_db.py
"""
from ajanvaraus.database import SessionLocal, init_db
from ajanvaraus.seed import init_default_services
from ajanvaraus.services.schedule import ScheduleService


def main():
    print("Creating tables...")
    init_db()
    print("Tables created!")

    db = SessionLocal()
    try:
        added = init_default_services(db)
        if added:
            print(f"Added {added} services!")
        else:
            print("Services already exist, skipping...")

        schedule = ScheduleService(db)
        schedule.init_default_schedule()
        for day in schedule.get_week_schedule():
            hours = f"{day['start_time']}-{day['end_time']}" if day["is_available"] else "closed"
            print(f"  {day['day_name']:<10} {hours}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
    print("\nInitialisation complete!")
    print("Start the server with: python -m uvicorn ajanvaraus.main:app --reload")
