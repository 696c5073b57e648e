"""
CareBridge Database Seeder

Creates demo data for local development:
- An admin, a recruiter (with profile) and a worker (with profile)
- A few job categories and one open job
- A pending application from the worker to that job
"""

import sys
sys.path.insert(0, ".")

from app.db.session import SessionLocal, engine
from app.db.base import Base
from app.models import (
    Application,
    ApplicationStatus,
    Job,
    JobCategory,
    Recruiter,
    RecruiterType,
    Role,
    SalaryType,
    User,
    Worker,
)
from app.core.security import get_password_hash

CATEGORIES = [
    ("Nanny", "Child care in the family home"),
    ("Teacher", "Private tutoring and classroom teaching"),
    ("Caregiver", "Support for elderly and disabled people"),
    ("Housekeeper", "Cleaning and household management"),
]


def seed_database():
    """Seed the database with demo data."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        # Check if already seeded
        existing_admin = db.query(User).filter(User.email == "admin@carebridge.com").first()
        if existing_admin:
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        # 1. Admin
        admin = User(
            email="admin@carebridge.com",
            password=get_password_hash("admin123"),
            first_name="Amina",
            last_name="Uwase",
            role=Role.ADMIN,
        )
        db.add(admin)

        # 2. Recruiter user + profile
        recruiter_user = User(
            email="recruiter@carebridge.com",
            password=get_password_hash("recruiter123"),
            first_name="Sarah",
            last_name="Chen",
            phone="250788000001",
            role=Role.RECRUITER,
        )
        db.add(recruiter_user)
        db.flush()  # Get IDs

        db.add(
            Recruiter(
                user_id=recruiter_user.id,
                company_name="Kigali Family Services",
                type=RecruiterType.COMPANY,
                description="Placing trusted carers with families since 2015",
                location="Kigali",
                verified=True,
            )
        )

        # 3. Worker user + profile
        worker_user = User(
            email="worker@carebridge.com",
            password=get_password_hash("worker123"),
            first_name="John",
            last_name="Mugisha",
            phone="250788000002",
            role=Role.WORKER,
        )
        db.add(worker_user)
        db.flush()

        db.add(
            Worker(
                user_id=worker_user.id,
                location="Kigali",
                experience="4 years as a nanny for two families",
                skills="Child care, First aid, Cooking",
                available=True,
            )
        )

        # 4. Categories
        categories = [JobCategory(name=name, description=description) for name, description in CATEGORIES]
        db.add_all(categories)
        db.flush()

        # 5. One open job and an application to it
        job = Job(
            title="Full-time Nanny",
            description="Looking after two children aged 3 and 6, Monday to Friday.",
            location="Kigali",
            salary=150000,
            salary_type=SalaryType.MONTHLY,
            requirements="Two years of experience, references",
            working_hours="08:00-17:00",
            skills=["Child care", "First aid"],
            category_id=categories[0].id,
            recruiter_id=recruiter_user.id,
        )
        db.add(job)
        db.flush()

        db.add(
            Application(
                job_id=job.id,
                worker_id=worker_user.id,
                status=ApplicationStatus.PENDING,
                message="I would love to help your family.",
            )
        )

        # Commit all changes
        db.commit()

        print("Database seeded successfully!")
        print("\nCreated Users:")
        print("   - admin@carebridge.com (password: admin123) [ADMIN]")
        print("   - recruiter@carebridge.com (password: recruiter123) [RECRUITER]")
        print("   - worker@carebridge.com (password: worker123) [WORKER]")
        print(f"\nCreated {len(categories)} job categories and 1 job with 1 application")

    except Exception as e:
        db.rollback()
        print(f"Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
