from app.db.models import Groomer, Service
from app.db.session import SessionLocal


DEMO_SERVICES = [
    ("Bath & brush", 30, 25.0),
    ("Full groom", 60, 55.0),
    ("Nail trim", 15, 12.0),
]


def seed_demo_groomer() -> None:
    session = SessionLocal()
    try:
        existing = session.query(Groomer).filter(Groomer.name == "Demo Groomer").first()
        if existing is not None:
            print(f"Demo groomer already exists with id={existing.id}")
            return

        demo = Groomer(
            name="Demo Groomer",
            address="Calle Mayor 1, Madrid",
            description="Demo grooming salon",
            lat=40.416775,
            lng=-3.703790,
            photo_url=None,
            opening_hour="09:00",
            closing_hour="18:00",
        )
        session.add(demo)
        known = {name for (name,) in session.query(Service.name).all()}
        for name, duration, price in DEMO_SERVICES:
            if name not in known:
                session.add(Service(name=name, duration=duration, price=price))
        session.commit()
        session.refresh(demo)
        print(f"Created demo groomer with id={demo.id}")
    finally:
        session.close()


if __name__ == "__main__":
    seed_demo_groomer()
