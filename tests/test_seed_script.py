from sqlalchemy.orm import sessionmaker

from app.models import Restaurant, User, UserRole
from app.scripts import seed_demo_data


class TestSeedDemoData:

    def test_seed_creates_restaurants_and_users(self, db, monkeypatch):
        bind = db.get_bind()
        monkeypatch.setattr(seed_demo_data, "engine", bind)
        monkeypatch.setattr(seed_demo_data, "SessionLocal", sessionmaker(bind=bind))

        assert seed_demo_data.main() == 0

        assert db.query(Restaurant).count() == 3
        owner = db.query(User).filter(User.role == UserRole.OWNER).one()
        linde = db.query(Restaurant).filter(Restaurant.name == "Zur Linde").one()
        assert owner.restaurant_id == linde.id
        assert linde.owner_id == owner.id

    def test_seed_is_idempotent(self, db, monkeypatch):
        bind = db.get_bind()
        monkeypatch.setattr(seed_demo_data, "engine", bind)
        monkeypatch.setattr(seed_demo_data, "SessionLocal", sessionmaker(bind=bind))

        seed_demo_data.main()
        assert seed_demo_data.main() == 0
        assert db.query(Restaurant).count() == 3
