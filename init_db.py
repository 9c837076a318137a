import argparse

from app.core.database import engine, Base

# Every model has to be imported so create_all knows about its table
from app.models.team import Team
from app.models.game import Game

def init_db(reset: bool = False):
    print("🔄 Connecting to the database...")

    if reset:
        # WARNING: this deletes every team and game
        print("🗑️  Dropping existing tables...")
        Base.metadata.drop_all(bind=engine)

    print("✨ Creating tables (teams, games)...")
    Base.metadata.create_all(bind=engine)

    print("✅ Database ready")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the teams/games tables")
    parser.add_argument("--reset", action="store_true", help="drop existing tables first")
    args = parser.parse_args()
    init_db(reset=args.reset)
