from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, CheckConstraint, func
from app.core.database import Base

class Game(Base):
    __tablename__ = "games"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False)
    home = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False)  # teams.id
    away = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False)  # teams.id
    home_score = Column(Integer, nullable=False, default=0)
    away_score = Column(Integer, nullable=False, default=0)
    created = Column(DateTime, server_default=func.now())

    __table_args__ = (
        CheckConstraint("home_score >= 0", name="ck_games_home_score"),
        CheckConstraint("away_score >= 0", name="ck_games_away_score"),
        CheckConstraint("home <> away", name="ck_games_distinct_teams"),
    )
