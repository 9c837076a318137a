from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, DateTime, func
from app.core.database import Base

class Team(Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    name: Mapped[str] = mapped_column(Text)  # stored escaped, can outgrow the 64 char input limit
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)  # derived from name
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
