from sqlalchemy import Column, Integer, String, DateTime, Float, Text
from datetime import datetime
from app.database import Base


class Location(Base):
    __tablename__ = "location"

    id = Column(Integer, primary_key=True, index=True)
    search_query = Column(String, unique=True, index=True, nullable=False)
    formatted_query = Column(String, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class WeatherEntry(Base):
    __tablename__ = "weather"

    id = Column(Integer, primary_key=True, index=True)
    time = Column(String, nullable=False)  # display date, e.g. "Mon Oct 19 2026"
    forecast = Column(Text, nullable=False)
    search_query = Column(String, index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class EventEntry(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    link = Column(String, nullable=False)
    name = Column(String, nullable=False)
    event_date = Column(String, nullable=False)
    summary = Column(Text, nullable=True)
    search_query = Column(String, index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class MovieEntry(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    overview = Column(Text, nullable=True)
    average_votes = Column(Float, nullable=True)
    total_votes = Column(Integer, nullable=True)
    image_url = Column(String, nullable=True)
    popularity = Column(Float, nullable=True)
    released_on = Column(String, nullable=True)
    search_query = Column(String, index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
