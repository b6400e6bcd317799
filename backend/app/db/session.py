from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.config import DATABASE_URL, SQL_ECHO


engine = create_engine(DATABASE_URL, pool_pre_ping=True, echo=SQL_ECHO)

# Store methods hand rows back after the session closes.
SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
