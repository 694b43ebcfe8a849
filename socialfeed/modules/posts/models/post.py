from sqlalchemy import Column, String, DateTime, Text, ForeignKey

from socialfeed.db.session import Base, utcnow


class Post(Base):
    __tablename__ = "posts"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    # Filenames inside the upload directory, never full URLs
    image = Column(String, nullable=True)
    video = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
