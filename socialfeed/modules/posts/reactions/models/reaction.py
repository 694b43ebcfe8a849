from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint

from socialfeed.db.session import Base, utcnow


class Reaction(Base):
    __tablename__ = "reactions"
    __table_args__ = (
        # One reaction per user per post; toggle_reaction depends on this
        UniqueConstraint("post_id", "user_id", name="uq_reaction_post_user"),
    )

    id = Column(String, primary_key=True, index=True)
    post_id = Column(String, ForeignKey("posts.id"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
