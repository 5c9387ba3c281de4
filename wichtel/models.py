from datetime import datetime
from .extensions import db


class RoundRecord(db.Model):
    """
    The single persisted round. The payload is the whole round as JSON:
    {"members": [...], "assignments": {giver: giftee}, "revealed": [...]}.
    """
    __tablename__ = "round_state"

    id = db.Column(db.Integer, primary_key=True)
    payload = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @classmethod
    def get_singleton(cls):
        return cls.query.order_by(cls.id.asc()).first()
