# passguard/models/policy_record.py
"""Persisted password policy"""
from passguard.extensions import db
from passguard.models.records import utcnow


class PolicyRecord(db.Model):
    """Single-row table holding the active policy in its wire form"""
    __tablename__ = 'password_policy'

    id = db.Column(db.Integer, primary_key=True)
    policy = db.Column(db.JSON, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f'<PolicyRecord updated_at={self.updated_at}>'
