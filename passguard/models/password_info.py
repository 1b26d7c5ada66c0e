# passguard/models/password_info.py
"""Per-identity password lifecycle state"""
from passguard.extensions import db


class PasswordInfo(db.Model):
    """Last change timestamp and change counter for an identity"""
    __tablename__ = 'password_info'

    identity = db.Column(db.String(255), primary_key=True)
    last_changed_at = db.Column(db.DateTime, nullable=True)
    change_count = db.Column(db.Integer, nullable=False, default=0)

    # Relationships
    history = db.relationship('PasswordHistory', backref='info', lazy=True,
                              order_by='PasswordHistory.position',
                              cascade='all, delete-orphan')

    def __repr__(self):
        return f'<PasswordInfo {self.identity} changes={self.change_count}>'
