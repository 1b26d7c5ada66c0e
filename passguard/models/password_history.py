# passguard/models/password_history.py
"""Password history model
Stores salted digests of previous passwords to enforce the reuse window
"""
from passguard.extensions import db
from passguard.models.records import utcnow


class PasswordHistory(db.Model):
    """
    One previously used password for an identity
    position 0 is the most recent entry
    """
    __tablename__ = 'password_history'

    id = db.Column(db.Integer, primary_key=True)
    identity = db.Column(db.String(255), db.ForeignKey('password_info.identity'),
                         nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False)

    # Stored password components (never plaintext)
    password_hash = db.Column(db.String(256), nullable=False)
    salt = db.Column(db.String(256), nullable=False)
    scheme = db.Column(db.String(20), nullable=False, default='pbkdf2')
    iterations = db.Column(db.Integer, nullable=True)

    # Temporal tracking
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f'<PasswordHistory identity={self.identity} position={self.position}>'
