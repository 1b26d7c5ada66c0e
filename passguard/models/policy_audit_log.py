# passguard/models/policy_audit_log.py
"""Policy audit log model
Tracks administrative changes to the password policy
"""
from passguard.extensions import db
from passguard.models.records import utcnow


class PolicyAuditLog(db.Model):
    """One administrative action on the password policy"""
    __tablename__ = 'policy_audit_logs'

    id = db.Column(db.Integer, primary_key=True)
    admin = db.Column(db.String(255), nullable=True)
    action = db.Column(db.String(64), nullable=False)
    details = db.Column(db.JSON, nullable=False, default=dict)

    # Temporal tracking
    timestamp = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    def __repr__(self):
        return f'<PolicyAuditLog action={self.action} timestamp={self.timestamp}>'

    @classmethod
    def trim(cls, keep):
        """Remove all but the newest `keep` entries"""
        stale = cls.query.order_by(cls.timestamp.desc(), cls.id.desc()).offset(keep).all()
        for entry in stale:
            db.session.delete(entry)
        return len(stale)
