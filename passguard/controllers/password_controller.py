# passguard/controllers/password_controller.py
"""Password Controller
JSON endpoints for the authentication flow: validate, generate, record, expiry
"""
from flask import Blueprint, current_app, jsonify, request

from passguard.errors import InvalidInputError

passwords_bp = Blueprint('passwords', __name__)


def get_engine():
    """Engine registered on the application by create_app"""
    return current_app.extensions['passguard']


def json_body():
    """Parsed JSON object body; anything else is a caller error"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidInputError('Request body must be a JSON object')
    return data


@passwords_bp.route('/validate', methods=['POST'])
def validate_password():
    """
    Validate a candidate password for an identity

    When the identity carries a history key the reuse check runs here too,
    costing one digest derivation per history entry (at most preventReuse).
    Callers that only need the policy rules can omit the identity key.
    """
    data = json_body()
    result = get_engine().validate_password(data.get('password'), data.get('identity'))
    return jsonify(result.to_dict())


@passwords_bp.route('/generate', methods=['POST'])
def generate_password():
    """Generate a policy-compliant password"""
    data = request.get_json(silent=True) or {}
    password = get_engine().generate_password(data.get('length'))
    return jsonify({'password': password, 'length': len(password)})


@passwords_bp.route('/change', methods=['POST'])
def record_password_change():
    """
    Record a password change after validating the new password
    The caller has already authenticated the identity
    """
    data = json_body()
    engine = get_engine()
    identity = data.get('identity')
    password = data.get('password')

    result = engine.validate_password(password, identity)
    if not result.is_valid:
        return jsonify({'status': 'rejected', 'validation': result.to_dict()}), 422

    record = engine.record_password_change(identity, password)
    return jsonify({
        'status': 'recorded',
        'changeCount': record.change_count,
        'lastChangedAt': record.last_changed_at.isoformat(),
    })


@passwords_bp.route('/expiry/<identity>', methods=['GET'])
def expiry_status(identity):
    """Expiry state of an identity's password"""
    status = get_engine().get_expiry_status(identity)
    if status is None:
        return jsonify({'error': 'NOT_FOUND', 'message': 'No password history for identity'}), 404
    return jsonify(status.to_dict())
