# passguard/controllers/policy_controller.py
"""Policy Administration Controller
Admin surface for reading, replacing, resetting, exporting and importing the policy
"""
from flask import Blueprint, jsonify, request

from passguard.controllers.password_controller import get_engine, json_body

policy_bp = Blueprint('policy', __name__)

ADMIN_HEADER = 'X-Admin-User'


def current_admin():
    return request.headers.get(ADMIN_HEADER)


@policy_bp.route('/', methods=['GET'])
def get_policy():
    return jsonify(get_engine().get_policy().to_dict())


@policy_bp.route('/', methods=['PUT'])
def set_policy():
    """Replace the policy; omitted fields keep their current values"""
    policy = get_engine().set_policy(json_body(), admin=current_admin())
    return jsonify(policy.to_dict())


@policy_bp.route('/reset', methods=['POST'])
def reset_policy():
    policy = get_engine().reset_policy(admin=current_admin())
    return jsonify(policy.to_dict())


@policy_bp.route('/export', methods=['GET'])
def export_policy():
    response = jsonify(get_engine().export_policy(admin=current_admin()))
    response.headers['Content-Disposition'] = 'attachment; filename=password-policies.json'
    return response


@policy_bp.route('/import', methods=['POST'])
def import_policy():
    policy = get_engine().import_policy(json_body(), admin=current_admin(),
                                        source=request.args.get('source'))
    return jsonify(policy.to_dict())


@policy_bp.route('/test', methods=['POST'])
def test_password():
    """Try a password against the active policy with sample identity data"""
    data = json_body()
    identity = data.get('identity') or {
        'firstName': 'Test',
        'lastName': 'User',
        'email': 'test@example.com',
    }
    result = get_engine().validate_password(data.get('password'), identity)
    return jsonify(result.to_dict())


@policy_bp.route('/statistics', methods=['GET'])
def policy_statistics():
    return jsonify(get_engine().policy_statistics())


@policy_bp.route('/audit', methods=['GET'])
def audit_trail():
    return jsonify([entry.to_dict() for entry in get_engine().audit_trail()])
