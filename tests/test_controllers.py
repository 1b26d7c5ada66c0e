"""Tests for the HTTP and CLI surface"""
from sqlalchemy.exc import OperationalError

from passguard.extensions import db

STRONG = "C0rrect-Horse-Battery99!!"
IDENTITY = {'firstName': 'Alice', 'lastName': 'Walker', 'userId': 'u-1'}


class TestPasswordRoutes:

    def test_validate(self, client):
        response = client.post('/api/passwords/validate', json={'password': STRONG, 'identity': IDENTITY})
        assert response.status_code == 200
        data = response.get_json()
        assert data['isValid'] is True
        assert data['strength'] == 'Excellent'

    def test_validate_weak(self, client):
        response = client.post('/api/passwords/validate', json={'password': 'Tr0ub4dor&3'})
        data = response.get_json()
        assert data['isValid'] is False
        assert 'too_short' in data['issues']

    def test_validate_requires_object_body(self, client):
        response = client.post('/api/passwords/validate', json=['not', 'an', 'object'])
        assert response.status_code == 400
        assert response.get_json()['error'] == 'INVALID_INPUT'

    def test_validate_rejects_non_string_password(self, client):
        response = client.post('/api/passwords/validate', json={'password': 12345678})
        assert response.status_code == 400

    def test_generate(self, client):
        response = client.post('/api/passwords/generate', json={'length': 20})
        assert response.status_code == 200
        data = response.get_json()
        assert data['length'] == 20
        assert len(data['password']) == 20

    def test_generate_default_length(self, client):
        response = client.post('/api/passwords/generate')
        assert response.get_json()['length'] == 16

    def test_generate_length_out_of_range(self, client):
        response = client.post('/api/passwords/generate', json={'length': 4})
        assert response.status_code == 400

    def test_change_and_expiry(self, client):
        response = client.post('/api/passwords/change', json={'password': STRONG, 'identity': IDENTITY})
        assert response.status_code == 200
        assert response.get_json()['status'] == 'recorded'
        assert response.get_json()['changeCount'] == 1

        response = client.get('/api/passwords/expiry/u-1')
        assert response.status_code == 200
        assert response.get_json()['state'] == 'active'

    def test_change_rejects_reuse(self, client):
        client.post('/api/passwords/change', json={'password': STRONG, 'identity': IDENTITY})
        response = client.post('/api/passwords/change', json={'password': STRONG, 'identity': IDENTITY})
        assert response.status_code == 422
        data = response.get_json()
        assert data['status'] == 'rejected'
        assert data['validation']['issues'] == ['password_reused']

    def test_validate_checks_reuse_only_with_identity_key(self, client):
        client.post('/api/passwords/change', json={'password': STRONG, 'identity': IDENTITY})

        keyed = client.post('/api/passwords/validate', json={'password': STRONG, 'identity': IDENTITY})
        assert keyed.get_json()['issues'] == ['password_reused']

        anonymous = client.post('/api/passwords/validate', json={'password': STRONG})
        assert anonymous.get_json()['isValid'] is True

    def test_generate_default_length_follows_policy(self, client):
        client.put('/api/policy/', json={'minLength': 8, 'maxLength': 12})
        response = client.post('/api/passwords/generate')
        assert response.status_code == 200
        assert response.get_json()['length'] == 12

    def test_change_requires_identity_key(self, client):
        response = client.post('/api/passwords/change',
                               json={'password': STRONG, 'identity': {'firstName': 'Alice'}})
        assert response.status_code == 400

    def test_expiry_unknown_identity(self, client):
        response = client.get('/api/passwords/expiry/nobody')
        assert response.status_code == 404


class TestPolicyRoutes:

    def test_get_policy(self, client):
        data = client.get('/api/policy/').get_json()
        assert data['minLength'] == 12
        assert data['maxAge'] == 90

    def test_update_policy(self, client):
        response = client.put('/api/policy/', json={'minLength': 16},
                              headers={'X-Admin-User': 'root'})
        assert response.status_code == 200
        assert response.get_json()['minLength'] == 16
        assert client.get('/api/policy/').get_json()['minLength'] == 16

        audit = client.get('/api/policy/audit').get_json()
        assert audit[-1]['action'] == 'password_policy_updated'
        assert audit[-1]['admin'] == 'root'

    def test_inconsistent_policy_rejected(self, client):
        response = client.put('/api/policy/', json={'minLength': 20, 'maxLength': 10})
        assert response.status_code == 422
        data = response.get_json()
        assert data['error'] == 'POLICY_VALIDATION_FAILED'
        assert data['errors']
        assert client.get('/api/policy/').get_json()['minLength'] == 12

    def test_unknown_field_rejected(self, client):
        response = client.put('/api/policy/', json={'minLenght': 20})
        assert response.status_code == 400

    def test_reset(self, client):
        client.put('/api/policy/', json={'minLength': 16})
        response = client.post('/api/policy/reset')
        assert response.get_json()['minLength'] == 12

    def test_export_import(self, client):
        client.put('/api/policy/', json={'minLength': 15})
        response = client.get('/api/policy/export', headers={'X-Admin-User': 'root'})
        assert 'attachment' in response.headers['Content-Disposition']
        document = response.get_json()
        assert document['exportedBy'] == 'root'

        client.post('/api/policy/reset')
        response = client.post('/api/policy/import?source=backup.json', json=document)
        assert response.status_code == 200
        assert response.get_json()['minLength'] == 15

    def test_import_malformed(self, client):
        response = client.post('/api/policy/import', json={'version': '1.0'})
        assert response.status_code == 400

    def test_policy_test_uses_sample_identity(self, client):
        response = client.post('/api/policy/test', json={'password': 'TestUser-Secure-42!'})
        data = response.get_json()
        assert 'contains_personal_info' in data['issues']

    def test_statistics(self, client):
        data = client.get('/api/policy/statistics').get_json()
        assert data['complianceLevel'] == 100
        assert data['totalPolicyChanges'] == 0

    def test_persistence_failure(self, client, monkeypatch):
        def failing_commit():
            raise OperationalError('COMMIT', {}, Exception('database is locked'))

        monkeypatch.setattr(db.session, 'commit', failing_commit)
        response = client.put('/api/policy/', json={'minLength': 16})
        assert response.status_code == 503
        assert response.get_json()['retryable'] is True

    def test_not_found(self, client):
        response = client.get('/api/nothing-here')
        assert response.status_code == 404
        assert response.get_json()['error'] == 'NOT_FOUND'


class TestCommands:

    def test_generate_password(self, app):
        result = app.test_cli_runner().invoke(args=['generate-password', '--length', '18'])
        assert result.exit_code == 0
        assert len(result.output.strip()) == 18

    def test_check_password(self, app):
        runner = app.test_cli_runner()
        assert runner.invoke(args=['check-password', STRONG]).exit_code == 0

        result = runner.invoke(args=['check-password', 'short'])
        assert result.exit_code == 1
        assert 'at least 12 characters' in result.output

    def test_init_db(self, app):
        result = app.test_cli_runner().invoke(args=['init-db'])
        assert 'Database initialized' in result.output
