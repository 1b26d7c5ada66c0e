"""Test configuration loading"""
from passguard.config import Config, config
from passguard.models.policy import PolicyConfiguration
from run import create_app


def test_testing_config():
    """Verify testing configuration loads correctly"""
    app = create_app('testing')
    assert app.config['TESTING'] is True
    assert app.config['PBKDF2_ITERATIONS'] == 1000
    assert 'SECRET_KEY' in app.config
    assert 'passguard' in app.extensions


def test_default_policy_matches_dataclass_defaults():
    """Config defaults and the dataclass defaults describe the same policy"""
    assert PolicyConfiguration.from_dict(Config.PASSWORD_POLICY_DEFAULTS) == PolicyConfiguration()


def test_default_policy_is_consistent():
    assert PolicyConfiguration.from_dict(Config.PASSWORD_POLICY_DEFAULTS).violations() == []


def test_config_dictionary():
    assert config['default'] is config['development']
    assert config['testing'].SQLALCHEMY_DATABASE_URI == 'sqlite:///:memory:'
