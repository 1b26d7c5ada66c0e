"""Application entry point for the Passguard password policy engine"""
import click
from flask import Flask, jsonify
from loguru import logger

from passguard.config import config
from passguard.errors import PassguardError
from passguard.extensions import db
from passguard.logging_config import setup_logging


def create_app(config_name='default', persistence=None):
    """Create and configure Flask application"""
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])
    setup_logging(app.config['LOG_LEVEL'], app.config.get('LOG_DIR'))

    # Initialize extensions
    db.init_app(app)

    # Register blueprints
    from passguard.controllers.password_controller import passwords_bp
    from passguard.controllers.policy_controller import policy_bp

    app.register_blueprint(passwords_bp, url_prefix='/api/passwords')
    app.register_blueprint(policy_bp, url_prefix='/api/policy')

    register_error_handlers(app)
    register_commands(app)

    # Create database tables and load the persisted policy
    from passguard.services.engine import PasswordEngine
    from passguard.services.persistence import SQLAlchemyPersistence

    with app.app_context():
        db.create_all()
        engine = PasswordEngine.from_config(app.config, persistence or SQLAlchemyPersistence())
        engine.load()

    app.extensions['passguard'] = engine
    logger.info(f"Passguard started with '{config_name}' configuration")
    return app


def register_error_handlers(app):
    """Register error handlers"""
    @app.errorhandler(PassguardError)
    def engine_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'NOT_FOUND', 'message': 'Resource not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'error': 'INTERNAL_ERROR', 'message': 'Internal server error'}), 500


def register_commands(app):
    """CLI commands"""
    @app.cli.command('init-db')
    def init_db():
        """Initialize database tables"""
        db.create_all()
        click.echo("Database initialized successfully")

    @app.cli.command('generate-password')
    @click.option('--length', type=int, default=None, help='Password length')
    def generate_password(length):
        """Generate a password that satisfies the active policy"""
        click.echo(app.extensions['passguard'].generate_password(length))

    @app.cli.command('check-password')
    @click.argument('password')
    def check_password(password):
        """Validate a password against the active policy"""
        result = app.extensions['passguard'].validate_password(password)
        click.echo(f"{result.strength.value} ({result.score}/100)")
        for message in result.messages:
            click.echo(f"  - {message}")
        for suggestion in result.suggestions:
            click.echo(f"  * {suggestion}")
        if not result.is_valid:
            raise SystemExit(1)


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True, host='0.0.0.0', port=5000)
