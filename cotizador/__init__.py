"""Flask application factory."""
import logging
import traceback

from flask import Flask, jsonify
from cotizador.database import init_db


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize database
    init_db(app)

    # Error Handlers
    from cotizador.exceptions import CotizadorError

    @app.errorhandler(CotizadorError)
    def handle_cotizador_error(error):
        """Handle custom application exceptions."""
        app.logger.error(f"{type(error).__name__} [{error.status_code}]: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'status': 'error', 'message': 'Not Found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'status': 'error', 'message': 'Method Not Allowed'}), 405

    @app.errorhandler(500)
    @app.errorhandler(Exception)
    def internal_error(error):
        app.logger.error(f"Unhandled Exception: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        return jsonify({'status': 'error', 'message': 'Internal Server Error'}), 500

    # Register blueprints
    from cotizador.blueprints.main import main_bp
    from cotizador.blueprints.quotes import quotes_bp
    from cotizador.blueprints.orders import orders_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(quotes_bp)
    app.register_blueprint(orders_bp)

    # Register CLI commands
    from cotizador.cli_commands import init_cli_commands
    init_cli_commands(app)

    app.logger.info(f"DEFAULT_TAX_CODES={app.config.get('DEFAULT_TAX_CODES')}")

    return app
