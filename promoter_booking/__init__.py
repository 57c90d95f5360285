"""Flask application factory."""
import os
import traceback

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from promoter_booking.database import init_db


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Sentry error tracking in production only
    if os.getenv('SENTRY_DSN') and (app.config.get('ENV') == 'production' or os.getenv('FLASK_ENV') == 'production'):
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=os.getenv('SENTRY_DSN'),
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment=os.getenv('FLASK_ENV', 'production'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )

    # Prometheus request instrumentation
    from promoter_booking.blueprints.metrics import setup_metrics_instrumentation
    setup_metrics_instrumentation(app)

    # Production: HTTPS behind a reverse proxy
    if app.config.get('ENV') == 'production':
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1, x_prefix=0)

    # Initialize database
    init_db(app)

    from promoter_booking.middleware import load_client

    @app.before_request
    def before_request_handler():
        """Load the authenticated client for each request."""
        load_client()

    # Error Handlers
    from promoter_booking.exceptions import BookingError, ErrorKind

    @app.errorhandler(BookingError)
    def handle_booking_error(error):
        """Render application exceptions as JSON."""
        if error.status_code >= 500:
            app.logger.error(f"BookingError [{error.status_code}] {error.kind.value}: {error.message}")
        else:
            app.logger.info(f"BookingError [{error.status_code}] {error.kind.value}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'status': 'error', 'code': 'NOT_FOUND', 'message': 'Recurso não encontrado'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'status': 'error', 'code': 'METHOD_NOT_ALLOWED', 'message': 'Método não permitido'}), 405

    @app.errorhandler(500)
    @app.errorhandler(Exception)
    def internal_error(error):
        if isinstance(error, HTTPException):
            return jsonify({'status': 'error', 'code': error.name, 'message': error.description}), error.code
        app.logger.error(f"Unhandled Exception: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        return jsonify({
            'status': 'error',
            'code': ErrorKind.INTERNAL_ERROR.value,
            'message': 'Erro interno do servidor'
        }), 500

    # Register blueprints
    from promoter_booking.blueprints.booking import booking_bp
    from promoter_booking.blueprints.orders import orders_bp
    from promoter_booking.blueprints.metrics import metrics_bp

    app.register_blueprint(booking_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(metrics_bp)

    # Register CLI commands
    from promoter_booking.cli_commands import init_cli_commands
    init_cli_commands(app)

    return app
