import logging

from flask import Flask, jsonify
from flask_cors import CORS
from marshmallow import ValidationError

from strengthlab.clock import SystemClock
from strengthlab.config import config
from strengthlab.errors import NotFoundError
from strengthlab.extensions import db, ma, jwt, migrate, scheduler


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    app.logger.setLevel(level)
    logging.getLogger('strengthlab').setLevel(level)
    if not logging.getLogger().handlers:
        logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')


def configure_scheduler(app):
    """Nightly UserStat refresh, only when enabled in config."""
    if not app.config.get('STATS_REFRESH_ENABLED') or scheduler.running:
        return

    def refresh_user_stats():
        from strengthlab.services import build_services

        with app.app_context():
            try:
                build_services(app).stats.refresh_all()
            except Exception:
                app.logger.exception("Nightly stats refresh failed")

    scheduler.init_app(app)
    scheduler.add_job(
        id='nightly_stats_refresh',
        func=refresh_user_stats,
        trigger='cron',
        hour=app.config['STATS_REFRESH_HOUR'],
    )
    scheduler.start()


def register_error_handlers(app):
    @app.errorhandler(NotFoundError)
    def handle_not_found(error):
        return jsonify({"msg": str(error)}), 404

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return jsonify({"msg": "Invalid payload", "errors": error.messages}), 400

    @jwt.unauthorized_loader
    def unauthorized_callback(reason):
        return jsonify({"msg": reason}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return jsonify({"msg": reason}), 401

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"msg": "Token has expired"}), 401


def create_app(config_name='default'):
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    configure_logging(app)

    # extensions
    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    from strengthlab import models  # noqa: F401  (register tables)
    CORS(app, resources={r"/api/*": {
        "origins": app.config['CORS_ORIGINS'],
        "allow_headers": ["Content-Type", "Authorization"],
        "methods": ["GET", "POST", "OPTIONS"]
    }})
    app.extensions['clock'] = SystemClock()

    register_error_handlers(app)

    from strengthlab.routes.home import home_bp
    from strengthlab.routes.api import api_bp
    app.register_blueprint(home_bp)
    app.register_blueprint(api_bp, url_prefix="/api")

    from strengthlab.cli import register_commands
    register_commands(app)

    configure_scheduler(app)
    return app

