import click
from flask import Flask, jsonify
from inventory.config import Config
from inventory.extensions import db, migrate, jwt

from inventory.services.errors import ServiceError


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # models must be imported before create_all / migrations see the metadata
    from inventory.models import user, item, borrow  # noqa: F401

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    _register_jwt_handlers()

    from inventory.controllers.auth_controller import auth_bp
    from inventory.controllers.item_controller import item_bp
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(item_bp, url_prefix="/api/inventory")

    @app.errorhandler(ServiceError)
    def handle_service_error(e):
        app.logger.warning(f"[api] unhandled service error {e.code}: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    _register_commands(app)

    return app


def _register_jwt_handlers():
    def _unauthorized(message):
        return jsonify({"success": False, "code": "UNAUTHORIZED", "message": message}), 401

    @jwt.unauthorized_loader
    def missing_token(reason):
        return _unauthorized("Access denied, token missing!")

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return _unauthorized(f"Invalid token: {reason}")

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return _unauthorized("Token has expired")


def _register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (use `flask db upgrade` once migrations exist)."""
        db.create_all()
        click.echo("Tables created.")

    @app.cli.command("create-admin")
    @click.argument("username")
    @click.argument("password")
    def create_admin(username, password):
        """Create the first ADMIN; registration itself needs an admin token."""
        from inventory.controllers.common import auth_service
        try:
            user = auth_service().register(username, password, "ADMIN")
        except ServiceError as e:
            raise click.ClickException(e.message)
        click.echo(f"Admin created: id={user.id} username={user.username}")
