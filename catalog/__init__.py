import os

from flask import Flask
from werkzeug.exceptions import HTTPException

from .config import Config
from .extensions import cors, db
from .logging_config import configure_logging
from .security.headers import init_security_headers
from .services.product_store import ProductStore


def create_app(config_class: type[Config] = Config) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_class)
    if not app.config.get("UPLOAD_FOLDER"):
        app.config["UPLOAD_FOLDER"] = os.path.join(app.instance_path, "uploads")
    os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)

    configure_logging(app)
    cors.init_app(app, origins=app.config["CORS_ORIGINS"], send_wildcard=True)
    db.init_app(app)
    ProductStore(db).init_app(app)
    init_security_headers(app)

    register_blueprints(app)
    register_error_handlers(app)
    register_commands(app)

    @app.get("/health")
    def health_check() -> tuple[dict[str, str], int]:
        return {"status": "ok"}, 200

    return app


def register_blueprints(app: Flask) -> None:
    from .api.product_routes import product_bp
    from .api.upload_routes import upload_bp

    app.register_blueprint(product_bp, url_prefix="/api/products")
    app.register_blueprint(upload_bp, url_prefix=app.config["UPLOAD_URL_PREFIX"])


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        # Routing redirects are HTTPExceptions too.
        if exc.code is not None and exc.code < 400:
            return exc
        return {"message": exc.description or exc.name}, exc.code or 500


def register_commands(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db() -> None:
        """Create the products table if it does not exist."""
        db.create_all()
        app.logger.info("products table ready")
