from flask import Flask, jsonify

from qr_library.config import Config
from qr_library.extensions import db, migrate, jwt
from qr_library.errors import register_error_handlers
from qr_library.db_objects_mssql import ensure_db_objects_mssql


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    app.logger.setLevel(str(app.config["LOG_LEVEL"]).upper())

    # models must be imported before the mappers are configured
    from qr_library import models  # noqa: F401

    db.init_app(app)

    # books.quantity guard (SQL Server only; needs db.init_app first)
    ensure_db_objects_mssql(app)

    migrate.init_app(app, db)
    jwt.init_app(app)

    register_error_handlers(app)

    from qr_library.controllers.auth_controller import auth_bp
    from qr_library.controllers.book_controller import book_bp
    from qr_library.controllers.borrow_controller import borrow_bp
    from qr_library.controllers.category_controller import category_bp
    from qr_library.controllers.presence_controller import presence_bp
    app.register_blueprint(auth_bp)
    app.register_blueprint(book_bp)
    app.register_blueprint(borrow_bp)
    app.register_blueprint(category_bp)
    app.register_blueprint(presence_bp)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    return app
