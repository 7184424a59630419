import os
from typing import Optional, Type

from flask import Flask

from .config import Config


def create_app(config_class: Optional[Type] = None) -> Flask:
    """Application factory.

    Builds the process-wide entropy pool and random.org client once and keeps
    them in ``app.extensions`` for the routes.
    """
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class or Config)

    os.makedirs(app.instance_path, exist_ok=True)
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        db_path = os.path.join(app.instance_path, "lotto.db")
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///" + db_path

    from .extensions import db, cache
    from .services.entropy import EntropyPool, RandomOrgClient

    db.init_app(app)
    cache.init_app(app)

    app.extensions["entropy_pool"] = EntropyPool()
    app.extensions["random_org"] = RandomOrgClient(
        url=app.config["RANDOM_ORG_URL"],
        quota_url=app.config["RANDOM_ORG_QUOTA_URL"],
        timeout=app.config["RANDOM_ORG_TIMEOUT"],
    )

    from .routes import api_bp

    app.register_blueprint(api_bp, url_prefix="/api")

    @app.get("/health")
    def healthcheck():  # type: ignore[unused-ignore]
        return {"status": "ok"}, 200

    with app.app_context():
        from . import models  # noqa: F401
        db.create_all()
        if app.config.get("SEED_HISTORY"):
            from .services.history import seed_history
            seed_history()

    return app
