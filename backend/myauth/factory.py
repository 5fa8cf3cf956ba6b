"""Application factory."""

from __future__ import annotations

from flask import Flask

from myauth.core.config import BaseConfig, check_secrets, get_config
from myauth.core.logger import configure_logging


def create_app(config: str | type[BaseConfig] | object | None = None) -> Flask:
    """Build the auth service.

    :param config: Object or import path passed to
        :meth:`flask.Config.from_object`. Defaults to the class selected by
        ``APP_ENV``. An optional ``instance/config.py`` is applied on top.
    :returns: Configured application with services wired and routes mounted.

    Extensions are bound before the service container is built, since the
    session registry needs the Redis client they create. Error handlers come
    after the blueprints so they cover every route.
    """

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(get_config() if config is None else config)
    app.config.from_pyfile("config.py", silent=True)
    check_secrets(app.config)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from myauth import cli
    from myauth.api import init_app as init_api
    from myauth.core import cors, errors, extensions, logger
    from myauth.core.container import build_container

    extensions.init_app(app)
    build_container(app)
    logger.init_app(app)
    cors.init_app(app)
    init_api(app)
    errors.init_app(app)
    cli.init_app(app)

    return app
