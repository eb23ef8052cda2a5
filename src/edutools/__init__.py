# SPDX-FileCopyrightText: 2025 Mark Liffiton <liffiton@gmail.com>
#
# SPDX-License-Identifier: AGPL-3.0-only

from typing import Any

from flask.app import Flask

from . import base, generator


def create_app(test_config: dict[str, Any] | None = None) -> Flask:
    ''' Flask app factory.  Create and configure the application. '''

    # App-specific configuration
    app_config: dict[str, Any] = dict(
        APPLICATION_TITLE='EduTools AI',
        APPLICATION_TAGLINE='CAPS Assessment Engine',
    )

    # load test config if provided, potentially overriding above config
    if test_config is not None:
        app_config = app_config | test_config

    # create the base application
    app = base.create_app_base(__name__, app_config)

    app.register_blueprint(generator.bp)

    return app
