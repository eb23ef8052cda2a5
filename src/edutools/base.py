# SPDX-FileCopyrightText: 2025 Mark Liffiton <liffiton@gmail.com>
#
# SPDX-License-Identifier: AGPL-3.0-only

import logging
import logging.config
import os
from typing import Any

from dotenv import load_dotenv
from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from . import cli, filters, params

# Gemini's OpenAI-compatible endpoint
DEFAULT_LLM_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_MODEL = "gemini-3-pro-preview"


class MissingEnvVarError(Exception):
    def __init__(self, varname: str):
        super().__init__(f"Required environment variable not set: {varname}")


def _init_logging(*, testing: bool) -> None:
    """ Configure logging.
    (https://flask.palletsprojects.com/en/3.0.x/logging/#basic-configuration)
    Configure logging before anything logs (via app.logger or when the WSGI
    server starts serving), so that neither Flask nor the server installs
    its own basic handler and we avoid missing or doubled log lines.
    """
    if not testing:
        logging.config.dictConfig({
            'version': 1,
            'formatters': {'default': {
                'format': '[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
            }},
            'handlers': {'wsgi': {
                'class': 'logging.StreamHandler',
                'stream': 'ext://flask.logging.wsgi_errors_stream',
                'formatter': 'default'
            }},
            'root': {
                'level': 'INFO',
                'handlers': ['wsgi']
            },
        })
    else:
        # For testing/debugging, ensure DEBUG level logging.
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger('markdown_it').setLevel(logging.INFO)  # avoid noisy debug logging in markdown_it
        logging.getLogger('httpx').setLevel(logging.INFO)
        logging.debug("DEBUG logging enabled.")


def _config_app(app: Flask, app_config: dict[str, Any]) -> None:
    # base config for all deployments
    base_config = dict(
        # Some simple/weak XSS/CSRF protection
        SESSION_COOKIE_SECURE=True,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE='Lax',
        # Cache timeout for static files (seconds)
        SEND_FILE_MAX_AGE_DEFAULT=3*60*60,  # 3 hours
        SUBJECTS=params.SUBJECTS,
        GRADES=params.GRADES,
    )

    # Add vars set in .env, loaded by load_dotenv(), to config dictionary.
    # Required variables:
    #  - SECRET_KEY: used by Flask to sign session cookies (flashed messages)
    #  - SYSTEM_API_KEY: the LLM API key used for all generation requests
    for varname in ["SECRET_KEY", "SYSTEM_API_KEY"]:
        # a test config may supply these directly
        if varname in app_config:
            continue
        try:
            env_var = os.environ[varname]
        except KeyError as e:
            raise MissingEnvVarError(varname) from e
        base_config[varname] = env_var

    # Optional variables:
    #  - SYSTEM_MODEL: model identifier sent to the provider
    #  - LLM_ENDPOINT: base URL of an OpenAI-compatible API
    base_config['SYSTEM_MODEL'] = os.environ.get("SYSTEM_MODEL", DEFAULT_MODEL)
    base_config['LLM_ENDPOINT'] = os.environ.get("LLM_ENDPOINT", DEFAULT_LLM_ENDPOINT)
    if "SYSTEM_MODEL" not in os.environ:
        app.logger.info(f"SYSTEM_MODEL environment variable not set.  Using {DEFAULT_MODEL}.")

    # build total configuration
    total_config = base_config | app_config

    app.config.from_mapping(total_config)


def create_app_base(import_name: str, app_config: dict[str, Any]) -> Flask:
    ''' Create and configure the base Flask application object.

    Args:
        import_name: The name of the application's package.
        app_config: Application-specific configuration for the Flask object (w/ CAPITALIZED keys)
    '''
    # load config values from .env file
    load_dotenv()

    app = Flask(import_name)

    testing = app.debug or app_config.get("TESTING", False)
    _init_logging(testing=testing)

    _config_app(app, app_config)

    # set up middleware to fix headers from a proxy if configured as such
    if os.environ.get("FLASK_APP_BEHIND_PROXY", "").lower() in ("yes", "true", "1"):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)  # type: ignore[method-assign]

    # strip whitespace before and after {% ... %} template statements
    app.jinja_env.lstrip_blocks = True
    app.jinja_env.trim_blocks = True

    filters.init_app(app)
    cli.init_app(app)

    return app
