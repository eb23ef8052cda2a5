# SPDX-FileCopyrightText: 2025 Mark Liffiton <liffiton@gmail.com>
#
# SPDX-License-Identifier: AGPL-3.0-only

import pytest

from edutools import create_app
from edutools.base import DEFAULT_MODEL, MissingEnvVarError


def test_config() -> None:
    '''Verify passing in test config works.'''
    # If we run this without setting TESTING, then logging is configured via dictConfig, which will affect all *later* tests...
    assert create_app({'TESTING': True}).testing


def test_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SYSTEM_API_KEY", "from-env")
    monkeypatch.setenv("SYSTEM_MODEL", "gemini-other")
    monkeypatch.setenv("LLM_ENDPOINT", "https://llm.example.com/v1/")
    app = create_app({'TESTING': True})
    assert app.config['SYSTEM_API_KEY'] == "from-env"
    assert app.config['SYSTEM_MODEL'] == "gemini-other"
    assert app.config['LLM_ENDPOINT'] == "https://llm.example.com/v1/"
    assert app.config['APPLICATION_TITLE'] == "EduTools AI"


def test_default_model(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SYSTEM_MODEL", raising=False)
    app = create_app({'TESTING': True})
    assert app.config['SYSTEM_MODEL'] == DEFAULT_MODEL


@pytest.mark.parametrize('varname', ["SECRET_KEY", "SYSTEM_API_KEY"])
def test_missing_env_var(monkeypatch: pytest.MonkeyPatch, varname: str) -> None:
    monkeypatch.delenv(varname, raising=False)
    with pytest.raises(MissingEnvVarError, match=varname):
        create_app({'TESTING': True})


def test_proxy_fix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLASK_APP_BEHIND_PROXY", "yes")
    app = create_app({'TESTING': True})
    assert type(app.wsgi_app).__name__ == "ProxyFix"
