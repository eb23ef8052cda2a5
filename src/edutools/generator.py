# SPDX-FileCopyrightText: 2025 Mark Liffiton <liffiton@gmail.com>
#
# SPDX-License-Identifier: AGPL-3.0-only

import asyncio
from collections.abc import Mapping
from datetime import datetime

from flask import (
    Blueprint,
    current_app,
    flash,
    make_response,
    render_template,
    request,
)
from werkzeug.wrappers.response import Response

from . import prompts
from .llm import LLM, with_llm
from .params import (
    DEFAULT_GRADE,
    DEFAULT_QUESTION_COUNT,
    DEFAULT_TOTAL_MARKS,
    SUBJECTS,
    CognitiveLevel,
    GenerationRequest,
    InvalidFieldError,
    MissingFieldError,
    ToolMode,
    check_required_fields,
    request_from_form,
)

bp = Blueprint('generator', __name__, template_folder='templates')

FORM_DEFAULTS = {
    'subject': SUBJECTS[0],
    'grade': DEFAULT_GRADE,
    'topic': '',
    'sub_topic': '',
    'cognitive_level': CognitiveLevel.MIXED.value,
    'question_count': str(DEFAULT_QUESTION_COUNT),
    'total_marks': str(DEFAULT_TOTAL_MARKS),
    'additional_notes': '',
}

# Short descriptions shown on each tool button
TOOL_DESCRIPTIONS = {
    ToolMode.QUESTION_GENERATOR: "Generate formal CAPS examination questions with mark allocation.",
    ToolMode.MEMORANDUM: "Create detailed marking guidelines, formulas, and model answers.",
    ToolMode.WORKSHEET_BUILDER: "Build classroom-ready worksheets with progressive difficulty.",
    ToolMode.REWRITER: "Adjust cognitive demand or rewrite content for exam standards.",
}


def _render_form(form: Mapping[str, str], status: int = 200) -> Response:
    return make_response(
        render_template(
            "generator_form.html",
            form=form,
            tools=TOOL_DESCRIPTIONS,
            levels=list(CognitiveLevel),
        ),
        status,
    )


def _submitted_values() -> dict[str, str]:
    return {key: request.form.get(key, default) for key, default in FORM_DEFAULTS.items()}


@bp.route("/", methods=["GET", "POST"])
def generator_form() -> Response:
    # A POST carries the values of a previous run back into the dashboard.
    return _render_form(_submitted_values())


async def run_generation(llm: LLM, req: GenerationRequest) -> tuple[dict[str, str], str]:
    ''' Assemble the prompt for a request and send it to the LLM.

    Returns the raw response object and the response text (or a user-facing
    error message if the response contains an 'error' key).
    '''
    prompt = prompts.make_main_prompt(req)
    current_app.logger.info(f"Generating: mode='{req.mode.value}' subject='{req.subject}' grade='{req.grade}' prompt_len={len(prompt)}")
    return await llm.get_completion(prompt=prompt)


@bp.route("/generate", methods=["POST"])
@with_llm
def generate(llm: LLM) -> Response | str:
    try:
        req = request_from_form(request.form)
        check_required_fields(req)
    except (InvalidFieldError, MissingFieldError) as e:
        current_app.logger.warning(f"Rejected generation request: {e}")
        flash(str(e), "danger")
        return _render_form(request.form, 400)

    response, response_txt = asyncio.run(run_generation(llm, req))

    if 'error' in response:
        flash(response_txt, "danger")
        return _render_form(request.form, 502)

    return render_template(
        "generator_result.html",
        title=req.title,
        content=response_txt,
        timestamp=datetime.now().strftime("%Y-%m-%d %H:%M"),
        req=req,
        form=_submitted_values(),
    )
