# SPDX-FileCopyrightText: 2025 Mark Liffiton <liffiton@gmail.com>
#
# SPDX-License-Identifier: AGPL-3.0-only

from dataclasses import dataclass

from jinja2 import Environment, Template

from .params import GenerationRequest, ToolMode

jinja_env = Environment(  # noqa: S701 - not worried about XSS in LLM prompts
    trim_blocks=True,
    lstrip_blocks=True,
)


system_prompt = """\
You are EduTools AI, a specialised educational content generation system built for South African CAPS-aligned Technical Subjects, with primary focus on Mechanical Technology (Fitting & Machining) at Grades 10–12 (NSC level). You are NOT a general tutor or chatbot. You operate as a senior CAPS examiner, subject advisor, and experienced classroom educator combined. Your outputs must be classroom-ready, exam-standard, and professionally formatted."""


#######################
### Subject engines ###
#######################

mech_tech_engine_prompt = """\
[SUBJECT ENGINE: MECHANICAL TECHNOLOGY]
You have deep working knowledge of the CAPS curriculum, NSC examination structure, and Department of Basic Education assessment standards. You have practical experience as a Mechanical Technology / Fitting & Machining educator. You prioritise accuracy, alignment, clarity, and assessment validity. Subject Scope: Mechanical Technology, Fitting & Machining, Grades 10-12. Topics include Safety, Tools, Materials, Measurements, Lubrication, Bearings, Power Transmission, Systems and Control, Forces, Terminology."""

generic_engine_prompt = """\
[SUBJECT ENGINE: GENERIC CAPS MODE]
You act as a CAPS-aligned subject educator and assessment designer. You generate formal South African CAPS-compliant assessment content for Grades 4–12. You follow CAPS terminology and structure, respect grade-appropriate cognitive demand, and use subject-specific command verbs."""

# Subject name -> specialised engine.  A subject that equals or contains a
# key gets that engine; every other subject gets the generic one.
SUBJECT_ENGINES: dict[str, str] = {
    "Mechanical Technology": mech_tech_engine_prompt,
}


def select_subject_engine(subject: str) -> str:
    for name, engine_prompt in SUBJECT_ENGINES.items():
        if name in subject:
            return engine_prompt
    return generic_engine_prompt


##################
### Tool modes ###
##################

@dataclass(frozen=True)
class ModeTemplate:
    """ The three mode-specific pieces of a prompt. """
    announcement: str
    inputs: Template  # rendered with the fields of a GenerationRequest
    output_format: str


question_generator_tpl = ModeTemplate(
    announcement="You are operating in TOOL MODE: QUESTION GENERATOR. Follow all rules defined in the system and subject prompts.",
    inputs=jinja_env.from_string("""\
Generate CAPS-aligned examination questions using the following parameters:
Grade: {{ grade }}
Subject: {{ subject }}
{% if topic %}
Topic: {{ topic }}
{% else %}
Topic: Not specified. Choose a representative CAPS topic for this grade and state your assumption before generating.
{% endif %}
Sub-topic: {{ sub_topic or "Not specified" }}
Cognitive Level: {{ cognitive_level }}
Number of Questions: {{ question_count }}
Total Marks: {{ total_marks or "Allocate appropriately" }}

Use CAPS-appropriate command verbs. Ensure realistic NSC-level difficulty."""),
    output_format="""\
Output format:
- Number each question clearly
- Include sub-questions where appropriate
- Indicate mark allocation per question
- Do not include answers or explanations""",
)

memorandum_tpl = ModeTemplate(
    announcement="You are operating in TOOL MODE: MEMORANDUM / MODEL ANSWERS. Generate a CAPS-aligned marking memorandum.",
    inputs=jinja_env.from_string("""\
Create a marking memorandum for the following assessment content:
Grade: {{ grade }}
Subject: {{ subject }}
Marking Style: Strict NSC Standard

Assessment Questions/Context:
{% if additional_notes %}
{{ additional_notes }}
{%- elif topic %}
Please generate a memorandum based on standard NSC curriculum expectations for the topic: {{ topic }}
{%- else %}
No questions or topic were provided. Choose a representative CAPS topic for {{ subject }} at {{ grade }}, state your assumptions about the topic and the questions being marked, and then generate the memorandum.
{%- endif %}"""),
    output_format="""\
Output format:
- Number answers according to the questions
- Provide concise, correct responses
- Include marking guidelines
- Show calculations where applicable (Formula -> Substitution -> Final Answer with Units)
- Use South African technical terminology""",
)

worksheet_builder_tpl = ModeTemplate(
    announcement="You are operating in TOOL MODE: WORKSHEET & REVISION BUILDER.",
    inputs=jinja_env.from_string("""\
Generate a CAPS-aligned worksheet using the following parameters:
Grade: {{ grade }}
Subject: {{ subject }}
{% if topic %}
Topic: {{ topic }}
{% else %}
Topic: Not specified. Choose a representative CAPS topic for this grade and state your assumption before generating.
{% endif %}
Difficulty Progression: Mixed (Simple to Complex)
Include Answers: No

The worksheet must be classroom-ready and printable."""),
    output_format="""\
Output format:
- Title the worksheet clearly
- Structure questions logically
- Progress difficulty appropriately
- If answers are included, separate clearly at the end""",
)

rewriter_tpl = ModeTemplate(
    announcement="You are operating in TOOL MODE: QUESTION REWRITER / DIFFICULTY ADJUSTER.",
    inputs=jinja_env.from_string("""\
Rewrite the provided content to the following specifications:
Grade: {{ grade }}
Subject: {{ subject }}
Target Cognitive Level: {{ cognitive_level }}

Content to Rewrite:
{% if additional_notes %}
{{ additional_notes }}
{%- else %}
No content was provided. State this assumption, then write one representative question for {{ subject }} at {{ grade }} at the target cognitive level.
{%- endif %}"""),
    output_format="""\
Output format:
- Provide only the rewritten question/content
- Do not include explanations or answers
- Adjust cognitive demand using CAPS-appropriate action verbs (Lower: Identify, Middle: Explain, Higher: Analyse)""",
)

MODE_TEMPLATES: dict[ToolMode, ModeTemplate] = {
    ToolMode.QUESTION_GENERATOR: question_generator_tpl,
    ToolMode.MEMORANDUM: memorandum_tpl,
    ToolMode.WORKSHEET_BUILDER: worksheet_builder_tpl,
    ToolMode.REWRITER: rewriter_tpl,
}


quality_control_footer = """\
QUALITY CONTROL RULES:
- Avoid repetition and vague phrasing.
- Avoid incorrect technical facts.
- Avoid American or non-SA terminology.
- If any required information is missing, make professional CAPS-aligned assumptions and state them before generating.
- Maintain examiner credibility at all times."""


def make_main_prompt(req: GenerationRequest) -> str:
    ''' Assemble the complete generation prompt for one request.

    Sections, in order and separated by a blank line: system role, subject
    engine, mode announcement, user inputs, output format, quality control.
    Missing optional inputs are replaced by instructions to state assumptions,
    so every request yields a complete prompt.
    '''
    mode_tpl = MODE_TEMPLATES[req.mode]
    inputs = mode_tpl.inputs.render(
        grade=req.grade,
        subject=req.subject,
        topic=req.topic,
        sub_topic=req.sub_topic,
        cognitive_level=req.cognitive_level.value,
        question_count=req.question_count,
        total_marks=req.total_marks,
        additional_notes=req.additional_notes,
    )

    sections = [
        system_prompt,
        select_subject_engine(req.subject),
        mode_tpl.announcement,
        inputs,
        mode_tpl.output_format,
        quality_control_footer,
    ]
    return "\n\n".join(sections)
