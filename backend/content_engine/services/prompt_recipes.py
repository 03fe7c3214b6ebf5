"""Prompt Recipes — drafting prompts per output type and scenario.

Invariants:
    - Every OutputType has a template; unknown types fall back to investment_note
    - Unknown or missing scenarios use the default scenario instructions
    - Source text enters the prompt only through {{text}}

Design Decisions:
    - One base template specialised by output label (same structure for all types)
    - fill_template (core/template.py) performs {{key}} substitution
"""

import json

from content_engine.core.domain_types import OutputType, Scenario
from content_engine.core.template import fill_template
from content_engine.services.style_guides import DEFAULT_STYLE_GUIDE

BASE_SYSTEM_PROMPT = """
You are an expert investment writer producing institutional-grade content.
Follow the provided style guide exactly.
Use a clear, structured format and avoid marketing fluff.
Write for sophisticated investors who care about facts, risks, and rationale.
""".strip()

_BASE_TEMPLATE = """
Write a {{outputTypeLabel}} for the scenario "{{scenario}}".

Title:
{{title}}

Notes from the user (constraints, must-include points):
{{notes}}

Source material to base your writing on:
{{text}}

Instructions:
- Follow the style guide carefully.
- Do not invent facts; rely on the source material.
- Use clear structure, headings, and short paragraphs.
""".strip()

_OUTPUT_TYPE_LABELS = {
    OutputType.PRESS_RELEASE: "press release",
    OutputType.INVESTMENT_NOTE: "investment note",
    OutputType.LINKEDIN_POST: "LinkedIn post",
    OutputType.TRANSACTION_TEXT: "short internal transaction description",
}

TEMPLATES: dict[OutputType, str] = {
    output_type: fill_template(_BASE_TEMPLATE, {"outputTypeLabel": label})
    for output_type, label in _OUTPUT_TYPE_LABELS.items()
}

SCENARIO_INSTRUCTIONS: dict[Scenario | None, str] = {
    Scenario.NEW_INVESTMENT: """
- Emphasise what was acquired or invested in, who the counterparties are, and the strategic rationale.
- Include, where appropriate, the strategy, sector, and how this fits into the firm's investment themes.
- If size or financial terms are not disclosed, avoid inventing them; use neutral language like "undisclosed terms".
""".strip(),
    Scenario.EXIT_REALISATION: """
- Emphasise what asset or company is being exited, who the buyer is (if known), and how long the asset was held.
- Focus on value creation, key achievements, and high-level performance, without disclosing confidential numbers unless provided.
- Highlight continuity for management teams and clients where relevant.
""".strip(),
    Scenario.PORTFOLIO_UPDATE: """
- Focus on operational progress, milestones, and key developments for existing portfolio companies or assets.
- Group related developments logically (by theme, sector, or geography) to make the update easy to scan.
- Keep the tone balanced: transparent about challenges, clear on positive progress.
""".strip(),
    None: """
- Provide balanced, factual context for the situation.
- Emphasise what is most relevant for an institutional investor trying to understand "what happened" and "why it matters".
""".strip(),
}


def resolve_output_type(selected_types: list[str] | None) -> OutputType:
    """First recognised output type, else investment_note."""
    for value in selected_types or []:
        try:
            return OutputType(value)
        except ValueError:
            continue
    return OutputType.INVESTMENT_NOTE


def scenario_instructions(scenario: str | None) -> str:
    try:
        return SCENARIO_INSTRUCTIONS[Scenario(scenario)]
    except ValueError:
        return SCENARIO_INSTRUCTIONS[None]


def build_draft_system_prompt() -> str:
    return "\n\n".join([
        BASE_SYSTEM_PROMPT,
        "STYLE GUIDE:",
        DEFAULT_STYLE_GUIDE,
    ])


def build_draft_user_prompt(
    *,
    title: str | None,
    notes: str | None,
    scenario: str | None,
    selected_types: list[str],
    version_type: str | None,
    max_words: int | None,
    public_search: bool,
    source_text: str,
    web_context: str = "",
) -> str:
    """Recipe template + scenario guidance + request metadata (+ web context)."""
    output_type = resolve_output_type(selected_types)
    body = fill_template(TEMPLATES[output_type], {
        "scenario": scenario or "general",
        "title": title or "(none)",
        "notes": notes or "(none)",
        "text": source_text or "(none)",
    })
    metadata = "\n".join([
        f"Title: {title or '(none)'}",
        f"Scenario: {scenario}",
        f"Output types: {json.dumps(selected_types or [])}",
        f"Version type: {version_type}",
        f"Max words: {max_words or 'none'}",
        f"Public search: {'on' if public_search else 'off'}",
    ])
    parts = [
        body,
        "Scenario guidance:\n" + scenario_instructions(scenario),
        "REQUEST METADATA:\n" + metadata,
    ]
    if web_context:
        parts.append(
            "PUBLIC SEARCH RESULTS (use only to confirm public facts; cite nothing "
            "that does not appear in the source material or these results):\n"
            + web_context,
        )
    return "\n\n".join(parts)


def build_shorten_prompt(draft: str, max_words: int) -> str:
    return "\n\n".join([
        f"The draft below is longer than the {max_words}-word limit.",
        f"Shorten it to at most {max_words} words.",
        "Keep the structure, the key facts and the house style. "
        "Return only the shortened draft.",
        "DRAFT:",
        draft,
    ])
