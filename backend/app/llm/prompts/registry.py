# app/llm/prompts/registry.py

from dataclasses import dataclass

from app.llm.prompts import templates

@dataclass(frozen=True)
class PromptTemplate:
    name: str
    version: str
    template: str

PROMPTS: dict[tuple[str, str], PromptTemplate] = {
    ("summarize_document", "v1"): PromptTemplate("summarize_document", "v1", templates.SUMMARIZE_DOCUMENT_V1),
    ("extract_keywords", "v1"): PromptTemplate("extract_keywords", "v1", templates.EXTRACT_KEYWORDS_V1),
}

def get_prompt(name: str, version: str) -> PromptTemplate:
    key = (name, version)
    if key not in PROMPTS:
        raise KeyError(f"Unknown prompt: {name}@{version}")
    return PROMPTS[key]
