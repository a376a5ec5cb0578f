# app/llm/prompts/templates.py

SUMMARIZE_DOCUMENT_V1 = """
You are summarizing a document that was uploaded to a document library.
The text below was extracted automatically from a PDF and may contain
broken lines, repeated headers or stray characters. Ignore that noise.

Rules:
- Write 3-6 plain sentences. No markdown, no bullet points.
- Only state what the text supports. Do not invent names, dates or figures.
- If the text is too fragmentary to summarize, say so in one sentence.

TEXT:
{{text}}
""".strip()


EXTRACT_KEYWORDS_V1 = """
Extract 5-7 domain-specific keywords from the document text below.
Return STRICT JSON only (no markdown).

Rules:
- Prefer specific terms (products, legal concepts, parties, topics) over
  generic words like "document" or "page".
- Each keyword is 1-3 words.
- Keep the original spelling from the text.

Return JSON with shape:
{
  "keywords": ["string", ...]
}

TEXT:
{{text}}

{{__REPAIR_INSTRUCTIONS__}}
""".strip()
