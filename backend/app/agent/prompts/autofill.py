AUTOFILL_TEMPLATE = """
You are a senior marketing strategist with strong web-research skills.

Task
1. Visit and read the content from the following business website: {website}.
2. Based only on content from that website (no other sources), write:
   - prodDescription: 1-4 concise sentences explaining the core product or service.
   - targetAudience: 1-4 concise sentences describing the likely customers, inferred from the site's messaging.
   - confidence: an integer 1-10 reflecting how certain you are about what the business does and who their target audience is (10 = very certain; 1 = no clear idea).

Output
Return ONLY a valid JSON object with no markdown formatting, no code blocks, no commentary, and no extra keys:

{{
  "website": "{website}",
  "prodDescription": "<your description>",
  "targetAudience": "<your description>",
  "confidence": <integer 1-10>
}}

Guidelines
- ONLY view the homepage of the website, no need for citations.
- If the site is vague or confusing, lower the confidence score.
- Keep language direct and free of marketing fluff.
- Do not wrap the JSON in backticks or any other formatting.
""".strip()


def build_autofill_prompt(website: str) -> str:
    return AUTOFILL_TEMPLATE.format(website=website)
