from app.agent.artifacts import BusinessContext, IdeaDraft

COMPLEXITY_GUIDE = (
    "simple, moderate or advanced, where simple is something that can be built in a few hours, "
    "moderate is something that can be built in a few days, and advanced is something that can "
    "be built in a few weeks"
)

ITERATION_INSTRUCTIONS = """
Instructions
1. Re-read the above Business Context and the Original lead magnet idea alongside the User feedback.
2. Revise or iterate on the idea so it better fits the feedback while still:
   - Solving a real problem for the target audience
   - Naturally leading to the business' paid offering
   - Collecting email addresses or contact info
3. Reassess the complexity level (Simple | Moderate | Advanced) based on the updated scope and note the new level in the output.
4. Preserve the five fields exactly as named:
   - name
   - summary
   - detailedDescription (4-6 sentences)
   - whyThis (3-6 sentences explaining relevance and value)
   - complexityLevel

Output format
Return a JSON object structured exactly like this:

{
  "name": "<string>",
  "summary": "<string>",
  "detailedDescription": "<string>",
  "whyThis": "<string>",
  "complexityLevel": "<Simple|Moderate|Advanced>"
}
""".strip()


def build_iteration_prompt(idea: IdeaDraft, business: BusinessContext, user_feedback: str) -> str:
    return "\n".join(
        [
            "You are the marketing expert who came up with an impactful lead magnet idea for the "
            "business mentioned below. I want you to improve upon the lead magnet idea you came up "
            "with based on the user's feedback.",
            "",
            "Goal",
            "Use the user's feedback to iterate on the provided lead magnet idea, producing a "
            "sharper, more personalized version.",
            "",
            "Business Context (unchanged):",
            f"- Product/service: {business.prod_description}",
            f"- Target audience: {business.target_audience}",
            f"- Location: {business.location or 'Not specified'}",
            "",
            "Original lead magnet idea provided:",
            f'- Lead magnet name: "{idea.name}"',
            f'- Summary of lead magnet: "{idea.summary}"',
            f'- Detailed description of lead magnet: "{idea.detailed_description}"',
            f'- Why this lead magnet makes sense for the business: "{idea.why_this}"',
            f'- Complexity level of building the lead magnet ({COMPLEXITY_GUIDE}): "{idea.complexity_level}"',
            "",
            "User feedback / personalization notes (free-form text):",
            user_feedback,
            "",
            ITERATION_INSTRUCTIONS,
        ]
    )
