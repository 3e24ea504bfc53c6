from app.agent.artifacts import BusinessContext, IdeaDraft

SPEC_SYSTEM_ROLE = (
    "You are a technical product manager who specializes in creating detailed specifications "
    "for AI-assisted web development. Your job is to take a web app concept and create both a "
    "comprehensive technical specification and a one-shot coding prompt."
)

SPEC_OUTPUTS = """
Create two outputs:

OUTPUT 1: Technical Specification
Include:
- User experience flow (step-by-step journey)
- Required features and functionality
- Data collection requirements
- UI/UX considerations
- Third-party integrations needed
- Recommended tech stack
- Estimated development time phases

OUTPUT 2: One-Shot Coding Prompt
Create a complete, copy-paste prompt for AI coding tools that includes:
- Brief description of the business (name, product/service, target audience, location - if not specified, don't include) the lead magnet is for
- Clear project description and requirements
- Specific functionality details explaining what the app should do and how it should work
- UI/UX specifications
- Output format requirements

The one-shot coding prompt should be detailed enough that an AI tool can build a working prototype, but there's no need to detail out the technical implementation details, the AI builder can decide how to implement it.

Output Format:
Return as a JSON object with two properties: "magnetSpec" (containing the technical specification) and "creationPrompt" (containing the one-shot coding prompt). Both values must be plain strings.
""".strip()


def build_spec_prompt(idea: IdeaDraft, business: BusinessContext) -> str:
    return "\n".join(
        [
            SPEC_SYSTEM_ROLE,
            "",
            f"App Concept: {idea.name} - {idea.summary}",
            "",
            idea.detailed_description,
            "",
            idea.why_this,
            "",
            "Business Details:",
            f"Product/Service offering: {business.prod_description}",
            f"Target audience: {business.target_audience}",
            f"Location: {business.location or 'Not specified'}",
            "Contact collection needs: Email or other contact info",
            "",
            SPEC_OUTPUTS,
        ]
    )
