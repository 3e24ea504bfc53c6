from app.agent.artifacts import BusinessContext, IdeaDraft
from app.agent.prompts.autofill import build_autofill_prompt
from app.agent.prompts.ideas import build_idea_generation_prompt
from app.agent.prompts.iteration import build_iteration_prompt
from app.agent.prompts.spec import build_spec_prompt

BUSINESS = BusinessContext(
    prod_description="Bookkeeping for dentists",
    target_audience="Dental practice owners",
    location="Austin, TX",
    business_url="https://ledgerdent.com",
)
IDEA = IdeaDraft(
    name="Practice Health Score",
    summary="Grade your practice finances",
    detailed_description="Upload a P&L and get a score.",
    why_this="Owners want a quick read on profitability.",
    complexity_level="Moderate",
)


def test_idea_generation_prompt_includes_business_context():
    prompt = build_idea_generation_prompt(BUSINESS)

    assert "Product/service: Bookkeeping for dentists" in prompt
    assert "Target audience: Dental practice owners" in prompt
    assert "Location of customers: Austin, TX" in prompt
    assert "Business website: https://ledgerdent.com" in prompt
    assert '"ideas" array' in prompt
    assert "name, summary, detailedDescription, whyThis, complexityLevel" in prompt


def test_idea_generation_prompt_without_location():
    business = BUSINESS.model_copy(update={"location": None, "business_url": None})

    prompt = build_idea_generation_prompt(business)

    assert "Location of customers: Not specified" in prompt
    assert "Business website" not in prompt


def test_spec_prompt_names_both_outputs():
    prompt = build_spec_prompt(IDEA, BUSINESS)

    assert "App Concept: Practice Health Score - Grade your practice finances" in prompt
    assert "Upload a P&L and get a score." in prompt
    assert "Product/Service offering: Bookkeeping for dentists" in prompt
    assert '"magnetSpec"' in prompt
    assert '"creationPrompt"' in prompt


def test_iteration_prompt_embeds_idea_and_feedback():
    prompt = build_iteration_prompt(IDEA, BUSINESS, "Make it work for orthodontists too")

    assert '- Lead magnet name: "Practice Health Score"' in prompt
    assert '"Moderate"' in prompt
    assert "Make it work for orthodontists too" in prompt
    assert "- Location: Austin, TX" in prompt
    assert '"complexityLevel": "<Simple|Moderate|Advanced>"' in prompt


def test_autofill_prompt_renders_website_and_literal_braces():
    prompt = build_autofill_prompt("https://ledgerdent.com")

    assert "business website: https://ledgerdent.com." in prompt
    assert '"website": "https://ledgerdent.com"' in prompt
    assert prompt.count("{") == prompt.count("}")
    assert "{{" not in prompt
