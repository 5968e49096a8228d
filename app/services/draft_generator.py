"""
Draft Generator - AI-written placement emails.

DeepSeek uses an OpenAI-compatible API, so we use the openai library.
Any other OpenAI-compatible provider works by changing the base URL
and DRAFT_MODEL.

IMPORTANT:
- AI only WRITES the draft. It never sends anything.
- A human reviews the draft before the mail bot broadcasts it.
- Inputs go into the prompt verbatim (operator-trusted).
- One call per draft: no retry, no cache.
"""
import logging

from openai import OpenAI, OpenAIError

from app.core.config import get_settings

logger = logging.getLogger(__name__)

EMPTY_DRAFT_MESSAGE = "Failed to generate draft."

PROMPT_TEMPLATE = """
You are the Placement Officer at {institution}.
Draft a formal, concise, and professional email notification to students regarding a new placement drive.

Details:
Company: {company_name}
Role: {role}
Raw Context/Message from Company: "{raw_context}"

The email should:
1. Have a clear Subject Line.
2. Be addressed to "Dear Students,".
3. Include key details like Role, Eligibility (if mentioned in raw text), and Action Required.
4. Sign off as "{signature}".
5. Do NOT use placeholders like [Date] unless essential.
"""


class DraftGenerationError(Exception):
    """The provider could not produce a draft (bad key, network, API error)."""


class DraftGenerator:
    """
    Wrapper around the chat completion API for email drafting.
    """

    def __init__(self, api_key: str = None, base_url: str = None, model: str = None, client=None):
        settings = get_settings()
        self.api_key = settings.deepseek_api_key if api_key is None else api_key
        self.model = model or settings.draft_model
        self.institution = settings.institution_name
        self.signature = settings.placement_cell_signature
        self.client = client
        if self.client is None and self.api_key:
            self.client = OpenAI(
                api_key=self.api_key,
                base_url=base_url or settings.deepseek_base_url
            )

    def build_prompt(self, company_name: str, role: str, raw_context: str) -> str:
        return PROMPT_TEMPLATE.format(
            institution=self.institution,
            company_name=company_name,
            role=role,
            raw_context=raw_context,
            signature=self.signature,
        )

    def generate_email_draft(self, company_name: str, role: str, raw_context: str) -> str:
        """
        Ask the model for a draft.

        Returns the draft text, or EMPTY_DRAFT_MESSAGE if the model answered
        with nothing. Raises DraftGenerationError on any provider failure.
        """
        if self.client is None:
            raise DraftGenerationError("AI API key is not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": self.build_prompt(company_name, role, raw_context)}],
            )
        except OpenAIError as e:
            logger.error("Draft generation failed: %s", e)
            raise DraftGenerationError(str(e)) from e

        text = response.choices[0].message.content if response.choices else None
        return text or EMPTY_DRAFT_MESSAGE

    def test_connection(self) -> bool:
        """Test if the provider is reachable"""
        try:
            return bool(self.generate_email_draft("Test", "Test", "Reply with OK"))
        except DraftGenerationError as e:
            logger.warning("Draft provider connection failed: %s", e)
            return False


# Singleton instance
_draft_generator: DraftGenerator = None


def get_draft_generator() -> DraftGenerator:
    """Get or create the draft generator (singleton pattern)"""
    global _draft_generator
    if _draft_generator is None:
        _draft_generator = DraftGenerator()
    return _draft_generator
